import hashlib
import io
import subprocess
import sys
import tarfile
from pathlib import Path

import pytest

from ropm.install import find_package, install_handler, install_package
from ropm.listing import PackageEntry
from ropm.repo import RopmError


def make_tarball(name):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        data = b"all:\n\ninstall:\n"
        info = tarfile.TarInfo(f"{name}/Makefile")
        info.size = len(data)
        tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


class FakeRunner:
    def __init__(self, files, fail=()):
        self.files = files
        self.fail = set(fail)
        self.calls = []

    def __call__(self, command, check=False):
        self.calls.append(list(command))
        if command[0] in self.fail:
            return subprocess.CompletedProcess(command, 1)
        if command[0] == "curl":
            name = command[1].rsplit("/", 1)[-1]
            if name not in self.files:
                return subprocess.CompletedProcess(command, 22)
            Path(command[3]).write_bytes(self.files[name])
        return subprocess.CompletedProcess(command, 0)

    def programs(self, program):
        return [call for call in self.calls if call[0] == program]


def prepare(home, name="hello", sha=None):
    root = home / ".ropm"
    root.mkdir()
    tarball = make_tarball(name)
    digest = sha if sha is not None else hashlib.sha256(tarball).hexdigest()
    (root / "Packages").write_text(f"{name}x {digest}\n{name} {digest}\n")
    return root, {f"{name}.tar.gz": tarball}


def test_find_package_exact_match():
    entries = [PackageEntry("hello", "aa"), PackageEntry("world", "bb")]
    assert find_package(entries, "world") == PackageEntry("world", "bb")


def test_find_package_reports_similar_names(capsys):
    entries = [PackageEntry("hello-extra", "aa"), PackageEntry("hello", "bb")]
    assert find_package(entries, "hello").sha256 == "bb"
    assert "Similar named package detected: hello-extra" in capsys.readouterr().out


def test_find_package_missing():
    with pytest.raises(RopmError, match="Failed to find package: nope"):
        find_package([PackageEntry("hello", "aa")], "nope")


def test_install_package_builds_and_cleans(tmp_path, monkeypatch):
    root, files = prepare(tmp_path)
    runner = FakeRunner(files)
    monkeypatch.setattr(subprocess, "run", runner)
    install_package("hello", tmp_path, True)
    assert runner.programs("make") == [
        ["make", "-C", str(root / "hello")],
        ["make", "-C", str(root / "hello"), "install"],
    ]
    assert not (root / "hello").exists()
    assert not (root / "hello.tar.gz").exists()
    assert not (root / "hello.tar").exists()


def test_install_package_sha_mismatch(tmp_path, monkeypatch):
    root, files = prepare(tmp_path, sha="0" * 64)
    runner = FakeRunner(files)
    monkeypatch.setattr(subprocess, "run", runner)
    with pytest.raises(RopmError, match="SHA check failed"):
        install_package("hello", tmp_path, True)
    assert not (root / "hello.tar.gz").exists()
    assert runner.programs("make") == []


def test_install_package_unchecked_ignores_sha(tmp_path, monkeypatch, capsys):
    root, files = prepare(tmp_path, sha="0" * 64)
    runner = FakeRunner(files)
    monkeypatch.setattr(subprocess, "run", runner)
    install_package("hello", tmp_path, False)
    assert len(runner.programs("make")) == 2
    assert "[WARNING] Package SHA check ignored" in capsys.readouterr().out


def test_install_package_download_failure(tmp_path, monkeypatch):
    prepare(tmp_path)
    runner = FakeRunner({})
    monkeypatch.setattr(subprocess, "run", runner)
    with pytest.raises(RopmError, match="Curl failed download"):
        install_package("hello", tmp_path, True)


def test_install_package_build_failure(tmp_path, monkeypatch):
    root, files = prepare(tmp_path)
    runner = FakeRunner(files, fail={"make"})
    monkeypatch.setattr(subprocess, "run", runner)
    with pytest.raises(RopmError, match="Failed to build and install package"):
        install_package("hello", tmp_path, True)
    assert (root / "hello").is_dir()


def test_install_handler_requires_package():
    with pytest.raises(RopmError, match="requires the <package> argument"):
        install_handler(["ropm", "install"])


def test_install_handler_unchecked_declined(tmp_path, monkeypatch, capsys):
    prepare(tmp_path)
    runner = FakeRunner({})
    monkeypatch.setattr(subprocess, "run", runner)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(sys, "stdin", io.StringIO("n"))
    install_handler(["ropm", "xinstall", "hello"])
    assert runner.calls == []
    assert "Got it aborting..." in capsys.readouterr().out


def test_install_handler_missing_listing(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    with pytest.raises(RopmError, match="setup"):
        install_handler(["ropm", "install", "hello"])


def test_install_handler_installs(tmp_path, monkeypatch, capsys):
    root, files = prepare(tmp_path)
    runner = FakeRunner(files)
    monkeypatch.setattr(subprocess, "run", runner)
    monkeypatch.setenv("HOME", str(tmp_path))
    install_handler(["ropm", "install", "hello"])
    assert runner.programs("make")[-1] == ["make", "-C", str(root / "hello"), "install"]
    out = capsys.readouterr().out
    assert "Similar named package detected: hellox" in out
    assert "Install complete" in out
    assert not (root / "hello").exists()