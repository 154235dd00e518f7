"""The install command: download, verify, build and install a package."""

from __future__ import annotations

import os
import shutil
import sys
import tarfile
from collections.abc import Iterable, Sequence
from pathlib import Path

from ropm.listing import PackageEntry, read_packages
from ropm.repo import (
    RopmError,
    confirm_unchecked,
    download,
    gunzip,
    home_dir,
    ropm_root,
    run_command,
)
from ropm.sha import sha256_matches

USAGE = (
    "Error, install command requires the <package> argument\n"
    "Syntax: ropm install <package>"
)


def find_package(entries: Iterable[PackageEntry], name: str) -> PackageEntry:
    """Return the entry named exactly name, reporting similarly named ones."""
    for entry in entries:
        if name not in entry.name:
            continue
        if entry.name != name:
            print(f"[INFO] Similar named package detected: {entry.name}")
            continue
        return entry
    raise RopmError(
        f"[FATAL ERROR] Failed to find package: {name} installation aborted"
    )


def _extract(archive: Path, destination: Path) -> None:
    try:
        with tarfile.open(archive) as tar:
            if hasattr(tarfile, "data_filter"):
                tar.extractall(destination, filter="data")
            else:
                tar.extractall(destination)
    except (OSError, tarfile.TarError) as exc:
        archive.unlink(missing_ok=True)
        raise RopmError("[FATAL ERROR] Failed to extract package") from exc


def install_package(
    name: str, home: str | os.PathLike[str], checked: bool = True
) -> None:
    """Install a package listed in the Packages file under home."""
    root = ropm_root(home)
    entry = find_package(read_packages(root / "Packages"), name)

    print("[INFO] Package found, downloading...")
    archive = root / f"{name}.tar.gz"
    try:
        download(f"{name}.tar.gz", archive)
    except RopmError as exc:
        raise RopmError(
            f"[FATAL ERROR] Curl failed download from repo aborting...\n{exc}"
        ) from exc

    if checked:
        try:
            matches = sha256_matches(entry.sha256, archive)
        except RopmError:
            matches = False
        if not matches:
            archive.unlink(missing_ok=True)
            raise RopmError(
                "[FATAL ERROR] SHA check failed aborting, "
                "package is probably compromised"
            )
        print("[INFO] Package SHA match...installing")
    else:
        print("[WARNING] Package SHA check ignored...installing")

    try:
        tar_path = gunzip(archive)
    except RopmError as exc:
        raise RopmError("[FATAL ERROR] Failed to decompress package") from exc

    _extract(tar_path, root)
    tar_path.unlink(missing_ok=True)

    build_dir = root / name
    try:
        run_command(["make", "-C", build_dir])
        run_command(["make", "-C", build_dir, "install"])
    except RopmError as exc:
        raise RopmError("[FATAL ERROR] Failed to build and install package") from exc

    print("[INFO] Install complete leaving...")

    try:
        shutil.rmtree(build_dir)
    except OSError as exc:
        raise RopmError(
            "[ERROR] Failed to delete installation files, "
            f"try removing manually .ropm/{name}"
        ) from exc


def install_handler(argv: Sequence[str]) -> None:
    """Handle "install <package>" and "xinstall <package>"."""
    if len(argv) < 3:
        raise RopmError(USAGE)
    program, command, name = argv[0], argv[1], argv[2]
    checked = not command.startswith("x")
    if not checked and not confirm_unchecked():
        print("Got it aborting...")
        return

    home = home_dir()
    try:
        install_package(name, home, checked)
    except RopmError as exc:
        packages = ropm_root(home) / "Packages"
        if packages.exists():
            raise
        raise RopmError(
            f"{exc}\n[INFO] File path for packages was: {packages}\n"
            f'[INFO] Please use "{program} setup" to setup the package list '
            "before installing"
        ) from exc
    finally:
        sys.stdout.flush()