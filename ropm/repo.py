"""Shared paths, repository access and helpers for external commands."""

from __future__ import annotations

import gzip
import os
import shutil
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TextIO

REPO_URL = "https://ropm.example.com/"
REPO_URL_ENV = "ROPM_REPO_URL"
UNCHECKED_PROMPT = (
    "Run in uncheck mode? This won't check the package SHA256, "
    "use with caution (y/n[default]): "
)


class RopmError(Exception):
    """A fatal error that ends the current command."""


def home_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the user's home directory taken from HOME."""
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if home is None:
        raise RopmError("[FATAL ERROR] HOME environment variable missing, aborting")
    return Path(home)


def ropm_root(home: str | os.PathLike[str]) -> Path:
    """Return the directory that holds the package listing and downloads."""
    return Path(home) / ".ropm"


def run_command(args: Sequence[str | os.PathLike[str]]) -> None:
    """Run an external program, raising RopmError unless it exits with 0."""
    command = [os.fspath(arg) for arg in args]
    try:
        result = subprocess.run(command, check=False)
    except OSError as exc:
        raise RopmError(f"Failed to run {command[0]}: {exc}") from exc
    if result.returncode != 0:
        raise RopmError(
            f"Command exited with status {result.returncode}: {' '.join(command)}"
        )


def _repo_url() -> str:
    return os.environ.get(REPO_URL_ENV, REPO_URL)


def download(name: str, destination: str | os.PathLike[str]) -> Path:
    """Fetch a file of the repository into destination using curl."""
    target = Path(destination)
    run_command(["curl", _repo_url() + name, "-o", str(target)])
    return target


def gunzip(path: str | os.PathLike[str]) -> Path:
    """Decompress a .gz file in place, removing the compressed original."""
    source = Path(path)
    if source.suffix != ".gz":
        raise RopmError(f"Not a .gz file: {source}")
    target = source.with_suffix("")
    try:
        with gzip.open(source, "rb") as compressed, open(target, "wb") as plain:
            shutil.copyfileobj(compressed, plain)
    except (OSError, EOFError) as exc:
        target.unlink(missing_ok=True)
        raise RopmError(f"Failed to decompress {source}: {exc}") from exc
    source.unlink()
    return target


def confirm_unchecked(
    input_stream: TextIO | None = None, output_stream: TextIO | None = None
) -> bool:
    """Ask whether to skip the SHA256 check; only an answer of 'n' declines."""
    inp = sys.stdin if input_stream is None else input_stream
    out = sys.stdout if output_stream is None else output_stream
    out.write(UNCHECKED_PROMPT)
    out.flush()
    answer = inp.read(1) or "n"
    return answer != "n"