"""Parsing of the repository Release file.

The file holds three lines: the maintainer name, the version as
Major.Minor.Release, and the SHA256 of Packages.gz.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from ropm.repo import RopmError

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Release:
    """The contents of a Release file."""

    maintainer: str
    version: tuple[int, int, int]
    sha256hash: str


def _version_part(text: str) -> int:
    match = _LEADING_INT.match(text)
    value = int(match.group(1)) if match else 0
    return value % 256


def _parse_version(line: str) -> tuple[int, int, int]:
    parts = line.split(".", 2)
    if len(parts) < 3:
        raise RopmError(f"[ERROR] Maliformed version {line}, aborting")
    major, minor, patch = parts
    return _version_part(major), _version_part(minor), _version_part(patch)


def parse_release(path: str | os.PathLike[str]) -> Release:
    """Read and parse a Release file."""
    try:
        with open(path, encoding="utf-8") as handle:
            maintainer = handle.readline()
            version = handle.readline()
            sha = handle.readline()
    except OSError as exc:
        raise RopmError(
            f"[FATAL ERROR] Failed to open release file for parsing: {path}: {exc}"
        ) from exc

    if not maintainer:
        raise RopmError(
            '[ERROR] Failed to read "maintainer" info from Release, '
            "must be corrupted, please try again..."
        )
    if not version:
        raise RopmError(
            '[ERROR] Failed to read "version" info from Release, '
            "must be corrupted, please try again..."
        )
    parsed_version = _parse_version(version.rstrip("\r\n"))
    if not sha:
        raise RopmError("[FATAL ERROR] Failed to read sha 256 checksum from Release")

    return Release(
        maintainer=maintainer.rstrip("\r\n"),
        version=parsed_version,
        sha256hash=sha.rstrip("\r\n"),
    )