"""SHA256 checks of downloaded files."""

from __future__ import annotations

import hashlib
import os

from ropm.repo import RopmError

_CHUNK_SIZE = 1024


def file_sha256(path: str | os.PathLike[str]) -> str:
    """Return the lowercase hex SHA256 digest of a file."""
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise RopmError(
            f"[FATAL ERROR] Failed to open file for SHA256 check: {path}: {exc}"
        ) from exc
    return digest.hexdigest()


def sha256_matches(expected: str, path: str | os.PathLike[str]) -> bool:
    """Tell whether expected starts with the file's hex digest.

    Only the first 64 characters of expected are compared, so a trailing
    newline or other suffix is ignored.
    """
    actual = file_sha256(path)
    return expected[: len(actual)] == actual