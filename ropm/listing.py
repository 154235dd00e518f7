"""The Packages listing: parsing and the list command.

Each line of the listing reads "<package name> <package SHA256>".
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from ropm.repo import RopmError, home_dir, ropm_root

LISTING_HEADER = "Package\t| SHA256\n--------|-------"
_SHORT_SHA = 6


@dataclass(frozen=True)
class PackageEntry:
    """One package of the listing."""

    name: str
    sha256: str


def parse_packages(lines: Iterable[str]) -> Iterator[PackageEntry]:
    """Yield the entries of a listing, reporting malformed lines on stderr."""
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            continue
        name, sep, sha = line.partition(" ")
        if not sep:
            print(
                f"[ERROR] Maliformed entry in Packages skipping: {line}",
                file=sys.stderr,
            )
            continue
        yield PackageEntry(name, sha)


def read_packages(path: str | os.PathLike[str]) -> list[PackageEntry]:
    """Read all entries from a listing file."""
    try:
        with open(path, encoding="utf-8") as handle:
            return list(parse_packages(handle))
    except OSError as exc:
        raise RopmError(f"[FATAL ERROR] Failed to open {path}: {exc}") from exc


def format_listing(entries: Iterable[PackageEntry], program: str) -> str:
    """Render the table printed by the list command."""
    rows = [LISTING_HEADER]
    count = 0
    for entry in entries:
        rows.append(f"{entry.name}\t| {entry.sha256[:_SHORT_SHA]}")
        count += 1
    rows.append(
        f"Total {count} packages in remote, if you don't find an existing package "
        f'then run "{program} setup" to reset the package ring '
        "(this won't delete your existing programs)"
    )
    return "\n".join(rows) + "\n"


def list_handler(argv: Sequence[str]) -> None:
    """Print the packages known from the last setup."""
    program = argv[0] if argv else "ropm"
    path = ropm_root(home_dir()) / "Packages"
    try:
        entries = read_packages(path)
    except RopmError as exc:
        raise RopmError(
            f'{exc}\nMake sure it exists, run "{program} setup" '
            "to reinstall Package listing"
        ) from exc
    sys.stdout.write(format_listing(entries, program))