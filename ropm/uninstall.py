"""The uninstall command."""

from __future__ import annotations

import os
from collections.abc import Sequence

from ropm.repo import RopmError, home_dir, ropm_root, run_command

USAGE = (
    "Error, uninstall requires the package argument to remove "
    "ropm uninstall <package>"
)


def uninstall_package(name: str, home: str | os.PathLike[str]) -> None:
    """Run the uninstall target of an installed package."""
    bin_dir = ropm_root(home) / "bin"
    try:
        installed = [entry.name for entry in os.scandir(bin_dir)]
    except OSError as exc:
        raise RopmError(
            f"[FATAL ERROR] Failed to open {bin_dir}: {exc}"
        ) from exc

    if name not in installed:
        raise RopmError(
            f"[ERROR] No such package found: {name} "
            "please use exact package name to remove"
        )

    try:
        run_command(["make", "-C", bin_dir / f"{name}.build", "uninstall"])
    except RopmError as exc:
        raise RopmError(
            "[FATAL ERROR] Failed to uninstall package, aborting, please try "
            "again or remove manually from ~/.ropm/bin"
        ) from exc
    print("[INFO] Uninstalled package successfully")


def uninstall_handler(argv: Sequence[str]) -> None:
    """Handle "uninstall <package>"."""
    home = home_dir()
    if len(argv) < 3:
        raise RopmError(USAGE)
    uninstall_package(argv[2], home)