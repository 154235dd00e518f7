"""Command line entry point."""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping, Sequence

from ropm.install import install_handler, install_package
from ropm.listing import list_handler
from ropm.repo import RopmError, confirm_unchecked, home_dir
from ropm.setup_repo import setup_handler
from ropm.uninstall import uninstall_handler, uninstall_package

PROGRAM = "ropm"

Handler = Callable[[Sequence[str]], None]


def dispatch(
    option: str,
    handlers: Mapping[str, Handler],
    argv: Sequence[str],
    case_insensitive: bool = False,
) -> bool:
    """Run the handler registered for option; tell whether one was found."""
    wanted = option.casefold() if case_insensitive else option
    for name, handler in handlers.items():
        key = name.casefold() if case_insensitive else name
        if key == wanted:
            handler(argv)
            return True
    return False


def update_handler(argv: Sequence[str]) -> None:
    """Reinstall a package: uninstall it, then install it again."""
    if len(argv) < 3:
        raise RopmError(
            "Error, update requires the package argument\n"
            "Syntax: ropm update <package>"
        )
    checked = not argv[1].startswith("x")
    if not checked and not confirm_unchecked():
        print("Got it aborting...")
        return
    name = argv[2]
    home = home_dir()
    uninstall_package(name, home)
    install_package(name, home, checked)


HANDLERS: dict[str, Handler] = {
    "setup": setup_handler,
    "install": install_handler,
    "xinstall": install_handler,
    "uninstall": uninstall_handler,
    "update": update_handler,
    "xupdate": update_handler,
    "list": list_handler,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run a ropm command; argv excludes the program name."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(
            "Error missing command parameters\n"
            f"Syntax: {PROGRAM} [setup|install|xinstall|uninstall|update|list] "
            "[options...]"
        )
        return 1

    try:
        found = dispatch(args[0], HANDLERS, [PROGRAM, *args], False)
    except RopmError as exc:
        sys.stdout.flush()
        print(exc, file=sys.stderr)
        return 1

    if not found:
        print(f"Fatal error, no such option {args[0]}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())