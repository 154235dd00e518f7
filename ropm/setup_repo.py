"""The setup command: fetch and verify the Release and Packages listing."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from pathlib import Path

from ropm.release import parse_release
from ropm.repo import RopmError, download, gunzip, home_dir, ropm_root, run_command
from ropm.sha import sha256_matches

VERIFY_PROMPT = (
    "Perform keybased checks on import? "
    "[Use n if key import before failed, default is y] (y/n) :: "
)
PUBLIC_KEY_FILE = "pubkey.asc"
SUCCESS_MESSAGE = (
    "Release and Package listing updated successfully use ropm install "
    "or ropm install-x (insecure) to install packages"
)


def ensure_layout(home: str | os.PathLike[str]) -> Path:
    """Create the ropm directory and its bin directory if missing."""
    root = ropm_root(home)
    for directory, label in ((root, ".ropm"), (root / "bin", ".ropm/bin")):
        if directory.exists():
            continue
        try:
            directory.mkdir(mode=0o700)
        except OSError as exc:
            raise RopmError(
                f"[FATAL ERROR] Failed to create {label} in $HOME: {exc}"
            ) from exc
    return root


def _fetch(name: str, destination: Path, failure: str) -> None:
    try:
        download(name, destination)
    except RopmError as exc:
        raise RopmError(f"{failure}\n{exc}") from exc


def _unpack_listing(root: Path) -> None:
    try:
        gunzip(root / "Packages.gz")
    except RopmError as exc:
        raise RopmError("[FATAL ERROR] Failed to extract Packages.gz") from exc


def _verify_release(root: Path, release_path: Path, signature_path: Path) -> None:
    try:
        run_command(["gpg", "--import", PUBLIC_KEY_FILE])
    except RopmError as exc:
        raise RopmError(
            "[FATAL ERROR] Failed to import public key from pubkey.asc, "
            "safe package imports may not work"
        ) from exc
    try:
        run_command(["gpg", "--verify", signature_path, release_path])
    except RopmError as exc:
        release_path.unlink(missing_ok=True)
        signature_path.unlink(missing_ok=True)
        raise RopmError(
            "[FATAL ERROR] GPG verification failed, either the gpg program is "
            "not installed or the Release is corrupted, please restart again "
            "or use a safer installation!\nDeleting malicious Release files"
        ) from exc
    print("[INFO] Release validation successfull!")


def setup_repository(home: str | os.PathLike[str], verify: bool = True) -> None:
    """Download the Release and Packages listing, verifying them if asked."""
    root = ensure_layout(home)
    release_path = root / "Release"
    signature_path = root / "Release.asc"
    listing_path = root / "Packages.gz"
    network_hint = "please check the internet connection and try setup again"

    _fetch(
        "Release",
        release_path,
        f"[FATAL ERROR] Failed to download Release from remote repo, {network_hint}",
    )
    _fetch(
        "Release.asc",
        signature_path,
        "[FATAL ERROR] Failed to download Release.asc from remote repo, "
        + network_hint,
    )

    if verify:
        _verify_release(root, release_path, signature_path)

    _fetch(
        "Packages.gz",
        listing_path,
        "[FATAL ERROR] Failed to download Packages.gz from repo, "
        "please try again with proper internet settings",
    )

    if verify:
        try:
            release = parse_release(release_path)
        except RopmError as exc:
            raise RopmError(f"{exc}\n[FATAL ERROR] Failed to parse release") from exc
        major, minor, patch = release.version
        print(
            f"[DEBUG] Release:\nMaintainer: {release.maintainer}\n"
            f"Version: {major}.{minor}.{patch}\nSHA256: {release.sha256hash}"
        )
        try:
            matches = sha256_matches(release.sha256hash, listing_path)
        except RopmError:
            matches = False
        if not matches:
            listing_path.unlink(missing_ok=True)
            raise RopmError(
                "[FATAL ERROR] SHA checksum didnt match with the Packages.gz, "
                "must be compromised aborting"
            )

    _unpack_listing(root)
    print(SUCCESS_MESSAGE)


def setup_handler(argv: Sequence[str]) -> None:
    """Handle "setup", asking whether to verify the Release with gpg."""
    home = home_dir()
    sys.stdout.write(VERIFY_PROMPT)
    sys.stdout.flush()
    answer = sys.stdin.read(1) or "y"
    setup_repository(home, answer == "y")