"""
Platform detection helpers for lan-party-tools.

Centralizes Windows, macOS and Linux differences so the rest of the codebase
can call simple functions instead of scattering ``sys.platform`` checks.
"""

import sys
from pathlib import Path
from typing import Dict

from lanparty_py.exceptions import UnsupportedPlatformError

# Default Steam library folder for each supported OS family.
DEFAULT_STEAMAPPS: Dict[str, str] = {
    "windows": r"C:\Program Files (x86)\Steam\steamapps",
    "darwin": "~/Library/Application Support/Steam/steamapps",
    "linux": "~/.steam/steam/steamapps",
}


def is_windows() -> bool:
    """Return True when running on Windows."""
    return sys.platform.startswith("win")


def is_macos() -> bool:
    """Return True when running on macOS."""
    return sys.platform == "darwin"


def is_linux() -> bool:
    """Return True when running on Linux."""
    return sys.platform.startswith("linux")


def os_family() -> str:
    """Return ``windows``, ``darwin`` or ``linux``, or the raw platform name."""
    if is_windows():
        return "windows"
    if is_macos():
        return "darwin"
    if is_linux():
        return "linux"
    return sys.platform


def default_steamapps_path() -> Path:
    """Return the platform-conventional ``steamapps`` folder.

    Raises:
        UnsupportedPlatformError: if the OS family has no known default.
    """
    family = os_family()
    try:
        location = DEFAULT_STEAMAPPS[family]
    except KeyError:
        raise UnsupportedPlatformError(family) from None
    return Path(location).expanduser()
