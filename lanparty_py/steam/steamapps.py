"""
The ``SteamApps`` library root.

A library root is a folder holding ``appmanifest_<appid>.acf`` files next to a
``common`` folder with one sub-folder per installed game.  Backup and restore
destinations use the same layout.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from lanparty_py.exceptions import (
    CommonFolderMissingError,
    DirectoryCreateError,
    LibraryPathError,
)
from lanparty_py.platform import default_steamapps_path
from lanparty_py.steam.appmanifest import AppManifest

logger = logging.getLogger("lanparty.steam.steamapps")

COMMON_FOLDER = "common"
MANIFEST_PREFIX = "appmanifest_"
MANIFEST_SUFFIX = ".acf"


@dataclass(frozen=True)
class SteamApps:
    """A ``steamapps`` folder or any folder following its layout."""

    location: Path
    role: str = field(default="steamapps", compare=False)

    @classmethod
    def default(cls, role: str = "steamapps") -> "SteamApps":
        """
        Create a ``SteamApps`` at the default location for this platform.

        - ``C:\\Program Files (x86)\\Steam\\steamapps`` on Windows
        - ``~/Library/Application Support/Steam/steamapps`` on macOS
        - ``~/.steam/steam/steamapps`` on Linux

        Raises:
            UnsupportedPlatformError: on any other platform.
        """
        return cls(location=default_steamapps_path(), role=role)

    @classmethod
    def from_console_input(
        cls, location: Optional[Union[str, Path]], role: str = "steamapps"
    ) -> "SteamApps":
        """Use *location* verbatim, or the platform default when it is None."""
        if location is None:
            return cls.default(role=role)
        return cls(location=Path(location), role=role)

    @property
    def common(self) -> Path:
        """Path of the ``common`` folder, which may not exist."""
        return self.location / COMMON_FOLDER

    def get_common(self) -> Path:
        """
        Return the ``common`` folder, which must already exist.

        Raises:
            CommonFolderMissingError: if ``common`` is not a directory.
        """
        path = self.common
        if not path.is_dir():
            raise CommonFolderMissingError(self.location, self.role)
        return path

    def get_or_create_common(self) -> Path:
        """
        Return the ``common`` folder, creating it first when absent.

        Raises:
            DirectoryCreateError: if the folder could not be created.
        """
        path = self.common
        if not path.is_dir():
            logger.info(f"Creating common folder at {path}")
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryCreateError(path, str(e)) from e
        return path

    def get_manifest_path(self, appid: str) -> Path:
        """Path to ``appmanifest_<appid>.acf``; existence is not checked."""
        return self.location / f"{MANIFEST_PREFIX}{appid}{MANIFEST_SUFFIX}"

    def get_manifest(self, appid: str) -> AppManifest:
        """Load the manifest for *appid*.

        Raises:
            ManifestUnreadableError: if the file cannot be read.
        """
        return AppManifest.from_path(self.get_manifest_path(appid))

    def find_manifests(self) -> List[Path]:
        """
        Return the manifest files directly inside the library root.

        The order is whatever the directory listing yields; it is not sorted.

        Raises:
            LibraryPathError: if the root cannot be listed.
        """
        manifests: List[Path] = []
        try:
            with os.scandir(self.location) as entries:
                for entry in entries:
                    if not entry.is_file():
                        continue
                    if not entry.name.startswith(MANIFEST_PREFIX):
                        continue
                    manifests.append(Path(entry.path))
        except OSError as e:
            raise LibraryPathError(self.location, str(e)) from e
        return manifests
