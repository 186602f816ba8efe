"""Inventory of the games installed in a Steam library."""

import logging
from dataclasses import dataclass
from typing import Iterator

from lanparty_py.steam.appmanifest import AppManifest
from lanparty_py.steam.steamapps import SteamApps

logger = logging.getLogger("lanparty.steam.listing")


@dataclass(frozen=True)
class InstalledApp:
    """An app id and display name read from one manifest."""

    appid: str
    name: str

    def __str__(self) -> str:
        return f"{self.appid}\t- {self.name}"


def iter_installed_apps(steamapps: SteamApps) -> Iterator[InstalledApp]:
    """
    Yield the installed apps of *steamapps* in directory listing order.

    The first unreadable or incomplete manifest stops the listing: the error
    propagates and the remaining manifests are not read.

    Raises:
        LibraryPathError: if the library root cannot be listed.
        ManifestUnreadableError: if a manifest cannot be read.
        ManifestFieldMissingError: if a manifest lacks ``appid`` or ``name``.
    """
    for path in steamapps.find_manifests():
        manifest = AppManifest.from_path(path)
        appid = manifest.require("appid")
        name = manifest.require("name")
        logger.debug(f"Found {appid} ({name}) in {path.name}")
        yield InstalledApp(appid=appid, name=name)
