"""
Exception hierarchy for lan-party-tools.

Errors that invalidate a whole run (bad library path, missing ``common``
folder on the source side, nothing to sync) propagate to the CLI.  Errors
scoped to a single app id are caught by the sync engine and turned into
per-id outcomes.
"""

from pathlib import Path
from typing import Optional


class LanPartyError(Exception):
    """Base class for all lan-party-tools errors."""


class UnsupportedPlatformError(LanPartyError):
    """No default Steam library location is known for this OS family."""

    def __init__(self, family: str):
        self.family = family
        super().__init__(f"Unsupported platform: {family}")


class LibraryPathError(LanPartyError):
    """A library root could not be listed as a directory."""

    def __init__(self, location: Path, reason: Optional[str] = None):
        self.location = location
        message = f"Could not find appmanifests in {location}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ManifestUnreadableError(LanPartyError):
    """An ``appmanifest_<id>.acf`` file could not be read as UTF-8 text."""

    def __init__(self, path: Path, reason: Optional[str] = None):
        self.path = path
        message = f"Could not read appmanifest {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ManifestFieldMissingError(LanPartyError):
    """A manifest has no usable value for a required field."""

    def __init__(self, field: str, path: Optional[Path] = None):
        self.field = field
        self.path = path
        message = f"Could not find {field}"
        if path is not None:
            message += f" in {path}"
        super().__init__(message)


class InstallDirMissingError(LanPartyError):
    """The ``installdir`` named by a manifest is not a directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Could not find installdir {path}")


class CommonFolderMissingError(LanPartyError):
    """A library root has no ``common`` folder to read game files from."""

    def __init__(self, location: Path, role: str = "steamapps"):
        self.location = location
        self.role = role
        super().__init__(f"No common folder found in {role} ({location})")


class DirectoryCreateError(LanPartyError):
    """The ``common`` folder could not be created in a destination root."""

    def __init__(self, path: Path, reason: Optional[str] = None):
        self.path = path
        message = f"Could not create common folder {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CopyFailedError(LanPartyError):
    """Copying a manifest or game files failed.

    ``phase`` is either ``"manifest"`` or ``"payload"``.
    """

    def __init__(self, phase: str, reason: Optional[str] = None):
        self.phase = phase
        what = "manifest" if phase == "manifest" else "game files"
        message = f"Couldn't copy {what}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TransferAbortedError(LanPartyError):
    """A progress callback asked the copy primitive to stop."""


class NothingToSyncError(LanPartyError):
    """Backup or restore was called without any app ids."""

    def __init__(self, direction: str = "backup"):
        self.direction = direction
        super().__init__(f"Nothing to {direction}")


class NetworkError(LanPartyError):
    """Network information could not be collected."""
