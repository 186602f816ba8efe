"""
Backup and restore of Steam games between two library roots.

Both directions run the same algorithm: the source root must already have a
``common`` folder, the destination gets one created if needed, and every app
id is then processed in the order given.  A failure for one id is recorded
and the batch carries on with the next one.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

from lanparty_py.exceptions import (
    CopyFailedError,
    InstallDirMissingError,
    LanPartyError,
    ManifestFieldMissingError,
    ManifestUnreadableError,
    NothingToSyncError,
    TransferAbortedError,
)
from lanparty_py.steam.steamapps import SteamApps
from lanparty_py.steam.transfer import (
    DEFAULT_BUFFER_SIZE,
    TransitResult,
    copy_file,
    copy_tree,
    progress_percentage,
)

logger = logging.getLogger("lanparty.steam.sync")


class SyncStatus(Enum):
    """Result of processing one app id."""

    SUCCESS = "success"
    MANIFEST_UNREADABLE = "manifest-unreadable"
    FIELD_MISSING = "field-missing"
    INSTALL_DIR_MISSING = "installdir-missing"
    COPY_FAILED = "copy-failed"


@dataclass(frozen=True)
class SyncOutcome:
    """Outcome for a single app id.

    ``detail`` names the missing field for ``FIELD_MISSING`` and the copy
    phase (``manifest`` or ``payload``) for ``COPY_FAILED``.
    """

    appid: str
    status: SyncStatus
    detail: Optional[str] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is SyncStatus.SUCCESS


@dataclass
class SyncReport:
    """All outcomes of one backup or restore run, in processing order."""

    direction: str
    outcomes: List[SyncOutcome] = field(default_factory=list)

    @property
    def failures(self) -> List[SyncOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def succeeded(self) -> List[SyncOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        total = len(self.outcomes)
        failed = len(self.failures)
        if failed == 0:
            return f"{self.direction.capitalize()} of {total} app(s) completed"
        noun = "failure" if failed == 1 else "failures"
        return f"{failed} {noun} out of {total}"


class SyncObserver:
    """Receives progress and outcome events; the default does nothing."""

    def on_copy_started(self, appid: str, source: Path) -> None:
        pass

    def on_copy_progress(self, appid: str, value: int) -> None:
        """*value* ranges from 0 to 10000 and never decreases for an app id."""
        pass

    def on_copy_finished(self, appid: str) -> None:
        pass

    def on_outcome(self, outcome: SyncOutcome) -> None:
        pass


def _copy_game_files(
    appid: str,
    installdir: Path,
    dest_common: Path,
    observer: SyncObserver,
    buffer_size: int,
) -> int:
    """Copy one install directory while forwarding clamped progress values."""
    highest = -1

    def on_progress(copied: int, total: int) -> TransitResult:
        nonlocal highest
        value = progress_percentage(copied, total)
        if value > highest:
            highest = value
            observer.on_copy_progress(appid, value)
        return TransitResult.CONTINUE

    observer.on_copy_started(appid, installdir)
    try:
        return copy_tree(
            installdir, dest_common, progress=on_progress, buffer_size=buffer_size
        )
    finally:
        observer.on_copy_finished(appid)


def _sync_one(
    appid: str,
    source: SteamApps,
    source_common: Path,
    destination: SteamApps,
    dest_common: Path,
    observer: SyncObserver,
    buffer_size: int,
) -> None:
    """Process one app id; raises on the first failing step."""
    manifest_path = source.get_manifest_path(appid)
    manifest = source.get_manifest(appid)
    installdir = manifest.resolve_installdir(source_common)

    try:
        copy_file(manifest_path, destination.location)
    except OSError as e:
        raise CopyFailedError("manifest", str(e)) from e

    try:
        _copy_game_files(appid, installdir, dest_common, observer, buffer_size)
    except (OSError, TransferAbortedError) as e:
        raise CopyFailedError("payload", str(e)) from e


def _outcome_for(appid: str, error: LanPartyError) -> SyncOutcome:
    if isinstance(error, ManifestUnreadableError):
        return SyncOutcome(appid, SyncStatus.MANIFEST_UNREADABLE, None, str(error))
    if isinstance(error, ManifestFieldMissingError):
        return SyncOutcome(appid, SyncStatus.FIELD_MISSING, error.field, str(error))
    if isinstance(error, InstallDirMissingError):
        return SyncOutcome(appid, SyncStatus.INSTALL_DIR_MISSING, None, str(error))
    if isinstance(error, CopyFailedError):
        return SyncOutcome(appid, SyncStatus.COPY_FAILED, error.phase, str(error))
    raise error


def synchronize(
    source: SteamApps,
    destination: SteamApps,
    appids: Iterable[str],
    direction: str,
    observer: Optional[SyncObserver] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> SyncReport:
    """
    Copy the manifests and game files of *appids* from *source* to
    *destination*.

    Args:
        source: Library root to read from; its ``common`` folder must exist
        destination: Library root to write to
        appids: App ids, processed in the given order without deduplication
        direction: ``backup`` or ``restore``, used in messages
        observer: Receives progress and per-id outcomes
        buffer_size: Chunk size for copying game files

    Returns:
        A ``SyncReport`` with one outcome per app id.

    Raises:
        CommonFolderMissingError: if *source* has no ``common`` folder.
        DirectoryCreateError: if *destination*'s ``common`` folder cannot be
            created.
        NothingToSyncError: if *appids* is empty.
    """
    observer = observer or SyncObserver()
    appids = list(appids)

    source_common = source.get_common()
    dest_common = destination.get_or_create_common()

    if not appids:
        raise NothingToSyncError(direction)

    logger.info(
        f"Starting {direction} of {len(appids)} app(s) "
        f"from {source.location} to {destination.location}"
    )
    report = SyncReport(direction=direction)

    for appid in appids:
        try:
            _sync_one(
                appid,
                source,
                source_common,
                destination,
                dest_common,
                observer,
                buffer_size,
            )
        except LanPartyError as e:
            outcome = _outcome_for(appid, e)
            logger.debug(f"{appid}: {outcome.message}")
        else:
            outcome = SyncOutcome(
                appid, SyncStatus.SUCCESS, message=f"Successfully copied {appid}"
            )
            logger.debug(f"{appid}: {direction} completed")

        report.outcomes.append(outcome)
        observer.on_outcome(outcome)

    logger.debug(report.summary())
    return report


def backup(
    steamapps: SteamApps,
    destination: SteamApps,
    appids: Iterable[str],
    observer: Optional[SyncObserver] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> SyncReport:
    """Back up *appids* from the Steam library to *destination*."""
    return synchronize(
        steamapps, destination, appids, "backup", observer, buffer_size
    )


def restore(
    steamapps: SteamApps,
    source: SteamApps,
    appids: Iterable[str],
    observer: Optional[SyncObserver] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> SyncReport:
    """Restore *appids* from *source* into the Steam library."""
    return synchronize(source, steamapps, appids, "restore", observer, buffer_size)
