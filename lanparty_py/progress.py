"""Rich progress display for backup and restore runs.

The sync engine reports a value between 0 and 10000 for the app id being
copied; this module turns those events into one progress bar per app id and a
status line per outcome.
"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from lanparty_py.steam.sync import SyncObserver, SyncOutcome, SyncStatus
from lanparty_py.steam.transfer import PROGRESS_SCALE


class RichSyncObserver(SyncObserver):
    """Shows a progress bar while game files are copied."""

    def __init__(self, console: Console, direction: str = "backup") -> None:
        self.console = console
        self.direction = direction
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def on_copy_started(self, appid: str, source: Path) -> None:
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=self.console,
        )
        self._progress.start()
        self._task = self._progress.add_task(
            f"{appid} ({source.name})", total=PROGRESS_SCALE
        )

    def on_copy_progress(self, appid: str, value: int) -> None:
        if self._progress is not None and self._task is not None:
            self._progress.update(self._task, completed=value)

    def on_copy_finished(self, appid: str) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task = None

    def on_outcome(self, outcome: SyncOutcome) -> None:
        if outcome.status is SyncStatus.SUCCESS:
            verb = "Backed up" if self.direction == "backup" else "Restored"
            self.console.print(f"[green]{verb} {escape(outcome.appid)}[/green]")
        else:
            self.console.print(
                f"[red]{escape(outcome.appid)}: {escape(outcome.message)}[/red]"
            )
