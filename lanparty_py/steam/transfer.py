"""
Recursive file copy with progress reporting.

``copy_tree`` copies a directory *into* a destination folder, merging with
whatever is already there and overwriting existing files.  Progress is
reported synchronously from inside the call as ``(copied_bytes,
total_bytes)``; the callback decides whether the copy goes on.
"""

import logging
import os
import shutil
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

from lanparty_py.exceptions import TransferAbortedError

logger = logging.getLogger("lanparty.steam.transfer")

DEFAULT_BUFFER_SIZE = 1_048_576  # 1 MiB
PROGRESS_SCALE = 10000


class TransitResult(Enum):
    """Answer of a progress callback."""

    CONTINUE = "continue"
    ABORT = "abort"


ProgressCallback = Callable[[int, int], TransitResult]


def progress_percentage(copied: int, total: int) -> int:
    """
    Convert a byte count into a progress value between 0 and 10000.

    An empty copy (``total == 0``) counts as complete.

    >>> progress_percentage(1, 2)
    5000
    >>> progress_percentage(1, 10000)
    1
    """
    if total <= 0:
        return PROGRESS_SCALE
    return int((copied / total) * PROGRESS_SCALE)


def _walk(source: Path) -> Iterator[Tuple[str, List[str], List[str]]]:
    """
    ``os.walk`` that descends into symlinked directories.

    A linked directory that points back at one of its own ancestors is not
    entered again.
    """
    for dirpath, dirnames, filenames in os.walk(source, followlinks=True):
        current = os.path.realpath(dirpath)
        for dirname in list(dirnames):
            target = os.path.realpath(os.path.join(dirpath, dirname))
            if current == target or current.startswith(target + os.sep):
                logger.debug(f"Skipping {os.path.join(dirpath, dirname)}: link loop")
                dirnames.remove(dirname)
        yield dirpath, dirnames, filenames


def _walk_files(source: Path) -> Iterator[Tuple[Path, Path]]:
    """Yield ``(absolute_path, path_relative_to_source)`` for every file."""
    for dirpath, _dirnames, filenames in _walk(source):
        for filename in filenames:
            path = Path(dirpath) / filename
            yield path, path.relative_to(source)


def tree_size(source: Path) -> int:
    """Total size in bytes of the regular files below *source*."""
    return sum(path.stat().st_size for path, _ in _walk_files(source))


def copy_file(source: Path, dest_dir: Path) -> int:
    """Copy *source* into *dest_dir*, overwriting an existing file.

    Returns:
        Number of bytes copied.
    """
    target = dest_dir / source.name
    logger.debug(f"Copying {source} to {target}")
    shutil.copy2(source, target)
    return target.stat().st_size


def copy_tree(
    source: Path,
    dest_dir: Path,
    progress: Optional[ProgressCallback] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """
    Copy the directory *source* to ``dest_dir / source.name``.

    Args:
        source: Directory to copy
        dest_dir: Folder that receives the copy
        progress: Called with ``(copied_bytes, total_bytes)`` once before
            the first file and after every buffer written
        buffer_size: Chunk size used for reading files

    Returns:
        Number of bytes copied.

    Raises:
        TransferAbortedError: if *progress* returned ``TransitResult.ABORT``.
        OSError: on any filesystem error.
    """
    target_root = dest_dir / source.name
    total = tree_size(source)
    copied = 0
    logger.debug(f"Copying {source} to {target_root} ({total} bytes)")

    def report() -> None:
        if progress is None:
            return
        if progress(copied, total) is TransitResult.ABORT:
            raise TransferAbortedError(f"Copy of {source} aborted")

    target_root.mkdir(parents=True, exist_ok=True)
    report()

    for dirpath, dirnames, filenames in _walk(source):
        relative = Path(dirpath).relative_to(source)
        for dirname in dirnames:
            (target_root / relative / dirname).mkdir(parents=True, exist_ok=True)

        for filename in filenames:
            src = Path(dirpath) / filename
            dst = target_root / relative / filename
            with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
                while True:
                    chunk = fsrc.read(buffer_size)
                    if not chunk:
                        break
                    fdst.write(chunk)
                    copied += len(chunk)
                    report()
            shutil.copystat(src, dst)

    return copied
