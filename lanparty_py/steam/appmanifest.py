"""
Parsing of Steam ``appmanifest_<appid>.acf`` files.

Only the ``appid``, ``name`` and ``installdir`` keys are read; everything else
in the manifest is opaque to lan-party-tools.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path, PurePath
from types import MappingProxyType
from typing import Mapping, Optional

from lanparty_py.exceptions import (
    InstallDirMissingError,
    ManifestFieldMissingError,
    ManifestUnreadableError,
)

logger = logging.getLogger("lanparty.steam.appmanifest")

FIELDS = ("appid", "name", "installdir")


def _field_pattern(field: str) -> "re.Pattern[str]":
    return re.compile(
        rf'^[ \t]*"{re.escape(field)}"[ \t]+"(.+)"[ \t\r]*$', re.MULTILINE
    )


PATTERNS: Mapping[str, "re.Pattern[str]"] = MappingProxyType(
    {field: _field_pattern(field) for field in FIELDS}
)


def extract_field(contents: str, field: str) -> Optional[str]:
    """
    Return the quoted value of the first line defining *field*.

    Lines are matched case-sensitively, with any leading spaces or tabs.  Key
    and value must sit on the same line.  When a key appears more than once
    the first occurrence wins.  A missing key, an empty value or broken
    quoting all give ``None``.
    """
    pattern = PATTERNS.get(field) or _field_pattern(field)
    match = pattern.search(contents)
    if match is None:
        return None
    return match.group(1)


@dataclass(frozen=True)
class AppManifest:
    """An ``appmanifest_XXX.acf`` file held in memory."""

    contents: str
    path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Path) -> "AppManifest":
        """Read the manifest at *path*.

        Raises:
            ManifestUnreadableError: if the file is missing, unreadable or not
                valid UTF-8.
        """
        try:
            contents = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestUnreadableError(Path(path), str(e)) from e
        logger.debug(f"Read appmanifest {path} ({len(contents)} chars)")
        return cls(contents=contents, path=Path(path))

    @property
    def appid(self) -> Optional[str]:
        return extract_field(self.contents, "appid")

    @property
    def name(self) -> Optional[str]:
        return extract_field(self.contents, "name")

    @property
    def installdir(self) -> Optional[PurePath]:
        """The ``installdir`` value as a path relative to ``common``."""
        value = extract_field(self.contents, "installdir")
        if value is None:
            return None
        return PurePath(value)

    def require(self, field: str) -> str:
        """Return the value of *field* or raise ``ManifestFieldMissingError``."""
        value = extract_field(self.contents, field)
        if value is None:
            raise ManifestFieldMissingError(field, self.path)
        return value

    def resolve_installdir(self, common: Path) -> Path:
        """
        Return the absolute install directory below *common*.

        Raises:
            ManifestFieldMissingError: if the manifest has no ``installdir``.
            InstallDirMissingError: if the directory does not exist.
        """
        installdir = self.installdir
        if installdir is None:
            raise ManifestFieldMissingError("installdir", self.path)

        path = common / installdir
        if not path.is_dir():
            raise InstallDirMissingError(path)
        return path
