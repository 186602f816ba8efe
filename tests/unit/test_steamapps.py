"""
Tests for the SteamApps library root.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from lanparty_py.exceptions import (
    CommonFolderMissingError,
    DirectoryCreateError,
    LibraryPathError,
    ManifestUnreadableError,
    UnsupportedPlatformError,
)
from lanparty_py.steam.steamapps import SteamApps


def test_manifest_path_is_not_checked(tmp_path: Path) -> None:
    steam = SteamApps(tmp_path / "nowhere")
    assert steam.get_manifest_path("42") == tmp_path / "nowhere" / "appmanifest_42.acf"


def test_common_path(tmp_path: Path) -> None:
    assert SteamApps(tmp_path).common == tmp_path / "common"


def test_from_console_input_uses_path_verbatim(tmp_path: Path) -> None:
    steam = SteamApps.from_console_input(str(tmp_path / "missing"))
    assert steam.location == tmp_path / "missing"
    assert steam.role == "steamapps"


def test_from_console_input_does_not_expand_user() -> None:
    steam = SteamApps.from_console_input("~/games")
    assert steam.location == Path("~/games")


def test_from_console_input_none_uses_default() -> None:
    with patch("lanparty_py.platform.sys") as mock_sys:
        mock_sys.platform = "linux"
        steam = SteamApps.from_console_input(None, role="destination")
    assert steam.location == Path.home() / ".steam" / "steam" / "steamapps"
    assert steam.role == "destination"


def test_default_unsupported_platform() -> None:
    with patch("lanparty_py.platform.sys") as mock_sys:
        mock_sys.platform = "sunos5"
        with pytest.raises(UnsupportedPlatformError):
            SteamApps.default()


def test_value_semantics(tmp_path: Path) -> None:
    assert SteamApps(tmp_path) == SteamApps(Path(str(tmp_path)), role="source")
    assert len({SteamApps(tmp_path), SteamApps(tmp_path)}) == 1


def test_get_common_missing(tmp_path: Path) -> None:
    with pytest.raises(CommonFolderMissingError) as exc_info:
        SteamApps(tmp_path, role="source").get_common()
    assert exc_info.value.role == "source"
    assert "source" in str(exc_info.value)


def test_get_or_create_common_creates_empty_folder(tmp_path: Path) -> None:
    steam = SteamApps(tmp_path)
    with pytest.raises(CommonFolderMissingError):
        steam.get_common()

    common = steam.get_or_create_common()
    assert common == tmp_path / "common"
    assert common.is_dir()
    assert list(common.iterdir()) == []
    assert steam.get_common() == common


def test_get_or_create_common_existing(library: Path) -> None:
    marker = library / "common" / "keep.txt"
    marker.write_text("x")
    assert SteamApps(library).get_or_create_common() == library / "common"
    assert marker.exists()


def test_get_or_create_common_failure(tmp_path: Path) -> None:
    steam = SteamApps(tmp_path)
    with patch.object(Path, "mkdir", side_effect=PermissionError("denied")):
        with pytest.raises(DirectoryCreateError):
            steam.get_or_create_common()


def test_get_manifest(add_game, library: Path) -> None:
    add_game("42", "Answer", "AnswerGame")
    manifest = SteamApps(library).get_manifest("42")
    assert manifest.name == "Answer"


def test_get_manifest_missing(library: Path) -> None:
    with pytest.raises(ManifestUnreadableError):
        SteamApps(library).get_manifest("404")


def test_find_manifests_filters_entries(add_game, library: Path) -> None:
    add_game("1", "One", "One")
    add_game("2", "Two", "Two")
    (library / "libraryfolders.vdf").write_text("")
    (library / "appmanifest_dir.acf").mkdir()

    names = {p.name for p in SteamApps(library).find_manifests()}
    assert names == {"appmanifest_1.acf", "appmanifest_2.acf"}


def test_find_manifests_keeps_listing_order(add_game, library: Path) -> None:
    for appid in ("30", "10", "20"):
        add_game(appid, f"Game {appid}", f"Game{appid}")

    expected = [
        entry.name
        for entry in os.scandir(library)
        if entry.is_file() and entry.name.startswith("appmanifest_")
    ]
    assert [p.name for p in SteamApps(library).find_manifests()] == expected


def test_find_manifests_not_a_directory(tmp_path: Path) -> None:
    with pytest.raises(LibraryPathError):
        SteamApps(tmp_path / "missing").find_manifests()
