"""Tests for the platform helpers module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from lanparty_py.exceptions import UnsupportedPlatformError
from lanparty_py.platform import (
    default_steamapps_path,
    is_linux,
    is_macos,
    is_windows,
    os_family,
)


class TestOsFamily:
    @pytest.mark.parametrize(
        "platform,family",
        [
            ("win32", "windows"),
            ("darwin", "darwin"),
            ("linux", "linux"),
            ("linux2", "linux"),
            ("freebsd13", "freebsd13"),
        ],
    )
    def test_family(self, platform: str, family: str) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = platform
            assert os_family() == family


class TestIsMacos:
    def test_true_on_darwin(self) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = "darwin"
            assert is_macos() is True

    def test_false_on_linux(self) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = "linux"
            assert is_macos() is False


class TestIsLinux:
    def test_true_on_linux_variant(self) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = "linux2"
            assert is_linux() is True

    def test_false_on_windows(self) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = "win32"
            assert is_linux() is False
            assert is_windows() is True


class TestDefaultSteamappsPath:
    def test_windows(self) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = "win32"
            assert str(default_steamapps_path()) == (
                r"C:\Program Files (x86)\Steam\steamapps"
            )

    def test_macos(self) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = "darwin"
            assert default_steamapps_path() == (
                Path.home() / "Library" / "Application Support" / "Steam" / "steamapps"
            )

    def test_linux(self) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = "linux"
            assert default_steamapps_path() == (
                Path.home() / ".steam" / "steam" / "steamapps"
            )

    def test_unsupported(self) -> None:
        with patch("lanparty_py.platform.sys") as mock_sys:
            mock_sys.platform = "aix"
            with pytest.raises(UnsupportedPlatformError) as exc_info:
                default_steamapps_path()
            assert exc_info.value.family == "aix"
