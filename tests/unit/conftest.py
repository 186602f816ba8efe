"""
Shared fixtures for building Steam library folders on disk.
"""

from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

GameFactory = Callable[..., Path]


def render_manifest(appid: str, name: str, installdir: str) -> str:
    """Build a minimal manifest with placeholder values for the opaque keys."""
    return (
        '"AppState"\n'
        "{\n"
        f'\t"appid"\t\t"{appid}"\n'
        '\t"Universe"\t\t"1"\n'
        f'\t"name"\t\t"{name}"\n'
        '\t"StateFlags"\t\t"4"\n'
        f'\t"installdir"\t\t"{installdir}"\n'
        "}\n"
    )


def write_game(
    root: Path,
    appid: str,
    name: str,
    installdir: str,
    files: Optional[Dict[str, bytes]] = None,
) -> Path:
    """Create a manifest and an install directory below *root*."""
    root.mkdir(parents=True, exist_ok=True)
    (root / f"appmanifest_{appid}.acf").write_text(
        render_manifest(appid, name, installdir), encoding="utf-8"
    )
    game_dir = root / "common" / installdir
    game_dir.mkdir(parents=True, exist_ok=True)
    for relative, content in (files or {}).items():
        path = game_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return game_dir


@pytest.fixture
def library(tmp_path: Path) -> Path:
    """An empty steamapps folder with a common folder."""
    root = tmp_path / "steamapps"
    (root / "common").mkdir(parents=True)
    return root


@pytest.fixture
def add_game(library: Path) -> GameFactory:
    """Factory adding games to the ``library`` fixture."""

    def _add(
        appid: str,
        name: str,
        installdir: str,
        files: Optional[Dict[str, bytes]] = None,
    ) -> Path:
        return write_game(library, appid, name, installdir, files)

    return _add


@pytest.fixture
def make_game() -> Callable[..., Path]:
    """``write_game`` for tests that need more than one library root."""
    return write_game
