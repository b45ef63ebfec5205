"""Shared fixtures. Kivy must be told to leave sys.argv and the user config alone before it is imported."""

import os

os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_CONFIG", "1")
os.environ.setdefault("KIVY_NO_FILELOG", "1")
os.environ.setdefault("KIVY_NO_CONSOLELOG", "1")

from pathlib import Path

import pytest

from quarkpad.core.models import Game, Settings


class FakePicker:
    """Returns queued answers; None means the user cancelled."""

    def __init__(self, files=None, folders=None):
        self.files = list(files or [])
        self.folders = list(folders or [])
        self.calls: list[str] = []

    def pick_file(self):
        self.calls.append("file")
        return self.files.pop(0) if self.files else None

    def pick_folder(self):
        self.calls.append("folder")
        return self.folders.pop(0) if self.folders else None


@pytest.fixture
def picker() -> FakePicker:
    return FakePicker()


@pytest.fixture
def game_files(tmp_path: Path) -> dict[str, str]:
    """A cover image, an executable and a wineprefix that all exist on disk."""
    game_dir = tmp_path / "games" / "portal"
    game_dir.mkdir(parents=True)
    cover = tmp_path / "covers" / "portal.png"
    cover.parent.mkdir()
    cover.write_bytes(b"\x89PNG")
    exe = game_dir / "portal.exe"
    exe.write_bytes(b"MZ")
    prefix = tmp_path / "prefixes" / "portal"
    prefix.mkdir(parents=True)
    return {"cover": str(cover), "exe": str(exe), "prefix": str(prefix)}


@pytest.fixture
def runtime_dirs(tmp_path: Path) -> Settings:
    proton = tmp_path / "runtime" / "proton"
    umu = tmp_path / "runtime" / "umu"
    proton.mkdir(parents=True)
    umu.mkdir(parents=True)
    return Settings(proton_path=str(proton), umu_path=str(umu))


def make_game(name: str) -> Game:
    return Game(
        name=name,
        cover_path=f"/covers/{name}.png",
        exe_path=f"/games/{name}/{name}.exe",
        wine_prefix=f"/prefixes/{name}",
    )
