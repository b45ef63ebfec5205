"""Controller tests: page transitions, library mutations, persistence and launch failures."""

import os
from pathlib import Path

import pytest

from conftest import FakePicker, make_game
from quarkpad import main as main_module
from quarkpad.controller import LibraryController
from quarkpad.core.models import Game, LibraryData, Settings
from quarkpad.pages import add_game, home, settings
from quarkpad.services.game_launcher import InvalidExePath, SpawnFailed
from quarkpad.state import ADD_GAME, HOME, SETTINGS


class RecordingSave:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.snapshots: list[dict] = []

    def __call__(self, data: LibraryData) -> None:
        if self.fail:
            raise PermissionError(13, "Permission denied")
        self.snapshots.append(data.to_dict())


class RecordingLauncher:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[Game, Settings]] = []

    def __call__(self, game: Game, settings: Settings) -> None:
        self.calls.append((game, settings))
        if self.error is not None:
            raise self.error


def _controller(count: int = 3, *, save=None, launcher=None, picker=None) -> LibraryController:
    data = LibraryData(
        games=[make_game(f"g{i}") for i in range(count)],
        settings=Settings("/rt/proton", "/rt/umu"),
    )
    return LibraryController(
        data,
        save=save or RecordingSave(),
        launcher=launcher or RecordingLauncher(),
        picker=picker or FakePicker(),
    )


def _fill_form(ctl: LibraryController, files: dict[str, str], name: str) -> None:
    ctl.dispatch_add_game(add_game.GameNameChanged(name))
    ctl.dispatch_add_game(add_game.CoverPathChanged(files["cover"]))
    ctl.dispatch_add_game(add_game.ExePathChanged(files["exe"]))
    ctl.dispatch_add_game(add_game.WineprefixChanged(files["prefix"]))


class TestTransitions:
    def test_starts_on_home(self) -> None:
        ctl = _controller()
        assert ctl.route == HOME
        assert ctl.state.game_count == 3
        assert ctl.home.games == ctl.data.games

    def test_to_add_game_opens_empty_form(self) -> None:
        ctl = _controller()
        ctl.dispatch_home(home.ToAddGame())
        assert ctl.route == ADD_GAME
        assert ctl.add_game_form is not None
        assert not ctl.add_game_form.is_editing
        assert ctl.add_game_form.game_name == ""

    def test_edit_opens_prefilled_form(self) -> None:
        ctl = _controller()
        ctl.dispatch_home(home.EditGame(1))
        assert ctl.route == ADD_GAME
        assert ctl.add_game_form.edit_index == 1
        assert ctl.add_game_form.game_name == "g1"
        assert ctl.add_game_form.wineprefix == "/prefixes/g1"

    def test_open_settings_prefills(self) -> None:
        ctl = _controller()
        ctl.open_settings()
        assert ctl.route == SETTINGS
        assert ctl.settings_form.proton_path == "/rt/proton"
        assert ctl.settings_form.umu_path == "/rt/umu"

    def test_go_home_discards_unsaved_form(self) -> None:
        save = RecordingSave()
        ctl = _controller(save=save)
        ctl.dispatch_home(home.EditGame(0))
        ctl.dispatch_add_game(add_game.GameNameChanged("changed"))
        ctl.go_home()
        assert ctl.route == HOME
        assert ctl.add_game_form is None
        assert ctl.data.games[0].name == "g0"
        assert save.snapshots == []

    def test_redraw_requested_on_change(self) -> None:
        ctl = _controller()
        before = ctl.state.revision
        ctl.dispatch_home(home.SelectGame(0))
        assert ctl.state.revision > before

    def test_messages_for_other_pages_are_ignored(self) -> None:
        ctl = _controller()
        ctl.dispatch_add_game(add_game.Save())
        ctl.dispatch_settings(settings.Save())
        assert ctl.route == HOME
        ctl.open_settings()
        ctl.dispatch_home(home.RemoveGame(0))
        assert len(ctl.data.games) == 3
        assert ctl.route == SETTINGS


class TestHomeActions:
    def test_remove_shifts_following_games(self) -> None:
        save = RecordingSave()
        ctl = _controller(save=save)
        former_last = ctl.data.games[2]
        ctl.dispatch_home(home.RemoveGame(1))
        assert [g.name for g in ctl.data.games] == ["g0", "g2"]
        assert ctl.data.games[1] == former_last
        assert ctl.home.games == ctl.data.games
        assert ctl.state.game_count == 2
        assert len(save.snapshots) == 1
        assert [g["name"] for g in save.snapshots[0]["games"]] == ["g0", "g2"]

    def test_remove_keeps_overlay_on_same_game(self) -> None:
        ctl = _controller()
        ctl.dispatch_home(home.SelectGame(2))
        ctl.dispatch_home(home.RemoveGame(0))
        assert ctl.home.selected_game == make_game("g2")

    def test_remove_last_remaining_game(self) -> None:
        ctl = _controller(count=1)
        ctl.dispatch_home(home.SelectGame(0))
        ctl.dispatch_home(home.RemoveGame(0))
        assert ctl.data.games == []
        assert ctl.home.selected_index is None

    @pytest.mark.parametrize(
        "message",
        [home.RemoveGame(3), home.EditGame(-1), home.LaunchGame(7), home.SelectGame(5)],
    )
    def test_stale_index_is_ignored(self, message) -> None:
        save = RecordingSave()
        launcher = RecordingLauncher()
        ctl = _controller(save=save, launcher=launcher)
        ctl.dispatch_home(message)
        assert ctl.route == HOME
        assert len(ctl.data.games) == 3
        assert ctl.home.selected_index is None
        assert save.snapshots == []
        assert launcher.calls == []

    def test_launch_passes_game_and_settings(self) -> None:
        launcher = RecordingLauncher()
        ctl = _controller(launcher=launcher)
        ctl.dispatch_home(home.LaunchGame(2))
        assert launcher.calls == [(make_game("g2"), Settings("/rt/proton", "/rt/umu"))]
        assert ctl.state.status_text == "Launched g2"
        assert ctl.state.error_text == ""

    @pytest.mark.parametrize(
        "error",
        [
            InvalidExePath("/games/g0/"),
            SpawnFailed("/rt/umu/umu-run", FileNotFoundError(2, "No such file or directory")),
            SpawnFailed("/rt/umu/umu-run", ValueError("embedded null byte")),
        ],
    )
    def test_launch_failure_is_reported(self, error) -> None:
        save = RecordingSave()
        ctl = _controller(save=save, launcher=RecordingLauncher(error))
        assert ctl.launch(0) is False
        assert ctl.route == HOME
        assert ctl.state.error_text.startswith("Could not launch g0")
        assert len(ctl.data.games) == 3
        assert save.snapshots == []

    def test_successful_launch_clears_previous_error(self) -> None:
        launcher = RecordingLauncher(InvalidExePath(""))
        ctl = _controller(launcher=launcher)
        ctl.launch(0)
        launcher.error = None
        assert ctl.launch(0) is True
        assert ctl.state.error_text == ""


class TestAddGameActions:
    def test_new_game_is_appended_and_saved(self, game_files) -> None:
        save = RecordingSave()
        ctl = _controller(save=save)
        ctl.dispatch_home(home.ToAddGame())
        _fill_form(ctl, game_files, "Portal")
        ctl.dispatch_add_game(add_game.Save())

        assert ctl.route == HOME
        assert ctl.add_game_form is None
        assert len(ctl.data.games) == 4
        assert ctl.data.games[-1] == Game("Portal", game_files["cover"], game_files["exe"], game_files["prefix"])
        assert ctl.home.games[-1].name == "Portal"
        assert save.snapshots[-1]["games"][-1]["wineprefix"] == game_files["prefix"]
        assert ctl.state.status_text == "Saved (4 games)"

    def test_duplicate_names_are_allowed(self, game_files) -> None:
        ctl = _controller()
        for _ in range(2):
            ctl.dispatch_home(home.ToAddGame())
            _fill_form(ctl, game_files, "Portal")
            ctl.dispatch_add_game(add_game.Save())
        assert [g.name for g in ctl.data.games[-2:]] == ["Portal", "Portal"]

    def test_edit_replaces_in_place(self, game_files) -> None:
        save = RecordingSave()
        ctl = _controller(save=save)
        ctl.dispatch_home(home.EditGame(1))
        _fill_form(ctl, game_files, "Renamed")
        ctl.dispatch_add_game(add_game.Save())

        assert [g.name for g in ctl.data.games] == ["g0", "Renamed", "g2"]
        assert ctl.route == HOME
        assert len(save.snapshots) == 1

    def test_invalid_form_stays_open(self) -> None:
        save = RecordingSave()
        ctl = _controller(save=save)
        ctl.dispatch_home(home.ToAddGame())
        ctl.dispatch_add_game(add_game.Save())
        assert ctl.route == ADD_GAME
        assert ctl.add_game_form.visible_error("game_name") == "Game name is required"
        assert len(ctl.data.games) == 3
        assert save.snapshots == []

    def test_dialogs_go_through_picker(self, game_files) -> None:
        picker = FakePicker(files=[game_files["exe"]])
        ctl = _controller(picker=picker)
        ctl.dispatch_home(home.ToAddGame())
        ctl.dispatch_add_game(add_game.ExePathDialogOpen())
        assert picker.calls == ["file"]
        assert ctl.add_game_form.exe_path == game_files["exe"]


class TestSettingsActions:
    def test_save_settings_persists(self, runtime_dirs: Settings) -> None:
        save = RecordingSave()
        ctl = _controller(save=save)
        ctl.open_settings()
        ctl.dispatch_settings(settings.ProtonPathChanged(runtime_dirs.proton_path))
        ctl.dispatch_settings(settings.UmuPathChanged(runtime_dirs.umu_path))
        ctl.dispatch_settings(settings.Save())

        assert ctl.route == HOME
        assert ctl.settings_form is None
        assert ctl.data.settings == runtime_dirs
        assert save.snapshots[-1]["settings"] == runtime_dirs.to_dict()

    def test_invalid_settings_stay_open(self) -> None:
        ctl = _controller()
        ctl.open_settings()
        ctl.dispatch_settings(settings.Save())
        assert ctl.route == SETTINGS
        assert ctl.data.settings == Settings("/rt/proton", "/rt/umu")


class TestPersistenceFailure:
    def test_failed_save_keeps_change_in_memory(self, game_files) -> None:
        save = RecordingSave(fail=True)
        ctl = _controller(save=save)
        ctl.dispatch_home(home.ToAddGame())
        _fill_form(ctl, game_files, "Portal")
        ctl.dispatch_add_game(add_game.Save())

        assert ctl.route == HOME
        assert len(ctl.data.games) == 4
        assert ctl.state.unsaved
        assert ctl.state.error_text.startswith("Could not save library")

    def test_failed_remove_keeps_removal(self) -> None:
        ctl = _controller(save=RecordingSave(fail=True))
        ctl.dispatch_home(home.RemoveGame(0))
        assert [g.name for g in ctl.data.games] == ["g1", "g2"]
        assert ctl.state.unsaved

    def test_retry_save(self) -> None:
        save = RecordingSave(fail=True)
        ctl = _controller(save=save)
        ctl.dispatch_home(home.RemoveGame(0))
        assert ctl.retry_save() is False

        save.fail = False
        assert ctl.retry_save() is True
        assert not ctl.state.unsaved
        assert ctl.state.error_text == ""
        assert [g["name"] for g in save.snapshots[-1]["games"]] == ["g1", "g2"]


class TestMain:
    def test_unreadable_library_exits_with_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("QUARKPAD_DATA_DIR", raising=False)
        monkeypatch.setattr(main_module, "setup_logging", lambda *args, **kwargs: None)
        (tmp_path / "data.toml").write_text("[[games]\n", encoding="utf-8")

        assert main_module.main(["--data-dir", str(tmp_path)]) == 1
        assert (tmp_path / "data.toml").read_text(encoding="utf-8") == "[[games]\n"
        assert "QUARKPAD_DATA_DIR" not in os.environ
