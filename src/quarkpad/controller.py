"""Top-level controller: owns the library and the current page, and carries out page actions."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .actions import clear_error, report_error, request_redraw, set_route, set_status
from .core.models import Game, LibraryData, Settings
from .pages import add_game, home, settings as settings_page
from .pages.add_game import AddGameState
from .pages.home import HomeState
from .pages.settings import SettingsState
from .services.game_launcher import LaunchError, launch_game
from .services.library_store import save_library
from .services.picker import Picker, TkPicker
from .state import ADD_GAME, HOME, SETTINGS, AppState

log = logging.getLogger(__name__)


class LibraryController:
    def __init__(
        self,
        data: LibraryData,
        state: AppState | None = None,
        *,
        save: Callable[[LibraryData], None] = save_library,
        launcher: Callable[[Game, Settings], Any] = launch_game,
        picker: Picker | None = None,
    ):
        self.data = data
        self.state = state or AppState()
        self._save = save
        self._launcher = launcher
        self.picker = picker or TkPicker()

        self.home = HomeState.load(data.games)
        self.add_game_form: AddGameState | None = None
        self.settings_form: SettingsState | None = None

        self.state.game_count = len(data.games)
        set_route(self.state, HOME)

    @property
    def route(self) -> str:
        return self.state.route

    # -- transitions ---------------------------------------------------

    def go_home(self) -> None:
        self.add_game_form = None
        self.settings_form = None
        self.home.sync(self.data.games)
        set_route(self.state, HOME)
        request_redraw(self.state)

    def open_settings(self) -> None:
        self.settings_form = SettingsState.load(self.data.settings, self.picker)
        set_route(self.state, SETTINGS)
        request_redraw(self.state)

    def _open_add_game(self, form: AddGameState) -> None:
        self.add_game_form = form
        set_route(self.state, ADD_GAME)
        request_redraw(self.state)

    # -- dispatch ------------------------------------------------------

    def dispatch_home(self, message: home.HomeMessage) -> None:
        if self.route != HOME:
            log.debug("Ignoring %r, current page is %s", message, self.route)
            return
        index = getattr(message, "index", None)
        if index is not None and not self._valid_index(index):
            log.warning("Ignoring %r: library has %d games", message, len(self.data.games))
            return
        action = self.home.update(message)
        request_redraw(self.state)
        if action is None:
            return

        if isinstance(action, home.ToAddGame):
            self._open_add_game(AddGameState.new(self.picker))
        elif isinstance(action, home.EditGame):
            game = self.data.games[action.index]
            self._open_add_game(AddGameState.load(game, action.index, self.picker))
        elif isinstance(action, home.RemoveGame):
            removed = self.data.games.pop(action.index)
            log.info("Removed %s", removed.name)
            self._persist()
            self.home.sync(self.data.games)
        elif isinstance(action, home.LaunchGame):
            self.launch(action.index)

    def dispatch_add_game(self, message: add_game.AddGameMessage) -> None:
        if self.route != ADD_GAME or self.add_game_form is None:
            log.debug("Ignoring %r, current page is %s", message, self.route)
            return
        action = self.add_game_form.update(message)
        request_redraw(self.state)
        if action is None:
            return

        if isinstance(action, add_game.NewGame):
            self.data.games.append(action.game)
            log.info("Added %s at index %d", action.game.name, len(self.data.games) - 1)
        elif isinstance(action, add_game.EditGame):
            self.data.games[action.index] = action.game
            log.info("Updated %s at index %d", action.game.name, action.index)
        self._persist()
        self.go_home()

    def dispatch_settings(self, message: settings_page.SettingsMessage) -> None:
        if self.route != SETTINGS or self.settings_form is None:
            log.debug("Ignoring %r, current page is %s", message, self.route)
            return
        action = self.settings_form.update(message)
        request_redraw(self.state)
        if action is None:
            return

        self.data.settings = action.settings
        log.info("Settings updated: %s", action.settings)
        self._persist()
        self.go_home()

    # -- side effects --------------------------------------------------

    def launch(self, index: int) -> bool:
        if not self._valid_index(index):
            log.warning("Ignoring launch of index %d: library has %d games", index, len(self.data.games))
            return False
        game = self.data.games[index]
        try:
            self._launcher(game, self.data.settings)
        except LaunchError as exc:
            log.error("Launch failed for %s: %s", game.name, exc)
            report_error(self.state, f"Could not launch {game.name}: {exc}")
            return False
        clear_error(self.state)
        set_status(self.state, f"Launched {game.name}")
        return True

    def retry_save(self) -> bool:
        return self._persist()

    def _persist(self) -> bool:
        self.state.game_count = len(self.data.games)
        try:
            self._save(self.data)
        except OSError as exc:
            # in-memory library is kept; disk catches up on the next successful write
            log.exception("Failed to save library")
            self.state.unsaved = True
            report_error(self.state, f"Could not save library: {exc}")
            return False
        self.state.unsaved = False
        clear_error(self.state)
        set_status(self.state, f"Saved ({len(self.data.games)} games)")
        return True

    def _valid_index(self, index: int) -> bool:
        return 0 <= index < len(self.data.games)
