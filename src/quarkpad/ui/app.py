from __future__ import annotations

import logging

from kivy.app import App
from kivy.core.window import Window
from kivy.uix.screenmanager import ScreenManager, FadeTransition

from ..controller import LibraryController
from ..state import HOME, SETTINGS, ADD_GAME

from .screens.home import HomeScreen
from .screens.add_game import AddGameScreen
from .screens.settings import SettingsScreen


log = logging.getLogger(__name__)


class QuarkpadApp(App):
    title = "Quarkpad"

    def __init__(self, controller: LibraryController, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self.state = controller.state
        self.sm = ScreenManager(transition=FadeTransition(duration=0.15))

    def build(self):
        self.sm.add_widget(HomeScreen(self.controller, name=HOME))
        self.sm.add_widget(AddGameScreen(self.controller, name=ADD_GAME))
        self.sm.add_widget(SettingsScreen(self.controller, name=SETTINGS))

        # Route changes switch screens (like a router)
        self.state.bind(route=self._on_route)
        Window.bind(on_key_down=self._on_key_down)

        log.info("Screens registered: %s", list(self.sm.screen_names))
        return self.sm

    def _on_route(self, *_):
        if self.state.route in self.sm.screen_names:
            self.sm.current = self.state.route

    def _on_key_down(self, _window, key, _scancode, _codepoint, _modifiers):
        # Escape is "back", never "quit"
        if key == 27:
            if self.state.route != HOME:
                self.controller.go_home()
            return True
        return False
