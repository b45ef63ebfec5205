from __future__ import annotations
import logging

from kivy.uix.screenmanager import Screen
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.uix.scrollview import ScrollView

from ...pages import home
from ...state import HOME
from ..widgets import (
    COLORS,
    apply_bg,
    SectionHeader,
    build_game_grid,
    muted_label,
    HoverButton,
)


class HomeScreen(Screen):
    def __init__(self, controller, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self.state = controller.state
        self.log = logging.getLogger(__name__)

        root = BoxLayout(orientation="vertical", padding=16, spacing=10)
        apply_bg(root, COLORS["bg"])

        settings_btn = HoverButton(text="Settings", size_hint=(None, 1), width=110)
        settings_btn.bind(on_press=lambda *_: self._on_settings_press())
        header = SectionHeader("Games", trailing=settings_btn)

        self.status = muted_label(self.state.status_text)

        self.scroll = ScrollView(size_hint=(1, 1), do_scroll_x=True)
        self.content = BoxLayout(orientation="vertical", size_hint=(None, None))
        self.content.bind(minimum_height=self.content.setter("height"))
        self.content.bind(minimum_width=self.content.setter("width"))
        self.scroll.add_widget(self.content)

        # launch / edit / remove bar for the selected game
        self.overlay = BoxLayout(size_hint_y=None, height=44, spacing=8, padding=[6, 4])
        apply_bg(self.overlay, COLORS["panel"])

        controls = BoxLayout(size_hint_y=None, height=44, spacing=8)
        self.retry_btn = HoverButton(text="Retry save", size_hint=(None, 1), width=140)
        self.retry_btn.bind(on_press=lambda *_: self.controller.retry_save())
        controls.add_widget(self.retry_btn)
        controls.add_widget(Label())
        add_btn = HoverButton(
            text="Add Game",
            size_hint=(None, 1),
            width=160,
            base_color=COLORS["accent"],
            hover_color=COLORS["panel_alt"],
        )
        add_btn.bind(on_press=lambda *_: self._send(home.ToAddGame()))
        controls.add_widget(add_btn)

        root.add_widget(header)
        root.add_widget(self.status)
        root.add_widget(self.scroll)
        root.add_widget(self.overlay)
        root.add_widget(controls)
        self.add_widget(root)

        self.state.bind(revision=self._rebuild)
        self.state.bind(status_text=self._on_status)
        self.state.bind(error_text=self._on_status)
        self.state.bind(unsaved=self._on_status)
        self._on_status()
        self._rebuild()

    def _send(self, message) -> None:
        self.controller.dispatch_home(message)

    def _on_settings_press(self) -> None:
        self.log.info("Settings button pressed")
        self.controller.open_settings()

    def _on_status(self, *_):
        self.status.text = self.state.status_text
        self.status.color = COLORS["error"] if self.state.error_text else COLORS["muted"]
        self.retry_btn.opacity = 1 if self.state.unsaved else 0
        self.retry_btn.disabled = not self.state.unsaved

    def _rebuild(self, *_):
        if self.state.route != HOME:
            return
        page = self.controller.home
        self.content.clear_widgets()
        if not page.games:
            self.content.add_widget(
                Label(
                    text="No Games Added",
                    font_size="32sp",
                    color=COLORS["muted"],
                    size_hint=(None, None),
                    size=(696, 80),
                )
            )
        else:
            self.content.add_widget(
                build_game_grid(
                    page.games,
                    on_select=lambda i: self._send(home.SelectGame(i)),
                    selected_index=page.selected_index,
                )
            )
        self._rebuild_overlay()

    def _rebuild_overlay(self):
        page = self.controller.home
        self.overlay.clear_widgets()
        game = page.selected_game
        if game is None:
            self.overlay.opacity = 0
            self.overlay.disabled = True
            return
        self.overlay.opacity = 1
        self.overlay.disabled = False

        index = page.selected_index
        name = Label(text=game.name, color=COLORS["text"], halign="left", valign="middle")
        name.bind(size=name.setter("text_size"))
        self.overlay.add_widget(name)
        for text, message in (
            ("Launch", home.LaunchGame(index)),
            ("Edit", home.EditGame(index)),
            ("Remove", home.RemoveGame(index)),
        ):
            btn = HoverButton(text=text, size_hint=(None, 1), width=100)
            btn.bind(on_press=lambda _b, m=message: self._send(m))
            self.overlay.add_widget(btn)
