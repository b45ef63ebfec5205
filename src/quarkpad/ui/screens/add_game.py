from __future__ import annotations

from kivy.uix.screenmanager import Screen
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label

from ...pages import add_game
from ...state import ADD_GAME
from ..widgets import COLORS, apply_bg, FormField, SectionHeader, HoverButton


class AddGameScreen(Screen):
    def __init__(self, controller, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self.state = controller.state

        root = BoxLayout(orientation="vertical", padding=[32, 16], spacing=16)
        apply_bg(root, COLORS["bg"])

        back = HoverButton(text="Back", size_hint=(None, 1), width=110)
        back.bind(on_press=lambda *_: self.controller.go_home())
        self.header = SectionHeader("Add Game", trailing=back)

        self.name_field = FormField("Game name", lambda v: self._send(add_game.GameNameChanged(v)))
        self.cover_field = FormField(
            "Cover path",
            lambda v: self._send(add_game.CoverPathChanged(v)),
            on_browse=lambda: self._send(add_game.CoverPathDialogOpen()),
        )
        self.exe_field = FormField(
            "Executable path",
            lambda v: self._send(add_game.ExePathChanged(v)),
            on_browse=lambda: self._send(add_game.ExePathDialogOpen()),
        )
        self.prefix_field = FormField(
            "Wineprefix",
            lambda v: self._send(add_game.WineprefixChanged(v)),
            on_browse=lambda: self._send(add_game.WineprefixDialogOpen()),
        )

        save_row = BoxLayout(size_hint_y=None, height=40)
        save_row.add_widget(Label())
        save = HoverButton(
            text="Save",
            size_hint=(None, 1),
            width=140,
            base_color=COLORS["accent"],
            hover_color=COLORS["panel_alt"],
        )
        save.bind(on_press=lambda *_: self._send(add_game.Save()))
        save_row.add_widget(save)
        save_row.add_widget(Label())

        root.add_widget(self.header)
        for w in (self.name_field, self.cover_field, self.exe_field, self.prefix_field):
            root.add_widget(w)
        root.add_widget(save_row)
        root.add_widget(Label())
        self.add_widget(root)

        self.state.bind(revision=self._refresh)

    def _send(self, message) -> None:
        self.controller.dispatch_add_game(message)

    def _refresh(self, *_):
        form = self.controller.add_game_form
        if form is None or self.state.route != ADD_GAME:
            return
        self.header.label.text = "Edit Game" if form.is_editing else "Add Game"
        self.name_field.show(form.game_name, form.visible_error("game_name"))
        self.cover_field.show(form.cover_path, form.visible_error("cover_path"))
        self.exe_field.show(form.exe_path, form.visible_error("exe_path"))
        self.prefix_field.show(form.wineprefix, form.visible_error("wineprefix"))
