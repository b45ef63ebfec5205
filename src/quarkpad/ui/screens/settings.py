from __future__ import annotations

from kivy.uix.screenmanager import Screen
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label

from ...pages import settings
from ...state import SETTINGS
from ..widgets import COLORS, apply_bg, FormField, SectionHeader, HoverButton


class SettingsScreen(Screen):
    def __init__(self, controller, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self.state = controller.state

        root = BoxLayout(orientation="vertical", padding=[32, 16], spacing=16)
        apply_bg(root, COLORS["bg"])

        back = HoverButton(text="Back", size_hint=(None, 1), width=110)
        back.bind(on_press=lambda *_: self.controller.go_home())

        self.proton_field = FormField(
            "Proton Path",
            lambda v: self._send(settings.ProtonPathChanged(v)),
            on_browse=lambda: self._send(settings.ProtonPathDialogOpen()),
        )
        self.umu_field = FormField(
            "Umu Path",
            lambda v: self._send(settings.UmuPathChanged(v)),
            on_browse=lambda: self._send(settings.UmuPathDialogOpen()),
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
        save.bind(on_press=lambda *_: self._send(settings.Save()))
        save_row.add_widget(save)
        save_row.add_widget(Label())

        root.add_widget(SectionHeader("Settings", trailing=back))
        root.add_widget(self.proton_field)
        root.add_widget(self.umu_field)
        root.add_widget(save_row)
        root.add_widget(Label())
        self.add_widget(root)

        self.state.bind(revision=self._refresh)

    def _send(self, message) -> None:
        self.controller.dispatch_settings(message)

    def _refresh(self, *_):
        form = self.controller.settings_form
        if form is None or self.state.route != SETTINGS:
            return
        self.proton_field.show(form.proton_path, form.visible_error("proton_path"))
        self.umu_field.show(form.umu_path, form.visible_error("umu_path"))
