from __future__ import annotations

from pathlib import Path
from typing import Callable

from kivy.core.window import Window
from kivy.graphics import Color, Rectangle, Line
from kivy.uix.anchorlayout import AnchorLayout
from kivy.uix.behaviors import ButtonBehavior
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.gridlayout import GridLayout
from kivy.uix.image import Image
from kivy.uix.label import Label
from kivy.uix.textinput import TextInput
from kivy.utils import get_color_from_hex

from ..core.models import Game


CARD_WIDTH = 160
CARD_HEIGHT = 272
GRID_GAP = 28

# Dark library palette
COLORS = {name: get_color_from_hex(value) for name, value in {
    "bg": "#171d25",
    "panel": "#1f2a37",
    "panel_alt": "#2a3f55",
    "card": "#212d3b",
    "cover": "#2c4459",
    "border": "#33485d",
    "selected": "#4d99ff",
    "text": "#f2f5f8",
    "muted": "#9aa7b4",
    "accent": "#3a6ea5",
    "error": "#f25959",
}.items()}


def apply_bg(widget, color):
    with widget.canvas.before:
        bg_color = Color(*color)
        bg_rect = Rectangle(pos=widget.pos, size=widget.size)

    def _sync_bg(*_):
        bg_rect.pos = widget.pos
        bg_rect.size = widget.size

    widget.bind(pos=_sync_bg, size=_sync_bg)
    return bg_color, bg_rect


def apply_outline(widget, color, width: float = 1.0, bottom_only: bool = False) -> Line:
    """Draw a border (or just a bottom rule) that follows the widget around."""
    def _points():
        if bottom_only:
            return {"points": [widget.x, widget.y, widget.right, widget.y]}
        return {"rectangle": (widget.x, widget.y, widget.width, widget.height)}

    with widget.canvas.after:
        Color(*color)
        line = Line(width=width, **_points())

    def _sync(*_):
        for key, value in _points().items():
            setattr(line, key, value)

    widget.bind(pos=_sync, size=_sync)
    return line


def muted_label(text: str, **kwargs) -> Label:
    kwargs.setdefault("size_hint_y", None)
    kwargs.setdefault("height", 24)
    label = Label(text=text, color=COLORS["muted"], halign="left", valign="middle", **kwargs)
    label.bind(size=label.setter("text_size"))
    return label


class HoverButton(Button):
    def __init__(self, base_color=COLORS["panel"], hover_color=COLORS["accent"], **kwargs):
        kwargs.setdefault("background_normal", "")
        kwargs.setdefault("background_down", "")
        kwargs.setdefault("color", COLORS["text"])
        super().__init__(background_color=base_color, **kwargs)
        self.base_color = base_color
        self.hover_color = hover_color
        Window.bind(mouse_pos=self._on_mouse_pos)

    def _on_mouse_pos(self, _window, pos):
        if self.get_root_window() is None:
            return
        inside = self.collide_point(*self.to_widget(*pos))
        self.background_color = self.hover_color if inside else self.base_color


class GameCard(ButtonBehavior, BoxLayout):
    """Cover art over the game name. Games without a readable cover show their initial instead."""

    def __init__(self, game: Game, selected: bool = False, **kwargs):
        super().__init__(
            orientation="vertical",
            size_hint=(None, None),
            size=(CARD_WIDTH, CARD_HEIGHT),
            padding=8,
            spacing=6,
            **kwargs,
        )
        apply_bg(self, COLORS["card"])
        if selected:
            apply_outline(self, COLORS["selected"], width=2.0)
        else:
            apply_outline(self, COLORS["border"])

        cover = AnchorLayout(size_hint=(1, 0.82))
        apply_bg(cover, COLORS["cover"])
        if game.cover_path and Path(game.cover_path).is_file():
            cover.add_widget(Image(source=game.cover_path, fit_mode="contain"))
        else:
            initial = game.name.strip()[:1].upper() or "?"
            cover.add_widget(Label(text=initial, font_size="48sp", color=COLORS["muted"]))
        self.add_widget(cover)

        caption = Label(
            text=game.name,
            color=COLORS["text"],
            font_size="14sp",
            size_hint_y=None,
            height=40,
            halign="center",
            valign="top",
            shorten=True,
            shorten_from="right",
        )
        caption.bind(size=caption.setter("text_size"))
        self.add_widget(caption)


class SectionHeader(BoxLayout):
    def __init__(self, text: str, trailing=None, **kwargs):
        super().__init__(size_hint_y=None, height=44, padding=[4, 0], **kwargs)
        self.label = Label(
            text=text,
            bold=True,
            color=COLORS["text"],
            font_size="22sp",
            halign="left",
            valign="middle",
        )
        self.label.bind(size=self.label.setter("text_size"))
        self.add_widget(self.label)
        if trailing is not None:
            self.add_widget(trailing)
        apply_outline(self, COLORS["border"], bottom_only=True)

class PathInput(TextInput):
    def __init__(self, **kwargs):
        super().__init__(
            multiline=False,
            background_normal="",
            background_active="",
            background_color=COLORS["panel"],
            foreground_color=COLORS["text"],
            cursor_color=COLORS["accent"],
            padding=[10, 8, 10, 8],
            font_size="14sp",
            **kwargs,
        )


class FormField(BoxLayout):
    """Label, text input, optional browse button and an error line underneath."""

    def __init__(
        self,
        label: str,
        on_text: Callable[[str], None],
        on_browse: Callable[[], None] | None = None,
        **kwargs,
    ):
        super().__init__(orientation="vertical", size_hint_y=None, height=62, spacing=4, **kwargs)
        self._on_text = on_text
        self._syncing = False
        row = BoxLayout(size_hint_y=None, height=38, spacing=12)
        caption = Label(
            text=label,
            color=COLORS["text"],
            size_hint_x=None,
            width=128,
            halign="left",
            valign="middle",
        )
        caption.bind(size=caption.setter("text_size"))
        self.input = PathInput()
        self.input.bind(text=self._text_changed)
        row.add_widget(caption)
        row.add_widget(self.input)
        if on_browse is not None:
            browse = HoverButton(text="Browse", size_hint_x=None, width=90)
            browse.bind(on_press=lambda *_: on_browse())
            row.add_widget(browse)

        self.error = Label(
            text="",
            color=COLORS["error"],
            font_size="12sp",
            size_hint_y=None,
            height=18,
            padding=[140, 0, 0, 0],
            halign="left",
            valign="middle",
        )
        self.error.bind(size=self.error.setter("text_size"))
        self.add_widget(row)
        self.add_widget(self.error)

    def _text_changed(self, _input, value):
        if not self._syncing:
            self._on_text(value)

    def show(self, text: str, error: str | None) -> None:
        if self.input.text != text:
            self._syncing = True
            try:
                self.input.text = text
            finally:
                self._syncing = False
        self.error.text = error or ""


def build_game_grid(
    games: list[Game],
    on_select: Callable[[int], None],
    selected_index: int | None = None,
    cols: int = 4,
) -> GridLayout:
    grid = GridLayout(
        cols=cols,
        spacing=GRID_GAP,
        padding=[GRID_GAP, 8],
        size_hint=(None, None),
        width=CARD_WIDTH * cols + GRID_GAP * (cols + 1),
        row_force_default=True,
        row_default_height=CARD_HEIGHT,
    )
    grid.bind(minimum_height=grid.setter("height"))
    for index, game in enumerate(games):
        card = GameCard(game, selected=index == selected_index)
        card.bind(on_press=lambda _c, i=index: on_select(i))
        grid.add_widget(card)
    return grid
