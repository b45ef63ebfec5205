"""Add/Edit game form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..core.models import Game
from ..services.picker import Picker
from ..validate import validate_dir_path, validate_file_path, validate_game_name


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class GameNameChanged:
    value: str


@dataclass(frozen=True)
class CoverPathChanged:
    value: str


@dataclass(frozen=True)
class ExePathChanged:
    value: str


@dataclass(frozen=True)
class WineprefixChanged:
    value: str


@dataclass(frozen=True)
class CoverPathDialogOpen:
    pass


@dataclass(frozen=True)
class ExePathDialogOpen:
    pass


@dataclass(frozen=True)
class WineprefixDialogOpen:
    pass


AddGameMessage = Union[
    Save,
    GameNameChanged,
    CoverPathChanged,
    ExePathChanged,
    WineprefixChanged,
    CoverPathDialogOpen,
    ExePathDialogOpen,
    WineprefixDialogOpen,
]


@dataclass(frozen=True)
class NewGame:
    game: Game


@dataclass(frozen=True)
class EditGame:
    index: int
    game: Game


AddGameAction = Union[NewGame, EditGame]

# message type -> field it writes
_TEXT_FIELDS = {
    GameNameChanged: "game_name",
    CoverPathChanged: "cover_path",
    ExePathChanged: "exe_path",
    WineprefixChanged: "wineprefix",
}
_FILE_DIALOGS = {CoverPathDialogOpen: "cover_path", ExePathDialogOpen: "exe_path"}
_FOLDER_DIALOGS = {WineprefixDialogOpen: "wineprefix"}


class AddGameState:
    def __init__(self, picker: Picker, edit_index: int | None = None):
        self.picker = picker
        self.game_name = ""
        self.cover_path = ""
        self.exe_path = ""
        self.wineprefix = ""
        self.edit_index = edit_index

        # errors are only rendered once the user has tried to save
        self.show_errors = False
        self.game_name_error: str | None = None
        self.cover_path_error: str | None = None
        self.exe_path_error: str | None = None
        self.wineprefix_error: str | None = None

    @classmethod
    def new(cls, picker: Picker) -> AddGameState:
        return cls(picker)

    @classmethod
    def load(cls, game: Game, index: int, picker: Picker) -> AddGameState:
        state = cls(picker, edit_index=index)
        state.game_name = game.name
        state.cover_path = game.cover_path
        state.exe_path = game.exe_path
        state.wineprefix = game.wine_prefix
        return state

    @property
    def is_editing(self) -> bool:
        return self.edit_index is not None

    def visible_error(self, field_name: str) -> str | None:
        if not self.show_errors:
            return None
        return getattr(self, f"{field_name}_error")

    def validate(self) -> bool:
        self.game_name_error = validate_game_name(self.game_name)
        self.cover_path_error = validate_file_path(self.cover_path)
        self.exe_path_error = validate_file_path(self.exe_path)
        self.wineprefix_error = validate_dir_path(self.wineprefix)
        return not any((
            self.game_name_error,
            self.cover_path_error,
            self.exe_path_error,
            self.wineprefix_error,
        ))

    def to_game(self) -> Game:
        return Game(
            name=self.game_name,
            cover_path=self.cover_path,
            exe_path=self.exe_path,
            wine_prefix=self.wineprefix,
        )

    def update(self, message: AddGameMessage) -> AddGameAction | None:
        kind = type(message)

        if kind is Save:
            self.show_errors = True
            if not self.validate():
                return None
            if self.edit_index is None:
                return NewGame(self.to_game())
            return EditGame(self.edit_index, self.to_game())

        if kind in _TEXT_FIELDS:
            setattr(self, _TEXT_FIELDS[kind], message.value)
        elif kind in _FILE_DIALOGS:
            self._apply_pick(_FILE_DIALOGS[kind], self.picker.pick_file())
        elif kind in _FOLDER_DIALOGS:
            self._apply_pick(_FOLDER_DIALOGS[kind], self.picker.pick_folder())
        else:
            raise TypeError(f"Unknown add-game message: {message!r}")
        return None

    def _apply_pick(self, field_name: str, path: str | None) -> None:
        if path is not None:
            setattr(self, field_name, path)
