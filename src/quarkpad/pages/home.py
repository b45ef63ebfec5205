"""Library (home) page: game grid plus a launch/edit/remove overlay for the selected entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..core.models import Game


@dataclass(frozen=True)
class SelectGame:
    index: int


@dataclass(frozen=True)
class ClearSelection:
    pass


# These four are both messages and the actions handed to the controller.

@dataclass(frozen=True)
class LaunchGame:
    index: int


@dataclass(frozen=True)
class EditGame:
    index: int


@dataclass(frozen=True)
class RemoveGame:
    index: int


@dataclass(frozen=True)
class ToAddGame:
    pass


HomeMessage = Union[SelectGame, ClearSelection, LaunchGame, EditGame, RemoveGame, ToAddGame]
HomeAction = Union[LaunchGame, EditGame, RemoveGame, ToAddGame]


@dataclass
class HomeState:
    games: list[Game] = field(default_factory=list)
    selected_index: int | None = None

    @classmethod
    def load(cls, games: list[Game]) -> HomeState:
        return cls(games=list(games))

    @property
    def selected_game(self) -> Game | None:
        if self.selected_index is None or not 0 <= self.selected_index < len(self.games):
            return None
        return self.games[self.selected_index]

    def sync(self, games: list[Game]) -> None:
        """Take a fresh copy of the library after the controller changed it."""
        self.games = list(games)
        if self.selected_index is not None and self.selected_index >= len(self.games):
            self.selected_index = None

    def update(self, message: HomeMessage) -> HomeAction | None:
        if isinstance(message, SelectGame):
            if not 0 <= message.index < len(self.games):
                return None
            if self.selected_index == message.index:
                self.selected_index = None
            else:
                self.selected_index = message.index
            return None

        if isinstance(message, ClearSelection):
            self.selected_index = None
            return None

        if isinstance(message, RemoveGame):
            self._forget(message.index)
            return message

        if isinstance(message, (LaunchGame, EditGame, ToAddGame)):
            return message

        raise TypeError(f"Unknown home message: {message!r}")

    def _forget(self, index: int) -> None:
        # keep the overlay pointing at the same game once later entries shift down
        if self.selected_index is None:
            return
        if self.selected_index == index:
            self.selected_index = None
        elif self.selected_index > index:
            self.selected_index -= 1
