from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any


class ModelFieldError(ValueError):
    """Raised when a persisted record carries a value of the wrong type."""


def _string_fields(cls: type, raw: dict[str, Any], renames: dict[str, str] | None = None) -> dict[str, str]:
    # Missing keys fall back to the dataclass default, unknown keys are dropped.
    renames = renames or {}
    out: dict[str, str] = {}
    for f in fields(cls):
        key = renames.get(f.name, f.name)
        if key not in raw:
            continue
        value = raw[key]
        if not isinstance(value, str):
            raise ModelFieldError(f"{cls.__name__}.{key} must be a string, got {type(value).__name__}")
        out[f.name] = value
    return out


# persisted key differs from the attribute name
_GAME_KEYS = {"wine_prefix": "wineprefix"}


@dataclass(frozen=True)
class Game:
    name: str = ""
    cover_path: str = ""
    exe_path: str = ""
    wine_prefix: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Game:
        return cls(**_string_fields(cls, raw, _GAME_KEYS))

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "cover_path": self.cover_path,
            "exe_path": self.exe_path,
            "wineprefix": self.wine_prefix,
        }


@dataclass(frozen=True)
class Settings:
    proton_path: str = ""
    umu_path: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(**_string_fields(cls, raw))

    def to_dict(self) -> dict[str, str]:
        return {"proton_path": self.proton_path, "umu_path": self.umu_path}


@dataclass
class LibraryData:
    """Everything Quarkpad persists: the ordered game list and the global settings."""

    games: list[Game] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> LibraryData:
        raw_games = raw.get("games", [])
        if not isinstance(raw_games, list) or not all(isinstance(g, dict) for g in raw_games):
            raise ModelFieldError("games must be an array of tables")
        raw_settings = raw.get("settings", {})
        if not isinstance(raw_settings, dict):
            raise ModelFieldError("settings must be a table")
        return cls(
            games=[Game.from_dict(g) for g in raw_games],
            settings=Settings.from_dict(raw_settings),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "settings": self.settings.to_dict(),
            "games": [g.to_dict() for g in self.games],
        }
