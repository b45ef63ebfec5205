from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..core.models import Settings
from ..services.picker import Picker
from ..validate import validate_dir_path


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class ProtonPathChanged:
    value: str


@dataclass(frozen=True)
class UmuPathChanged:
    value: str


@dataclass(frozen=True)
class ProtonPathDialogOpen:
    pass


@dataclass(frozen=True)
class UmuPathDialogOpen:
    pass


SettingsMessage = Union[Save, ProtonPathChanged, UmuPathChanged, ProtonPathDialogOpen, UmuPathDialogOpen]


@dataclass(frozen=True)
class SaveSettings:
    settings: Settings


class SettingsState:
    def __init__(self, picker: Picker):
        self.picker = picker
        self.proton_path = ""
        self.umu_path = ""

        self.show_errors = False
        self.proton_path_error: str | None = None
        self.umu_path_error: str | None = None

    @classmethod
    def load(cls, settings: Settings, picker: Picker) -> SettingsState:
        state = cls(picker)
        state.proton_path = settings.proton_path
        state.umu_path = settings.umu_path
        return state

    def visible_error(self, field_name: str) -> str | None:
        if not self.show_errors:
            return None
        return getattr(self, f"{field_name}_error")

    def validate(self) -> bool:
        self.proton_path_error = validate_dir_path(self.proton_path)
        self.umu_path_error = validate_dir_path(self.umu_path)
        return self.proton_path_error is None and self.umu_path_error is None

    def update(self, message: SettingsMessage) -> SaveSettings | None:
        if isinstance(message, Save):
            self.show_errors = True
            if not self.validate():
                return None
            return SaveSettings(Settings(proton_path=self.proton_path, umu_path=self.umu_path))

        if isinstance(message, ProtonPathChanged):
            self.proton_path = message.value
        elif isinstance(message, UmuPathChanged):
            self.umu_path = message.value
        elif isinstance(message, ProtonPathDialogOpen):
            path = self.picker.pick_folder()
            if path is not None:
                self.proton_path = path
        elif isinstance(message, UmuPathDialogOpen):
            path = self.picker.pick_folder()
            if path is not None:
                self.umu_path = path
        else:
            raise TypeError(f"Unknown settings message: {message!r}")
        return None
