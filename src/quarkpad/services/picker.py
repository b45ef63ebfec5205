from __future__ import annotations

import logging
from typing import Protocol

log = logging.getLogger(__name__)


class Picker(Protocol):
    def pick_file(self) -> str | None: ...

    def pick_folder(self) -> str | None: ...


class TkPicker:
    """Native file/folder dialogs. Blocks until the user picks or cancels."""

    def _root(self):
        import tkinter

        root = tkinter.Tk()
        root.withdraw()
        root.attributes("-topmost", True)
        return root

    def pick_file(self) -> str | None:
        from tkinter import filedialog

        root = self._root()
        try:
            selected = filedialog.askopenfilename(parent=root)
        finally:
            root.destroy()
        return selected or None

    def pick_folder(self) -> str | None:
        from tkinter import filedialog

        root = self._root()
        try:
            selected = filedialog.askdirectory(parent=root)
        finally:
            root.destroy()
        if selected:
            log.debug("Picked folder %s", selected)
        return selected or None
