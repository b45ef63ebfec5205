# Small mutators for AppState, so controllers and screens never poke at properties directly

from __future__ import annotations
from .state import AppState, ROUTES

def set_route(state: AppState, route: str) -> None:
    if route not in ROUTES:
        raise ValueError(f"Unknown route: {route}")
    state.route = route

def set_status(state: AppState, text: str) -> None:
    state.status_text = text

def report_error(state: AppState, text: str) -> None:
    state.error_text = text
    state.status_text = text

def clear_error(state: AppState) -> None:
    state.error_text = ""

def request_redraw(state: AppState) -> None:
    state.revision += 1
