from __future__ import annotations
from kivy.event import EventDispatcher
from kivy.properties import (
    StringProperty, NumericProperty, BooleanProperty
)

# Routes, one per page. Exactly one is current.
HOME = "home"
SETTINGS = "settings"
ADD_GAME = "add_game"
ROUTES = (HOME, SETTINGS, ADD_GAME)


# Define states used in the application
class AppState(EventDispatcher):
    route = StringProperty(HOME) # current page
    status_text = StringProperty("Ready") # status bar text
    error_text = StringProperty("") # last persistence/launch error, empty when none
    game_count = NumericProperty(0) # how many games are in the library
    unsaved = BooleanProperty(False) # in-memory library differs from disk after a failed write
    revision = NumericProperty(0) # bumped whenever page state changes and views must redraw
