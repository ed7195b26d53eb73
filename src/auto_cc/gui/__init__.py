# GUI module for the session window and dialogs

from .dialogs import TextInputDialog, TkUserInterface

__all__ = [
    "TextInputDialog",
    "TkUserInterface",
]
