#!/usr/bin/env python3
"""
User interaction used by the runner: one text prompt and modal messages.
"""

import sys
from typing import Optional

DEFAULT_BASE_CC = 16

PROMPT_TITLE = "MIDI CC Mapping"
PROMPT_CAPTION = "First CC control number:"


class UserInterface:
    """Prompts and message boxes. Subclasses bind these to a real UI."""

    def ask_text(self, title: str, caption: str, default: str = "") -> Optional[str]:
        """Ask for one line of text. Returns None if cancelled."""
        raise NotImplementedError

    def show_error(self, message: str, title: str = "Error") -> None:
        raise NotImplementedError

    def show_info(self, message: str, title: str = "Info") -> None:
        raise NotImplementedError


class ConsoleUserInterface(UserInterface):
    """Non-interactive UI for the command line.

    The prompt is answered with a preset value; messages are printed.
    """

    def __init__(self, answer: Optional[str] = None, stream=None, err_stream=None):
        self.answer = answer
        self.stream = stream or sys.stdout
        self.err_stream = err_stream or sys.stderr

    def ask_text(self, title: str, caption: str, default: str = "") -> Optional[str]:
        return self.answer

    def show_error(self, message: str, title: str = "Error") -> None:
        print(f"ERROR: {message}", file=self.err_stream)

    def show_info(self, message: str, title: str = "Info") -> None:
        print(message, file=self.stream)


def parse_base_cc(text: Optional[str], default: int = DEFAULT_BASE_CC) -> int:
    """Parse the base CC answer; cancelled or non-numeric input gives default."""
    if text is None:
        return default
    try:
        return int(text.strip())
    except ValueError:
        return default


def ask_base_cc(ui: UserInterface) -> int:
    return parse_base_cc(ui.ask_text(PROMPT_TITLE, PROMPT_CAPTION, ""))
