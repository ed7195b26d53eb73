#!/usr/bin/env python3
"""
Dialogs for the first-CC prompt and error messages.
"""

import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

from ..ui import UserInterface


class TextInputDialog(tk.Toplevel):
    """Modal single-line text prompt."""

    def __init__(self, parent, title: str, caption: str, default: str = ""):
        super().__init__(parent)
        self.title(title)
        self.geometry("320x130")
        self.resizable(False, False)

        self.result: Optional[str] = None

        # Center dialog
        self.transient(parent)
        self.grab_set()

        padding = 10
        frame = ttk.Frame(self, padding=padding)
        frame.pack(fill=tk.BOTH, expand=True)

        ttk.Label(frame, text=caption).grid(row=0, column=0, sticky=tk.W, pady=5)
        self.text_var = tk.StringVar(value=default)
        entry = ttk.Entry(frame, textvariable=self.text_var, width=12)
        entry.grid(row=0, column=1, sticky=tk.W, pady=5)
        entry.focus_set()

        # Buttons
        btn_frame = ttk.Frame(frame)
        btn_frame.grid(row=1, column=0, columnspan=2, pady=15)

        ttk.Button(btn_frame, text="OK", command=self._on_ok).pack(side=tk.LEFT, padx=5)
        ttk.Button(btn_frame, text="Cancel", command=self.destroy).pack(
            side=tk.LEFT, padx=5
        )

        self.bind("<Return>", lambda e: self._on_ok())
        self.bind("<Escape>", lambda e: self.destroy())

    def _on_ok(self):
        self.result = self.text_var.get()
        self.destroy()


class TkUserInterface(UserInterface):
    """UserInterface backed by tkinter dialogs, optionally logging to the app."""

    def __init__(self, root, log=None):
        self.root = root
        self.log = log

    def ask_text(self, title: str, caption: str, default: str = "") -> Optional[str]:
        dialog = TextInputDialog(self.root, title, caption, default)
        self.root.wait_window(dialog)
        return dialog.result

    def show_error(self, message: str, title: str = "Error") -> None:
        if self.log:
            self.log(f"✗ {message}", "error")
        messagebox.showerror(title, message)

    def show_info(self, message: str, title: str = "Info") -> None:
        if self.log:
            self.log(message, "info")
        messagebox.showinfo(title, message)
