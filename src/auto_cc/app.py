#!/usr/bin/env python3
"""
Auto CC - GUI Application

A tkinter front end for mapping automation envelopes to MIDI CC:
- Load a session snapshot
- Choose the tracks to map
- Run the mapping and merge, with undo/redo
- Save the resulting session
"""

from __future__ import annotations

import os
import tkinter as tk
from tkinter import ttk, filedialog, messagebox, scrolledtext

from .core.locator import TARGET_TRACK_NAME
from .core.runner import run_auto_cc
from .gui.dialogs import TkUserInterface
from .host.memory import MemoryHost, load_session, save_session


class AutoCCGUI:
    """Main GUI Application for Auto CC"""

    def __init__(self, root):
        self.root = root
        self.root.title("Auto CC - Automation to MIDI CC")
        self.root.geometry("760x640")
        self.root.resizable(True, True)

        # State variables
        self.input_file = None
        self.host: MemoryHost | None = None

        self.setup_styles()
        self.create_widgets()

        self.ui = TkUserInterface(self.root, log=self.log)

    def setup_styles(self):
        """Configure ttk styles"""
        style = ttk.Style()
        style.theme_use("clam")

        style.configure("Primary.TButton", font=("Arial", 11, "bold"), padding=10)
        style.configure("Secondary.TButton", font=("Arial", 10), padding=8)
        style.configure("Title.TLabel", font=("Arial", 16, "bold"))
        style.configure("Normal.TLabel", font=("Arial", 10))
        style.configure("Info.TLabel", font=("Arial", 9), foreground="#666")

    def create_widgets(self):
        """Create all GUI widgets"""
        main_frame = ttk.Frame(self.root, padding="20")
        main_frame.pack(fill=tk.BOTH, expand=True)

        ttk.Label(
            main_frame, text="Auto CC - Automation to MIDI CC", style="Title.TLabel"
        ).pack(pady=(0, 20))

        self.create_import_section(main_frame)
        self.create_tracks_section(main_frame)
        self.create_status_section(main_frame)

    def create_import_section(self, parent):
        """Create import section"""
        import_frame = ttk.LabelFrame(parent, text="1. Session", padding="15")
        import_frame.pack(fill=tk.X, pady=(0, 15))

        self.file_path_var = tk.StringVar(value="No session loaded")
        ttk.Label(
            import_frame,
            textvariable=self.file_path_var,
            style="Normal.TLabel",
            wraplength=450,
        ).pack(side=tk.LEFT, padx=(0, 10))

        ttk.Button(
            import_frame,
            text="Save As...",
            style="Secondary.TButton",
            command=self.save_session,
        ).pack(side=tk.RIGHT, padx=5)

        ttk.Button(
            import_frame,
            text="Open...",
            style="Secondary.TButton",
            command=self.import_session,
        ).pack(side=tk.RIGHT)

    def create_tracks_section(self, parent):
        """Create track selection and action buttons"""
        tracks_frame = ttk.LabelFrame(parent, text="2. Tracks", padding="15")
        tracks_frame.pack(fill=tk.BOTH, expand=True, pady=(0, 15))

        self.track_list = tk.Listbox(
            tracks_frame, selectmode=tk.EXTENDED, height=10, exportselection=False
        )
        self.track_list.pack(fill=tk.BOTH, expand=True)

        control_frame = ttk.Frame(tracks_frame)
        control_frame.pack(fill=tk.X, pady=(10, 0))

        self.info_label = ttk.Label(
            control_frame,
            text=f"Envelopes are written to the '{TARGET_TRACK_NAME}' track",
            style="Info.TLabel",
        )
        self.info_label.pack(side=tk.LEFT)

        ttk.Button(
            control_frame,
            text="Redo (Ctrl+Y)",
            style="Secondary.TButton",
            command=self.redo,
        ).pack(side=tk.RIGHT, padx=5)

        ttk.Button(
            control_frame,
            text="Undo (Ctrl+Z)",
            style="Secondary.TButton",
            command=self.undo,
        ).pack(side=tk.RIGHT, padx=5)

        self.run_btn = ttk.Button(
            control_frame,
            text="Map to CC",
            style="Primary.TButton",
            command=self.run_mapping,
            state=tk.DISABLED,
        )
        self.run_btn.pack(side=tk.RIGHT, padx=5)

    def create_status_section(self, parent):
        """Create status/log area"""
        status_frame = ttk.LabelFrame(parent, text="Status / Log", padding="15")
        status_frame.pack(fill=tk.BOTH, expand=True)

        self.status_text = scrolledtext.ScrolledText(
            status_frame, height=8, wrap=tk.WORD, font=("Courier", 9)
        )
        self.status_text.pack(fill=tk.BOTH, expand=True)

        self.status_text.tag_config("info", foreground="#0066cc")
        self.status_text.tag_config("success", foreground="#00aa00")
        self.status_text.tag_config("error", foreground="#cc0000")

        self.log("Open a session to start.", "info")

    def log(self, message, tag="normal"):
        """Add a message to the status log"""
        self.status_text.insert(tk.END, message + "\n", tag)
        self.status_text.see(tk.END)
        self.root.update_idletasks()

    def refresh_tracks(self):
        """Show the tracks of the session, keeping the host selection"""
        self.track_list.delete(0, tk.END)
        if self.host is None:
            return
        for i, track in enumerate(self.host.tracks()):
            envelopes = len(self.host.envelopes(track))
            items = len(self.host.items(track))
            self.track_list.insert(
                tk.END, f"{track.name or '(unnamed)'}  [{envelopes} env, {items} items]"
            )
            if track.selected:
                self.track_list.selection_set(i)

    def import_session(self):
        """Handle session import"""
        filename = filedialog.askopenfilename(
            title="Open session",
            filetypes=[("Session files", "*.json"), ("All files", "*.*")],
        )
        if not filename:
            return

        try:
            self.host = load_session(filename)
        except (OSError, ValueError, KeyError, TypeError) as e:
            self.log(f"Error loading session: {e}", "error")
            messagebox.showerror("Error", f"Could not load session:\n{e}")
            return

        self.input_file = filename
        self.file_path_var.set(os.path.basename(filename))
        self.log(f"\n--- Session loaded ---", "info")
        self.log(f"File: {filename}", "info")
        self.log(f"Tracks: {len(self.host.tracks())}", "info")
        self.refresh_tracks()
        self.run_btn.config(state=tk.NORMAL)

    def run_mapping(self):
        """Map the selected tracks' envelopes and merge the target items"""
        if self.host is None:
            messagebox.showwarning("No session", "Please open a session first.")
            return

        chosen = set(self.track_list.curselection())
        for i, track in enumerate(self.host.tracks()):
            track.selected = i in chosen

        self.log(f"\n--- Map to CC ---", "info")
        summary = run_auto_cc(self.host, self.ui)

        self.log(f"First CC: {summary['base_cc']}", "info")
        for lane in summary["mapping"]["details"]["lanes"]:
            self.log(
                f"  {lane['track']} / {lane['envelope']}: CC {lane['controller']} "
                f"ch {lane['channel']} ({lane['points']} points)",
                "info",
            )
        for step in ("mapping", "merge"):
            if summary[step]["success"]:
                self.log(f"✓ {summary[step]['message']}", "success")

        self.refresh_tracks()

    def undo(self):
        if self.host is None:
            return
        description = self.host.undo()
        if description:
            self.log(f"Undo: {description}", "info")
            self.refresh_tracks()

    def redo(self):
        if self.host is None:
            return
        description = self.host.redo()
        if description:
            self.log(f"Redo: {description}", "info")
            self.refresh_tracks()

    def save_session(self):
        """Save the current session"""
        if self.host is None:
            messagebox.showwarning("No session", "Please open a session first.")
            return

        base, ext = os.path.splitext(os.path.basename(self.input_file))
        filename = filedialog.asksaveasfilename(
            title="Save session",
            defaultextension=".json",
            filetypes=[("Session files", "*.json"), ("All files", "*.*")],
            initialfile=f"{base}_cc{ext}",
        )
        if not filename:
            return

        try:
            save_session(self.host, filename)
            self.log(f"\nSaved: {filename}", "success")
        except OSError as e:
            self.log(f"\nError: {e}", "error")
            messagebox.showerror("Error", f"Could not save session:\n{e}")


def main():
    """Main entry point"""
    root = tk.Tk()
    app = AutoCCGUI(root)

    # Bind keyboard shortcuts
    root.bind("<Control-z>", lambda e: app.undo())
    root.bind("<Control-y>", lambda e: app.redo())

    root.mainloop()


if __name__ == "__main__":
    main()
