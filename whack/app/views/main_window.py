"""
MainWindowView
--------------
Tkinter main window for the whack-a-mole game. This file contains only View
code: no timers, no round logic. It exposes callback hooks that the app
wires to the round presenter and the dialogs.

The window provides:
  * Top row: Start button, read-only "Time Left" and "Score" fields, session
    best, Settings and History buttons
  * Host frame for the MoleGridView
  * Status bar at the bottom
"""
from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Dict, Optional

from .view_utils import safe_call

FIELD_COLUMNS = 5


class MainWindowView(tk.Tk):
    """Top-level application window (UI-only)."""

    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        on_start: OnVoid = None,
        on_open_settings: OnVoid = None,
        on_open_history: OnVoid = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__()

        self.title("Whack-a-mole GUI")
        self.geometry("560x300")
        self.minsize(520, 240)

        self._on_start = on_start
        self._on_open_settings = on_open_settings
        self._on_open_history = on_open_history
        self._on_close = on_close

        self.rowconfigure(1, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_toolbar(self)
        self._build_grid_host(self)
        self._build_statusbar(self)

        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)
        self.bind("<Control-Return>", lambda e: self._start_if_enabled())

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_toolbar(self, parent: tk.Widget) -> None:
        toolbar = ttk.Frame(parent)
        toolbar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))

        self.btn_start = ttk.Button(
            toolbar,
            text="Start",
            style="Primary.TButton",
            command=lambda: safe_call(self._on_start),
        )
        self.btn_start.pack(side="left")

        self.time_var = tk.StringVar(value="")
        ttk.Label(toolbar, text="Time Left: ").pack(side="left", padx=(12, 0))
        ttk.Entry(
            toolbar,
            textvariable=self.time_var,
            width=FIELD_COLUMNS,
            state="readonly",
            style="Counter.TEntry",
        ).pack(side="left")

        self.score_var = tk.StringVar(value="")
        ttk.Label(toolbar, text="Score: ").pack(side="left", padx=(12, 0))
        ttk.Entry(
            toolbar,
            textvariable=self.score_var,
            width=FIELD_COLUMNS,
            state="readonly",
            style="Counter.TEntry",
        ).pack(side="left")

        self.best_var = tk.StringVar(value="Best: -")
        ttk.Label(toolbar, textvariable=self.best_var, style="Subtle.TLabel").pack(
            side="left", padx=(12, 0)
        )

        ttk.Button(
            toolbar, text="History", command=lambda: safe_call(self._on_open_history)
        ).pack(side="right")
        ttk.Button(
            toolbar, text="Settings", command=lambda: safe_call(self._on_open_settings)
        ).pack(side="right", padx=(0, 6))

    def _build_grid_host(self, parent: tk.Widget) -> None:
        self.grid_host = ttk.Frame(parent)
        self.grid_host.grid(row=1, column=0, sticky="nsew", padx=8, pady=4)

    def _build_statusbar(self, parent: tk.Widget) -> None:
        status = ttk.Frame(parent)
        status.grid(row=2, column=0, sticky="ew", padx=8, pady=(4, 8))
        status.columnconfigure(0, weight=1)

        self.status_message_var = tk.StringVar(value="Press Start to play.")
        ttk.Label(status, textvariable=self.status_message_var).grid(row=0, column=0, sticky="w")
        self.history_summary_var = tk.StringVar(value="")
        ttk.Label(status, textvariable=self.history_summary_var, style="Subtle.TLabel").grid(
            row=0, column=1, sticky="e"
        )

    # ------------------------------------------------------------------
    # Public API (called by the app/presenter through GameVM callbacks)
    # ------------------------------------------------------------------
    def set_header(self, dto: Dict[str, Any]) -> None:
        """Render a GameVM header DTO."""
        self.time_var.set(dto.get("time", ""))
        self.score_var.set(dto.get("score", ""))
        best = dto.get("best") or "-"
        self.best_var.set(f"Best: {best}")
        self.set_start_enabled(bool(dto.get("start_enabled", True)))

    def set_start_enabled(self, enabled: bool) -> None:
        self.btn_start.state(["!disabled"] if enabled else ["disabled"])

    def set_history_summary(self, text: str) -> None:
        self.history_summary_var.set(text)

    def show_toast(self, message: str, level: str = "info") -> None:
        """Lightweight user feedback in the status bar."""
        self.status_message_var.set(message)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _start_if_enabled(self) -> None:
        if not self.btn_start.instate(["disabled"]):
            safe_call(self._on_start)

    def _on_close_clicked(self) -> None:
        safe_call(self._on_close)
        self.destroy()


if __name__ == "__main__":
    win = MainWindowView()
    win.mainloop()
