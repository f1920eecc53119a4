from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Dict, Mapping, Optional

from .view_utils import safe_call

_FIELDS = (
    # (key, label, group)
    ("round_seconds", "Round length (s)", "Round"),
    ("cooldown_s", "Pause after round (s)", "Round"),
    ("rows", "Rows", "Grid"),
    ("cols", "Columns", "Grid"),
    ("min_up_s", "Mole up min (s)", "Moles"),
    ("max_up_s", "Mole up max (s)", "Moles"),
    ("min_down_s", "Hole empty min (s)", "Moles"),
    ("max_down_s", "Hole empty max (s)", "Moles"),
    ("tick_ms", "Refresh interval (ms)", "Advanced"),
)


class SettingsDialog(tk.Toplevel):
    """Modal dialog to edit game settings (UI-only).

    Values are emitted as raw strings; SettingsVM owns coercion and
    validation, and the app reports errors via ``set_error``.
    """

    OnVoid = Optional[Callable[[], None]]
    OnSave = Optional[Callable[[dict], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_save: OnSave = None,
        on_reset_defaults: OnVoid = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__(parent)
        self.title("Settings")
        self.transient(parent)
        self.resizable(False, False)

        self._on_save = on_save
        self._on_reset_defaults = on_reset_defaults
        self._on_close = on_close

        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)

        self.vars: Dict[str, tk.StringVar] = {key: tk.StringVar(value="") for key, _, _ in _FIELDS}
        self.debug_logging_var = tk.BooleanVar(value=False)
        self.error_var = tk.StringVar(value="")

        self._build_ui()

        self.update_idletasks()
        self.grab_set()
        self.focus_set()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        pad = dict(padx=8, pady=6)
        groups: Dict[str, ttk.Labelframe] = {}
        rows_in_group: Dict[str, int] = {}
        for key, label, group in _FIELDS:
            frame = groups.get(group)
            if frame is None:
                frame = ttk.Labelframe(self, text=group)
                frame.grid(row=len(groups), column=0, sticky="ew", **pad)
                frame.columnconfigure(1, weight=1)
                groups[group] = frame
                rows_in_group[group] = 0
            row = rows_in_group[group]
            ttk.Label(frame, text=label).grid(row=row, column=0, sticky="w")
            ttk.Entry(frame, textvariable=self.vars[key], width=10).grid(
                row=row, column=1, sticky="w", padx=(8, 0), pady=2
            )
            rows_in_group[group] = row + 1

        ttk.Checkbutton(
            groups["Advanced"], text="Enable debug logging", variable=self.debug_logging_var
        ).grid(row=rows_in_group["Advanced"], column=0, columnspan=2, sticky="w", pady=(4, 0))

        ttk.Label(self, textvariable=self.error_var, style="Error.TLabel").grid(
            row=len(groups), column=0, sticky="w", padx=8
        )

        footer = ttk.Frame(self)
        footer.grid(row=len(groups) + 1, column=0, sticky="ew", **pad)
        ttk.Button(footer, text="Defaults", command=lambda: safe_call(self._on_reset_defaults)).pack(
            side="left"
        )
        ttk.Button(footer, text="Save", command=self._emit_save).pack(side="right", padx=(6, 0))
        ttk.Button(footer, text="Close", command=self._on_close_clicked).pack(side="right")

    # ------------------------------------------------------------------
    def _emit_save(self) -> None:
        settings: Dict[str, Any] = {key: var.get().strip() for key, var in self.vars.items()}
        settings["debug_logging"] = bool(self.debug_logging_var.get())
        self.error_var.set("")
        safe_call(self._on_save, settings)

    def _on_close_clicked(self) -> None:
        safe_call(self._on_close)
        try:
            if self.winfo_exists():
                self.destroy()
        except tk.TclError:
            pass

    # ------------------------------------------------------------------
    # Public setters to initialize dialog fields from VM
    # ------------------------------------------------------------------
    def set_values(self, payload: Mapping[str, Any]) -> None:
        for key, var in self.vars.items():
            if key in payload:
                var.set(str(payload[key]))
        if "debug_logging" in payload:
            self.debug_logging_var.set(bool(payload["debug_logging"]))

    def set_error(self, message: str) -> None:
        self.error_var.set(message)


if __name__ == "__main__":
    root = tk.Tk()
    dialog = SettingsDialog(root, on_save=print)
    dialog.mainloop()
