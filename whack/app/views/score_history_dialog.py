"""
ScoreHistoryDialog (Popup)
--------------------------
Toplevel window charting recent round scores with matplotlib. The dialog
only renders series handed to it by the app (from ``HistoryVM``); it does
not read the history file itself.
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional, Sequence

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from .theme import ACCENT, MUTED, SUCCESS
from .view_utils import safe_call


class ScoreHistoryDialog(tk.Toplevel):
    """Read-only popup with a bar chart of recent scores."""

    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_refresh: OnVoid = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__(parent)
        self.title("Score History")
        self.transient(parent)
        self.geometry("560x380")

        self._on_refresh = on_refresh
        self._on_close = on_close
        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)

        header = ttk.Frame(self)
        header.pack(fill="x", padx=8, pady=(8, 4))
        self._summary_var = tk.StringVar(value="")
        ttk.Label(header, textvariable=self._summary_var).pack(side="left")
        ttk.Button(header, text="Close", command=self._on_close_clicked).pack(side="right")
        ttk.Button(header, text="Refresh", command=lambda: safe_call(self._on_refresh)).pack(
            side="right", padx=(0, 6)
        )

        self._figure = Figure(figsize=(5.4, 3.2), dpi=100)
        self._ax = self._figure.add_subplot(111)
        self._canvas = FigureCanvasTkAgg(self._figure, master=self)
        self._canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(0, 8))

    # ------------------------------------------------------------------
    def set_series(
        self,
        rounds: Sequence[int],
        scores: Sequence[int],
        *,
        best: Optional[int] = None,
        average: Optional[float] = None,
    ) -> None:
        """Redraw the chart for ``(round number, score)`` pairs."""
        ax = self._ax
        ax.clear()
        if rounds:
            ax.bar(list(rounds), list(scores), color=ACCENT, width=0.7)
            if average is not None:
                ax.axhline(average, color=MUTED, linewidth=1.2, linestyle="--", label=f"avg {average:.1f}")
            if best is not None:
                ax.axhline(best, color=SUCCESS, linewidth=1.2, linestyle=":", label=f"best {best}")
            ax.legend(loc="upper left", fontsize=8)
            ax.set_xlabel("Round")
            ax.set_ylabel("Score")
            ax.set_title("Recent rounds")
        else:
            ax.set_title("No rounds played yet")
        self._figure.tight_layout()
        self._canvas.draw_idle()

    def set_summary(self, text: str) -> None:
        self._summary_var.set(text)

    def _on_close_clicked(self) -> None:
        safe_call(self._on_close)
        try:
            if self.winfo_exists():
                self.destroy()
        except tk.TclError:
            pass
