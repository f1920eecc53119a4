"""Mole grid view: one button per hole.

The grid renders ``rows x cols`` buttons and reports clicks by hole index
(row-major). It owns only UI state; texts and colors arrive as ready-made
styles from ``GameVM``.
"""

from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, List, Optional, Tuple

from .theme import MOLE_FONT
from .view_utils import safe_call

HoleIndex = int
GAP = 5


class MoleGridView(ttk.Frame):
    """Grid of mole buttons."""

    OnHole = Optional[Callable[[HoleIndex], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        rows: int = 4,
        cols: int = 5,
        on_whack: OnHole = None,
    ) -> None:
        """Construct the grid and bind the click callback.

        Args:
            parent: Parent container.
            rows: Number of button rows.
            cols: Number of button columns.
            on_whack: Called with the hole index when a button is clicked.
        """
        super().__init__(parent)
        self._rows = int(rows)
        self._cols = int(cols)
        self._on_whack = on_whack
        self._buttons: List[tk.Button] = []
        self._build_ui()

    # ------------------------------------------------------------------
    # UI build
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        for r in range(self._rows):
            self.rowconfigure(r, weight=1, uniform="mole_row")
        for c in range(self._cols):
            self.columnconfigure(c, weight=1, uniform="mole_col")

        for index in range(self._rows * self._cols):
            r, c = divmod(index, self._cols)
            btn = tk.Button(
                self,
                text="   ",
                font=MOLE_FONT,
                relief="raised",
                command=lambda i=index: safe_call(self._on_whack, i),
            )
            btn.grid(
                row=r,
                column=c,
                padx=(0 if c == 0 else GAP, 0),
                pady=(0 if r == 0 else GAP, 0),
                sticky="nsew",
            )
            self._buttons.append(btn)

    # ------------------------------------------------------------------
    # Public API used by the app
    # ------------------------------------------------------------------
    @property
    def hole_count(self) -> int:
        return len(self._buttons)

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    def set_shape(self, rows: int, cols: int) -> None:
        """Rebuild the grid for a new shape."""
        for child in list(self.winfo_children()):
            child.destroy()
        self._buttons.clear()
        # Weights of a larger previous grid would keep empty cells stretched.
        for r in range(self._rows):
            self.rowconfigure(r, weight=0, uniform="")
        for c in range(self._cols):
            self.columnconfigure(c, weight=0, uniform="")
        self._rows = int(rows)
        self._cols = int(cols)
        self._build_ui()

    def apply_styles(self, styles: Dict[HoleIndex, Tuple[str, str]]) -> None:
        """Set ``(text, background)`` per hole index; unknown indexes are ignored."""
        for index, (text, bg) in styles.items():
            if not 0 <= index < len(self._buttons):
                continue
            self._buttons[index].configure(
                text=text,
                bg=bg,
                activebackground=bg,
                highlightbackground=bg,
            )


if __name__ == "__main__":
    root = tk.Tk()
    root.title("MoleGridView Demo")
    grid = MoleGridView(root, on_whack=lambda i: print(f"[demo] whack {i}"))
    grid.pack(fill="both", expand=True, padx=8, pady=8)
    grid.apply_styles({0: (" :P ", "#00ff00"), 7: (" X ", "#ff0000")})
    root.mainloop()
