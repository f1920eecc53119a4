"""Look and feel shared by the game window, dialogs and the history chart.

Mole buttons are plain ``tk.Button`` widgets (their background is the game
state), so only the chrome around them goes through ttk styles.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

MOLE_FONT = ("Courier", 16, "bold")

WINDOW_BG = "#f3f5f9"
SURFACE_BG = "#ffffff"
BORDER = "#d9dfeb"
ACCENT = "#2457ff"
ACCENT_ACTIVE = "#1b45ce"
ACCENT_DISABLED = "#9db3ff"
TEXT = "#1f2937"
MUTED = "#64748b"
SUCCESS = "#16a34a"
ERROR = "#b91c1c"


def apply_modern_theme(root: tk.Misc) -> None:
    """Install the ttk styles used by the views.

    Args:
        root: Root Tk object or any widget tied to the app Tcl interpreter.
    """
    style = ttk.Style(root)
    if "clam" in style.theme_names():
        style.theme_use("clam")

    root.option_add("*Font", "TkDefaultFont 10")
    root.configure(bg=WINDOW_BG)

    style.configure(".", background=WINDOW_BG, foreground=TEXT)
    for name in ("TFrame", "TLabel", "TCheckbutton"):
        style.configure(name, background=WINDOW_BG, foreground=TEXT)
    style.configure("Subtle.TLabel", foreground=MUTED)
    style.configure("Error.TLabel", foreground=ERROR)
    style.configure(
        "TLabelframe", background=WINDOW_BG, bordercolor=BORDER, relief="solid", borderwidth=1
    )
    style.configure(
        "TLabelframe.Label", background=WINDOW_BG, foreground=TEXT, font=("TkDefaultFont", 10, "bold")
    )

    style.configure("TButton", padding=(10, 4), background=SURFACE_BG, bordercolor=BORDER, relief="flat")
    style.map("TButton", background=[("active", "#edf2ff")])
    style.configure("Primary.TButton", background=ACCENT, foreground="#ffffff", bordercolor=ACCENT)
    style.map(
        "Primary.TButton",
        background=[("disabled", ACCENT_DISABLED), ("active", ACCENT_ACTIVE)],
    )

    # Time/score read-outs: readonly entries that still look like fields.
    style.configure("Counter.TEntry", fieldbackground=SURFACE_BG, bordercolor=BORDER)
    style.map("Counter.TEntry", fieldbackground=[("readonly", SURFACE_BG)])
