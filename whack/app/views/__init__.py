"""Tkinter views. UI-only: widgets, layout, and callback hooks."""
