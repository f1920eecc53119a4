"""Whack-a-mole desktop game (Tkinter, MVVM)."""
