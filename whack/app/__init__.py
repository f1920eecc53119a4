"""Application composition layer for the Tkinter GUI.

``main.App`` wires views, view models, storage, and the round presenter into
the runnable game without placing round logic in views.
"""
