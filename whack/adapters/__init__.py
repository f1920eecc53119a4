"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of domain ports. Currently only local filesystem
    storage for settings and the score history.

Call context:
    Imported by the app composition root for runtime wiring and by tests.
"""
