"""ViewModel package for UI state and command surfaces.

Call context:
    ``whack/app/main.py`` and the round presenter import concrete viewmodels
    from this package to turn round snapshots into widget updates.

Dependencies:
    Domain types and the formatting helpers in ``status_format`` only. Tk,
    storage, and use-case orchestration remain outside.
"""
