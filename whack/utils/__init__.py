"""Shared helpers (logging configuration)."""
