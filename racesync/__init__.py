"""Shared stopwatch sessions synchronised over websockets."""

__version__ = "0.1.0"
