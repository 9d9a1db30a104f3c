"""Core engine package for Last Trick."""

__all__ = [
    "cards",
    "deck",
    "trick",
    "mechanics",
    "state",
    "settings",
    "storage",
    "play_log",
    "pacing",
    "service",
]
