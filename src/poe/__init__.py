"""Minimal line-oriented text editor."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
