"""Interactive command-line to-do tracker with background auto-save."""

__version__ = "0.1.0"
