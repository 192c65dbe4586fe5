"""Task Timer - per-task elapsed time tracking with restart-safe persistence."""

__version__ = "1.0.0"
