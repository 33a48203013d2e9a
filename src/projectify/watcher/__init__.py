"""File watcher module for re-analysis on file changes."""

from .handler import DebouncedFileHandler, FileWatcher

__all__ = [
    "DebouncedFileHandler",
    "FileWatcher",
]
