"""
Core module containing the classification engine.

This package contains the settings model, color arithmetic, the article
classifier, the persistent term store and the change watcher. The live
browser session lives in highlighter.core.session.
"""

from .classifier import Hidden, Highlighted, Normal, Reduced, classify
from .colors import ColorError, adjust_color
from .settings import HiddenTerm, HighlightTerm, Settings, TermKind, Flag
from .store import JsonFileStore, MemoryStore, PersistenceError, TermStore
from .watcher import ChangeFeed, ChangeWatcher

__all__ = [
    "classify",
    "Highlighted",
    "Hidden",
    "Reduced",
    "Normal",
    "adjust_color",
    "ColorError",
    "Settings",
    "HighlightTerm",
    "HiddenTerm",
    "TermKind",
    "Flag",
    "TermStore",
    "MemoryStore",
    "JsonFileStore",
    "PersistenceError",
    "ChangeFeed",
    "ChangeWatcher",
]
