"""
Feed highlighter package.

This package highlights, hides or de-emphasizes the articles of a
feed-reading page according to user-defined keyword lists, either on a
saved HTML page or on a live page open in a browser.
"""

__version__ = "1.0.0"

from .content.restyler import Restyler
from .core.classifier import classify
from .core.store import JsonFileStore, TermStore
from .core.watcher import ChangeWatcher

__all__ = ["classify", "Restyler", "TermStore", "JsonFileStore", "ChangeWatcher"]
