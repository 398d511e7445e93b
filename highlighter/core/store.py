#!/usr/bin/env python3
"""
Term store module.

This module keeps the in-memory Settings in sync with a persistent
key-value store. Every mutation writes the store first and only then
replaces the in-memory value, so a failed write never leaves unpersisted
state on screen.
"""

import asyncio
import json
import os
import tempfile
import threading

from .colors import normalize_color, is_valid_color
from .settings import (DEFAULT_TERM_COLOR, HiddenTerm, HighlightTerm,
                       Settings, TermKind, serialize_terms)

SETTINGS_KEYS = ["highlightTerms", "hiddenTerms", "showEmphasis", "isMinimized"]


class PersistenceError(RuntimeError):
    """Raised when the persistent store cannot be read or written."""


class MemoryStore:
    """
    Dictionary-backed key-value store.

    Every call yields to the event loop once, the way a real asynchronous
    backend would, so interleavings between handlers stay observable.
    """

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = []

    async def get(self, keys):
        await asyncio.sleep(0)
        return {key: self.data[key] for key in keys if key in self.data}

    async def set(self, mapping):
        await asyncio.sleep(0)
        self.writes.append(dict(mapping))
        self.data.update(mapping)


class JsonFileStore:
    """
    Key-value store persisted as a flat JSON object on disk.

    Writes go to a uniquely named temporary file which then atomically
    replaces the store file, so an interrupted write cannot corrupt stored
    settings. Reads and read-modify-write cycles are serialized per store,
    so overlapping writes never fail; the last one wins.
    """

    def __init__(self, path):
        """
        Initialize the store.

        Args:
            path: Path to the JSON settings file (created on first write)
        """
        self.path = path
        self._lock = threading.Lock()

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Invalid JSON in settings file {self.path}: {e.msg}") from e
        except OSError as e:
            raise PersistenceError(f"Error reading settings file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError(f"Settings file {self.path} does not hold a JSON object")
        return data

    def _locked_read(self):
        with self._lock:
            return self._read()

    def _write(self, mapping):
        with self._lock:
            data = self._read()
            data.update(mapping)

            directory = os.path.dirname(os.path.abspath(self.path))
            tmp_file = None
            try:
                os.makedirs(directory, exist_ok=True)
                with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=directory,
                                                 prefix=f"{os.path.basename(self.path)}.",
                                                 suffix=".tmp", delete=False) as f:
                    tmp_file = f.name
                    json.dump(data, f, indent=2)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_file, self.path)
            except OSError as e:
                if tmp_file is not None and os.path.exists(tmp_file):
                    os.remove(tmp_file)
                raise PersistenceError(f"Error saving settings to {self.path}: {e}") from e

    async def get(self, keys):
        data = await asyncio.to_thread(self._locked_read)
        return {key: data[key] for key in keys if key in data}

    async def set(self, mapping):
        await asyncio.to_thread(self._write, dict(mapping))


def _parse_highlight_terms(raw):
    terms = []
    seen = set()
    for entry in raw or []:
        if isinstance(entry, dict):
            text, color = entry.get("term"), entry.get("color")
        else:
            text, color = entry, None
        if not isinstance(text, str) or not text.strip() or text in seen:
            print(f"Warning: ignoring malformed highlight term {entry!r}")
            continue
        if color is not None and not is_valid_color(color):
            print(f"Warning: invalid color {color!r} for term '{text}', using {DEFAULT_TERM_COLOR}")
        seen.add(text)
        terms.append(HighlightTerm(text, normalize_color(color)))
    return terms


def _parse_hidden_terms(raw):
    terms = []
    seen = set()
    for entry in raw or []:
        if not isinstance(entry, str) or not entry.strip() or entry in seen:
            print(f"Warning: ignoring malformed hidden term {entry!r}")
            continue
        seen.add(entry)
        terms.append(HiddenTerm(entry))
    return terms


def settings_from_mapping(result):
    """
    Build Settings from raw store values, applying defaults for missing keys.

    Args:
        result: Mapping returned by a key-value store's get()

    Returns:
        Settings: Normalized settings
    """
    is_minimized = result.get("isMinimized")
    return Settings(
        highlight_terms=tuple(_parse_highlight_terms(result.get("highlightTerms"))),
        hidden_terms=tuple(_parse_hidden_terms(result.get("hiddenTerms"))),
        show_emphasis=bool(result.get("showEmphasis") or False),
        is_minimized=True if is_minimized is None else bool(is_minimized),
    )


class TermStore:
    """
    Owner of the current Settings and the only writer to the persistent store.

    Mutations are coroutines: the store write is awaited before the
    in-memory Settings is replaced. Separate mutations are not serialized
    against each other; two overlapping calls both start from the same
    Settings and the later write wins.
    """

    def __init__(self, store, settings=None):
        """
        Initialize the term store.

        Args:
            store: Key-value store with async get(keys) and set(mapping)
            settings: Initial in-memory settings (defaults until load())
        """
        self.store = store
        self.settings = settings or Settings()

    async def load(self):
        """
        Load settings from the persistent store.

        Returns:
            Settings: Loaded settings, with defaults for unset keys

        Raises:
            PersistenceError: If the store cannot be read
        """
        try:
            result = await self.store.get(SETTINGS_KEYS)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Error loading settings: {e}") from e

        self.settings = settings_from_mapping(result or {})
        return self.settings

    async def _persist(self, mapping):
        try:
            await self.store.set(mapping)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Error saving settings: {e}") from e

    async def _save_terms(self, kind, terms):
        await self._persist({kind.store_key: serialize_terms(kind, terms)})
        self.settings = self.settings.with_terms(kind, terms)

    async def add_term(self, kind, text):
        """
        Append a term unless it is empty or already present.

        Args:
            kind: TermKind of the collection to add to
            text: Term text (surrounding whitespace is stripped)

        Returns:
            bool: True if the term was added and persisted
        """
        text = (text or "").strip()
        if not text:
            return False

        current = self.settings.terms(kind)
        if any(term.text == text for term in current):
            return False

        if kind is TermKind.HIGHLIGHT:
            new_term = HighlightTerm(text, DEFAULT_TERM_COLOR)
        else:
            new_term = HiddenTerm(text)

        await self._save_terms(kind, list(current) + [new_term])
        return True

    async def remove_term(self, kind, text):
        """
        Remove every term whose text equals the given text.

        Returns:
            bool: True if anything was removed; nothing is written otherwise
        """
        current = self.settings.terms(kind)
        updated = [term for term in current if term.text != text]
        if len(updated) == len(current):
            return False

        await self._save_terms(kind, updated)
        return True

    async def set_term_color(self, text, color):
        """
        Change the color of a highlight term, keeping its position.

        Invalid colors fall back to the default term color.

        Returns:
            bool: True if the term exists and the new color was persisted
        """
        current = list(self.settings.highlight_terms)
        for index, term in enumerate(current):
            if term.text == text:
                break
        else:
            return False

        if not is_valid_color(color):
            print(f"Warning: invalid color {color!r} for term '{text}', using {DEFAULT_TERM_COLOR}")
        current[index] = HighlightTerm(text, normalize_color(color))
        await self._save_terms(TermKind.HIGHLIGHT, current)
        return True

    async def set_flag(self, flag, value):
        """Persist a boolean setting, then update memory."""
        value = bool(value)
        await self._persist({flag.value: value})
        self.settings = self.settings.with_flag(flag, value)
