#!/usr/bin/env python3
"""
Content change watching module.

This module re-applies classification to every article on the page
whenever the page content changes. It never tracks individual articles:
each pass queries the document afresh, so articles the host page replaces
or lazily loads are picked up without re-registration.
"""

from collections import Counter
from enum import Enum

from ..content.articles import StaleArticleError
from .classifier import plan_assignments


class WatcherState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    ACTIVE = "active"


class ChangeFeed:
    """Source of "content changed" notifications."""

    def __init__(self):
        self._subscribers = []

    def subscribe(self, callback):
        self._subscribers.append(callback)

    def notify(self):
        for callback in list(self._subscribers):
            callback()


class ChangeWatcher:
    """
    Keeps article presentation in line with the current settings.

    Lifecycle is Uninitialized -> Loading -> Active. Active lasts for the
    rest of the page's life; there is no teardown.
    """

    def __init__(self, term_store, document, restyler, feed=None):
        """
        Initialize the watcher.

        Args:
            term_store: TermStore owning the current settings
            document: Document exposing query_articles()
            restyler: Restyler applying categories to articles
            feed: ChangeFeed to subscribe to (a private one if omitted)
        """
        self.term_store = term_store
        self.document = document
        self.restyler = restyler
        self.feed = feed or ChangeFeed()
        self.state = WatcherState.UNINITIALIZED
        self.passes = 0
        self.last_counts = Counter()

    async def load(self):
        """Load settings from the persistent store."""
        if self.state is not WatcherState.UNINITIALIZED:
            raise RuntimeError(f"Cannot load settings while {self.state.value}")
        self.state = WatcherState.LOADING
        return await self.term_store.load()

    def activate(self):
        """Run the first pass and start reacting to content changes."""
        if self.state is not WatcherState.LOADING:
            raise RuntimeError(f"Cannot activate watcher while {self.state.value}")
        self.state = WatcherState.ACTIVE
        self.feed.subscribe(self.on_content_changed)
        return self.reapply()

    async def start(self):
        await self.load()
        return self.activate()

    def on_content_changed(self):
        self.reapply()

    def reapply(self):
        """
        Classify and restyle every article currently on the page.

        Returns:
            Counter: Number of articles per category name
        """
        counts = Counter()
        try:
            articles = self.document.query_articles()
        except StaleArticleError as e:
            print(f"Skipping pass, page changed while scanning: {e}")
            return counts

        for article, category in plan_assignments(articles, self.term_store.settings):
            try:
                self.restyler.apply_category(article, category)
            except StaleArticleError:
                continue
            counts[category.name] += 1

        self.passes += 1
        self.last_counts = counts
        return counts


def format_counts(counts):
    """Format category counts as a short human readable summary."""
    total = sum(counts.values())
    parts = [f"{counts.get(name, 0)} {name}" for name in ("highlighted", "hidden", "reduced", "normal")]
    return f"{total} articles: " + ", ".join(parts)
