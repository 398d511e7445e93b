#!/usr/bin/env python3
"""
Live highlighting session module.

This module drives a page open in a real browser. It installs a
MutationObserver on the page body, injects the stylesheet and settings
panel, and then polls the page: observed mutations trigger a full
re-apply, and queued panel interactions are run through the
PanelController.

Browser calls are made only from the synchronous poll loop. TermStore
coroutines run on a private event loop in a background thread, because
Playwright's sync API keeps its own loop registered as running on the
calling thread. Panel handlers merely schedule the re-apply and panel
repaint, which the poll loop performs once the handler has returned.
"""

import asyncio
import threading
import time

from ..content.articles import BrowserDocument
from ..content.panel import (PANEL_EVENTS_SCRIPT, PANEL_ID, STYLESHEET_ID,
                             PanelController, build_stylesheet)
from .store import PersistenceError
from .watcher import ChangeFeed, ChangeWatcher, format_counts

OBSERVER_SCRIPT = """
if (!window.__feedHighlighter) {
    window.__feedHighlighter = {mutations: 0, events: [], panelWired: false};
}
const hub = window.__feedHighlighter;
if (!hub.observer && document.body) {
    hub.observer = new MutationObserver(() => { hub.mutations += 1; });
    hub.observer.observe(document.body, {childList: true, subtree: true});
}
return hub.mutations;
"""

POLL_SCRIPT = """
const hub = window.__feedHighlighter;
if (!hub) { return null; }
return {mutations: hub.mutations, events: hub.events.splice(0)};
"""

MUTATIONS_SCRIPT = """
const hub = window.__feedHighlighter;
return hub ? hub.mutations : null;
"""

STYLESHEET_SCRIPT = """
let style = document.getElementById(arguments[0]);
if (!style) {
    style = document.createElement('style');
    style.id = arguments[0];
    (document.head || document.documentElement).appendChild(style);
}
style.textContent = arguments[1];
"""

SHOW_PANEL_SCRIPT = """
const holder = document.createElement('div');
holder.innerHTML = arguments[1];
const panel = holder.firstElementChild;
const existing = document.getElementById(arguments[0]);
if (existing) {
    existing.replaceWith(panel);
} else {
    document.body.appendChild(panel);
}
"""

MAX_CONSECUTIVE_ERRORS = 3


class StoreLoop:
    """Runs coroutines to completion on an event loop owned by a daemon thread."""

    def __init__(self):
        self.loop = None
        self.thread = None

    def run(self, coro):
        """
        Run a coroutine on the background loop and wait for its result.

        Exceptions raised by the coroutine propagate to the caller.
        """
        if self.loop is None:
            self.loop = asyncio.new_event_loop()
            self.thread = threading.Thread(target=self.loop.run_forever,
                                           name="highlighter-store", daemon=True)
            self.thread.start()
        return asyncio.run_coroutine_threadsafe(coro, self.loop).result()

    def close(self):
        if self.loop is None:
            return
        self.run(self.loop.shutdown_default_executor())
        self.loop.call_soon_threadsafe(self.loop.stop)
        self.thread.join()
        self.loop.close()
        self.loop = self.thread = None


class DeferredPanelView:
    """Holds the latest panel markup until the poll loop paints it."""

    def __init__(self):
        self.pending = None

    def show(self, markup):
        self.pending = markup

    def take(self):
        markup, self.pending = self.pending, None
        return markup


class LiveSession:
    """
    Keeps a live browser page highlighted until stopped.

    Attributes:
        watcher: ChangeWatcher re-applying styles on every change
        controller: PanelController handling panel interactions
    """

    def __init__(self, browser, term_store, restyler, selectors=None,
                 poll_interval=0.5, inject_panel=True):
        """
        Initialize the session.

        Args:
            browser: Browser instance (see highlighter.browser)
            term_store: TermStore owning the settings
            restyler: Restyler applying categories to articles
            selectors: Article selectors (defaults to ARTICLE_SELECTORS)
            poll_interval: Seconds between polls of the page
            inject_panel: Whether to add the settings panel to the page
        """
        self.browser = browser
        self.term_store = term_store
        self.restyler = restyler
        self.poll_interval = poll_interval
        self.inject_panel = inject_panel

        self.feed = ChangeFeed()
        self.document = BrowserDocument(browser, selectors)
        self.watcher = ChangeWatcher(term_store, self.document, restyler, self.feed)
        self.panel_view = DeferredPanelView()
        self.controller = PanelController(term_store, self.panel_view,
                                          on_change=self.request_reapply)

        self.store_loop = StoreLoop()

        self.reapply_requested = False
        self.last_mutations = None
        self.last_counts = None

    def request_reapply(self):
        self.reapply_requested = True

    def install(self):
        """Inject the stylesheet, mutation observer and panel into the page."""
        stylesheet = build_stylesheet(self.restyler.hidden_class, self.restyler.reduced_class)
        self.browser.execute_script(STYLESHEET_SCRIPT, STYLESHEET_ID, stylesheet)
        self.last_mutations = self.browser.execute_script(OBSERVER_SCRIPT)
        if self.inject_panel:
            self.controller.refresh()
            if self.flush_panel():
                self.last_mutations = self.browser.execute_script(MUTATIONS_SCRIPT)
            self.browser.execute_script(PANEL_EVENTS_SCRIPT)

    def flush_panel(self):
        """
        Paint pending panel markup.

        Returns:
            bool: True if the panel was repainted
        """
        markup = self.panel_view.take()
        if markup is None or not self.inject_panel:
            return False
        self.browser.execute_script(SHOW_PANEL_SCRIPT, PANEL_ID, markup)
        return True

    def open(self, url):
        """
        Navigate to a page and start highlighting it.

        Args:
            url: Page URL (file:// URLs work for saved pages)

        Returns:
            Counter: Category counts of the first pass
        """
        print(f"Opening {url}")
        self.browser.get(url)
        self.store_loop.run(self.watcher.load())
        self.install()
        counts = self.watcher.activate()
        self._report(counts)
        return counts

    def dispatch(self, event):
        """Run one panel interaction through the controller."""
        try:
            self.store_loop.run(self.controller.handle_event(event))
        except PersistenceError as e:
            print(f"Error saving settings: {e}")

    def close(self):
        """Stop the background store loop."""
        self.store_loop.close()

    def poll_once(self):
        """
        Process queued panel events and pending page mutations.

        Returns:
            bool: True if a re-apply pass ran
        """
        state = self.browser.execute_script(POLL_SCRIPT)
        if state is None:
            print("Page was reloaded, reinstalling highlighter")
            self.install()
            self._report(self.watcher.reapply())
            return True

        for event in state.get("events") or []:
            self.dispatch(event)

        mutations = state.get("mutations")
        host_changed = mutations != self.last_mutations
        if self.flush_panel() and not host_changed:
            # The observer counts the repaint as one batch; anything more
            # came from the page and is left for the next poll
            painted = self.browser.execute_script(MUTATIONS_SCRIPT)
            if self.last_mutations is not None and painted == self.last_mutations + 1:
                self.last_mutations = painted

        if host_changed:
            # One pass covers every mutation batch seen since the last poll
            self.last_mutations = mutations
            self.reapply_requested = False
            self.feed.notify()
        elif self.reapply_requested:
            self.reapply_requested = False
            self.watcher.reapply()
        else:
            return False

        self._report(self.watcher.last_counts)
        return True

    def run(self, duration=None):
        """
        Poll the page until the duration elapses.

        Args:
            duration: Seconds to keep watching (None runs until interrupted)

        Raises:
            KeyboardInterrupt: When the user stops the session
            RuntimeError: If polling keeps failing (e.g. the browser closed)
        """
        deadline = None if duration is None else time.time() + duration
        errors = 0

        while deadline is None or time.time() < deadline:
            try:
                self.poll_once()
                errors = 0
            except Exception as e:
                errors += 1
                print(f"Error polling page ({errors}/{MAX_CONSECUTIVE_ERRORS}): {e}")
                if errors >= MAX_CONSECUTIVE_ERRORS:
                    raise RuntimeError(f"Giving up after {errors} consecutive polling errors") from e
            time.sleep(self.poll_interval)

    def _report(self, counts):
        if counts == self.last_counts:
            return
        self.last_counts = counts
        print(f"Styled {format_counts(counts)}")

