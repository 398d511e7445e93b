import asyncio

from bs4 import BeautifulSoup

from highlighter.browser.interface import Browser
from highlighter.content import articles
from highlighter.core import session
from highlighter.content.panel import PANEL_EVENTS_SCRIPT
from highlighter.core.store import MemoryStore, TermStore

FEED_HTML = """<html><head><title>Feed</title></head><body>
<div class="list">
<article id="a1">Python 3.13 release notes</article>
<article id="a2" class="entry-card" style="color: red">This is an ad for shoes</article>
<div class="entry" id="a3">Weather forecast for the weekend</div>
<div data-entry-id="42" id="a4">Rust and Python interop</div>
</div>
</body></html>"""


def run(coro):
    return asyncio.run(coro)


def make_soup(html=FEED_HTML):
    return BeautifulSoup(html, "html.parser")


def make_term_store(data=None):
    return TermStore(MemoryStore(data))


class FakeElement:
    def __init__(self, text, styles=None, classes=None):
        self.text = text
        self.styles = dict(styles or {})
        self.classes = list(classes or [])
        self.detached = False


class FakeBrowser(Browser):
    """In-memory stand-in for a live page driven through execute_script."""

    def __init__(self, elements=None):
        self.elements = list(elements or [])
        self.url = None
        self.mutations = 0
        self.events = []
        self.hub_installed = False
        self.panel_markup = None
        self.stylesheet = None
        self.panel_wired = 0
        self.fail_polls = False
        self.closed = False

    @property
    def current_url(self):
        return self.url

    @property
    def page_source(self):
        return "<html><body></body></html>"

    def get(self, url):
        self.url = url

    def find_elements(self, by, selector):
        return list(self.elements)

    def add_article(self, text):
        element = FakeElement(text)
        self.elements.append(element)
        self.mutations += 1
        return element

    def reload(self):
        self.hub_installed = False
        self.events = []

    def execute_script(self, script, *args):
        if script == session.OBSERVER_SCRIPT:
            self.hub_installed = True
            return self.mutations
        if script == session.POLL_SCRIPT:
            if self.fail_polls:
                raise RuntimeError("browser went away")
            if not self.hub_installed:
                return None
            events, self.events = self.events, []
            return {"mutations": self.mutations, "events": events}
        if script == session.STYLESHEET_SCRIPT:
            self.stylesheet = args[1]
            return None
        if script == session.MUTATIONS_SCRIPT:
            return self.mutations if self.hub_installed else None
        if script == session.SHOW_PANEL_SCRIPT:
            self.panel_markup = args[1]
            if self.hub_installed:
                # The page observer sees the panel being swapped in
                self.mutations += 1
            return None
        if script == PANEL_EVENTS_SCRIPT:
            self.panel_wired += 1
            return True
        if script == articles.TEXT_CONTENT_SCRIPT:
            return [element.text for element in args[0]]
        if script == articles.RESTYLE_SCRIPT:
            element, change = args
            if element.detached:
                raise RuntimeError("stale element reference")
            for prop in change["clearStyles"]:
                element.styles.pop(prop, None)
            element.classes = [c for c in element.classes if c not in change["clearClasses"]]
            for prop, value in change["styles"]:
                element.styles[prop] = value
            for name in change["classes"]:
                if name not in element.classes:
                    element.classes.append(name)
            return None
        raise AssertionError(f"unexpected script: {script[:40]!r}")

    def quit(self):
        self.closed = True
