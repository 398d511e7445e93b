#!/usr/bin/env python3
"""
Article discovery module.

This module finds the article elements of a feed page and wraps each one
in a small handle exposing its text content and a restyle operation. Two
backends are provided: BeautifulSoup documents (static HTML) and live
browser pages (Selenium or Playwright elements).
"""

import re

from bs4.element import (Comment, Declaration, Doctype, NavigableString,
                         ProcessingInstruction)

ARTICLE_SELECTORS = ["article", ".entry", "[data-entry-id]"]

# Strings that are not part of an element's textContent
NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

RESTYLE_SCRIPT = """
const el = arguments[0];
const change = arguments[1];
for (const prop of change.clearStyles) {
    el.style.removeProperty(prop);
}
for (const name of change.clearClasses) {
    el.classList.remove(name);
}
for (const [prop, value] of change.styles) {
    el.style.setProperty(prop, value);
}
for (const name of change.classes) {
    el.classList.add(name);
}
"""

TEXT_CONTENT_SCRIPT = "return arguments[0].map(el => el.textContent || '');"


class StaleArticleError(RuntimeError):
    """Raised when a live article element left the page before it was restyled."""


def parse_style(style):
    """
    Split an inline style attribute into ordered (property, value) pairs.

    Args:
        style: Contents of a ``style`` attribute (may be None)

    Returns:
        dict: Property names (lowercased) mapped to their values
    """
    declarations = {}
    for declaration in (style or "").split(";"):
        if ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        prop, value = prop.strip().lower(), value.strip()
        if prop:
            declarations[prop] = value
    return declarations


def format_style(declarations):
    return "; ".join(f"{prop}: {value}" for prop, value in declarations.items())


class SoupArticle:
    """Article handle backed by a BeautifulSoup tag."""

    def __init__(self, tag):
        self.tag = tag

    @property
    def text(self):
        # Same as the DOM's textContent, so script and style text counts too
        return "".join(
            node for node in self.tag.descendants
            if isinstance(node, NavigableString) and not isinstance(node, NON_TEXT_STRINGS)
        )

    @property
    def classes(self):
        classes = self.tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        return list(classes)

    @property
    def style(self):
        return parse_style(self.tag.get("style"))

    def restyle(self, clear_styles, clear_classes, styles, classes):
        """
        Remove managed presentation, then apply the new one.

        Args:
            clear_styles: Style properties to remove
            clear_classes: Class names to remove
            styles: (property, value) pairs to set
            classes: Class names to add
        """
        declarations = self.style
        for prop in clear_styles:
            declarations.pop(prop, None)
        for prop, value in styles:
            declarations[prop] = value

        class_names = [name for name in self.classes if name not in clear_classes]
        for name in classes:
            if name not in class_names:
                class_names.append(name)

        if declarations:
            self.tag["style"] = format_style(declarations)
        elif self.tag.has_attr("style"):
            del self.tag["style"]

        if class_names:
            self.tag["class"] = class_names
        elif self.tag.has_attr("class"):
            del self.tag["class"]

    def __repr__(self):
        snippet = re.sub(r"\s+", " ", self.text).strip()[:40]
        return f"SoupArticle(<{self.tag.name}> {snippet!r})"


class SoupDocument:
    """Static HTML document whose articles are found with CSS selectors."""

    def __init__(self, soup, selectors=None):
        """
        Initialize the document.

        Args:
            soup: BeautifulSoup object of the page
            selectors: Article selectors (defaults to ARTICLE_SELECTORS)
        """
        self.soup = soup
        self.selectors = list(selectors or ARTICLE_SELECTORS)

    def query_articles(self):
        return [SoupArticle(tag) for tag in self.soup.select(", ".join(self.selectors))]


class BrowserArticle:
    """
    Article handle backed by a live browser element.

    The text is captured when the article is queried; restyling runs a
    script against the element and fails with StaleArticleError if the
    host page has since removed it.
    """

    def __init__(self, browser, element, text):
        self.browser = browser
        self.element = element
        self.text = text

    def restyle(self, clear_styles, clear_classes, styles, classes):
        change = {
            "clearStyles": list(clear_styles),
            "clearClasses": list(clear_classes),
            "styles": [list(pair) for pair in styles],
            "classes": list(classes),
        }
        try:
            self.browser.execute_script(RESTYLE_SCRIPT, self.element, change)
        except Exception as e:
            raise StaleArticleError(f"Article element no longer available: {e}") from e


class BrowserDocument:
    """Live browser page whose articles are re-queried on every call."""

    def __init__(self, browser, selectors=None):
        """
        Initialize the document.

        Args:
            browser: Browser instance (see highlighter.browser)
            selectors: Article selectors (defaults to ARTICLE_SELECTORS)
        """
        self.browser = browser
        self.selectors = list(selectors or ARTICLE_SELECTORS)

    def query_articles(self):
        """
        Query all article elements and read their text content.

        Returns:
            list: BrowserArticle handles in document order

        Raises:
            StaleArticleError: If the page replaced the elements mid-query
        """
        elements = self.browser.find_elements("css selector", ", ".join(self.selectors))
        if not elements:
            return []

        try:
            texts = self.browser.execute_script(TEXT_CONTENT_SCRIPT, list(elements))
        except Exception as e:
            raise StaleArticleError(f"Articles changed while reading their text: {e}") from e

        return [
            BrowserArticle(self.browser, element, text or "")
            for element, text in zip(elements, texts or [])
        ]
