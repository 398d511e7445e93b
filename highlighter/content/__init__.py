"""
Content module for finding and restyling articles.

This package contains article discovery for static and live pages, the
restyler applying categories to articles, and the settings panel.
"""

from .articles import (ARTICLE_SELECTORS, BrowserDocument, SoupDocument,
                       StaleArticleError)
from .panel import PanelController, SoupPanelView, render_panel
from .restyler import Restyler

__all__ = [
    "ARTICLE_SELECTORS",
    "SoupDocument",
    "BrowserDocument",
    "StaleArticleError",
    "Restyler",
    "PanelController",
    "SoupPanelView",
    "render_panel",
]
