"""
Playwright browser module.

This package provides the Playwright implementation of the Browser
interface.
"""

from .driver import PlaywrightBrowser, setup_playwright_browser

__all__ = ["PlaywrightBrowser", "setup_playwright_browser"]
