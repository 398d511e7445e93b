"""
Browser module for opening feed pages in a real browser.

This package contains the Browser interface and the factory that creates
Selenium or Playwright implementations of it.
"""

from .interface import Browser, BrowserFactory

# Export the factory function for creating browser instances
create_browser = BrowserFactory.create

__all__ = [
    "Browser",          # Abstract browser interface
    "BrowserFactory",   # Engine selection
    "create_browser",   # Factory function to create browser instances
]
