#!/usr/bin/env python3
"""
Browser interface definition module.

The live session and URL fetching talk to pages only through this small
interface, so Selenium and Playwright pages can be swapped freely.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class Browser(ABC):
    """
    A single browser page the highlighter can drive.

    Elements returned by ``find_elements`` are opaque handles; they are only
    ever passed back into ``execute_script``.
    """

    @property
    @abstractmethod
    def current_url(self) -> str:
        """URL of the page currently open."""

    @property
    @abstractmethod
    def page_source(self) -> str:
        """Serialized HTML of the page as currently rendered."""

    @abstractmethod
    def get(self, url: str) -> None:
        """Open a page and wait for its document to load."""

    @abstractmethod
    def find_elements(self, by: str, selector: str) -> List[Any]:
        """Return element handles for a locator such as ("css selector", "article")."""

    @abstractmethod
    def execute_script(self, script: str, *args: Any) -> Any:
        """
        Run a script in the page.

        The script is a function body: it reads its parameters from
        ``arguments`` and hands back a value with ``return``.
        """

    @abstractmethod
    def quit(self) -> None:
        """Close the page and shut the browser down."""


class BrowserFactory:
    """Creates a Browser for the configured engine."""

    @staticmethod
    def create(
        engine: str = "selenium",
        headless: bool = True,
        webdriver_path: Optional[str] = None,
        type: str = "chromium",
        **kwargs: Any
    ) -> Browser:
        """
        Start a browser with the requested engine.

        Engine modules are imported on demand, so only the engine in use
        has to be able to start.

        Args:
            engine: 'selenium' (Chrome) or 'playwright'
            headless: Whether to hide the browser window
            webdriver_path: Chromedriver executable (Selenium only)
            type: Playwright browser ('chromium', 'chrome', 'firefox', 'webkit')
            **kwargs: Passed on to the engine's setup function

        Returns:
            Browser: A started browser with one open page
        """
        if engine.lower() == "playwright":
            from .playwright.driver import setup_playwright_browser
            return setup_playwright_browser(headless=headless, browser_type=type, **kwargs)

        from .driver import setup_webdriver
        return setup_webdriver(headless=headless, webdriver_path=webdriver_path, **kwargs)
