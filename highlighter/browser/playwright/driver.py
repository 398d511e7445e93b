#!/usr/bin/env python3
"""
Playwright browser setup and initialization module.

This module creates Playwright browser pages and wraps them in the same
Browser interface as the Selenium implementation.
"""

import time

from playwright.sync_api import sync_playwright

from ..interface import Browser

# Runs a Selenium-style function body (``arguments`` / ``return``) through
# page.evaluate, which takes a single argument.
SCRIPT_WRAPPER = "(args) => (function() {{ {body} }}).apply(null, args)"


class PlaywrightBrowser(Browser):
    """Browser implementation wrapping a Playwright page."""

    def __init__(self, playwright, browser, context, page, page_load_timeout=30000):
        self._pw = playwright
        self._browser = browser
        self._context = context
        self.page = page
        self.page_load_timeout = page_load_timeout

    @property
    def current_url(self):
        return self.page.url

    @property
    def page_source(self):
        return self.page.content()

    def get(self, url):
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=self.page_load_timeout)
            self.page.wait_for_selector("body", timeout=5000)
        except Exception as e:
            print(f"Navigation error: {e}")
            # Try again with a different wait strategy
            self.page.goto(url, wait_until="load", timeout=self.page_load_timeout)

    def find_elements(self, by, selector):
        if by in ("css selector", "tag name"):
            return self.page.query_selector_all(selector)
        elif by == "xpath":
            return self.page.query_selector_all(f"xpath={selector}")
        else:
            raise ValueError(f"Unsupported locator: {by}")

    def execute_script(self, script, *args):
        return self.page.evaluate(SCRIPT_WRAPPER.format(body=script), list(args))

    def quit(self):
        try:
            if self.page:
                self.page.close()
            if self._context:
                self._context.close()
            if self._browser:
                self._browser.close()
            if self._pw:
                self._pw.stop()
        except Exception as e:
            print(f"Error during quit: {e}")


def launch_browser(playwright, browser_type, headless):
    """Launch the requested Playwright browser engine."""
    browser_args = ["--no-sandbox", "--disable-dev-shm-usage", "--disable-notifications"]
    if not headless:
        browser_args.append("--start-maximized")

    if browser_type == "chrome":
        return playwright.chromium.launch(headless=headless, args=browser_args, channel="chrome")
    elif browser_type == "firefox":
        return playwright.firefox.launch(headless=headless)
    elif browser_type == "webkit":
        return playwright.webkit.launch(headless=headless)
    else:
        return playwright.chromium.launch(headless=headless, args=browser_args)


def setup_playwright_browser(headless=True, retry_count=3, page_load_timeout=30000, browser_type="chromium"):
    """
    Set up and return a Playwright-backed Browser.

    Args:
        headless: Whether to run in headless mode
        retry_count: Number of times to retry browser creation
        page_load_timeout: Timeout for page loads in milliseconds
        browser_type: Browser to use ("chromium", "chrome", "firefox", or "webkit")

    Returns:
        PlaywrightBrowser: Browser wrapping a fresh page

    Raises:
        RuntimeError: If the browser cannot be created
    """
    for attempt in range(retry_count):
        playwright = None
        try:
            playwright = sync_playwright().start()
            browser = launch_browser(playwright, browser_type, headless)

            context = browser.new_context(
                viewport={"width": 1920, "height": 1080},
                java_script_enabled=True,
                ignore_https_errors=True,
                locale="en-US",
            )
            context.set_default_timeout(page_load_timeout)
            page = context.new_page()

            return PlaywrightBrowser(playwright, browser, context, page, page_load_timeout)

        except Exception as e:
            print(f"Playwright browser creation failed (attempt {attempt+1}/{retry_count}): {e}")
            if playwright is not None:
                playwright.stop()
            time.sleep(2)

            if attempt == retry_count - 1:
                raise RuntimeError(f"Failed to create Playwright browser after {retry_count} attempts: {e}") from e

    raise RuntimeError("Failed to create Playwright browser")
