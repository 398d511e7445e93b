#!/usr/bin/env python3
"""
WebDriver setup and initialization module.

This module creates Selenium Chrome sessions used to open feed pages
for live highlighting.
"""

import time

from selenium import webdriver
from selenium.common.exceptions import (SessionNotCreatedException,
                                        WebDriverException)
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

from .interface import Browser


class SeleniumBrowser(Browser):
    """Browser implementation wrapping a Selenium WebDriver."""

    def __init__(self, driver):
        self.driver = driver

    @property
    def current_url(self):
        return self.driver.current_url

    @property
    def page_source(self):
        return self.driver.page_source

    def get(self, url):
        self.driver.get(url)

    def find_elements(self, by, selector):
        return self.driver.find_elements(by, selector)

    def execute_script(self, script, *args):
        return self.driver.execute_script(script, *args)

    def quit(self):
        try:
            self.driver.quit()
        except WebDriverException as e:
            print(f"Error during quit: {e}")


def build_chrome_options(headless=True):
    """Chrome options for a page the user watches or a one-off fetch."""
    chrome_options = Options()
    chrome_options.add_argument('--headless=new' if headless else '--start-maximized')
    chrome_options.page_load_strategy = 'normal'

    for flag in ('--no-sandbox', '--disable-dev-shm-usage', '--disable-gpu',
                 '--disable-notifications', '--disable-popup-blocking', '--disable-infobars'):
        chrome_options.add_argument(flag)

    return chrome_options


def _chrome_service(webdriver_path):
    # webdriver-manager downloads a matching chromedriver when none is given
    return Service(webdriver_path or ChromeDriverManager().install())


def setup_webdriver(headless=True, webdriver_path=None, retry_count=3, page_load_timeout=30):
    """
    Start Chrome through Selenium, retrying transient startup failures.

    Args:
        headless: Hide the browser window
        webdriver_path: Chromedriver executable (downloaded if omitted)
        retry_count: Attempts before giving up
        page_load_timeout: Page load and script timeout in seconds

    Returns:
        SeleniumBrowser: Browser wrapping the new Chrome session

    Raises:
        RuntimeError: If Chrome could not be started
    """
    chrome_options = build_chrome_options(headless=headless)
    last_error = None

    for attempt in range(1, retry_count + 1):
        try:
            driver = webdriver.Chrome(service=_chrome_service(webdriver_path), options=chrome_options)
        except (WebDriverException, SessionNotCreatedException) as e:
            last_error = e
            print(f"Chrome did not start (attempt {attempt}/{retry_count}): {e}")
            if attempt < retry_count:
                time.sleep(2)
            continue

        driver.set_page_load_timeout(page_load_timeout)
        driver.set_script_timeout(page_load_timeout)
        return SeleniumBrowser(driver)

    raise RuntimeError(f"Could not start Chrome after {retry_count} attempts: {last_error}")
