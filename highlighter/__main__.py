#!/usr/bin/env python3
"""
Main entry point for the feed highlighter.

This module provides the main entry point for running the highlighter
from the command line.
"""

import asyncio
import sys
import traceback
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup

from .browser import create_browser
from .cli.argument_parser import has_term_edits, parse_args
from .cli.config import load_config_from_args, save_config
from .content.articles import SoupDocument
from .content.panel import PanelController, SoupPanelView, build_stylesheet
from .content.restyler import Restyler
from .core.session import LiveSession
from .core.settings import Flag, TermKind, sort_for_display
from .core.store import JsonFileStore, TermStore
from .core.watcher import ChangeWatcher, format_counts


async def apply_term_edits(term_store, args):
    """
    Load the stored settings and apply the term changes given on the command line.

    Args:
        term_store: TermStore to modify
        args: Parsed command-line arguments

    Returns:
        Settings: Settings after all changes
    """
    await term_store.load()

    edits = [
        (TermKind.HIGHLIGHT, args.highlight, term_store.add_term, "Added highlight term"),
        (TermKind.HIDDEN, args.hide, term_store.add_term, "Added hidden term"),
        (TermKind.HIGHLIGHT, args.remove_highlight, term_store.remove_term, "Removed highlight term"),
        (TermKind.HIDDEN, args.remove_hidden, term_store.remove_term, "Removed hidden term"),
    ]
    for kind, terms, operation, message in edits:
        for term in terms:
            if await operation(kind, term):
                print(f"{message} '{term.strip()}'")
            else:
                print(f"- No change for {kind.value} term '{term}'")

    for term, color in args.color:
        if await term_store.set_term_color(term, color):
            print(f"Set color of '{term}' to {color}")
        else:
            print(f"- No highlight term '{term}' to recolor")

    if args.emphasis is not None:
        await term_store.set_flag(Flag.SHOW_EMPHASIS, args.emphasis)
        print(f"Emphasis {'enabled' if args.emphasis else 'disabled'}")

    return term_store.settings


def print_terms(settings):
    """Print stored terms in display order."""
    print("\nHighlight terms:")
    for term in sort_for_display(settings.highlight_terms):
        print(f"  {term.text}  {term.color}")
    if not settings.highlight_terms:
        print("  (none)")

    print("Hidden terms:")
    for term in sort_for_display(settings.hidden_terms):
        print(f"  {term.text}")
    if not settings.hidden_terms:
        print("  (none)")

    print(f"Emphasis: {'on' if settings.show_emphasis else 'off'}")
    print(f"Panel minimized: {'yes' if settings.is_minimized else 'no'}")


def load_page_html(config):
    """
    Read the page's HTML, fetching it through a browser for remote URLs.

    Args:
        config: Configuration instance

    Returns:
        str: Page HTML
    """
    if not config.is_remote:
        path = config.source
        if path.startswith("file://"):
            path = unquote(urlparse(path).path)
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    browser = create_browser(
        engine=config.engine,
        headless=config.headless,
        webdriver_path=config.webdriver_path,
        type=config.browser_type,
    )
    try:
        browser.get(config.source)
        return browser.page_source
    finally:
        browser.quit()


def run_static(config, term_store, restyler):
    """
    Classify the page once and write the restyled HTML.

    Returns:
        Counter: Category counts
    """
    soup = BeautifulSoup(load_page_html(config), "html.parser")
    watcher = ChangeWatcher(term_store, SoupDocument(soup, config.article_selectors), restyler)
    counts = asyncio.run(watcher.start())

    view = SoupPanelView(soup)
    view.install_stylesheet(build_stylesheet(restyler.hidden_class, restyler.reduced_class))
    if config.inject_panel:
        PanelController(term_store, view).refresh()

    with open(config.output_file, "w", encoding="utf-8") as f:
        f.write(str(soup))

    print(f"Styled {format_counts(counts)}")
    print(f"Highlighted page saved to {config.output_file}")
    return counts


def run_live(config, term_store, restyler):
    """Open the page in a browser and keep it highlighted until stopped."""
    browser = create_browser(
        engine=config.engine,
        headless=config.headless,
        webdriver_path=config.webdriver_path,
        type=config.browser_type,
    )
    try:
        session = LiveSession(
            browser,
            term_store,
            restyler,
            selectors=config.article_selectors,
            poll_interval=config.poll_interval,
            inject_panel=config.inject_panel,
        )
        try:
            session.open(config.page_url)

            if sys.stdin.isatty():
                print("\nPress Ctrl+C to stop highlighting...")
            session.run(duration=config.watch_duration)
        finally:
            session.close()
    finally:
        browser.quit()


def main(argv=None):
    """Main entry point for the feed highlighter."""
    try:
        args = parse_args(argv)
        config = load_config_from_args(args)

        # Save configuration if requested
        if args.save_config:
            save_config(config, args.save_config)

        term_store = TermStore(JsonFileStore(config.store_file))
        settings = asyncio.run(apply_term_edits(term_store, args))

        if args.show_terms:
            print_terms(settings)

        if not config.source:
            if not (has_term_edits(args) or args.show_terms or args.save_config):
                print("Nothing to do: give a page to process or a term option (see --help)")
                return 1
            return 0

        config.print_summary()

        restyler = Restyler(hidden_class=config.hidden_class, reduced_class=config.reduced_class)
        if config.watch:
            run_live(config, term_store, restyler)
        else:
            run_static(config, term_store, restyler)

        return 0

    except KeyboardInterrupt:
        print("\nHighlighting interrupted by user.")
        return 130

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
