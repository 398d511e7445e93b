#!/usr/bin/env python3
"""
Command-line argument parsing module.

This module provides functions for setting up and parsing command-line
arguments for the highlighter.
"""

import argparse

from ..core.colors import is_valid_color


def create_parser():
    """
    Create the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description='Highlight, hide or de-emphasize feed articles based on keyword lists'
    )

    parser.add_argument('source', type=str, nargs='?', default=None,
                        help='Feed page to process: a URL or a saved HTML file '
                             '(omit to only edit stored terms)')

    # Basic options
    parser.add_argument('--store', type=str, default='highlighter_settings.json',
                        help='JSON file holding the term lists and flags (default: highlighter_settings.json)')
    parser.add_argument('--output', type=str, default=None,
                        help='Output HTML file for static mode (default: derived from the page name)')

    # Term editing
    term_group = parser.add_argument_group('Term Options')
    term_group.add_argument('--highlight', action='append', default=[], metavar='TERM',
                        help='Add highlight keywords (repeatable, comma-separated)')
    term_group.add_argument('--hide', action='append', default=[], metavar='TERM',
                        help='Add terms whose articles are hidden (repeatable, comma-separated)')
    term_group.add_argument('--remove-highlight', action='append', default=[], metavar='TERM',
                        help='Remove a highlight keyword (repeatable)')
    term_group.add_argument('--remove-hidden', action='append', default=[], metavar='TERM',
                        help='Remove a hidden term (repeatable)')
    term_group.add_argument('--color', action='append', default=[], metavar='TERM=#RRGGBB',
                        help='Set the color of a highlight keyword (repeatable)')
    term_group.add_argument('--emphasis', dest='emphasis', action='store_const', const=True, default=None,
                        help='De-emphasize articles that match no term')
    term_group.add_argument('--no-emphasis', dest='emphasis', action='store_const', const=False,
                        help='Show unmatched articles normally')
    term_group.add_argument('--show-terms', action='store_true',
                        help='Print the stored terms and flags')

    # Browser options
    browser_group = parser.add_argument_group('Browser Options')
    browser_group.add_argument('--engine', type=str, default='selenium', choices=['selenium', 'playwright'],
                        help='Browser engine used for URLs and live watching (default: selenium)')
    browser_group.add_argument('--browser-type', type=str, default='chromium',
                        choices=['chromium', 'chrome', 'firefox', 'webkit'],
                        help='Browser type for Playwright (default: chromium)')
    browser_group.add_argument('--visible', action='store_true',
                        help='Run in visible browser mode instead of headless (default: headless)')
    browser_group.add_argument('--webdriver-path', type=str, default=None,
                        help='Path to the webdriver executable (optional)')

    # Live watching
    watch_group = parser.add_argument_group('Watch Options')
    watch_group.add_argument('--watch', action='store_true',
                        help='Open the page in a live browser and keep it highlighted as it changes')
    watch_group.add_argument('--poll-interval', type=float, default=0.5,
                        help='Seconds between checks for page changes (default: 0.5)')
    watch_group.add_argument('--duration', type=float, default=None,
                        help='Stop watching after this many seconds (default: until Ctrl+C)')

    # Styling
    style_group = parser.add_argument_group('Styling Options')
    style_group.add_argument('--selectors', type=str, default=None,
                        help='Comma-separated CSS selectors identifying articles '
                             '(default: "article,.entry,[data-entry-id]")')
    style_group.add_argument('--hidden-class', type=str, default='feedly-hidden',
                        help='Class added to hidden articles (default: feedly-hidden)')
    style_group.add_argument('--reduced-class', type=str, default='feedly-reduced',
                        help='Class added to de-emphasized articles (default: feedly-reduced)')
    style_group.add_argument('--no-panel', action='store_true',
                        help='Do not add the settings panel to the page')

    # Configuration file options
    config_group = parser.add_argument_group('Configuration Options')
    config_group.add_argument('--config', type=str, default=None,
                        help='Path to configuration file (JSON)')
    config_group.add_argument('--save-config', type=str, default=None,
                        help='Save current settings to configuration file')

    return parser


def parse_color_assignment(value):
    """
    Split a TERM=#RRGGBB assignment.

    Args:
        value: Assignment string

    Returns:
        tuple: (term, color)

    Raises:
        ValueError: If the assignment is malformed
    """
    term, sep, color = value.rpartition('=')
    term, color = term.strip(), color.strip()
    if not sep or not term:
        raise ValueError(f"Expected TERM=#RRGGBB, got '{value}'")
    if not is_valid_color(color):
        raise ValueError(f"Invalid color '{color}' for term '{term}' (expected #RRGGBB)")
    return term, color


def parse_args(args=None):
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments to parse (uses sys.argv if None)

    Returns:
        argparse.Namespace: Parsed arguments

    Raises:
        SystemExit: If arguments are missing or invalid
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Process term lists, splitting comma-separated values
    for name in ('highlight', 'hide', 'remove_highlight', 'remove_hidden'):
        terms = []
        for value in getattr(parsed_args, name):
            terms.extend(t.strip() for t in value.split(',') if t.strip())
        setattr(parsed_args, name, terms)

    # Process color assignments into (term, color) pairs
    colors = []
    for assignment in parsed_args.color:
        try:
            colors.append(parse_color_assignment(assignment))
        except ValueError as e:
            parser.error(str(e))
    parsed_args.color = colors

    # Process article selectors
    if parsed_args.selectors:
        parsed_args.selectors = [s.strip() for s in parsed_args.selectors.split(',') if s.strip()]
    else:
        parsed_args.selectors = None

    if parsed_args.watch and not parsed_args.source and not parsed_args.config:
        parser.error("--watch needs a page to open")

    if parsed_args.hidden_class == parsed_args.reduced_class:
        parser.error("--hidden-class and --reduced-class must differ")

    return parsed_args


def has_term_edits(args):
    """Check whether any term or flag changes were requested."""
    return bool(
        args.highlight or args.hide or args.remove_highlight
        or args.remove_hidden or args.color or args.emphasis is not None
    )
