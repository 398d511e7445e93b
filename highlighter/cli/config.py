#!/usr/bin/env python3
"""
Configuration management module.

This module holds the settings of one highlighter run (page, browser,
watch and styling options), kept separate from the user's term lists,
and saves them to or loads them from JSON files.
"""

import json
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from ..content.articles import ARTICLE_SELECTORS
from ..content.restyler import HIDDEN_CLASS, REDUCED_CLASS
from .argument_parser import create_parser

ENGINES = ("selenium", "playwright")
BROWSER_TYPES = ("chromium", "chrome", "firefox", "webkit")


def is_url(source):
    """Check whether a page source is a URL rather than a local file path."""
    if not source:
        return False
    return urlparse(source).scheme in ("http", "https", "file")


@dataclass
class Configuration:
    """
    Options for one highlighting run.

    Term lists and display flags are not part of it; those live in the
    settings store named by ``store_file``.
    """
    # Page and settings storage
    source: Optional[str] = None
    store_file: str = "highlighter_settings.json"
    output_file: Optional[str] = None

    # Browser configuration
    engine: str = "selenium"
    browser_type: str = "chromium"
    headless: bool = True
    webdriver_path: Optional[str] = None

    # Live watching
    watch: bool = False
    poll_interval: float = 0.5
    watch_duration: Optional[float] = None

    # Article styling
    article_selectors: List[str] = field(default_factory=lambda: list(ARTICLE_SELECTORS))
    hidden_class: str = HIDDEN_CLASS
    reduced_class: str = REDUCED_CLASS
    inject_panel: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.engine not in ENGINES:
            raise ValueError(f"Unknown browser engine: {self.engine} (expected one of {', '.join(ENGINES)})")

        if self.browser_type not in BROWSER_TYPES:
            raise ValueError(f"Unknown browser type: {self.browser_type}")

        if self.source and not is_url(self.source) and not os.path.exists(self.source):
            raise ValueError(f"Page source is neither a URL nor an existing file: {self.source}")

        if self.poll_interval <= 0:
            print(f"Warning: poll_interval ({self.poll_interval}) must be positive. Setting poll_interval to 0.5.")
            self.poll_interval = 0.5

        if self.watch_duration is not None and self.watch_duration <= 0:
            print(f"Warning: watch_duration ({self.watch_duration}) is not positive. Watching until interrupted.")
            self.watch_duration = None

        if not self.article_selectors:
            self.article_selectors = list(ARTICLE_SELECTORS)

        if self.hidden_class == self.reduced_class:
            raise ValueError("hidden_class and reduced_class must differ")

        if self.source and not self.output_file and not self.watch:
            self.output_file = self.default_output_file()

    @property
    def page_url(self):
        """URL to open in a browser (local files become file:// URLs)."""
        if not self.source:
            return None
        if is_url(self.source):
            return self.source
        return Path(self.source).resolve().as_uri()

    @property
    def is_remote(self):
        return is_url(self.source) and urlparse(self.source).scheme != "file"

    def default_output_file(self):
        """Derive an output file name from the page source."""
        if self.is_remote:
            base = urlparse(self.source).netloc.replace('.', '_')
        else:
            base = os.path.splitext(os.path.basename(urlparse(self.source).path))[0] or "page"
        return f"{base}_highlighted.html"

    @classmethod
    def from_args(cls, args):
        """Build a Configuration from the namespace returned by parse_args()."""
        return cls(
            source=args.source,
            store_file=args.store,
            output_file=args.output,
            engine=args.engine,
            browser_type=args.browser_type,
            headless=not args.visible,
            webdriver_path=args.webdriver_path,
            watch=args.watch,
            poll_interval=args.poll_interval,
            watch_duration=args.duration,
            article_selectors=args.selectors or list(ARTICLE_SELECTORS),
            hidden_class=args.hidden_class,
            reduced_class=args.reduced_class,
            inject_panel=not args.no_panel,
        )

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict):
        """
        Build a Configuration from a saved dictionary.

        Keys that are not configuration fields (for example from an older
        version) are reported and skipped.
        """
        config = {}
        for key, value in config_dict.items():
            if key in cls.__dataclass_fields__:
                config[key] = value
            else:
                print(f"Warning: ignoring unknown configuration field '{key}'")
        return cls(**config)

    def print_summary(self):
        """Print a summary of the configuration."""
        print(f"\nHighlighter configuration:")
        print(f"- Page: {self.source}")
        print(f"- Settings store: {self.store_file}")

        if self.watch:
            print(f"- Mode: Live watching ({self.engine}, {self.browser_type})")
            print(f"  - Poll interval: {self.poll_interval}s")
            print(f"  - Duration: {'Until interrupted' if self.watch_duration is None else str(self.watch_duration) + 's'}")
            print(f"- Browser mode: {'Headless' if self.headless else 'Visible'}")
        else:
            print(f"- Mode: Static annotation")
            print(f"- Output file: {self.output_file}")
            if self.is_remote:
                print(f"- Fetching page with: {self.engine} ({'Headless' if self.headless else 'Visible'})")

        print(f"- Article selectors: {', '.join(self.article_selectors)}")
        print(f"- Marker classes: hidden='{self.hidden_class}', reduced='{self.reduced_class}'")
        print(f"- Settings panel: {'Enabled' if self.inject_panel else 'Disabled'}")
        print()


def load_config(config_file: str) -> Configuration:
    """
    Read a Configuration saved with ``--save-config``.

    Raises:
        FileNotFoundError: If the file is missing
        ValueError: If the file is not a JSON object or holds invalid values
    """
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"No configuration file at {config_file}")

    with open(config_file, 'r', encoding='utf-8') as f:
        try:
            config_dict = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{config_file} is not valid JSON: {e.msg} (line {e.lineno})") from e

    if not isinstance(config_dict, dict):
        raise ValueError(f"{config_file} must hold a JSON object")
    return Configuration.from_dict(config_dict)


def save_config(config: Configuration, config_file: str) -> None:
    """
    Write a Configuration as JSON, creating parent directories as needed.

    Raises:
        OSError: If the file cannot be written
    """
    directory = os.path.dirname(os.path.abspath(config_file))
    os.makedirs(directory, exist_ok=True)

    with open(config_file, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)

    print(f"Configuration saved to {config_file}")


# Argument names that map to differently named configuration fields
ARG_TO_FIELD = {
    "source": "source",
    "store": "store_file",
    "output": "output_file",
    "engine": "engine",
    "browser_type": "browser_type",
    "webdriver_path": "webdriver_path",
    "watch": "watch",
    "poll_interval": "poll_interval",
    "duration": "watch_duration",
    "selectors": "article_selectors",
    "hidden_class": "hidden_class",
    "reduced_class": "reduced_class",
}


def load_config_from_args(args):
    """
    Build the run's Configuration.

    With ``--config`` the saved file is the base and any option given
    explicitly on the command line replaces its value. A file that cannot
    be used is reported and the command line alone is used instead.

    Args:
        args: Namespace returned by parse_args()

    Returns:
        Configuration: Validated configuration
    """
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as e:
            print(f"Error loading configuration file: {e}")
            print("Falling back to command-line arguments")
        else:
            print(f"Loaded configuration from {args.config}")
            return _override_config_from_args(config, args)

    return Configuration.from_args(args)


def _override_config_from_args(config, args):
    """Apply the options that differ from their parser defaults on top of a loaded config."""
    defaults = vars(create_parser().parse_args([]))

    updates = config.to_dict()
    for key, value in vars(args).items():
        if value == defaults.get(key):
            continue
        if key == "visible":
            updates["headless"] = not value
        elif key == "no_panel":
            updates["inject_panel"] = not value
        elif key in ARG_TO_FIELD:
            updates[ARG_TO_FIELD[key]] = value

    # A new page gets a new derived output name unless one was given
    if args.source != defaults.get("source") and args.output == defaults.get("output"):
        updates["output_file"] = None

    return Configuration.from_dict(updates)
