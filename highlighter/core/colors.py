#!/usr/bin/env python3
"""
Color arithmetic module.

This module parses and re-encodes #rrggbb colors and derives the darker
border shade drawn beside highlighted articles.
"""

import re

from .settings import DEFAULT_TERM_COLOR

HEX_COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")
BORDER_SHADE_DELTA = -20


class ColorError(ValueError):
    """Raised when a color string is not a 6-hex-digit color."""


def parse_color(color):
    """
    Parse a hex color into its red, green and blue channels.

    Args:
        color: Color string such as "#e8f5e9" (the leading '#' is optional)

    Returns:
        tuple: (red, green, blue) integers in the range 0-255

    Raises:
        ColorError: If the string is not a 6-hex-digit color
    """
    if not isinstance(color, str):
        raise ColorError(f"Invalid color: {color!r}")
    match = HEX_COLOR_PATTERN.match(color.strip())
    if not match:
        raise ColorError(f"Invalid color: {color!r}")

    value = int(match.group(1), 16)
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def format_color(red, green, blue):
    """Encode channels as a lowercase, zero-padded #rrggbb string."""
    return f"#{red:02x}{green:02x}{blue:02x}"


def is_valid_color(color):
    try:
        parse_color(color)
    except ColorError:
        return False
    return True


def normalize_color(color, default=DEFAULT_TERM_COLOR):
    """
    Return the canonical form of a color, or the default if it is invalid.

    Args:
        color: Candidate color string (may be None)
        default: Color used when the candidate cannot be parsed

    Returns:
        str: Lowercase #rrggbb color
    """
    try:
        return format_color(*parse_color(color))
    except ColorError:
        return default


def _clamp(channel):
    return min(max(channel, 0), 255)


def adjust_color(color, amount):
    """
    Shift every channel of a color by the same amount.

    Channels are clamped to 0-255 after the shift, so "#000000" darkened
    stays "#000000" and "#ffffff" lightened stays "#ffffff".

    Args:
        color: Base #rrggbb color
        amount: Signed delta added to each channel

    Returns:
        str: Adjusted #rrggbb color

    Raises:
        ColorError: If the base color is malformed
    """
    red, green, blue = parse_color(color)
    return format_color(_clamp(red + amount), _clamp(green + amount), _clamp(blue + amount))


def border_shade(color):
    """Darker shade of a highlight color used for the article's left border."""
    return adjust_color(color, BORDER_SHADE_DELTA)
