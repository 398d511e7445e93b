#!/usr/bin/env python3
"""
Article restyling module.

This module turns a classification Category into presentational changes on
an article element. Every application first clears whatever this module
may have applied earlier, so an article can move between any two
categories without stale styling left behind.
"""

from ..core.classifier import Hidden, Highlighted, Reduced
from ..core.colors import BORDER_SHADE_DELTA, adjust_color, normalize_color

HIDDEN_CLASS = "feedly-hidden"
REDUCED_CLASS = "feedly-reduced"
MANAGED_STYLES = ("background-color", "border-left")


class Restyler:
    """
    Applies categories to article handles.

    Article handles must provide ``restyle(clear_styles, clear_classes,
    styles, classes)``; see highlighter.content.articles.
    """

    def __init__(self, hidden_class=HIDDEN_CLASS, reduced_class=REDUCED_CLASS,
                 border_delta=BORDER_SHADE_DELTA):
        """
        Initialize the restyler.

        Args:
            hidden_class: Marker class for hidden articles
            reduced_class: Marker class for de-emphasized articles
            border_delta: Channel delta for the highlight border shade
        """
        self.hidden_class = hidden_class
        self.reduced_class = reduced_class
        self.border_delta = border_delta

    @property
    def managed_classes(self):
        return (self.hidden_class, self.reduced_class)

    def presentation(self, category):
        """
        Work out the styles and classes for a category.

        Args:
            category: Category returned by the classifier

        Returns:
            tuple: (list of (property, value) pairs, list of class names)
        """
        if isinstance(category, Highlighted):
            color = normalize_color(category.color)
            border = adjust_color(color, self.border_delta)
            return [
                ("background-color", color),
                ("border-left", f"4px solid {border}"),
            ], []
        if isinstance(category, Hidden):
            return [], [self.hidden_class]
        if isinstance(category, Reduced):
            return [], [self.reduced_class]
        return [], []

    def apply_category(self, article, category):
        """Reset the article's managed presentation and apply the category."""
        styles, classes = self.presentation(category)
        article.restyle(MANAGED_STYLES, self.managed_classes, styles, classes)
