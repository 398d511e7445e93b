#!/usr/bin/env python3
"""
Article classification module.

This module decides how each article should be displayed given the
current Settings. Rules are checked in a fixed priority order: a highlight
match beats a hidden match, which beats emphasis reduction, which beats
leaving the article alone.
"""

from dataclasses import dataclass


class Category:
    """Base class for the display category of one article."""

    name = "normal"


@dataclass(frozen=True)
class Highlighted(Category):
    color: str
    name = "highlighted"


@dataclass(frozen=True)
class Hidden(Category):
    name = "hidden"


@dataclass(frozen=True)
class Reduced(Category):
    name = "reduced"


@dataclass(frozen=True)
class Normal(Category):
    name = "normal"


def classify(article_text, settings):
    """
    Decide the display category of an article.

    Matching is plain case-insensitive substring containment. When several
    highlight terms match, the one added first wins, regardless of the
    alphabetical order used to display terms.

    Args:
        article_text: Full text content of the article
        settings: Current Settings

    Returns:
        Category: Highlighted(color), Hidden(), Reduced() or Normal()
    """
    text = (article_text or "").lower()

    for term in settings.highlight_terms:
        if term.text.lower() in text:
            return Highlighted(term.color)

    if any(term.text.lower() in text for term in settings.hidden_terms):
        return Hidden()

    if settings.show_emphasis:
        return Reduced()

    return Normal()


def plan_assignments(articles, settings):
    """
    Pair every article with its category.

    Args:
        articles: Article handles exposing a ``text`` attribute
        settings: Current Settings

    Returns:
        list: (article, Category) tuples in document order
    """
    return [(article, classify(article.text, settings)) for article in articles]
