#!/usr/bin/env python3
"""
Settings and term model module.

This module defines the term types the user manages (highlight terms with a
color, hidden terms) and the Settings value that holds them together with
the two display flags.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple, Union

DEFAULT_TERM_COLOR = "#e8f5e9"


class TermKind(Enum):
    """Which of the two term collections a term belongs to."""

    HIGHLIGHT = "highlight"
    HIDDEN = "hidden"

    @property
    def store_key(self) -> str:
        return "highlightTerms" if self is TermKind.HIGHLIGHT else "hiddenTerms"


class Flag(Enum):
    """Boolean settings, valued by their persistent store key."""

    SHOW_EMPHASIS = "showEmphasis"
    IS_MINIMIZED = "isMinimized"


@dataclass(frozen=True)
class HighlightTerm:
    text: str
    color: str = DEFAULT_TERM_COLOR

    @property
    def kind(self) -> TermKind:
        return TermKind.HIGHLIGHT

    def to_dict(self):
        return {"term": self.text, "color": self.color}


@dataclass(frozen=True)
class HiddenTerm:
    text: str

    @property
    def kind(self) -> TermKind:
        return TermKind.HIDDEN


Term = Union[HighlightTerm, HiddenTerm]


def sort_for_display(terms):
    """
    Return terms in alphabetical display order.

    Stored order is insertion order and is what matching uses; this ordering
    is only for rendering.
    """
    return sorted(terms, key=lambda t: (t.text.casefold(), t.text))


@dataclass(frozen=True)
class Settings:
    """
    User settings held in memory for the lifetime of a page.

    Instances are never mutated; TermStore swaps in a new value after each
    successful write to the persistent store.
    """

    highlight_terms: Tuple[HighlightTerm, ...] = field(default_factory=tuple)
    hidden_terms: Tuple[HiddenTerm, ...] = field(default_factory=tuple)
    show_emphasis: bool = False
    is_minimized: bool = True

    def terms(self, kind: TermKind) -> Tuple[Term, ...]:
        if kind is TermKind.HIGHLIGHT:
            return self.highlight_terms
        return self.hidden_terms

    def with_terms(self, kind: TermKind, terms) -> "Settings":
        if kind is TermKind.HIGHLIGHT:
            return replace(self, highlight_terms=tuple(terms))
        return replace(self, hidden_terms=tuple(terms))

    def with_flag(self, flag: Flag, value: bool) -> "Settings":
        if flag is Flag.SHOW_EMPHASIS:
            return replace(self, show_emphasis=bool(value))
        return replace(self, is_minimized=bool(value))

    def find_highlight(self, text: str):
        for term in self.highlight_terms:
            if term.text == text:
                return term
        return None


def serialize_terms(kind: TermKind, terms):
    """Convert a term collection to its persistent store representation."""
    if kind is TermKind.HIGHLIGHT:
        return [term.to_dict() for term in terms]
    return [term.text for term in terms]
