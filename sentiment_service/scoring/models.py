"""Data models for sentiment scoring results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class WordScore:
    """Polarity of a single token: -1 negative, 0 neutral, 1 positive."""

    word: str
    score: int


@dataclass
class Analysis:
    """Sentiment of a whole text.

    ``score`` is the document class (1 positive, 0 negative or neutral);
    ``words`` holds one entry per token, in text order.
    """

    score: int
    words: list[WordScore] = field(default_factory=list)
    language: str = "en"


class Scorer(Protocol):
    """Anything that can turn text into an Analysis."""

    def score(self, text: str) -> Analysis:
        """Score ``text`` and return its Analysis."""
        ...
