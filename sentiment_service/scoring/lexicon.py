"""Deterministic lexicon-based sentiment scorer."""

from __future__ import annotations

import re

from sentiment_service.scoring.models import Analysis, WordScore

_TOKEN_RE = re.compile(r"[A-Za-z][A-Za-z']*|[.!?;]")
_CLAUSE_BREAKS = frozenset({".", "!", "?", ";"})

# Negators flip the polarity of the next sentiment word within this many tokens.
_NEGATION_WINDOW = 3
_NEGATORS = frozenset({"not", "no", "never", "nor", "neither", "nobody", "nothing", "without"})

POSITIVE_WORDS = frozenset(
    {
        "amazing", "awesome", "beautiful", "best", "better", "brilliant", "calm",
        "celebrate", "cheerful", "clean", "comfortable", "delight", "delighted",
        "delightful", "easy", "effective", "enjoy", "enjoyed", "excellent",
        "excited", "exciting", "fantastic", "fine", "fortunate", "fun", "glad",
        "good", "grateful", "great", "happy", "helpful", "hope", "hopeful",
        "impressive", "incredible", "joy", "kind", "like", "liked", "love",
        "loved", "lovely", "lucky", "nice", "perfect", "pleasant", "pleased",
        "positive", "proud", "recommend", "reliable", "right", "satisfied",
        "smooth", "success", "successful", "superb", "thank", "thanks",
        "truth", "useful", "valuable", "welcome", "well", "win", "wonderful",
        "worth",
    }
)

NEGATIVE_WORDS = frozenset(
    {
        "afraid", "angry", "annoyed", "annoying", "anxious", "awful", "bad",
        "boring", "broken", "confused", "crash", "cruel", "damage", "dead",
        "difficult", "disappointed", "disappointing", "dislike", "dreadful",
        "fail", "failed", "failure", "fear", "frustrated", "frustrating",
        "hard", "harm", "hate", "hated", "horrible", "hurt", "lose", "loss",
        "mad", "miserable", "mistake", "negative", "pain", "painful", "poor",
        "problem", "sad", "scared", "slow", "sorry", "terrible", "trouble",
        "ugly", "unhappy", "upset", "useless", "waste", "weak", "worried",
        "worse", "worst", "wrong",
    }
)


def _polarity(token: str) -> int:
    if token in POSITIVE_WORDS:
        return 1
    if token in NEGATIVE_WORDS:
        return -1
    return 0


def _is_negator(token: str) -> bool:
    return token in _NEGATORS or token.endswith("n't")


class LexiconScorer:
    """Scores text by summing per-word polarities from fixed word lists.

    A negator ("not", "never", "don't", ...) flips the next sentiment word
    within a short window; clause punctuation ends the negation. The document
    is positive (score 1) when the polarity sum is above zero.
    """

    def score(self, text: str) -> Analysis:
        words: list[WordScore] = []
        total = 0
        negate_for = 0

        for token in _TOKEN_RE.findall(text):
            if token in _CLAUSE_BREAKS:
                negate_for = 0
                continue

            lowered = token.lower()
            polarity = _polarity(lowered)
            if polarity and negate_for:
                polarity = -polarity
                negate_for = 0
            elif _is_negator(lowered):
                negate_for = _NEGATION_WINDOW + 1
            if negate_for:
                negate_for -= 1

            words.append(WordScore(word=lowered, score=polarity))
            total += polarity

        return Analysis(score=1 if total > 0 else 0, words=words)
