"""
Vocabulary-overlap consistency between new and prior text.

Jaccard similarity of lower-cased word sets. Measures topical continuity,
not meaning.
"""

from __future__ import annotations

import re
from typing import Set

DEFAULT_CONSISTENCY_THRESHOLD = 0.7

_WORD_RE = re.compile(r"\b\w+\b")


def word_set(text: str) -> Set[str]:
    return set(_WORD_RE.findall(text.lower()))


def jaccard_similarity(new_content: str, prior_content: str) -> float:
    """|A ∩ B| / |A ∪ B|; two texts without any words score 1.0."""
    new_words = word_set(new_content)
    prior_words = word_set(prior_content)
    union = new_words | prior_words
    if not union:
        return 1.0
    return len(new_words & prior_words) / len(union)


class ConsistencyChecker:
    """Score new content against prior content and gate on a threshold."""

    def __init__(self, threshold: float = DEFAULT_CONSISTENCY_THRESHOLD):
        self.threshold = threshold

    def score(self, new_content: str, prior_content: str) -> float:
        return jaccard_similarity(new_content, prior_content)

    def passes(self, score: float) -> bool:
        return score >= self.threshold
