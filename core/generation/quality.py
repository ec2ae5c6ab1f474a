"""
Heuristic quality scoring for generated text.

Length relative to configured bounds plus a coherence sub-score built from
surface signals (transition words, sentence-length variety, line breaks).
No LLM calls. This is a proxy, not a semantic model; anything implementing
``QualityScorer`` can replace it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Protocol

from core.generation.models import count_words

DEFAULT_MIN_WORDS = 500
DEFAULT_MAX_WORDS = 4000
DEFAULT_PASS_SCORE = 0.6

TRANSITION_WORDS = (
    "however", "therefore", "meanwhile", "furthermore", "consequently", "moreover",
)

_TRANSITION_RE = re.compile(r"\b(" + "|".join(TRANSITION_WORDS) + r")\b", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass
class QualityCheck:
    passes: bool
    score: float
    reason: str
    word_count: int = 0

    def to_dict(self) -> dict:
        return {
            "passes": self.passes,
            "score": round(self.score, 4),
            "reason": self.reason,
            "word_count": self.word_count,
        }


class QualityScorer(Protocol):
    def validate(self, content: str) -> QualityCheck:
        ...


def split_sentences(content: str) -> List[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(content) if s.strip()]


def coherence_score(content: str) -> float:
    """Surface-level coherence signal in [0, 1]."""
    sentences = split_sentences(content)
    if len(sentences) < 3:
        return 0.3

    has_transitions = _TRANSITION_RE.search(content) is not None
    has_varied_sentences = len({len(s) for s in sentences}) > 2
    has_structure = "\n" in content

    score = (
        (0.4 if has_transitions else 0.0)
        + (0.3 if has_varied_sentences else 0.0)
        + (0.3 if has_structure else 0.0)
    )
    return min(score, 1.0)


class HeuristicQualityValidator:
    """Weighted length + coherence score.

    score = min(words/min*0.5 + max/max(words, max)*0.3 + coherence*0.2, 1.0)
    """

    def __init__(
        self,
        min_words: int = DEFAULT_MIN_WORDS,
        max_words: int = DEFAULT_MAX_WORDS,
        pass_score: float = DEFAULT_PASS_SCORE,
    ):
        if min_words <= 0 or max_words <= 0:
            raise ValueError("word thresholds must be positive")
        self.min_words = min_words
        self.max_words = max_words
        self.pass_score = pass_score

    def validate(self, content: str) -> QualityCheck:
        word_count = count_words(content)
        score = min(
            (word_count / self.min_words) * 0.5
            + (self.max_words / max(word_count, self.max_words)) * 0.3
            + coherence_score(content) * 0.2,
            1.0,
        )

        if score < self.pass_score:
            reason = "Quality score too low"
        elif word_count < self.min_words:
            reason = "Content too short"
        else:
            reason = "Passed"

        return QualityCheck(
            passes=score >= self.pass_score and word_count >= self.min_words,
            score=score,
            reason=reason,
            word_count=word_count,
        )
