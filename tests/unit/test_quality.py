"""
Unit tests for core/generation/quality.py — HeuristicQualityValidator.
"""

import pytest

from core.generation.quality import (
    HeuristicQualityValidator,
    coherence_score,
    split_sentences,
)
from tests.fakes import GOOD_TEXT, PARAGRAPH


@pytest.fixture
def validator():
    return HeuristicQualityValidator(min_words=500, max_words=4000, pass_score=0.6)


class TestCoherence:
    def test_fewer_than_three_sentences(self):
        assert coherence_score("One sentence. Two sentences.") == 0.3

    def test_all_signals(self):
        text = "Short one. However this sentence is a lot longer than that.\nAnd a third, mid size."
        assert coherence_score(text) == pytest.approx(1.0)

    def test_no_signals(self):
        # same-length sentences, no transitions, no line breaks
        assert coherence_score("abc. abc. abc. abc.") == 0.0

    def test_transition_word_must_be_whole_word(self):
        text = "Howevers are odd. Cats sit on mats today. Dogs run. Birds fly over hills."
        assert coherence_score(text) == pytest.approx(0.3)

    def test_transition_case_insensitive(self):
        text = "MOREOVER it rained. It rained a great deal more. Then it stopped."
        assert coherence_score(text) == pytest.approx(0.7)

    def test_split_sentences_drops_blanks(self):
        assert split_sentences("A!! B?  . C.") == ["A", " B", " C"]


class TestValidate:
    def test_good_text_passes(self, validator):
        check = validator.validate(GOOD_TEXT)
        assert check.passes is True
        assert check.reason == "Passed"
        assert check.word_count >= 500
        assert 0.6 <= check.score <= 1.0

    def test_short_text_fails_even_with_coherence_signals(self, validator):
        text = "\n".join([PARAGRAPH] * 3)  # every coherence signal, but < 500 words
        assert coherence_score(text) == pytest.approx(1.0)
        check = validator.validate(text)
        assert check.passes is False
        assert check.word_count < 500

    def test_short_text_reason(self, validator):
        check = validator.validate("word " * 100)
        assert check.passes is False
        assert check.reason == "Quality score too low"

    def test_content_too_short_reason(self):
        # 450 words: 0.45 + 0.3 + 0.3*0.2 = 0.81 >= 0.6, yet under min words
        validator = HeuristicQualityValidator(min_words=500)
        check = validator.validate("word " * 450)
        assert check.passes is False
        assert check.reason == "Content too short"

    def test_score_capped_at_one(self, validator):
        check = validator.validate("word " * 3000)
        assert check.score == 1.0

    def test_overlong_text_penalised(self):
        validator = HeuristicQualityValidator(min_words=5000, max_words=1000)
        short = validator.validate("word " * 1000).score
        long = validator.validate("word " * 2000).score
        # length term grows by 0.1, max-length term shrinks by 0.15
        assert long < short

    def test_empty_text(self, validator):
        check = validator.validate("")
        assert check.passes is False
        assert check.word_count == 0

    def test_to_dict(self, validator):
        d = validator.validate(GOOD_TEXT).to_dict()
        assert set(d) == {"passes", "score", "reason", "word_count"}

    def test_invalid_thresholds(self):
        with pytest.raises(ValueError):
            HeuristicQualityValidator(min_words=0)
