"""Unit tests for ProtectedSpans placeholder protection."""

import pytest

from src.services.tts.protection import (
    ABBREVIATION_PATTERN,
    DECIMAL_PATTERN,
    ProtectedSpans,
)


def protect_all(spans, text):
    text = spans.protect(text, ABBREVIATION_PATTERN)
    return spans.protect(text, DECIMAL_PATTERN)


class TestTokens:
    """Tests for placeholder token shape."""

    def test_token_length_follows_insertion_order(self):
        """The n-th token is n + 1 characters long."""
        spans = ProtectedSpans()
        protect_all(spans, "Dr. rated 94.5 and 2.0")
        assert [len(spans.token(i)) for i in range(3)] == [1, 2, 3]

    def test_tokens_use_distinct_characters(self):
        """No token is a substring of another."""
        spans = ProtectedSpans()
        protect_all(spans, "Dr. vs. Mr. 1.5")
        chars = {spans.token(i)[0] for i in range(len(spans))}
        assert len(chars) == 4
        for i in range(len(spans)):
            assert len(set(spans.token(i))) == 1

    def test_token_characters_absent_from_input(self):
        """A character already in the text is never used for a token."""
        spans = ProtectedSpans()
        text = "\ue000\ue001 see Dr. Smith"
        result = spans.protect(text, ABBREVIATION_PATTERN)
        assert spans.token(0) == "\ue002"
        assert spans.restore(result) == text

    def test_tokens_are_not_word_characters(self):
        """Tokens never form a word with the text around them."""
        spans = ProtectedSpans()
        spans.protect("Dr. x", ABBREVIATION_PATTERN)
        token = spans.token(0)
        assert not token.isalnum()
        assert not token.isspace()


class TestProtect:
    """Tests for ProtectedSpans.protect()."""

    def test_protects_abbreviation(self):
        """Abbreviations with their period are swapped out."""
        spans = ProtectedSpans()
        result = spans.protect("Call Dr. Smith", ABBREVIATION_PATTERN)
        assert result == f"Call {spans.token(0)} Smith"
        assert len(spans) == 1

    @pytest.mark.parametrize("text", ["MR. Jones", "etc. more", "ETC. more", "i.e. this", "Vol. 2", "No. 5"])
    def test_abbreviations_case_insensitive(self, text):
        """The abbreviation set matches in any case."""
        spans = ProtectedSpans()
        result = spans.protect(text, ABBREVIATION_PATTERN)
        assert len(spans) == 1
        assert spans.token(0) in result

    def test_word_boundary(self):
        """'piano.' does not match the 'no' abbreviation."""
        spans = ProtectedSpans()
        text = "I play piano. Daily"
        assert spans.protect(text, ABBREVIATION_PATTERN) == text
        assert len(spans) == 0

    @pytest.mark.parametrize("text", ["CaféMr. Smith", "Naïvs. them"])
    def test_word_boundary_is_ascii(self, text):
        """An accented letter is not a word character, so the abbreviation after it matches."""
        spans = ProtectedSpans()
        assert len(spans.protect(text, ABBREVIATION_PATTERN)) < len(text)
        assert len(spans) == 1

    def test_shared_counter_across_patterns(self):
        """Decimals continue numbering after abbreviations."""
        spans = ProtectedSpans()
        text = protect_all(spans, "Dr. rated 94.5 and 2.0")
        assert text == f"{spans.token(0)} rated {spans.token(1)} and {spans.token(2)}"
        assert len(spans) == 3

    def test_decimal_requires_digits_on_both_sides(self):
        """A trailing period after a number is not a decimal."""
        spans = ProtectedSpans()
        assert spans.protect("In 2021. Then", DECIMAL_PATTERN) == "In 2021. Then"


class TestRestore:
    """Tests for ProtectedSpans.restore()."""

    def test_round_trip(self):
        """Restoring gives back the original text."""
        spans = ProtectedSpans()
        original = "Dr. rated 94.5 and 2.0 vs. 3.1"
        assert spans.restore(protect_all(spans, original)) == original

    def test_reverse_order_for_adjacent_tokens(self):
        """Touching tokens are restored to their own originals."""
        spans = ProtectedSpans()
        text = spans.protect("Dr.Mr. x", ABBREVIATION_PATTERN)
        assert text == f"{spans.token(0)}{spans.token(1)} x"
        assert spans.restore(text) == "Dr.Mr. x"

    @pytest.mark.parametrize("original", [
        "Try no.2.5 today",
        "Rated approx.94.5 points",
        "See Dr.Mr. Smith",
    ])
    def test_abbreviation_touching_decimal(self, original):
        """An abbreviation directly followed by another span comes back intact."""
        spans = ProtectedSpans()
        assert spans.restore(protect_all(spans, original)) == original

    def test_nul_in_input_preserved(self):
        """A NUL character in the text is not mistaken for a token."""
        spans = ProtectedSpans()
        original = "Tag\x00 see Dr. Smith"
        assert spans.restore(protect_all(spans, original)) == original

    def test_restore_without_spans(self):
        """An empty table leaves text alone."""
        assert ProtectedSpans().restore("plain") == "plain"
