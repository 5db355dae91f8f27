"""Prosody-aware text formatting for speech synthesis.

Converts markdown-rich assistant replies into plain text tuned for a
speech backend that pauses too long after full stops but renders the
inflection of ! and ? well. Periods are softened to commas or
semicolons while ! and ? are always kept.

Rules are deterministic regular-expression rewrites, applied in a
fixed order. No NLP, no locale-aware segmentation.
"""

import logging
import re
from typing import Optional

from src.lib.config import get_prosody_config
from src.lib.exceptions import ValidationError
from src.models.prosody import SofteningLevel, SpeechChunk
from src.services.tts.chunker import SpeechChunker
from src.services.tts.softening import soften_full_stops

logger = logging.getLogger(__name__)


def _contraction_table(pairs: list[tuple[str, str]]) -> list[tuple[re.Pattern, str]]:
    """Build whole-word patterns for each pair and its capitalized form."""
    table = []
    for phrase, contraction in pairs:
        variants = [(phrase, contraction)]
        capitalized = (phrase[0].upper() + phrase[1:], contraction[0].upper() + contraction[1:])
        if capitalized[0] != phrase:
            variants.append(capitalized)
        for source, target in variants:
            table.append((re.compile(rf"\b{re.escape(source)}\b", re.ASCII), target))
    return table


class SpeechTextFormatter:
    """Formats text for a speech-synthesis backend.

    Each phase is exposed as a classmethod so it can be tested alone;
    format() chains them in order. The default softening level is
    captured when the formatter is built and can be overridden per call.

    Example:
        >>> formatter = SpeechTextFormatter()
        >>> formatter.format("Wow!!! It is **great**.")
        "Wow! It's great."
    """

    # Applied in order, so "you would not" becomes "you'd not".
    CONTRACTIONS = _contraction_table([
        ("it is", "it's"),
        ("I have", "I've"),
        ("I am", "I'm"),
        ("do not", "don't"),
        ("cannot", "can't"),
        ("will not", "won't"),
        ("that is", "that's"),
        ("what is", "what's"),
        ("you are", "you're"),
        ("they are", "they're"),
        ("we are", "we're"),
        ("there is", "there's"),
        ("here is", "here's"),
        ("you would", "you'd"),
        ("would not", "wouldn't"),
        ("should not", "shouldn't"),
        ("could not", "couldn't"),
    ])

    EM_DASH = "—"

    def __init__(self, default_level: SofteningLevel | str | None = None):
        if default_level is None:
            default_level = get_prosody_config().softening_level
        self.default_level = SofteningLevel.parse(default_level)

    @classmethod
    def strip_markdown(cls, text: str) -> str:
        """Remove emphasis, heading markers and double quotes.

        Single quotes are kept, they carry contractions.
        """
        text = re.sub(r"\*\*(.+?)\*\*", r"\1", text)
        text = re.sub(r"\*(.+?)\*", r"\1", text)
        text = re.sub(r"_(.+?)_", r"\1", text)
        text = re.sub(r"^#{1,6}\s+", "", text, flags=re.MULTILINE)
        text = re.sub(r"[\"“”]", "", text)
        return text

    @classmethod
    def flatten_parentheticals(cls, text: str) -> str:
        """Turn "(text)" into a comma-introduced clause."""
        return re.sub(r"\(\s*([^)]+?)\s*\)", r", \1", text)

    @classmethod
    def collapse_punctuation_runs(cls, text: str) -> str:
        text = re.sub(r"\.{2,}", ".", text)
        text = re.sub(r"!{2,}", "!", text)
        text = re.sub(r"\?{2,}", "?", text)
        return text

    @classmethod
    def normalize_inflection_spacing(cls, text: str) -> str:
        """Collapse whitespace after ! and ? to one space."""
        text = re.sub(r"!\s+", "! ", text)
        text = re.sub(r"\?\s+", "? ", text)
        return text

    @classmethod
    def normalize_dashes(cls, text: str) -> str:
        """Space em-dashes and turn "--" into a spaced em-dash."""
        spaced = f" {cls.EM_DASH} "
        text = text.replace(cls.EM_DASH, spaced)
        text = text.replace("--", spaced)
        return text

    @classmethod
    def soften_colons(cls, text: str) -> str:
        """Replace list-introducing and continuation colons with commas.

        A colon before an uppercase word is left alone.
        """
        text = re.sub(r":(\s*\n)", r",\1", text)
        text = re.sub(r":\s+([a-z])", r", \1", text)
        return text

    @classmethod
    def replace_newlines(cls, text: str, level: SofteningLevel) -> str:
        """Replace paragraph breaks by level, then single newlines by commas."""
        text = re.sub(r"\n\s*\n", level.paragraph_separator, text)
        return text.replace("\n", ", ")

    @classmethod
    def apply_contractions(cls, text: str) -> str:
        for pattern, replacement in cls.CONTRACTIONS:
            text = pattern.sub(replacement, text)
        return text

    @classmethod
    def cleanup(cls, text: str) -> str:
        """Collapse leftover whitespace and doubled punctuation, then trim."""
        text = re.sub(r"\s{2,}", " ", text)
        text = re.sub(r",\s*,", ",", text)
        text = re.sub(r",\s*\.", ".", text)
        text = re.sub(r"\.\s*\.", ".", text)
        text = re.sub(r";\s*;", ";", text)
        text = re.sub(r"\s+([.,;:?!])", r"\1", text)
        text = re.sub(r"([.,;:?!])\s*([.,;:?!])", r"\1", text)
        return text.strip()

    def resolve_level(self, level: SofteningLevel | str | None = None) -> SofteningLevel:
        """Return the per-call level, or this formatter's default."""
        if level is None:
            return self.default_level
        return SofteningLevel.parse(level)

    def format(self, text: str, level: SofteningLevel | str | None = None) -> str:
        """Format text for speech synthesis.

        Args:
            text: Raw assistant text, possibly with markdown.
            level: Optional softening level overriding the default.

        Returns:
            Plain text ready for the speech backend.

        Raises:
            ValidationError: If text is not a string or level is unknown.
        """
        if not isinstance(text, str):
            raise ValidationError(
                f"Text must be a string, got {type(text).__name__}",
                field="text",
            )
        softening = self.resolve_level(level)
        if not text:
            return ""

        s = self.strip_markdown(text)
        s = self.flatten_parentheticals(s)
        s = self.collapse_punctuation_runs(s)
        s = self.normalize_inflection_spacing(s)
        s = self.normalize_dashes(s)
        s = self.soften_colons(s)
        s = self.replace_newlines(s, softening)
        s = soften_full_stops(s, softening)
        s = self.apply_contractions(s)
        s = self.cleanup(s)

        logger.debug(f"Formatted speech text at {softening.value}: {len(text)} -> {len(s)} chars")
        return s

    def format_and_chunk(
        self,
        text: str,
        level: SofteningLevel | str | None = None,
        chunker: Optional[SpeechChunker] = None,
    ) -> list[SpeechChunk]:
        """Format text, then split it into chunks for back-to-back synthesis."""
        chunker = chunker or SpeechChunker.from_config()
        return chunker.split(self.format(text, level))


def format_for_speech(text: str, level: SofteningLevel | str | None = None) -> str:
    """Format text with a formatter using the configured default level."""
    return SpeechTextFormatter().format(text, level)
