"""Chunking of formatted speech text for back-to-back synthesis.

Short chunks start playing sooner and keep gaps between requests small.
Text is split on sentence-final marks first; sentences that are still
too long are sub-split on commas, semicolons and colons, and no chunk
exceeds the per-request limit of the speech backend.
"""

import logging
import re

from src.lib.config import get_prosody_config
from src.lib.exceptions import ConfigError, ValidationError
from src.models.prosody import SpeechChunk

logger = logging.getLogger(__name__)


SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+|[^.!?]+\Z")
CLAUSE_DELIMITER = re.compile(r"([,;:])")


class SpeechChunker:
    """Splits formatted text into chunks for a speech backend.

    Attributes:
        sentence_limit: Sentences longer than this are sub-split
        max_length: Maximum length of an accumulated sub-split chunk
        request_limit: Hard cap on the length of any chunk
    """

    def __init__(
        self,
        sentence_limit: int = 160,
        max_length: int = 220,
        request_limit: int = 2000,
    ):
        if sentence_limit <= 0 or max_length <= 0 or request_limit <= 0:
            raise ConfigError("Chunk limits must be positive")
        self.sentence_limit = sentence_limit
        self.max_length = max_length
        self.request_limit = request_limit

    @classmethod
    def from_config(cls) -> "SpeechChunker":
        """Create a chunker from the prosody configuration."""
        config = get_prosody_config()
        return cls(
            sentence_limit=config.chunk_sentence_limit,
            max_length=config.chunk_max_length,
            request_limit=config.max_text_length,
        )

    def _sub_split(self, sentence: str) -> list[str]:
        pieces = [p for p in CLAUSE_DELIMITER.split(sentence) if p.strip()]
        parts: list[str] = []
        current = ""
        for piece in pieces:
            if len(current + piece) > self.max_length:
                parts.append(current.strip())
                current = piece
            else:
                current += piece
        if current:
            parts.append(current.strip())
        return parts

    def _fit_request(self, part: str) -> list[str]:
        """Pack words into pieces no longer than request_limit.

        A word longer than the limit is cut.
        """
        if len(part) <= self.request_limit:
            return [part]
        pieces: list[str] = []
        current = ""
        for word in part.split():
            while len(word) > self.request_limit:
                if current:
                    pieces.append(current)
                    current = ""
                pieces.append(word[: self.request_limit])
                word = word[self.request_limit :]
            if not word:
                continue
            candidate = f"{current} {word}" if current else word
            if len(candidate) > self.request_limit:
                pieces.append(current)
                current = word
            else:
                current = candidate
        if current:
            pieces.append(current)
        return pieces

    def split(self, text: str) -> list[SpeechChunk]:
        """Split text into ordered, non-empty chunks.

        Args:
            text: Formatted speech text.

        Returns:
            SpeechChunk list indexed from 0.

        Raises:
            ValidationError: If text is not a string.
        """
        if not isinstance(text, str):
            raise ValidationError(
                f"Text must be a string, got {type(text).__name__}",
                field="text",
            )

        sentences = SENTENCE_PATTERN.findall(text) or [text]

        parts: list[str] = []
        for sentence in sentences:
            sentence = sentence.strip()
            if not sentence:
                continue
            if len(sentence) > self.sentence_limit:
                parts.extend(self._sub_split(sentence))
            else:
                parts.append(sentence)

        fitted = [piece for part in parts if part for piece in self._fit_request(part)]
        chunks = [SpeechChunk(index=i, text=piece) for i, piece in enumerate(fitted)]
        logger.debug(f"Split {len(text)} chars into {len(chunks)} speech chunks")
        return chunks
