"""Placeholder protection for spans that must survive sentence splitting.

Abbreviations such as "Dr." and decimals such as "94.5" contain a period
that is not a sentence boundary. Before splitting, each match is swapped
for a placeholder token; after splitting, the original text is put back.
"""

import re
from typing import Iterator


# Private-use ranges: no letters, digits or whitespace, so tokens never
# change how the boundary and connector patterns match around them.
PLACEHOLDER_RANGES = ((0xE000, 0xF8FF), (0xF0000, 0xFFFFD), (0x100000, 0x10FFFD))

ABBREVIATION_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:Mr|Mrs|Ms|Dr|St|Jr|Sr|vs|etc|e\.g|i\.e|approx|vol|no)\.",
    re.IGNORECASE | re.ASCII,
)

DECIMAL_PATTERN: re.Pattern[str] = re.compile(r"\d+\.\d+", re.ASCII)


def _placeholder_chars() -> Iterator[str]:
    for start, end in PLACEHOLDER_RANGES:
        for code in range(start, end + 1):
            yield chr(code)


class ProtectedSpans:
    """Ordered table of protected spans for a single formatting call.

    The n-th protected span (1-based) is replaced by a token of length n
    built from a character of its own. Token characters are private-use
    code points absent from any text seen by the table, so adjacent
    tokens stay distinct and input text can never look like a token.
    Tokens share one counter across every pattern protected on the same
    table, so instances must never be reused between calls.

    Example:
        >>> spans = ProtectedSpans()
        >>> text = spans.protect("Dr. Who scored 9.5", ABBREVIATION_PATTERN)
        >>> text = spans.protect(text, DECIMAL_PATTERN)
        >>> spans.restore(text)
        'Dr. Who scored 9.5'
    """

    def __init__(self) -> None:
        self._tokens: list[str] = []
        self._originals: list[str] = []
        self._reserved: set[str] = set()
        self._candidates = _placeholder_chars()

    def __len__(self) -> int:
        return len(self._originals)

    def token(self, index: int) -> str:
        """Placeholder for the span at 0-based insertion index."""
        return self._tokens[index]

    def _next_token(self) -> str:
        char = next(c for c in self._candidates if c not in self._reserved)
        self._reserved.add(char)
        return char * (len(self._tokens) + 1)

    def protect(self, text: str, pattern: re.Pattern[str]) -> str:
        """Replace every match of pattern with its placeholder token."""
        self._reserved.update(text)

        def _swap(match: re.Match) -> str:
            token = self._next_token()
            self._tokens.append(token)
            self._originals.append(match.group(0))
            return token

        return pattern.sub(_swap, text)

    def restore(self, text: str) -> str:
        """Put original spans back, highest insertion index first."""
        for index in range(len(self._originals) - 1, -1, -1):
            text = text.replace(self._tokens[index], self._originals[index])
        return text
