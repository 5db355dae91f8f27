"""Prosody data models for speech text formatting.

This module defines the transient values used while formatting text
for a speech-synthesis backend:
- SofteningLevel: How aggressively full stops are weakened
- BoundaryDecision: Separator chosen for one sentence boundary
- SpeechChunk: One piece of formatted text queued for synthesis
"""

from dataclasses import dataclass
from enum import Enum

from src.lib.exceptions import ValidationError


# =============================================================================
# Enums
# =============================================================================


class SofteningLevel(str, Enum):
    """Softening policy for sentence-final periods.

    Levels are ordered OFF < LOW < MED < HIGH. Comparison uses that
    order rather than the alphabetical order of the string values.
    """

    OFF = "OFF"    # Periods pass through unchanged
    LOW = "LOW"    # Only connector words soften
    MED = "MED"    # Length-based comma/semicolon/period
    HIGH = "HIGH"  # Almost always soft, with cadence rule

    @property
    def rank(self) -> int:
        """Position of this level in the OFF..HIGH order."""
        return list(type(self)).index(self)

    @property
    def softens(self) -> bool:
        """Whether full-stop softening runs at this level."""
        return self is not SofteningLevel.OFF

    @property
    def paragraph_separator(self) -> str:
        """Replacement for a blank-line paragraph break."""
        if self in (SofteningLevel.OFF, SofteningLevel.LOW):
            return ". "
        return ", "

    def _other_rank(self, other):
        """Rank of other, or NotImplemented when it is not level-like.

        Plain strings compare by level order, never alphabetically.
        """
        if isinstance(other, SofteningLevel):
            return other.rank
        if isinstance(other, str):
            try:
                return SofteningLevel.parse(other).rank
            except ValidationError:
                raise TypeError(f"Cannot compare SofteningLevel with {other!r}") from None
        return NotImplemented

    def __lt__(self, other):
        rank = self._other_rank(other)
        return rank if rank is NotImplemented else self.rank < rank

    def __le__(self, other):
        rank = self._other_rank(other)
        return rank if rank is NotImplemented else self.rank <= rank

    def __gt__(self, other):
        rank = self._other_rank(other)
        return rank if rank is NotImplemented else self.rank > rank

    def __ge__(self, other):
        rank = self._other_rank(other)
        return rank if rank is NotImplemented else self.rank >= rank

    @classmethod
    def parse(cls, value: "SofteningLevel | str") -> "SofteningLevel":
        """Coerce a level name into a SofteningLevel.

        Args:
            value: A SofteningLevel or its case-insensitive name.

        Returns:
            The matching SofteningLevel.

        Raises:
            ValidationError: If value does not name a softening level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        choices = ", ".join(level.value for level in cls)
        raise ValidationError(
            f"Invalid softening level {value!r}, expected one of: {choices}",
            field="level",
        )


# =============================================================================
# Per-call values
# =============================================================================


@dataclass(frozen=True)
class BoundaryDecision:
    """Separator chosen for one sentence boundary.

    Attributes:
        separator: ", ", "; " or ". "
        consecutive_soft: Running count of soft breaks after this decision
        rule: Name of the rule that produced the decision
    """

    separator: str
    consecutive_soft: int
    rule: str = ""

    @property
    def is_soft(self) -> bool:
        """True for comma or semicolon, False for a hard stop."""
        return self.separator != ". "


@dataclass(frozen=True)
class SpeechChunk:
    """One piece of formatted text queued for synthesis."""

    index: int
    text: str

    def __len__(self) -> int:
        return len(self.text)
