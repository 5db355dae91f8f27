"""Full-stop softening for speech text.

The speech backend pauses too long after a period. This module weakens
sentence boundaries to commas or semicolons according to the softening
level, using an ordered rule table where the first matching rule wins.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable

from src.models.prosody import BoundaryDecision, SofteningLevel
from src.services.tts.protection import (
    ABBREVIATION_PATTERN,
    DECIMAL_PATTERN,
    ProtectedSpans,
)

logger = logging.getLogger(__name__)


CONNECTOR_PATTERN: re.Pattern[str] = re.compile(
    r"^(?:And|But|So|Then|Also|Now|However|Still|Plus|Next|Or|Yet)\b",
    re.IGNORECASE | re.ASCII,
)

SENTENCE_BOUNDARY: re.Pattern[str] = re.compile(r"\.\s+")

SHORT_FRAGMENT_LIMIT = 40
MEDIUM_FRAGMENT_LIMIT = 80
CADENCE_LIMIT = 3

COMMA = ", "
SEMICOLON = "; "
PERIOD = ". "


@dataclass(frozen=True)
class BoundaryContext:
    """Facts about one boundary that the rules inspect."""

    level: SofteningLevel
    next_length: int
    starts_with_connector: bool
    consecutive_soft: int


@dataclass(frozen=True)
class SofteningRule:
    """One row of the rule table."""

    name: str
    applies: Callable[[BoundaryContext], bool]
    separator: Callable[[BoundaryContext], str]


def _med_separator(ctx: BoundaryContext) -> str:
    if ctx.next_length <= SHORT_FRAGMENT_LIMIT:
        return COMMA
    if ctx.next_length <= MEDIUM_FRAGMENT_LIMIT:
        return SEMICOLON
    return PERIOD


def _high_separator(ctx: BoundaryContext) -> str:
    if ctx.next_length <= MEDIUM_FRAGMENT_LIMIT:
        return COMMA
    return SEMICOLON


# Precedence is the list order.
SOFTENING_RULES: tuple[SofteningRule, ...] = (
    SofteningRule(
        name="cadence",
        applies=lambda ctx: ctx.level is SofteningLevel.HIGH
        and ctx.consecutive_soft >= CADENCE_LIMIT,
        separator=lambda ctx: PERIOD,
    ),
    SofteningRule(
        name="connector",
        applies=lambda ctx: ctx.starts_with_connector,
        separator=lambda ctx: COMMA,
    ),
    SofteningRule(
        name="low",
        applies=lambda ctx: ctx.level is SofteningLevel.LOW,
        separator=lambda ctx: PERIOD,
    ),
    SofteningRule(
        name="med",
        applies=lambda ctx: ctx.level is SofteningLevel.MED,
        separator=_med_separator,
    ),
    SofteningRule(
        name="high",
        applies=lambda ctx: ctx.level is SofteningLevel.HIGH,
        separator=_high_separator,
    ),
)


def starts_with_connector(fragment: str) -> bool:
    """Check if a fragment opens with a continuation word."""
    return CONNECTOR_PATTERN.match(fragment.strip()) is not None


def decide_boundary(
    level: SofteningLevel,
    next_fragment: str,
    consecutive_soft: int,
) -> BoundaryDecision:
    """Choose the separator for the boundary before next_fragment.

    Args:
        level: Active softening level (not OFF).
        next_fragment: Protected text following the boundary.
        consecutive_soft: Soft breaks chosen since the last hard stop.

    Returns:
        BoundaryDecision with the separator and the updated counter.
        A hard stop resets the counter; LOW's hard stop leaves it as is.

    Raises:
        ValueError: If level is OFF, where boundaries are never softened.
    """
    if not level.softens:
        raise ValueError("Sentence boundaries are not softened at OFF")

    ctx = BoundaryContext(
        level=level,
        next_length=len(next_fragment),
        starts_with_connector=starts_with_connector(next_fragment),
        consecutive_soft=consecutive_soft,
    )
    for rule in SOFTENING_RULES:
        if not rule.applies(ctx):
            continue
        separator = rule.separator(ctx)
        if separator != PERIOD:
            counter = consecutive_soft + 1
        elif rule.name == "low":
            counter = consecutive_soft
        else:
            counter = 0
        return BoundaryDecision(separator=separator, consecutive_soft=counter, rule=rule.name)

    raise ValueError(f"No softening rule applies at level {level.value}")


def soften_full_stops(text: str, level: SofteningLevel) -> str:
    """Replace sentence-final periods with weaker breaks.

    Abbreviations and decimals are protected before splitting on
    ". " and restored afterwards. The last fragment keeps its own
    trailing punctuation. At OFF the text is returned unchanged.
    """
    if not level.softens:
        return text

    spans = ProtectedSpans()
    text = spans.protect(text, ABBREVIATION_PATTERN)
    text = spans.protect(text, DECIMAL_PATTERN)

    fragments = SENTENCE_BOUNDARY.split(text)
    if len(fragments) > 1:
        consecutive_soft = 0
        result: list[str] = []
        for current, following in zip(fragments, fragments[1:]):
            decision = decide_boundary(level, following, consecutive_soft)
            consecutive_soft = decision.consecutive_soft
            result.append(current)
            result.append(decision.separator)
        result.append(fragments[-1])
        text = "".join(result)
        logger.debug(
            f"Softened {len(fragments) - 1} boundaries at {level.value} "
            f"({len(spans)} protected spans)"
        )

    return spans.restore(text)
