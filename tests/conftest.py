"""Shared pytest fixtures for all test types."""

import pytest

from src.lib.config import reset_all_configs
from src.models.prosody import SofteningLevel
from src.services.tts import SpeechTextFormatter


@pytest.fixture
def formatter() -> SpeechTextFormatter:
    """Formatter pinned to the default MED level."""
    return SpeechTextFormatter(SofteningLevel.MED)


@pytest.fixture
def clean_config():
    """Drop cached configuration before and after a test."""
    reset_all_configs()
    yield
    reset_all_configs()


@pytest.fixture
def reference_reply() -> str:
    """Sommelier-style assistant reply with markdown and mixed punctuation."""
    return (
        "Ah, curry! *Magnifique.* The vibrant spices and aromatics demand a wine "
        "that can dance alongside those bold flavors without being overwhelmed. "
        "Looking into your \"Rave Cave,\" I have found two stellar options for you:\n\n"
        "**The Top Choice: 2020 Puddleduck Vineyard TGR Riesling**\n"
        "*S'il vous plaît*, this is the one! Riesling is the classic partner for curry. "
        "The bright acidity and touch of fruitiness in this bottle will balance the heat "
        "and harmonize with the spices perfectly. It is in its prime—**Drink Now**!\n\n"
        "**The Red Alternative: 2021 Cirillo 'The Vincent' Grenache**\n"
        "If you prefer a red wine, this Grenache is your best friend. It is fruit-forward "
        "with soft tannins, meaning it won't clash with the spice of your dish like a "
        "heavier Cabernet might. It is also ready to enjoy tonight (**Drink Now**).\n\n"
        "Shall I help you locate one of these in the cellar, or perhaps you'd like a "
        "third option? *Bon appétit!*"
    )
