"""Configuration management via environment variables and pydantic-settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from src.lib.exceptions import ValidationError
from src.models.prosody import SofteningLevel


DEFAULT_SOFTENING_LEVEL = SofteningLevel.MED


class ProsodyConfig(BaseSettings):
    """Configuration for speech text formatting.

    Priority (highest to lowest):
    1. Explicit per-call or per-formatter level (handled separately)
    2. Environment variables
    3. .env file
    4. Defaults defined here
    """

    softening_level: SofteningLevel = Field(
        default=DEFAULT_SOFTENING_LEVEL,
        alias="TTS_SOFTENING_LEVEL",
        description="Default full-stop softening: OFF, LOW, MED, HIGH",
    )

    chunk_sentence_limit: int = Field(
        default=160,
        gt=0,
        alias="TTS_CHUNK_SENTENCE_LIMIT",
        description="Sentences longer than this are sub-split on , ; :",
    )

    chunk_max_length: int = Field(
        default=220,
        gt=0,
        alias="TTS_CHUNK_MAX_LENGTH",
        description="Maximum length of an accumulated sub-split chunk",
    )

    max_text_length: int = Field(
        default=2000,
        gt=0,
        alias="TTS_MAX_TEXT_LENGTH",
        description="Maximum characters accepted by one synthesis request",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("softening_level", mode="before")
    @classmethod
    def parse_softening_level(cls, value):
        """Accept level names in any case."""
        try:
            return SofteningLevel.parse(value)
        except ValidationError as e:
            raise ValueError(e.message) from e


# Prosody config instance (lazy loaded)
_prosody_config: ProsodyConfig | None = None


def get_prosody_config() -> ProsodyConfig:
    """Get the prosody configuration instance."""
    global _prosody_config
    if _prosody_config is None:
        _prosody_config = ProsodyConfig()
    return _prosody_config


def reset_all_configs() -> None:
    """Reset all configuration instances (useful for testing)."""
    global _prosody_config
    _prosody_config = None
