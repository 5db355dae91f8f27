"""Shared utilities and configuration."""

from src.lib.exceptions import (
    ProsodyError,
    ValidationError,
    ConfigError,
)

__all__ = [
    "ProsodyError",
    "ValidationError",
    "ConfigError",
]
