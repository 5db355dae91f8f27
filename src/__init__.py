"""Prosody-aware text formatting for speech synthesis."""

__version__ = "0.1.0"
