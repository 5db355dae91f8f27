"""Domain models for prosody-aware speech formatting."""

from src.models.prosody import BoundaryDecision, SofteningLevel, SpeechChunk

__all__ = [
    "SofteningLevel",
    "BoundaryDecision",
    "SpeechChunk",
]
