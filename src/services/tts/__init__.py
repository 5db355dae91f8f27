"""TTS (Text-to-Speech) text preparation package.

This package turns assistant replies into speech-ready text with:
- Markdown stripping and punctuation cleanup
- Level-aware softening of full stops (! and ? always kept)
- Protection of abbreviations and decimals while splitting
- Chunking for back-to-back synthesis requests

Example:
    >>> from src.services.tts import SpeechTextFormatter
    >>> from src.models.prosody import SofteningLevel
    >>>
    >>> formatter = SpeechTextFormatter(SofteningLevel.HIGH)
    >>> formatter.format("A. B. C. D. E.")
    'A, B, C, D. E.'
"""

from src.services.tts.chunker import SpeechChunker
from src.services.tts.protection import ProtectedSpans
from src.services.tts.softening import decide_boundary, soften_full_stops
from src.services.tts.speech_formatter import SpeechTextFormatter, format_for_speech

__all__ = [
    "SpeechTextFormatter",
    "SpeechChunker",
    "ProtectedSpans",
    "decide_boundary",
    "soften_full_stops",
    "format_for_speech",
]
