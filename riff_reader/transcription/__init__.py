"""Transcription layer - Note-level detection from pitch estimates.

This layer converts per-frame estimates into discrete note events:
- Streaming segmentation (live input, one estimate at a time)
- Monophonic transcription of a whole buffer
"""

from .base import Transcriber
from .segmenter import NoteSegmenter
from .monophonic import MonophonicTranscriber

__all__ = [
    "Transcriber",
    "NoteSegmenter",
    "MonophonicTranscriber",
]
