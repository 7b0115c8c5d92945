"""Riff Reader - Monophonic guitar transcription.

Architecture Layers:
    1. core/          - Value types (Note, Pitch, GuitarString, GuitarNote)
    2. input/         - Recorded files and live microphone frames
    3. analysis/      - Per-frame pitch estimation (YIN)
    4. transcription/ - Segmentation of pitch estimates into notes
    5. inference/     - Melody extraction and fretboard placement
    6. engine         - Live recording lifecycle and published state
"""

__version__ = "0.1.0"

# Core types
from .core import Note, Pitch, NoteName, GuitarString, GuitarNote

# Input layer
from .input import AudioLoader, MicrophoneCapture, CaptureUnavailable

# Analysis layer
from .analysis import PitchEstimator, estimate_pitch

# Transcription layer
from .transcription import NoteSegmenter, MonophonicTranscriber

# Inference layer
from .inference import (
    MelodyExtractor,
    FretboardMapper,
    extract_melody,
    map_to_fretboard,
)

# Engine
from .engine import RecordingEngine, EngineConfig, EngineState

__all__ = [
    # Core
    "Note",
    "Pitch",
    "NoteName",
    "GuitarString",
    "GuitarNote",
    # Input
    "AudioLoader",
    "MicrophoneCapture",
    "CaptureUnavailable",
    # Analysis
    "PitchEstimator",
    "estimate_pitch",
    # Transcription
    "NoteSegmenter",
    "MonophonicTranscriber",
    # Inference
    "MelodyExtractor",
    "FretboardMapper",
    "extract_melody",
    "map_to_fretboard",
    # Engine
    "RecordingEngine",
    "EngineConfig",
    "EngineState",
]
