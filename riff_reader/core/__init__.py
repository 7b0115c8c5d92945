"""Core types and constants for Riff Reader."""

from .note import Note, Pitch, NoteName, freq_to_midi, midi_to_freq
from .guitar import GuitarString, GuitarNote, STRING_CATALOG
from .constants import (
    PITCH_NAMES,
    DEFAULT_SR,
    DEFAULT_FRAME_LENGTH,
    DEFAULT_HOP_LENGTH,
    MAX_FRET,
)

__all__ = [
    "Note",
    "Pitch",
    "NoteName",
    "freq_to_midi",
    "midi_to_freq",
    "GuitarString",
    "GuitarNote",
    "STRING_CATALOG",
    "PITCH_NAMES",
    "DEFAULT_SR",
    "DEFAULT_FRAME_LENGTH",
    "DEFAULT_HOP_LENGTH",
    "MAX_FRET",
]
