"""Inference layer - Musical understanding of detected notes.

- Melody extraction (one note per time window)
- Fretboard placement (string and fret for each note)
"""

from .melody import MelodyExtractor, extract_melody
from .fretboard import FretboardMapper, map_to_fretboard

__all__ = [
    "MelodyExtractor",
    "extract_melody",
    "FretboardMapper",
    "map_to_fretboard",
]
