"""Fretboard mapping - place notes on a string and fret."""

from typing import Iterable, List, Optional, Tuple

import numpy as np

from ..core import GuitarNote, GuitarString, Note
from ..core.constants import MAX_FRET, PREFERRED_FRET


class FretboardMapper:
    """Choose a playable string/fret for each note.

    Every string is tried; among positions within ``0..max_fret`` the one
    closest to ``preferred_fret`` wins, lower string ordinal on ties. When
    ``prefer_open_strings`` is set, a pitch that rounds to fret 0 on some
    string (within half a semitone of it) is played on that open string.
    """

    def __init__(
        self,
        max_fret: int = MAX_FRET,
        preferred_fret: int = PREFERRED_FRET,
        prefer_open_strings: bool = True,
    ):
        """
        Initialize FretboardMapper.

        Args:
            max_fret: Highest playable fret
            preferred_fret: Fret the search is biased towards
            prefer_open_strings: Play open-string pitches open
        """
        self.max_fret = max_fret
        self.preferred_fret = preferred_fret
        self.prefer_open_strings = prefer_open_strings

    def candidates(self, frequency: float) -> List[Tuple[GuitarString, int]]:
        """All valid (string, fret) positions for a frequency, string order."""
        if not frequency > 0:
            return []

        positions = []
        for string in GuitarString:
            fret = int(round(12 * np.log2(frequency / string.open_frequency)))
            if 0 <= fret <= self.max_fret:
                positions.append((string, fret))
        return positions

    def map_note(self, note: Note) -> Optional[GuitarNote]:
        """
        Map one note to the fretboard.

        Returns:
            GuitarNote, or None if the note has no playable position
        """
        positions = self.candidates(note.frequency)
        if not positions:
            return None

        if self.prefer_open_strings:
            open_positions = [p for p in positions if p[1] == 0]
            if open_positions:
                positions = open_positions

        # min() keeps the first of equal keys, i.e. the lowest ordinal
        string, fret = min(positions, key=lambda p: abs(p[1] - self.preferred_fret))
        return GuitarNote(note=note, string=string, fret=fret)

    def map_notes(self, notes: Iterable[Note]) -> List[GuitarNote]:
        """Map notes in order, silently dropping unplayable ones."""
        guitar_notes = []
        for note in notes:
            guitar_note = self.map_note(note)
            if guitar_note is not None:
                guitar_notes.append(guitar_note)
        return guitar_notes


_default_mapper = FretboardMapper()


def map_to_fretboard(note: Note) -> Optional[GuitarNote]:
    """Map a note with the default mapper."""
    return _default_mapper.map_note(note)
