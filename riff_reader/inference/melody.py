"""Melody extraction - reduce a dense note sequence to one line."""

from typing import Iterable, List

from ..core import Note
from ..core.constants import MELODY_WINDOW


class MelodyExtractor:
    """Keep the highest note in each fixed-width time window.

    Windows do not overlap. The first window opens at the earliest note; a
    note starting at or after ``window_start + window`` closes the current
    window and opens the next one at its own start time.
    """

    def __init__(self, window: float = MELODY_WINDOW):
        """
        Initialize MelodyExtractor.

        Args:
            window: Window width in seconds
        """
        self.window = window

    def extract_melody(self, notes: Iterable[Note]) -> List[Note]:
        """
        Extract the melody line.

        Args:
            notes: Notes in any order

        Returns:
            One note per non-empty window, in time order
        """
        sorted_notes = sorted(notes, key=lambda n: n.start_time)
        if not sorted_notes:
            return []

        melody = []
        window_start = sorted_notes[0].start_time
        highest = sorted_notes[0]

        for note in sorted_notes[1:]:
            if note.start_time >= window_start + self.window:
                melody.append(highest)
                window_start = note.start_time
                highest = note
            elif note.frequency > highest.frequency:
                highest = note

        melody.append(highest)
        return melody


def extract_melody(notes: Iterable[Note], window: float = MELODY_WINDOW) -> List[Note]:
    """Highest note per window, see MelodyExtractor."""
    return MelodyExtractor(window=window).extract_melody(notes)
