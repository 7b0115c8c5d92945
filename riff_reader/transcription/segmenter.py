"""Note segmentation - turn a stream of pitch estimates into notes."""

from typing import Iterable, List, Optional, Tuple

from ..core import Note
from ..core.constants import (
    DEFAULT_VELOCITY,
    MAX_FREQUENCY_JUMP,
    MAX_RELATIVE_JUMP,
    MIN_NOTE_DURATION,
)


class NoteSegmenter:
    """Streaming state machine from frequency estimates to finalized notes.

    Feed it ``(elapsed_time, frequency)`` pairs in time order, with None for
    frames without a pitch. A segment stays open while the frequency stays
    close to the frequency it started with; a jump, a silent frame or an
    explicit flush closes it. Segments shorter than ``min_note_duration`` are
    dropped as misfires.
    """

    def __init__(
        self,
        min_note_duration: float = MIN_NOTE_DURATION,
        max_frequency_jump: float = MAX_FREQUENCY_JUMP,
        max_relative_jump: float = MAX_RELATIVE_JUMP,
        velocity: int = DEFAULT_VELOCITY,
    ):
        """
        Initialize NoteSegmenter.

        Args:
            min_note_duration: Shortest segment emitted as a note (seconds)
            max_frequency_jump: Absolute change (Hz) that starts a new note
            max_relative_jump: Relative change that starts a new note
            velocity: Velocity assigned to emitted notes
        """
        self.min_note_duration = min_note_duration
        self.max_frequency_jump = max_frequency_jump
        self.max_relative_jump = max_relative_jump
        self.velocity = velocity
        self.reset()

    def reset(self) -> None:
        """Drop any open segment and return to idle."""
        self.reference_frequency: Optional[float] = None
        self.segment_start_time: float = 0.0
        self._last_time: Optional[float] = None

    @property
    def active(self) -> bool:
        """Whether a segment is currently open."""
        return self.reference_frequency is not None

    def feed(
        self,
        elapsed_time: float,
        frequency: Optional[float],
    ) -> Optional[Note]:
        """
        Advance the state machine by one estimate.

        Args:
            elapsed_time: Time of the estimate in seconds
            frequency: Estimated frequency in Hz, or None for no pitch

        Returns:
            The note finalized by this estimate, if any

        Raises:
            ValueError: If elapsed_time does not increase
        """
        if self._last_time is not None and elapsed_time <= self._last_time:
            raise ValueError(
                f"Estimates must arrive in time order: {elapsed_time} "
                f"after {self._last_time}"
            )
        self._last_time = elapsed_time

        if frequency is None:
            if not self.active:
                return None
            return self.flush(elapsed_time)

        if not self.active:
            self._open(elapsed_time, frequency)
            return None

        if not self._is_jump(frequency):
            return None

        note = self._finalize(elapsed_time)
        self._open(elapsed_time, frequency)
        return note

    def flush(self, cutoff_time: float) -> Optional[Note]:
        """
        Close the open segment at cutoff_time (external stop).

        Returns:
            The finalized note, or None if idle or too short
        """
        if not self.active:
            return None
        note = self._finalize(cutoff_time)
        self.reference_frequency = None
        return note

    def segment(
        self,
        estimates: Iterable[Tuple[float, Optional[float]]],
        end_time: Optional[float] = None,
    ) -> List[Note]:
        """
        Run a whole estimate sequence through a fresh segmenter state.

        Args:
            estimates: (elapsed_time, frequency or None) pairs in time order
            end_time: Cutoff for a segment still open at the end

        Returns:
            Finalized notes in arrival order
        """
        self.reset()
        notes = []

        for elapsed_time, frequency in estimates:
            note = self.feed(elapsed_time, frequency)
            if note is not None:
                notes.append(note)

        if end_time is not None:
            note = self.flush(end_time)
            if note is not None:
                notes.append(note)

        return notes

    def _is_jump(self, frequency: float) -> bool:
        delta = abs(frequency - self.reference_frequency)
        return (
            delta > self.max_frequency_jump
            or delta / self.reference_frequency > self.max_relative_jump
        )

    def _open(self, start_time: float, frequency: float) -> None:
        self.reference_frequency = frequency
        self.segment_start_time = start_time

    def _finalize(self, end_time: float) -> Optional[Note]:
        duration = end_time - self.segment_start_time
        if duration < self.min_note_duration:
            return None

        return Note.from_frequency(
            frequency=self.reference_frequency,
            start_time=self.segment_start_time,
            duration=duration,
            velocity=self.velocity,
        )
