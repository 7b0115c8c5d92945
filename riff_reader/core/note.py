"""Note and Pitch value types - the fundamental units of transcription."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional
from uuid import UUID, uuid4

import numpy as np

from .constants import (
    A4_FREQUENCY,
    A4_MIDI,
    DEFAULT_VELOCITY,
    MIDI_MAX,
    MIDI_MIN,
    PITCH_NAMES,
)


class NoteName(Enum):
    """The twelve chromatic semitones, sharp spelling."""

    C = "C"
    CS = "C#"
    D = "D"
    DS = "D#"
    E = "E"
    F = "F"
    FS = "F#"
    G = "G"
    GS = "G#"
    A = "A"
    AS = "A#"
    B = "B"

    @property
    def chromatic_index(self) -> int:
        """Semitones above C (0-11)."""
        return CHROMATIC_INDEX[self]

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_index(cls, index: int) -> "NoteName":
        """Get the note name for a chromatic index (wraps modulo 12)."""
        return cls(PITCH_NAMES[index % 12])


CHROMATIC_INDEX = MappingProxyType(
    {NoteName(name): index for index, name in enumerate(PITCH_NAMES)}
)


@dataclass(frozen=True)
class Pitch:
    """A named pitch: semitone plus octave (scientific pitch notation)."""

    note_name: NoteName
    octave: int

    @property
    def midi_number(self) -> int:
        """MIDI note number (A4 = 69)."""
        return (self.octave + 1) * 12 + self.note_name.chromatic_index

    @property
    def frequency(self) -> float:
        """Equal-tempered frequency in Hz."""
        return midi_to_freq(self.midi_number)

    @classmethod
    def from_midi(cls, midi: int) -> "Pitch":
        return cls(note_name=NoteName.from_index(midi), octave=(midi // 12) - 1)

    @classmethod
    def from_frequency(cls, frequency: float) -> "Pitch":
        """Nearest equal-tempered pitch to a frequency.

        Raises:
            ValueError: If frequency is not positive
        """
        if not frequency > 0:
            raise ValueError(f"Frequency must be positive, got {frequency}")
        return cls.from_midi(freq_to_midi(frequency))

    def __str__(self) -> str:
        return f"{self.note_name.display_name}{self.octave}"


def freq_to_midi(freq: float) -> int:
    """Convert frequency (Hz) to the nearest MIDI pitch."""
    return int(round(A4_MIDI + 12 * np.log2(freq / A4_FREQUENCY)))


def midi_to_freq(midi: int) -> float:
    """Convert MIDI pitch to frequency (Hz)."""
    return A4_FREQUENCY * (2 ** ((midi - A4_MIDI) / 12.0))


@dataclass(frozen=True)
class Note:
    """Represents a detected musical note."""

    pitch: Pitch
    frequency: float  # Hz
    start_time: float  # Seconds since recording start
    duration: float  # Seconds
    velocity: int = DEFAULT_VELOCITY  # MIDI velocity (0-127)
    id: UUID = field(default_factory=uuid4, compare=False)

    def __post_init__(self):
        if self.start_time < 0:
            raise ValueError(f"start_time must be >= 0, got {self.start_time}")
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")
        if not MIDI_MIN <= self.velocity <= MIDI_MAX:
            raise ValueError(f"velocity must be in 0-127, got {self.velocity}")

    @property
    def end_time(self) -> float:
        """Note end time in seconds."""
        return self.start_time + self.duration

    @property
    def midi_number(self) -> int:
        return self.pitch.midi_number

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'C4', 'A#3')."""
        return str(self.pitch)

    @classmethod
    def from_frequency(
        cls,
        frequency: float,
        start_time: float,
        duration: float,
        velocity: int = DEFAULT_VELOCITY,
        pitch: Optional[Pitch] = None,
    ) -> "Note":
        """Build a note, deriving the pitch from the frequency unless given."""
        return cls(
            pitch=pitch or Pitch.from_frequency(frequency),
            frequency=frequency,
            start_time=start_time,
            duration=duration,
            velocity=velocity,
        )

    # Kept as static helpers for callers working with raw numbers
    freq_to_midi = staticmethod(freq_to_midi)
    midi_to_freq = staticmethod(midi_to_freq)
