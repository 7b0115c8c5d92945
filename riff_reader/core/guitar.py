"""Guitar model - standard-tuned strings and fretted note positions."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from uuid import UUID, uuid4

from .constants import MAX_FRET
from .note import Note


class GuitarString(Enum):
    """The six strings of a standard-tuned guitar, 1 = highest pitched."""

    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5
    SIXTH = 6

    @property
    def ordinal(self) -> int:
        return self.value

    @property
    def open_frequency(self) -> float:
        """Frequency of the open (unfretted) string in Hz."""
        return STRING_CATALOG[self][0]

    @property
    def display_name(self) -> str:
        return STRING_CATALOG[self][1]

    @classmethod
    def by_ordinal(cls, ordinal: int) -> "GuitarString":
        return cls(ordinal)


# (open frequency, display name) per string, standard E tuning
STRING_CATALOG = MappingProxyType(
    {
        GuitarString.FIRST: (329.63, "high E"),
        GuitarString.SECOND: (246.94, "B"),
        GuitarString.THIRD: (196.00, "G"),
        GuitarString.FOURTH: (146.83, "D"),
        GuitarString.FIFTH: (110.00, "A"),
        GuitarString.SIXTH: (82.41, "low E"),
    }
)


@dataclass(frozen=True)
class GuitarNote:
    """A note placed on a string and fret."""

    note: Note
    string: GuitarString
    fret: int
    id: UUID = field(default_factory=uuid4, compare=False)

    def __post_init__(self):
        if not 0 <= self.fret <= MAX_FRET:
            raise ValueError(f"fret must be in 0-{MAX_FRET}, got {self.fret}")

    @property
    def is_open(self) -> bool:
        return self.fret == 0
