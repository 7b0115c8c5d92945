"""Tests for the Note, Pitch and guitar value types."""

import pytest
from dataclasses import FrozenInstanceError

from riff_reader.core import (
    GuitarNote,
    GuitarString,
    Note,
    NoteName,
    Pitch,
    freq_to_midi,
    midi_to_freq,
)


class TestPitch:
    """Tests for Pitch conversions (A4 = 440Hz = MIDI 69)."""

    def test_a4_midi_number(self):
        assert Pitch(NoteName.A, 4).midi_number == 69

    def test_a4_frequency(self):
        assert Pitch(NoteName.A, 4).frequency == pytest.approx(440.0, abs=0.01)

    def test_middle_c_frequency(self):
        assert Pitch(NoteName.C, 4).frequency == pytest.approx(261.63, abs=0.1)

    def test_low_e_frequency(self):
        assert Pitch(NoteName.E, 2).frequency == pytest.approx(82.41, abs=0.1)

    def test_from_frequency(self):
        assert Pitch.from_frequency(440.0) == Pitch(NoteName.A, 4)
        assert Pitch.from_frequency(261.63) == Pitch(NoteName.C, 4)
        assert Pitch.from_frequency(82.41) == Pitch(NoteName.E, 2)

    def test_from_frequency_rounds_to_nearest(self):
        # 450Hz is 39 cents above A4
        assert Pitch.from_frequency(450.0) == Pitch(NoteName.A, 4)
        # 460Hz is 77 cents above A4, nearer A#4
        assert Pitch.from_frequency(460.0) == Pitch(NoteName.AS, 4)

    def test_from_frequency_rejects_non_positive(self):
        with pytest.raises(ValueError):
            Pitch.from_frequency(0.0)

    def test_from_midi_low_octaves(self):
        assert Pitch.from_midi(0) == Pitch(NoteName.C, -1)
        assert Pitch.from_midi(40) == Pitch(NoteName.E, 2)

    def test_str(self):
        assert str(Pitch(NoteName.CS, 3)) == "C#3"
        assert str(Pitch(NoteName.A, 4)) == "A4"

    def test_chromatic_index(self):
        assert NoteName.C.chromatic_index == 0
        assert NoteName.A.chromatic_index == 9
        assert NoteName.B.chromatic_index == 11
        assert NoteName.from_index(13) == NoteName.CS

    def test_freq_midi_helpers(self):
        assert freq_to_midi(880.0) == 81
        assert midi_to_freq(69) == 440.0
        assert Note.freq_to_midi(440.0) == 69


class TestNote:
    """Tests for the Note value type."""

    def test_from_frequency_derives_pitch(self):
        note = Note.from_frequency(440.0, start_time=0.5, duration=0.25)
        assert note.pitch == Pitch(NoteName.A, 4)
        assert note.pitch_name == "A4"
        assert note.midi_number == 69
        assert note.velocity == 64
        assert note.end_time == pytest.approx(0.75)

    def test_notes_are_immutable(self):
        note = Note.from_frequency(440.0, start_time=0.0, duration=1.0)
        with pytest.raises(FrozenInstanceError):
            note.frequency = 220.0

    def test_ids_are_unique(self):
        a = Note.from_frequency(440.0, start_time=0.0, duration=1.0)
        b = Note.from_frequency(440.0, start_time=0.0, duration=1.0)
        assert a.id != b.id

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"start_time": -0.1, "duration": 1.0},
            {"start_time": 0.0, "duration": -1.0},
            {"start_time": 0.0, "duration": 1.0, "velocity": 128},
        ],
    )
    def test_invalid_fields_rejected(self, kwargs):
        with pytest.raises(ValueError):
            Note.from_frequency(440.0, **kwargs)


class TestGuitarString:
    """Tests for the string catalog."""

    def test_open_frequencies(self):
        assert GuitarString.FIRST.open_frequency == pytest.approx(329.63, abs=0.01)
        assert GuitarString.SECOND.open_frequency == pytest.approx(246.94, abs=0.01)
        assert GuitarString.THIRD.open_frequency == pytest.approx(196.00, abs=0.01)
        assert GuitarString.FOURTH.open_frequency == pytest.approx(146.83, abs=0.01)
        assert GuitarString.FIFTH.open_frequency == pytest.approx(110.00, abs=0.01)
        assert GuitarString.SIXTH.open_frequency == pytest.approx(82.41, abs=0.01)

    def test_names_and_ordinals(self):
        names = [s.display_name for s in GuitarString]
        assert names == ["high E", "B", "G", "D", "A", "low E"]
        assert [s.ordinal for s in GuitarString] == [1, 2, 3, 4, 5, 6]
        assert GuitarString.by_ordinal(5) is GuitarString.FIFTH

    def test_open_strings_match_equal_temperament(self):
        for string in GuitarString:
            pitch = Pitch.from_frequency(string.open_frequency)
            assert pitch.frequency == pytest.approx(string.open_frequency, abs=0.05)

    def test_guitar_note_fret_range(self):
        note = Note.from_frequency(110.0, start_time=0.0, duration=1.0)
        assert GuitarNote(note=note, string=GuitarString.FIFTH, fret=0).is_open
        with pytest.raises(ValueError):
            GuitarNote(note=note, string=GuitarString.FIFTH, fret=23)
