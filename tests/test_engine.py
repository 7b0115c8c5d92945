"""Tests for the recording engine lifecycle and published state."""

import numpy as np
import pytest

from riff_reader.engine import EngineConfig, EngineState, RecordingEngine
from riff_reader.input import CaptureUnavailable

from generate_test_audio import SR, generate_sine_wave

FRAME = 4096
A3 = generate_sine_wave(220.0, FRAME / SR)
E4 = generate_sine_wave(329.63, FRAME / SR)
SILENCE = np.zeros(FRAME, dtype=np.float32)


class FakeCapture:
    """Records start/stop calls; frames are pushed by the test."""

    def __init__(self):
        self.callback = None
        self.start_calls = 0
        self.stop_calls = 0

    @property
    def is_running(self):
        return self.callback is not None

    def start(self, callback):
        self.start_calls += 1
        self.callback = callback

    def stop(self):
        self.stop_calls += 1
        self.callback = None

    def push(self, samples, elapsed_time):
        return self.callback(samples, float(SR), elapsed_time)


class BrokenCapture(FakeCapture):
    def start(self, callback):
        raise CaptureUnavailable("no input device")


class OutputOnlyCapture(FakeCapture):
    def start(self, callback):
        raise ValueError("Not an input device")


@pytest.fixture
def engine():
    engine = RecordingEngine()
    engine.start()
    return engine


class TestLifecycle:
    """Idle/recording transitions."""

    def test_initial_state(self):
        engine = RecordingEngine()
        assert engine.snapshot() == EngineState()
        assert not engine.is_recording
        assert engine.current_frequency is None
        assert engine.notes == ()

    def test_frames_ignored_while_idle(self):
        engine = RecordingEngine()
        assert engine.on_frame(A3, SR, 0.1) == []
        assert engine.current_frequency is None

    def test_start_twice_raises(self, engine):
        with pytest.raises(RuntimeError):
            engine.start()

    def test_stop_is_idempotent(self, engine):
        engine.stop()
        assert not engine.is_recording
        assert engine.stop() == []
        assert RecordingEngine().stop() == []

    def test_start_resets_notes(self, engine):
        engine.on_frame(A3, SR, 0.1)
        engine.on_frame(SILENCE, SR, 0.3)
        engine.stop()
        assert len(engine.notes) == 1

        engine.start()
        assert engine.notes == ()
        assert engine.snapshot().elapsed_time == 0.0

    def test_start_resets_open_segment(self, engine):
        engine.on_frame(A3, SR, 1.0)
        engine.stop(cutoff_time=1.01)  # too short to keep
        engine.start()
        # Earlier times are accepted again after a restart
        engine.on_frame(A3, SR, 0.1)
        assert engine.stop(cutoff_time=0.5)[0].start_time == pytest.approx(0.1)


class TestProcessing:
    """Frames in, notes out."""

    def test_current_frequency_published(self, engine):
        engine.on_frame(A3, SR, 0.093)
        assert engine.current_frequency == pytest.approx(220.0, rel=0.02)

        engine.on_frame(SILENCE, SR, 0.186)
        assert engine.current_frequency is None

    def test_note_emitted_on_silence(self, engine):
        engine.on_frame(A3, SR, 0.1)
        engine.on_frame(A3, SR, 0.2)
        finalized = engine.on_frame(SILENCE, SR, 0.3)

        assert len(finalized) == 1
        assert finalized[0].pitch_name == "A3"
        assert finalized[0].start_time == pytest.approx(0.1)
        assert finalized[0].duration == pytest.approx(0.2)
        assert engine.notes == tuple(finalized)

    def test_note_emitted_on_pitch_change(self, engine):
        engine.on_frame(A3, SR, 0.1)
        finalized = engine.on_frame(E4, SR, 0.2)

        assert [n.pitch_name for n in finalized] == ["A3"]
        assert engine.notes[0].frequency == pytest.approx(220.0, rel=0.02)

    def test_stop_flushes_open_note(self, engine):
        engine.on_frame(E4, SR, 0.1)
        engine.on_frame(E4, SR, 0.4)
        finalized = engine.stop()

        assert len(finalized) == 1
        assert finalized[0].pitch_name == "E4"
        # Cut off at the last elapsed time
        assert finalized[0].end_time == pytest.approx(0.4)
        assert engine.notes == tuple(finalized)

    def test_stop_with_cutoff(self, engine):
        engine.on_frame(E4, SR, 0.1)
        finalized = engine.stop(cutoff_time=0.6)
        assert finalized[0].duration == pytest.approx(0.5)

    def test_snapshot_is_consistent(self, engine):
        engine.on_frame(A3, SR, 0.1)
        before = engine.snapshot()
        engine.on_frame(SILENCE, SR, 0.3)

        # Old snapshots never change
        assert before.notes == ()
        assert before.elapsed_time == 0.1
        assert engine.snapshot().elapsed_time == 0.3


class TestMaxDuration:
    """The 15s limit runs the stop path."""

    def test_frame_past_limit_stops(self, engine):
        engine.on_frame(A3, SR, 14.9)
        finalized = engine.on_frame(A3, SR, 15.05)

        assert not engine.is_recording
        assert len(finalized) == 1
        assert finalized[0].end_time == pytest.approx(15.0)

    def test_advance_past_limit_stops(self, engine):
        engine.on_frame(A3, SR, 0.1)
        assert engine.advance(1.0) == []
        assert engine.snapshot().elapsed_time == pytest.approx(1.1)

        finalized = engine.advance(20.0)
        assert not engine.is_recording
        assert finalized[0].duration == pytest.approx(14.9)

    def test_custom_limit(self):
        engine = RecordingEngine(config=EngineConfig(max_duration=1.0))
        engine.start()
        engine.on_frame(A3, SR, 0.5)
        engine.on_frame(A3, SR, 1.2)
        assert not engine.is_recording
        assert engine.notes[0].end_time == pytest.approx(1.0)

    def test_frames_after_limit_ignored(self, engine):
        engine.advance(15.0)
        assert engine.on_frame(A3, SR, 15.1) == []


class TestCapture:
    """Engine driving an attached frame source."""

    def test_capture_started_and_stopped(self):
        capture = FakeCapture()
        engine = RecordingEngine(capture=capture)
        engine.start()
        assert capture.start_calls == 1

        capture.push(A3, 0.1)
        capture.push(SILENCE, 0.3)
        engine.stop()

        assert capture.stop_calls == 1
        assert len(engine.notes) == 1

    def test_limit_leaves_capture_for_stop(self):
        capture = FakeCapture()
        engine = RecordingEngine(config=EngineConfig(max_duration=1.0), capture=capture)
        engine.start()
        capture.push(A3, 0.5)
        capture.push(A3, 1.1)

        assert not engine.is_recording
        assert capture.is_running
        engine.stop()
        assert not capture.is_running

    def test_capture_failure_leaves_engine_idle(self):
        engine = RecordingEngine()
        engine.attach(BrokenCapture())

        with pytest.raises(CaptureUnavailable):
            engine.start()

        assert not engine.is_recording
        assert engine.snapshot() == EngineState()

    def test_any_capture_error_leaves_engine_idle(self):
        engine = RecordingEngine(capture=OutputOnlyCapture())

        with pytest.raises(ValueError):
            engine.start()

        assert not engine.is_recording

        capture = FakeCapture()
        engine.attach(capture)
        engine.start()
        assert engine.is_recording
        assert capture.start_calls == 1
