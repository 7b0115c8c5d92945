"""Recording engine - live frames in, notes out.

The engine owns one estimator and one segmenter and runs every frame
through them in arrival order. Its published state is an immutable
EngineState snapshot; each update swaps in a new snapshot, so a reader
on another thread sees either the old or the new state, never a mix.
The engine owns no timer: the capture (or a test) calls ``on_frame`` and
``advance`` and the 15 s limit is checked against the times passed in.
"""

import threading
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from .analysis import PitchEstimator
from .core import Note
from .core.constants import (
    DEFAULT_VELOCITY,
    MAX_FREQUENCY,
    MAX_FREQUENCY_JUMP,
    MAX_RECORDING_DURATION,
    MAX_RELATIVE_JUMP,
    MIN_FREQUENCY,
    MIN_NOTE_DURATION,
    YIN_THRESHOLD,
    YIN_WINDOW_CAP,
)
from .input.capture import MicrophoneCapture
from .transcription import NoteSegmenter


@dataclass
class EngineConfig:
    """Configuration for the recording engine.

    Attributes:
        min_frequency: Lowest accepted pitch in Hz (default: 80)
        max_frequency: Highest accepted pitch in Hz (default: 1000)
        yin_threshold: CMNDF dip threshold (default: 0.1)
        window_cap: Max samples per lag in the difference function (default: 1000)
        min_note_duration: Shortest emitted note in seconds (default: 0.05)
        max_frequency_jump: Hz change that starts a new note (default: 20)
        max_relative_jump: Relative change that starts a new note (default: 0.05)
        velocity: Velocity of emitted notes (default: 64)
        max_duration: Recording length limit in seconds (default: 15)
    """

    min_frequency: float = MIN_FREQUENCY
    max_frequency: float = MAX_FREQUENCY
    yin_threshold: float = YIN_THRESHOLD
    window_cap: int = YIN_WINDOW_CAP
    min_note_duration: float = MIN_NOTE_DURATION
    max_frequency_jump: float = MAX_FREQUENCY_JUMP
    max_relative_jump: float = MAX_RELATIVE_JUMP
    velocity: int = DEFAULT_VELOCITY
    max_duration: float = MAX_RECORDING_DURATION

    def build_estimator(self) -> PitchEstimator:
        return PitchEstimator(
            min_frequency=self.min_frequency,
            max_frequency=self.max_frequency,
            threshold=self.yin_threshold,
            window_cap=self.window_cap,
        )

    def build_segmenter(self) -> NoteSegmenter:
        return NoteSegmenter(
            min_note_duration=self.min_note_duration,
            max_frequency_jump=self.max_frequency_jump,
            max_relative_jump=self.max_relative_jump,
            velocity=self.velocity,
        )


@dataclass(frozen=True)
class EngineState:
    """Snapshot of what the engine publishes."""

    is_recording: bool = False
    current_frequency: Optional[float] = None
    notes: Tuple[Note, ...] = field(default_factory=tuple)
    elapsed_time: float = 0.0


class RecordingEngine:
    """Two-state (idle/recording) pipeline from frames to notes."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        capture: Optional[MicrophoneCapture] = None,
    ):
        """
        Initialize RecordingEngine.

        Args:
            config: Engine settings (defaults if None)
            capture: Frame source started and stopped with the engine
        """
        self.config = config or EngineConfig()
        self.estimator = self.config.build_estimator()
        self.segmenter = self.config.build_segmenter()
        self.capture = capture
        self._state = EngineState()
        self._lock = threading.RLock()

    # Published state

    def snapshot(self) -> EngineState:
        """Current state; never partially updated."""
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state.is_recording

    @property
    def current_frequency(self) -> Optional[float]:
        return self._state.current_frequency

    @property
    def notes(self) -> Tuple[Note, ...]:
        return self._state.notes

    # Lifecycle

    def attach(self, capture: MicrophoneCapture) -> None:
        """Use capture as the frame source from the next start()."""
        self.capture = capture

    def start(self) -> None:
        """
        Begin a new recording, discarding the previous one.

        Raises:
            RuntimeError: If already recording
            CaptureUnavailable: If the attached capture fails to start

        Any exception from the capture leaves the engine idle.
        """
        with self._lock:
            if self._state.is_recording:
                raise RuntimeError("Recording already in progress")

            self.segmenter.reset()
            self._state = EngineState(is_recording=True)

            if self.capture is None:
                return

            try:
                self.capture.start(self.on_frame)
            except Exception:
                self._state = EngineState()
                raise

    def stop(self, cutoff_time: Optional[float] = None) -> List[Note]:
        """
        End the recording, closing any open note at cutoff_time.

        Safe to call when idle.

        Args:
            cutoff_time: End of the open note (default: last elapsed time)

        Returns:
            The note finalized by stopping, if any
        """
        with self._lock:
            notes = self._finish(cutoff_time)

        if self.capture is not None and self.capture.is_running:
            self.capture.stop()

        return notes

    # Processing

    def on_frame(
        self,
        samples: Sequence[float],
        sample_rate: float,
        elapsed_time: float,
    ) -> List[Note]:
        """
        Process one captured frame.

        Args:
            samples: Frame samples
            sample_rate: Sample rate in Hz
            elapsed_time: Seconds since start() at the end of the frame

        Returns:
            Notes finalized by this frame
        """
        with self._lock:
            if not self._state.is_recording:
                return []

            if elapsed_time >= self.config.max_duration:
                return self._finish(self.config.max_duration)

            frequency = self.estimator.estimate(samples, sample_rate)
            note = self.segmenter.feed(elapsed_time, frequency)
            finalized = [note] if note is not None else []

            self._state = replace(
                self._state,
                current_frequency=frequency,
                notes=self._state.notes + tuple(finalized),
                elapsed_time=elapsed_time,
            )
            return finalized

    def advance(self, delta_time: float) -> List[Note]:
        """
        Move the clock forward without a frame.

        Returns:
            Notes finalized if the max duration was reached
        """
        with self._lock:
            if not self._state.is_recording:
                return []

            elapsed_time = self._state.elapsed_time + delta_time
            if elapsed_time >= self.config.max_duration:
                return self._finish(self.config.max_duration)

            self._state = replace(self._state, elapsed_time=elapsed_time)
            return []

    def _finish(self, cutoff_time: Optional[float]) -> List[Note]:
        """Stop path shared by stop() and the max-duration limit."""
        if not self._state.is_recording:
            return []

        if cutoff_time is None:
            cutoff_time = self._state.elapsed_time

        note = self.segmenter.flush(cutoff_time)
        finalized = [note] if note is not None else []

        self._state = EngineState(
            is_recording=False,
            current_frequency=None,
            notes=self._state.notes + tuple(finalized),
            elapsed_time=cutoff_time,
        )
        return finalized
