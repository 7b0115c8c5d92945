"""Pitch estimation - YIN-style fundamental frequency detection."""

import numpy as np
import librosa
from typing import List, Optional, Sequence, Tuple

from ..core import Pitch
from ..core.constants import (
    DEFAULT_FRAME_LENGTH,
    DEFAULT_HOP_LENGTH,
    MAX_FREQUENCY,
    MIN_FRAME_LENGTH,
    MIN_FREQUENCY,
    YIN_THRESHOLD,
    YIN_WINDOW_CAP,
)


class PitchEstimator:
    """Estimates the fundamental frequency of a single audio frame.

    Stateless and reentrant: every call works only on its arguments.
    "No pitch" (silence, noise, out-of-range pitch, degenerate frames)
    is reported as None, never as 0.
    """

    def __init__(
        self,
        min_frequency: float = MIN_FREQUENCY,
        max_frequency: float = MAX_FREQUENCY,
        threshold: float = YIN_THRESHOLD,
        window_cap: int = YIN_WINDOW_CAP,
    ):
        """
        Initialize PitchEstimator.

        Args:
            min_frequency: Lowest accepted fundamental (Hz)
            max_frequency: Highest accepted fundamental (Hz)
            threshold: CMNDF dip threshold (lower = stricter)
            window_cap: Max samples summed per lag in the difference function
        """
        self.min_frequency = min_frequency
        self.max_frequency = max_frequency
        self.threshold = threshold
        self.window_cap = window_cap

    def estimate(
        self,
        frame: Sequence[float],
        sample_rate: float,
    ) -> Optional[float]:
        """
        Estimate the fundamental frequency of one frame.

        Args:
            frame: Ordered audio samples
            sample_rate: Sample rate in Hz

        Returns:
            Frequency in Hz, or None if no pitch was found
        """
        samples = np.asarray(frame, dtype=np.float64).ravel()
        count = len(samples)

        if count <= MIN_FRAME_LENGTH or not sample_rate > 0:
            return None
        if not np.all(np.isfinite(samples)):
            return None

        min_lag = int(sample_rate / self.max_frequency)
        max_lag = min(int(sample_rate / self.min_frequency), count // 2)
        if max_lag <= min_lag:
            return None

        cmndf = self._cmndf(self._difference(samples, max_lag))

        # A dip below min_lag means the true period is shorter than the
        # range allows; anything found above it would be a sub-harmonic.
        lag = self._first_dip(cmndf, 1, max_lag)
        if lag is not None and lag < min_lag:
            return None

        if lag is not None:
            frequency = self._parabolic_interpolation(cmndf, lag, sample_rate)
        else:
            # No clear dip, fall back to the global minimum
            best_lag = min_lag + int(np.argmin(cmndf[min_lag:max_lag]))
            if best_lag == 0 or cmndf[best_lag] >= 1.0:
                return None
            frequency = sample_rate / best_lag

        if not self.min_frequency <= frequency <= self.max_frequency:
            return None

        return float(frequency)

    def track(
        self,
        audio: np.ndarray,
        sr: int,
        frame_length: int = DEFAULT_FRAME_LENGTH,
        hop_length: int = DEFAULT_HOP_LENGTH,
    ) -> Tuple[np.ndarray, List[Optional[float]]]:
        """
        Estimate pitch frame by frame over a whole buffer.

        Args:
            audio: Audio array (mono)
            sr: Sample rate
            frame_length: Samples per analysis frame
            hop_length: Samples between frame starts

        Returns:
            Tuple of (frame start times, frequencies with None for unvoiced)
        """
        audio = np.asarray(audio, dtype=np.float64)
        if len(audio) < frame_length:
            audio = librosa.util.fix_length(audio, size=frame_length)

        frames = librosa.util.frame(
            audio, frame_length=frame_length, hop_length=hop_length
        )
        times = librosa.frames_to_time(
            np.arange(frames.shape[1]), sr=sr, hop_length=hop_length
        )
        frequencies = [self.estimate(frames[:, i], sr) for i in range(frames.shape[1])]

        return times, frequencies

    def _difference(self, samples: np.ndarray, max_lag: int) -> np.ndarray:
        """Squared-difference function, summed over at most window_cap samples."""
        count = len(samples)
        diff = np.zeros(max_lag)

        for lag in range(max_lag):
            n = min(count - lag, self.window_cap)
            delta = samples[:n] - samples[lag:lag + n]
            diff[lag] = np.dot(delta, delta)

        return diff

    def _cmndf(self, diff: np.ndarray) -> np.ndarray:
        """Cumulative mean normalized difference function."""
        cmndf = np.ones(len(diff))
        running_sum = np.cumsum(diff[1:])
        lags = np.arange(1, len(diff))

        with np.errstate(divide="ignore", invalid="ignore"):
            normalized = diff[1:] * lags / running_sum
        cmndf[1:] = np.where(running_sum > 0, normalized, 1.0)

        return cmndf

    def _first_dip(
        self, cmndf: np.ndarray, start: int, stop: int
    ) -> Optional[int]:
        """First lag below threshold that starts a local minimum."""
        for lag in range(start, stop - 1):
            if cmndf[lag] < self.threshold and cmndf[lag] < cmndf[lag + 1]:
                return lag
        return None

    def _parabolic_interpolation(
        self, cmndf: np.ndarray, lag: int, sample_rate: float
    ) -> float:
        """Refine a lag to sub-sample precision, return frequency."""
        if lag <= 0 or lag >= len(cmndf) - 1:
            return sample_rate / lag

        alpha, beta, gamma = cmndf[lag - 1], cmndf[lag], cmndf[lag + 1]
        denominator = alpha - 2 * beta + gamma
        if denominator == 0:
            return sample_rate / lag

        peak = 0.5 * (alpha - gamma) / denominator
        return sample_rate / (lag + peak)


_default_estimator = PitchEstimator()


def estimate_pitch(frame: Sequence[float], sample_rate: float) -> Optional[float]:
    """Estimate the fundamental of one frame with default guitar settings."""
    return _default_estimator.estimate(frame, sample_rate)


def frequency_to_pitch(frequency: Optional[float]) -> Optional[Pitch]:
    """Nearest pitch for a frequency, None passes through."""
    if frequency is None or frequency <= 0:
        return None
    return Pitch.from_frequency(frequency)
