"""Audio file loading for offline transcription."""

import numpy as np
import librosa
from pathlib import Path
from typing import Tuple, Optional

from ..core.constants import DEFAULT_SR, MIN_FRAME_LENGTH


class AudioLoader:
    """Loads recorded takes as mono float arrays.

    Every take comes back at one sample rate, mixed down to mono and peak
    normalized, so the transcriber sees the same kind of signal the live
    capture delivers. Takes with no more samples than the pitch estimator
    needs for a single frame are rejected.
    """

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".aiff", ".caf"}

    def __init__(
        self,
        target_sr: int = DEFAULT_SR,
        normalize: bool = True,
        min_samples: int = MIN_FRAME_LENGTH + 1,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Sample rate every take is resampled to
            normalize: Peak-normalize the amplitude if True
            min_samples: Shortest accepted take, in samples after resampling
        """
        self.target_sr = target_sr
        self.normalize = normalize
        self.min_samples = min_samples

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load a recorded take as mono.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the format is unsupported, the file cannot be
                decoded, or the take is too short to analyse
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {sorted(self.SUPPORTED_FORMATS)}"
            )

        try:
            audio, sr = librosa.load(str(path), sr=self.target_sr, mono=True)
        except Exception as e:
            raise ValueError(f"Could not decode {path.name}: {e}") from e

        if len(audio) < self.min_samples:
            raise ValueError(
                f"Take too short: {len(audio)} samples, "
                f"need at least {self.min_samples}"
            )

        if self.normalize:
            audio = self._normalize(audio)

        return audio, sr

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        peak = np.abs(audio).max() if len(audio) else 0.0
        if peak > 0:
            audio = audio / peak
        return audio

    def get_duration(self, audio: np.ndarray, sr: Optional[int] = None) -> float:
        """Length of a loaded take in seconds."""
        return len(audio) / (sr or self.target_sr)
