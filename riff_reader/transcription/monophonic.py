"""Monophonic transcription of a recorded buffer using YIN and segmentation."""

import numpy as np
from typing import List, Optional

from .base import Transcriber
from .segmenter import NoteSegmenter
from ..analysis import PitchEstimator
from ..core import Note
from ..core.constants import DEFAULT_FRAME_LENGTH, DEFAULT_HOP_LENGTH


class MonophonicTranscriber(Transcriber):
    """Transcribes a single melodic line, one frame at a time.

    Runs the same estimator and segmenter as the live engine, so a file
    and a microphone take of the same performance segment identically.
    """

    def __init__(
        self,
        frame_length: int = DEFAULT_FRAME_LENGTH,
        hop_length: int = DEFAULT_HOP_LENGTH,
        estimator: Optional[PitchEstimator] = None,
        segmenter: Optional[NoteSegmenter] = None,
    ):
        """
        Initialize MonophonicTranscriber.

        Args:
            frame_length: Samples per analysis frame
            hop_length: Samples between analysis frames
            estimator: Pitch estimator (default guitar range)
            segmenter: Note segmenter (default thresholds)
        """
        self.frame_length = frame_length
        self.hop_length = hop_length
        self.estimator = estimator or PitchEstimator()
        self.segmenter = segmenter or NoteSegmenter()

    def transcribe(self, audio: np.ndarray, sr: int) -> List[Note]:
        """
        Transcribe monophonic audio to notes.

        Args:
            audio: Audio array (mono)
            sr: Sample rate

        Returns:
            List of detected notes in time order
        """
        if len(audio) == 0:
            return []

        times, frequencies = self.estimator.track(
            audio, sr, frame_length=self.frame_length, hop_length=self.hop_length
        )

        # Close whatever is still sounding at the end of the buffer
        end_time = max(len(audio) / sr, float(times[-1]) + self.hop_length / sr)

        return self.segmenter.segment(
            zip(times.tolist(), frequencies), end_time=end_time
        )
