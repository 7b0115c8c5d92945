"""Base classes for transcription."""

from abc import ABC, abstractmethod
from typing import List, Optional
import numpy as np

from ..core import Note
from ..input import AudioLoader


class Transcriber(ABC):
    """Abstract base class for buffer-to-notes transcription."""

    @abstractmethod
    def transcribe(self, audio: np.ndarray, sr: int) -> List[Note]:
        """
        Transcribe audio to notes.

        Args:
            audio: Audio array (mono)
            sr: Sample rate

        Returns:
            List of detected notes in time order
        """

    def transcribe_file(
        self, path: str, loader: Optional[AudioLoader] = None
    ) -> List[Note]:
        """
        Load a recorded take and transcribe it.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is unsupported, undecodable or too short
        """
        loader = loader or AudioLoader()
        audio, sr = loader.load(path)
        return self.transcribe(audio, sr)
