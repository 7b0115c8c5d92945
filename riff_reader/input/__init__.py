"""Input layer - recorded files and live microphone frames."""

from .loader import AudioLoader
from .capture import MicrophoneCapture, CaptureUnavailable

__all__ = [
    "AudioLoader",
    "MicrophoneCapture",
    "CaptureUnavailable",
]
