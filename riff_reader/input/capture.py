"""Live microphone capture via sounddevice."""

import threading
import warnings
from typing import Callable, Optional

import numpy as np

from ..core.constants import DEFAULT_FRAME_LENGTH, DEFAULT_SR

# (samples, sample_rate, elapsed_time)
FrameCallback = Callable[[np.ndarray, float, float], None]


class CaptureUnavailable(RuntimeError):
    """The audio input device could not be opened or started."""


class MicrophoneCapture:
    """Deliver mono frames from the default input device.

    Frames arrive on the PortAudio thread, in order, one per block. The
    elapsed time passed along is the end of the frame, counted in samples
    since ``start`` so it never jumps backwards.
    """

    def __init__(
        self,
        sample_rate: int = DEFAULT_SR,
        block_size: int = DEFAULT_FRAME_LENGTH,
        device: Optional[int] = None,
    ):
        """
        Initialize MicrophoneCapture.

        Args:
            sample_rate: Capture sample rate in Hz
            block_size: Samples per delivered frame
            device: Input device index (default device if None)
        """
        self.sample_rate = sample_rate
        self.block_size = block_size
        self.device = device
        self._stream = None
        self._callback: Optional[FrameCallback] = None
        self._samples_seen = 0
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._stream is not None

    def start(self, callback: FrameCallback) -> None:
        """
        Open the input stream and start delivering frames.

        Raises:
            CaptureUnavailable: If sounddevice/PortAudio or the device is missing
        """
        try:
            import sounddevice as sd
        except (ImportError, OSError) as e:
            raise CaptureUnavailable(
                f"sounddevice is required for live capture: {e}"
            ) from e

        with self._lock:
            if self._stream is not None:
                return
            self._callback = callback
            self._samples_seen = 0

            stream = None
            try:
                stream = sd.InputStream(
                    samplerate=self.sample_rate,
                    blocksize=self.block_size,
                    channels=1,
                    dtype="float32",
                    device=self.device,
                    callback=self._on_block,
                )
                stream.start()
            except (sd.PortAudioError, ValueError) as e:
                # ValueError: device index is not an input device
                self._callback = None
                if stream is not None:
                    stream.close()
                raise CaptureUnavailable(f"Failed to start audio input: {e}") from e

            self._stream = stream

    def stop(self) -> None:
        """Stop and close the stream. Safe to call when not running."""
        with self._lock:
            stream, self._stream = self._stream, None
            self._callback = None

        if stream is not None:
            stream.stop()
            stream.close()

    def _on_block(self, indata: np.ndarray, frames: int, time_info, status) -> None:
        if status:
            warnings.warn(f"Audio input status: {status}")

        callback = self._callback
        if callback is None:
            return

        self._samples_seen += frames
        elapsed_time = self._samples_seen / self.sample_rate
        callback(indata[:, 0].copy(), float(self.sample_rate), elapsed_time)
