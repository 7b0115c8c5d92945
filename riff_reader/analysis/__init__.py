"""Analysis layer - Low-level signal analysis.

This layer extracts per-frame measurements from raw audio:
- Fundamental frequency estimation (YIN)
"""

from .pitch import PitchEstimator, estimate_pitch, frequency_to_pitch

__all__ = [
    "PitchEstimator",
    "estimate_pitch",
    "frequency_to_pitch",
]
