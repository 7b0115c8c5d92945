"""Global constants for Riff Reader."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Tuning reference
A4_FREQUENCY = 440.0
A4_MIDI = 69

# Audio processing defaults
DEFAULT_SR = 44100
DEFAULT_FRAME_LENGTH = 4096  # ~93ms at 44.1kHz
DEFAULT_HOP_LENGTH = 2048

# Pitch estimation (guitar range)
MIN_FREQUENCY = 80.0  # Just under low E
MAX_FREQUENCY = 1000.0
YIN_THRESHOLD = 0.1
YIN_WINDOW_CAP = 1000  # Max samples summed per lag
MIN_FRAME_LENGTH = 100

# Note segmentation
MIN_NOTE_DURATION = 0.05  # 50ms
MAX_FREQUENCY_JUMP = 20.0  # Hz
MAX_RELATIVE_JUMP = 0.05
DEFAULT_VELOCITY = 64

# Melody extraction
MELODY_WINDOW = 0.1  # 100ms

# Fretboard
MAX_FRET = 22
PREFERRED_FRET = 5

# Recording
MAX_RECORDING_DURATION = 15.0

# MIDI ranges
MIDI_MIN = 0
MIDI_MAX = 127
