"""Command-line interface for Riff Reader.

Provides commands for:
- transcribe: Turn a recorded take into notes and fretboard positions
- listen: Record from the microphone and show the notes played
- fret: Show where frequencies sit on the fretboard
"""

import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .core.constants import (
    DEFAULT_FRAME_LENGTH,
    DEFAULT_HOP_LENGTH,
    MAX_RECORDING_DURATION,
    MIN_NOTE_DURATION,
)

app = typer.Typer(
    name="riff-reader",
    help="Monophonic guitar transcription to notes and fretboard positions",
    rich_markup_mode="markdown",
)
console = Console()


@app.command()
def transcribe(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, MP3, ...)"),
    melody: bool = typer.Option(
        False, "-m", "--melody/--no-melody", help="Reduce to one note per 100ms window"
    ),
    frame_length: int = typer.Option(
        DEFAULT_FRAME_LENGTH, "--frame-length", help="Samples per analysis frame"
    ),
    hop_length: int = typer.Option(
        DEFAULT_HOP_LENGTH, "--hop-length", help="Samples between analysis frames"
    ),
    min_duration: float = typer.Option(
        MIN_NOTE_DURATION, "--min-duration", help="Minimum note duration in seconds"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Transcribe a recorded take.

    **Examples:**

        riff-reader transcribe riff.wav

        riff-reader transcribe riff.wav --melody --json
    """
    from .input import AudioLoader
    from .transcription import MonophonicTranscriber, NoteSegmenter
    from .inference import MelodyExtractor, FretboardMapper

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    if not json_output:
        console.print(f"[blue]Transcribing:[/blue] {input_file}")

    transcriber = MonophonicTranscriber(
        frame_length=frame_length,
        hop_length=hop_length,
        segmenter=NoteSegmenter(min_note_duration=min_duration),
    )
    try:
        notes = transcriber.transcribe_file(str(input_file), loader=AudioLoader())
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if melody:
        notes = MelodyExtractor().extract_melody(notes)

    guitar_notes = FretboardMapper().map_notes(notes)

    if json_output:
        console.print_json(
            data={
                "input": str(input_file),
                "notes_count": len(notes),
                "melody": melody,
                "notes": [_guitar_note_to_dict(g) for g in guitar_notes],
                "unmapped": len(notes) - len(guitar_notes),
            }
        )
        return

    console.print(f"  Detected {len(notes)} notes")
    if guitar_notes:
        _show_guitar_notes_table(guitar_notes)
    if len(guitar_notes) < len(notes):
        console.print(
            f"  [yellow]{len(notes) - len(guitar_notes)} notes outside the fretboard[/yellow]"
        )


@app.command()
def listen(
    seconds: float = typer.Option(
        MAX_RECORDING_DURATION, "-s", "--seconds", help="Recording length limit"
    ),
    device: Optional[int] = typer.Option(
        None, "--device", help="Input device index (default device if omitted)"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Record from the microphone and transcribe live. Ctrl+C stops early."""
    from .engine import EngineConfig, RecordingEngine
    from .input import CaptureUnavailable, MicrophoneCapture
    from .inference import FretboardMapper

    engine = RecordingEngine(
        config=EngineConfig(max_duration=seconds),
        capture=MicrophoneCapture(device=device),
    )

    try:
        engine.start()
    except CaptureUnavailable as e:
        console.print(f"[red]Audio input unavailable: {e}[/red]")
        raise typer.Exit(1)

    try:
        with console.status("Listening...") as status:
            while engine.is_recording:
                state = engine.snapshot()
                frequency = state.current_frequency
                heard = f"{frequency:.1f} Hz" if frequency is not None else "-"
                status.update(
                    f"Listening {state.elapsed_time:4.1f}s / {seconds:.0f}s  "
                    f"pitch: {heard}  notes: {len(state.notes)}"
                )
                time.sleep(0.1)
    except KeyboardInterrupt:
        pass
    finally:
        engine.stop()

    guitar_notes = FretboardMapper().map_notes(engine.notes)

    if json_output:
        console.print_json(
            data={
                "notes_count": len(engine.notes),
                "notes": [_guitar_note_to_dict(g) for g in guitar_notes],
            }
        )
        return

    console.print(f"[green]Recorded {len(engine.notes)} notes[/green]")
    if guitar_notes:
        _show_guitar_notes_table(guitar_notes)


@app.command()
def fret(
    frequencies: List[float] = typer.Argument(..., help="Frequencies in Hz"),
):
    """Show the string and fret for each frequency."""
    from .core import Note
    from .inference import FretboardMapper

    mapper = FretboardMapper()

    table = Table(title="Fretboard Positions")
    table.add_column("Frequency (Hz)", style="cyan")
    table.add_column("Pitch", style="green")
    table.add_column("String", style="yellow")
    table.add_column("Fret", style="magenta")

    for frequency in frequencies:
        if frequency <= 0:
            table.add_row(f"{frequency:.2f}", "-", "unmapped", "-")
            continue

        note = Note.from_frequency(frequency, start_time=0.0, duration=0.0)
        guitar_note = mapper.map_note(note)
        if guitar_note is None:
            table.add_row(f"{frequency:.2f}", note.pitch_name, "unmapped", "-")
        else:
            table.add_row(
                f"{frequency:.2f}",
                note.pitch_name,
                f"{guitar_note.string.ordinal} ({guitar_note.string.display_name})",
                str(guitar_note.fret),
            )

    console.print(table)


def _guitar_note_to_dict(guitar_note) -> Dict[str, Any]:
    note = guitar_note.note
    return {
        "pitch": note.pitch_name,
        "frequency": round(note.frequency, 2),
        "start": round(note.start_time, 3),
        "duration": round(note.duration, 3),
        "velocity": note.velocity,
        "string": guitar_note.string.ordinal,
        "fret": guitar_note.fret,
    }


def _show_guitar_notes_table(guitar_notes):
    """Display positioned notes in a table."""
    table = Table(title="Detected Notes")
    table.add_column("Pitch", style="cyan")
    table.add_column("Start (s)", style="green")
    table.add_column("Duration (s)", style="yellow")
    table.add_column("String", style="magenta")
    table.add_column("Fret", style="magenta")

    for guitar_note in guitar_notes:
        note = guitar_note.note
        table.add_row(
            note.pitch_name,
            f"{note.start_time:.3f}",
            f"{note.duration:.3f}",
            guitar_note.string.display_name,
            str(guitar_note.fret),
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
