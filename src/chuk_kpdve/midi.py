"""
MIDI input - turn notes into chroma masks for analysis.

The start of the pipeline: MIDI note numbers, mido messages or a whole
MIDI file become 12-bit chroma masks (C at bit 0). Read-only; nothing
here writes or plays MIDI.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from mido import Message, MidiFile, merge_tracks

from chuk_kpdve.constants import CHROMA_COUNT, ErrorMessages

_MIDI_NOTE_MAX = 127

# General MIDI percussion (channel 10, zero-indexed)
DRUM_CHANNEL = 9


def chroma_from_midi_notes(notes: Iterable[int]) -> int:
    """
    Collapse MIDI note numbers to a chroma mask.

    Args:
        notes: MIDI note numbers (0-127); octaves are folded together

    Returns:
        Chroma mask with bit (note % 12) set for every note
    """
    chroma = 0
    for note in notes:
        if not 0 <= note <= _MIDI_NOTE_MAX:
            raise ValueError(ErrorMessages.INVALID_MIDI_NOTE.format(note=note))
        chroma |= 1 << (note % CHROMA_COUNT)
    return chroma


def _apply_message(sounding: dict[tuple[int, int], int], msg: Message) -> None:
    """Track note_on/note_off, keyed by (channel, note) with a hold count."""
    if msg.type not in ("note_on", "note_off"):
        return
    key = (msg.channel, msg.note)
    if msg.type == "note_on" and msg.velocity > 0:
        sounding[key] = sounding.get(key, 0) + 1
    elif key in sounding:
        sounding[key] -= 1
        if sounding[key] <= 0:
            del sounding[key]


def chroma_from_messages(messages: Iterable[Message]) -> int:
    """
    Chroma mask of the notes still sounding after a message sequence.

    A note_on with velocity 0 counts as a note_off.
    """
    sounding: dict[tuple[int, int], int] = {}
    for msg in messages:
        _apply_message(sounding, msg)
    return chroma_from_midi_notes(note for _, note in sounding)


def chromas_from_midi_file(
    source: str | Path | MidiFile,
    include_drums: bool = False,
) -> list[tuple[int, int]]:
    """
    Sounding chroma at every onset in a MIDI file.

    All tracks are merged. One entry is produced per tick at which at
    least one note starts, after every message at that tick is applied.

    Args:
        source: Path to a MIDI file, or an already loaded MidiFile
        include_drums: Whether channel 10 (GM drums) counts as pitched

    Returns:
        List of (absolute_tick, chroma) pairs in time order
    """
    mid = source if isinstance(source, MidiFile) else MidiFile(str(source))

    sounding: dict[tuple[int, int], int] = {}
    results: list[tuple[int, int]] = []
    current_tick = 0
    onset_pending = False

    def flush() -> None:
        if onset_pending:
            chroma = chroma_from_midi_notes(note for _, note in sounding)
            results.append((current_tick, chroma))

    for msg in merge_tracks(mid.tracks):
        if msg.time > 0:
            flush()
            current_tick += msg.time
            onset_pending = False
        if msg.type not in ("note_on", "note_off"):
            continue
        if not include_drums and msg.channel == DRUM_CHANNEL:
            continue
        _apply_message(sounding, msg)
        if msg.type == "note_on" and msg.velocity > 0:
            onset_pending = True

    flush()
    return results
