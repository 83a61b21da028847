"""
MIDI input tests - notes, messages and files into chroma masks.
"""

from pathlib import Path

import pytest
from mido import Message, MidiFile, MidiTrack

from chuk_kpdve.midi import chroma_from_messages, chroma_from_midi_notes, chromas_from_midi_file
from chuk_kpdve.state import analyze_progression

F_MAJOR_TRIAD = 0b001000100001
C_MAJOR_TRIAD = 0b000010010001


def _block_chords(chords: list[list[int]], ticks: int = 480, channel: int = 0) -> MidiFile:
    """One track of block chords, each held for `ticks`."""
    mid = MidiFile(ticks_per_beat=480)
    track = MidiTrack()
    mid.tracks.append(track)
    for chord in chords:
        for note in chord:
            track.append(Message("note_on", note=note, velocity=100, channel=channel, time=0))
        for i, note in enumerate(chord):
            track.append(
                Message("note_off", note=note, channel=channel, time=ticks if i == 0 else 0)
            )
    return mid


class TestChromaFromNotes:
    """Tests for chroma_from_midi_notes."""

    def test_triad(self) -> None:
        """F3 A3 C4 is an F major triad."""
        assert chroma_from_midi_notes([53, 57, 60]) == F_MAJOR_TRIAD

    def test_octaves_fold(self) -> None:
        assert chroma_from_midi_notes([0, 12, 60, 127]) == (1 << 0) | (1 << 7)

    def test_empty(self) -> None:
        assert chroma_from_midi_notes([]) == 0

    def test_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="Invalid MIDI note"):
            chroma_from_midi_notes([128])
        with pytest.raises(ValueError, match="Invalid MIDI note"):
            chroma_from_midi_notes([-1])


class TestChromaFromMessages:
    """Tests for chroma_from_messages."""

    def test_sounding_notes(self) -> None:
        messages = [
            Message("note_on", note=60),
            Message("note_on", note=64),
            Message("note_on", note=67),
            Message("note_off", note=64),
        ]
        assert chroma_from_messages(messages) == (1 << 0) | (1 << 7)

    def test_zero_velocity_is_note_off(self) -> None:
        messages = [Message("note_on", note=60), Message("note_on", note=60, velocity=0)]
        assert chroma_from_messages(messages) == 0

    def test_channels_tracked_separately(self) -> None:
        messages = [
            Message("note_on", note=60, channel=0),
            Message("note_on", note=60, channel=1),
            Message("note_off", note=60, channel=0),
        ]
        assert chroma_from_messages(messages) == 1

    def test_unmatched_note_off_ignored(self) -> None:
        messages = [Message("note_off", note=62), Message("note_on", note=60)]
        assert chroma_from_messages(messages) == 1

    def test_other_messages_ignored(self) -> None:
        messages = [Message("program_change", program=5), Message("note_on", note=65)]
        assert chroma_from_messages(messages) == 1 << 5


class TestChromasFromMidiFile:
    """Tests for chromas_from_midi_file."""

    def test_block_chords(self) -> None:
        mid = _block_chords([[53, 57, 60], [60, 64, 67]])
        assert chromas_from_midi_file(mid) == [(0, F_MAJOR_TRIAD), (480, C_MAJOR_TRIAD)]

    def test_from_path(self, temp_dir: Path) -> None:
        path = temp_dir / "chords.mid"
        _block_chords([[53, 57, 60], [60, 64, 67]]).save(str(path))

        assert chromas_from_midi_file(path) == [(0, F_MAJOR_TRIAD), (480, C_MAJOR_TRIAD)]
        assert chromas_from_midi_file(str(path)) == [(0, F_MAJOR_TRIAD), (480, C_MAJOR_TRIAD)]

    def test_drums_skipped_by_default(self) -> None:
        mid = _block_chords([[36]], channel=9)
        assert chromas_from_midi_file(mid) == []
        assert chromas_from_midi_file(mid, include_drums=True) == [(0, 1)]

    def test_held_notes_carry_over(self) -> None:
        """A note still held at a later onset is part of that chroma."""
        mid = MidiFile(ticks_per_beat=480)
        track = MidiTrack()
        mid.tracks.append(track)
        track.append(Message("note_on", note=53, time=0))
        track.append(Message("note_on", note=57, time=480))
        track.append(Message("note_off", note=53, time=480))
        track.append(Message("note_off", note=57, time=0))

        assert chromas_from_midi_file(mid) == [(0, 1 << 5), (480, (1 << 5) | (1 << 9))]

    def test_feeds_progression_analysis(self) -> None:
        mid = _block_chords([[53, 57, 60], [60, 64, 67]])
        chromas = [chroma for _, chroma in chromas_from_midi_file(mid)]
        assert [s.kpdve for s in analyze_progression(chromas)] == [34, 98]
