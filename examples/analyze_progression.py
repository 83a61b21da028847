#!/usr/bin/env python3
"""
Example: Analyze a chord progression.

This demonstrates the whole pipeline: chords go in as pitch-class sets,
each is read against the previous chord, and every chord comes back as a
KPDVE (Key, Pattern, Degree, Voicing, Extension).

Usage:
    python examples/analyze_progression.py
    python examples/analyze_progression.py path/to/song.mid
"""

import sys

from chuk_kpdve.analysis import ContextResolver
from chuk_kpdve.config import ConfigLoader
from chuk_kpdve.core import chroma_root_from_kpdve
from chuk_kpdve.midi import chroma_from_midi_notes, chromas_from_midi_file
from chuk_kpdve.state import analyze_progression

NOTE_NAMES = ["C", "C#", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B"]


def note_names(chroma: int) -> str:
    """Spell a chroma mask, C first."""
    return " ".join(name for i, name in enumerate(NOTE_NAMES) if chroma & (1 << i))


def main() -> None:
    """Analyze a built-in progression, or the chords of a MIDI file."""
    if len(sys.argv) > 1:
        print(f"Reading {sys.argv[1]}...")
        chromas = [chroma for _, chroma in chromas_from_midi_file(sys.argv[1])]
    else:
        # I - vi - IV - V in C major, voiced in the middle of the keyboard
        chords = [[60, 64, 67], [57, 60, 64], [53, 57, 60], [55, 59, 62]]
        chromas = [chroma_from_midi_notes(chord) for chord in chords]

    for config_name in ("default", "modal"):
        config = ConfigLoader().require_config(config_name)
        print(f"\n{config.name}: {config.description}")

        for summary in analyze_progression(chromas, resolver=ContextResolver(config)):
            if not summary.is_valid:
                print(f"  {note_names(summary.chromatic_notes):<16} (no reading)")
                continue
            root = note_names(chroma_root_from_kpdve(summary.kpdve))
            print(
                f"  {note_names(summary.chromatic_notes):<16} "
                f"KPDVE {list(summary.kpdve_tuple)}  root {root:<3} "
                f"({summary.candidate_count} readings)"
            )


if __name__ == "__main__":
    main()
