"""
Constants and enums for the KPDVE system.

No magic numbers - use named constants and IntEnums for the axes.
"""

from enum import IntEnum

# Chromatic notes in an octave (the modulus for chroma and key rotation)
CHROMA_COUNT = 12

# Divisions in the prime scale (the modulus for pattern/degree/voicing space)
PRIME_DIVISION = 7

# 12 x 7 cells in the default harmony crystal - one candidate slot per cell
KPDVE_LIST_MAX = CHROMA_COUNT * PRIME_DIVISION

# Largest chord the model can describe (one note per scale degree)
MAX_CHORD_NOTES = PRIME_DIVISION

# Masks
CHROMA_MASK = 0xFFF
FIELD_MASK = 0b111
KEY_MASK = 0b1111
KPDVE_MASK = 0xFFFF
FIELD_BITS = 3

# Encoded state: x---KKKKPPPDDDVVVEEE b-a-g-fe-d-c
INVALID_STATE_BIT = 1 << 31

# F major triad as the base of the lydian mode: [0, 0, 0, 4, 2]
DEFAULT_KPDVE = 34

# F major 7 (lydian) in chroma order: F, A, C, E
FM7_LYDIAN_KPDVE = (0, 0, 0, 4, 3)
FM7_LYDIAN_CHROMA = 0b001000110001


class KPDVEAxis(IntEnum):
    """Index of each axis within a KPDVE tuple."""

    KEY = 0
    PATTERN = 1
    DEGREE = 2
    VOICING = 3
    EXTENSION = 4


class Voicing(IntEnum):
    """
    Canonical voicings - which stacking of scale steps spells the chord.

    Only powers of two are canonical. Other values in [0, 6] are legal
    but describe non-canonical stackings.
    """

    FIFTHS = 1
    SECONDS = 2
    THIRDS = 4


# Modulus of each axis (12 for key, 7 for the rest)
KPDVE_MODS: tuple[int, ...] = (
    CHROMA_COUNT,
    PRIME_DIVISION,
    PRIME_DIVISION,
    PRIME_DIVISION,
    PRIME_DIVISION,
)


class ErrorMessages:
    """Standardized error messages."""

    CONFIG_NOT_FOUND = "Resolver config '{name}' not found."
    CONFIG_EXISTS = "Resolver config already exists in project: {name}"
    NO_PROJECT_PATH = "No project path configured"
    INVALID_MIDI_NOTE = "Invalid MIDI note: {note}. Must be between 0 and 127."
