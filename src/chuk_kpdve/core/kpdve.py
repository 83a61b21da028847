"""
KPDVE codec - pack/unpack the five-axis harmonic address.

Layout (16 bits): KKKK PPP DDD VVV EEE, most significant field first.
Fields are masked to their bit width, never range-checked: an
out-of-range tuple still encodes deterministically.

The projections (chord, scale, root, extension) are built by rewriting
KPDVE fields and re-running the forward model. Masking the packed value
would not work: the model is not linear in the packed bits.
"""

from __future__ import annotations

from typing import NamedTuple

from chuk_kpdve.constants import (
    CHROMA_COUNT,
    CHROMA_MASK,
    FIELD_BITS,
    FIELD_MASK,
    KEY_MASK,
    KPDVE_MASK,
    KPDVEAxis,
    Voicing,
)
from chuk_kpdve.core.bits import circle_to_chroma, mod_rot
from chuk_kpdve.core.pattern import pdve_chord_val, pdve_val

# Extension that stacks all seven scale tones
_FULL_EXTENSION = 6


class KPDVE(NamedTuple):
    """
    A decoded KPDVE: Key, Pattern, Degree, Voicing, Extension.

    Examples:
        KPDVE(0, 0, 0, 4, 2) = F major triad (lydian model)
        KPDVE(0, 0, 0, 4, 3) = F major 7
    """

    k: int
    p: int
    d: int
    v: int
    e: int

    def pack(self) -> int:
        """Encode as a single integer."""
        return kpdve_to_binary(*self)

    @classmethod
    def unpack(cls, encoded: int) -> KPDVE:
        """Decode from a single integer."""
        return binary_to_kpdve(encoded)

    def replace_axis(self, axis: KPDVEAxis, value: int) -> KPDVE:
        """Copy with one axis changed."""
        values = list(self)
        values[axis] = value
        return KPDVE(*values)


def kpdve_to_binary(k: int, p: int, d: int, v: int, e: int) -> int:
    """Pack five fields into KKKKPPPDDDVVVEEE."""
    encoded = k & KEY_MASK
    for value in (p, d, v, e):
        encoded = (encoded << FIELD_BITS) | (value & FIELD_MASK)
    return encoded


def binary_to_kpdve(encoded: int) -> KPDVE:
    """Unpack KKKKPPPDDDVVVEEE into a KPDVE."""
    fields = [0] * 5
    chomped = encoded
    for i in range(4):
        fields[4 - i] = chomped & FIELD_MASK
        chomped >>= FIELD_BITS
    fields[0] = chomped & KEY_MASK
    return KPDVE(*fields)


def kpdve_parameter(kpdve: int, axis: KPDVEAxis | int) -> int:
    """A single axis value of a packed KPDVE."""
    return binary_to_kpdve(kpdve)[axis]


def kpdve_chromatic_byte(kpdve: int, chromatic: int) -> int:
    """Join a packed KPDVE and a chroma mask: KPDVE above, chroma in the low 12 bits.

    Both halves are masked, so the bits above the KPDVE stay clear.
    """
    return ((kpdve & KPDVE_MASK) << CHROMA_COUNT) | (chromatic & CHROMA_MASK)


def kpdve_chromatic_byte_to_kpdve(encoded: int) -> KPDVE:
    """Decode the KPDVE half of kpdve_chromatic_byte."""
    return binary_to_kpdve(encoded >> CHROMA_COUNT)


# ---------------------------------------------------------------------------
# Forward model
# ---------------------------------------------------------------------------


def kpdve_val(kpdve: int) -> int:
    """The extension tone alone, in circle order (F at bit 0)."""
    k, p, d, v, e = binary_to_kpdve(kpdve)
    return mod_rot(pdve_val(p, d, v, e), k, CHROMA_COUNT)


def kpdve_chord_val(kpdve: int) -> int:
    """The whole chord, in circle order (F at bit 0)."""
    k, p, d, v, e = binary_to_kpdve(kpdve)
    return mod_rot(pdve_chord_val(p, d, v, e), k, CHROMA_COUNT)


# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------


def circle_chord_from_kpdve(kpdve: int) -> int:
    return kpdve_chord_val(kpdve)


def circle_scale_from_kpdve(kpdve: int) -> int:
    """Seven scale tones of the KPDVE's key and pattern, stacked stepwise from its root."""
    scale = binary_to_kpdve(kpdve)._replace(v=Voicing.SECONDS, e=_FULL_EXTENSION)
    return kpdve_chord_val(scale.pack())


def circle_root_from_kpdve(kpdve: int) -> int:
    root = binary_to_kpdve(kpdve)._replace(e=0)
    return kpdve_chord_val(root.pack())


def circle_ext_from_kpdve(kpdve: int) -> int:
    return kpdve_val(kpdve)


def chroma_chord_from_kpdve(kpdve: int) -> int:
    """The whole chord as a chroma mask (C at bit 0)."""
    return circle_to_chroma(circle_chord_from_kpdve(kpdve))


def chroma_scale_from_kpdve(kpdve: int) -> int:
    return circle_to_chroma(circle_scale_from_kpdve(kpdve))


def chroma_root_from_kpdve(kpdve: int) -> int:
    return circle_to_chroma(circle_root_from_kpdve(kpdve))


def chroma_ext_from_kpdve(kpdve: int) -> int:
    return circle_to_chroma(circle_ext_from_kpdve(kpdve))
