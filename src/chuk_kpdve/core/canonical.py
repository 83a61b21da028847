"""
Canonicalizer - reduce a 7-bit note shape to its (Degree, Voicing, Extension).

Input is a chord with Key and Pattern already undone: seven scale tones
in fifths order. The canonical form is the rotation (the root, Degree)
and stacking view (Voicing) that packs the chord into the lowest bits,
i.e. the numerically smallest value. The highest bit that remains is the
Extension: how far above the root the chord reaches.

Voicing views are reached by unshuffling the eight-bit "deck":
  - 1: fifths (no unshuffle)
  - 2: seconds, i.e. stepwise (one unshuffle)
  - 4: thirds (two unshuffles)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chuk_kpdve.constants import PRIME_DIVISION
from chuk_kpdve.core.bits import largest_bit, mod_rot, unshuffle_bits

# Number of voicing views (the shuffle cycle length on eight bits)
_VOICING_VIEWS = 3

# Above any seven-bit value
_LOW_VE_START = 0b10000000


@dataclass(frozen=True)
class VEValue:
    """Seven bits pushed as far right as possible, with the view that did it."""

    bin_val: int
    v: int = 0
    e: int = -1


@dataclass(frozen=True)
class DVEValue:
    """Seven bits before rotation, with the rotation (degree) that minimizes them."""

    bin_val: int
    d: int = 0
    ve: VEValue = field(default_factory=lambda: VEValue(0))


@dataclass(frozen=True)
class KPDVEValue:
    """A DVE shape placed at a key and pattern."""

    bin_val: int
    k: int = 0
    p: int = 0
    dve: DVEValue = field(default_factory=lambda: DVEValue(0))


def make_ve(input_val: int) -> VEValue:
    return VEValue(bin_val=input_val, v=0, e=largest_bit(input_val))


def make_dve(input_val: int) -> DVEValue:
    return DVEValue(bin_val=input_val, d=0, ve=make_ve(input_val))


def make_kpdve(input_val: int) -> KPDVEValue:
    return KPDVEValue(bin_val=input_val, k=0, p=0, dve=make_dve(0))


def minimize_ve_value(ve: VEValue) -> VEValue:
    """
    Find the voicing view with the smallest value.

    Views are tried in order 1, 2, 4; an equal value from a later view
    replaces the earlier one.

    Args:
        ve: Value to minimize (only bin_val is read)

    Returns:
        VEValue with the minimal bin_val, its voicing and its extension
    """
    min_ve = ve
    min_val = ve.bin_val
    test_val = ve.bin_val
    for i in range(_VOICING_VIEWS):
        if test_val <= min_val:
            min_val = test_val
            min_ve = VEValue(bin_val=test_val, v=1 << i, e=largest_bit(test_val))
        test_val = unshuffle_bits(test_val)
    return min_ve


def minimize_dve_value(dve: DVEValue) -> DVEValue:
    """
    Find the root (degree) whose minimized VE is smallest.

    Each rotation that puts a sounding tone on bit 0 is a candidate root.
    Rotations step right by one, so rotation i roots the chord on the
    tone at position i. Ties keep the first degree found.

    A zero shape has no candidate root and comes back unchanged.
    """
    min_dve = dve
    low_ve = _LOW_VE_START
    slide_val = dve.bin_val

    for i in range(PRIME_DIVISION):
        if slide_val & 1:
            test_ve = minimize_ve_value(make_ve(slide_val))
            if test_ve.bin_val < low_ve:
                min_dve = DVEValue(bin_val=dve.bin_val, d=i, ve=test_ve)
                low_ve = test_ve.bin_val
        slide_val = mod_rot(slide_val, -1, PRIME_DIVISION)
    return min_dve
