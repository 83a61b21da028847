"""
Pattern primitives - the P-axis filter and the forward chord model.

A pattern is the lydian scale (seven consecutive fifths) with at most one
pair of tones altered. The filter marks that pair; applying it XORs the
pair into a note set, but only when the set actually holds one of them.

The forward helpers build chords from (Degree, Voicing, Extension):
a voicing is a step size through the seven scale tones, an extension is
how many steps are stacked above the root.
"""

from __future__ import annotations

from chuk_kpdve.constants import CHROMA_COUNT, PRIME_DIVISION
from chuk_kpdve.core.bits import key_filt, mod_rot


def p_filt(p_val: int, breadth: int = PRIME_DIVISION) -> int:
    """
    Filter that adds or removes a pattern distortion.

    Pattern 0 is pure lydian and has no filter. Patterns 1-3 raise
    (shift the pair to positions p - 1), patterns 4-6 lower (fold to
    -1, -2, -3 around the lydian reference).

    Args:
        p_val: The pattern axis of a KPDVE
        breadth: Distance between the two altered tones

    Returns:
        The two-bit filter in circle order
    """
    if p_val <= 0:
        return 0
    if p_val > 3:
        shift = -(~p_val & 3)
    else:
        shift = p_val - 1
    return mod_rot(key_filt(breadth), shift, CHROMA_COUNT)


def apply_p_filt(val: int, p: int) -> int:
    """
    Apply (or undo) the pattern filter for p.

    The XOR only happens when the filter overlaps val, so a note set that
    holds neither altered tone passes through untouched. This is not a
    general involution: applying twice restores val only while the
    overlap is the same both times.
    """
    filt = p_filt(p, PRIME_DIVISION)
    return val ^ filt if (filt & val) > 0 else val


def ve_val(v: int, e: int) -> int:
    """Single scale bit reached by e steps of size v (voicing 0 stays on the root)."""
    if v == 0:
        return 1
    return mod_rot(1, v * e, PRIME_DIVISION)


def ve_chord_val(v: int, e: int) -> int:
    """All scale bits from the root up to e steps of size v."""
    val = 0
    e_sign = -1 if e < 0 else 1
    for i in range(abs(e) + 1):
        val |= ve_val(v, e_sign * i)
    return val


def dve_val(d: int, v: int, e: int) -> int:
    """ve_val moved onto degree d."""
    return mod_rot(ve_val(v, e), d, PRIME_DIVISION)


def dve_chord_val(d: int, v: int, e: int) -> int:
    """ve_chord_val moved onto degree d."""
    return mod_rot(ve_chord_val(v, e), d, PRIME_DIVISION)


def pdve_val(p: int, d: int, v: int, e: int) -> int:
    """Single extension tone with the pattern distortion applied."""
    return apply_p_filt(dve_val(d, v, e), p)


def pdve_chord_val(p: int, d: int, v: int, e: int) -> int:
    """Whole chord with the pattern distortion applied."""
    return apply_p_filt(dve_chord_val(d, v, e), p)
