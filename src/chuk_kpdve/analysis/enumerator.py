"""
Candidate enumerator - every (Key, Pattern) reading of a chord.

Walks the harmony crystal cell by cell. A cell fits the chord when its
note pattern is a superset of the chord (both in circle order). Each fit
is undone back to a key- and pattern-free shape, canonicalized, and
recorded as a (KPDVE, DVE, VE) triple.

Enumeration order is Key-major, Pattern-minor. The resolver depends on
it for tie-breaking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chuk_kpdve.constants import CHROMA_COUNT
from chuk_kpdve.core.bits import chroma_to_circle, mod_rot
from chuk_kpdve.core.canonical import make_dve, minimize_dve_value
from chuk_kpdve.core.crystal import (
    HarmonyCrystal,
    default_harmonycrystal,
    kp_for_harmonycrystal,
)
from chuk_kpdve.core.kpdve import KPDVE, binary_to_kpdve, kpdve_to_binary
from chuk_kpdve.core.pattern import apply_p_filt

if TYPE_CHECKING:
    from collections.abc import Iterator

    from chuk_kpdve.state.harmony_state import HarmonyState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """One interpretation of a chord."""

    kpdve: int
    dve: int
    ve: int

    @property
    def kpdve_tuple(self) -> KPDVE:
        return binary_to_kpdve(self.kpdve)


def undo_kp_for_input_val(input_val: int, k: int, p: int) -> int:
    """
    Move a circle-order chord back to the lydian base and strip the pattern.

    The result is a seven-bit shape, ready for canonicalization.
    """
    reduced = mod_rot(input_val, -k, CHROMA_COUNT)
    return apply_p_filt(reduced, p)


def iter_candidates(
    chroma: int,
    crystal: HarmonyCrystal | None = None,
) -> Iterator[Candidate]:
    """
    Yield every interpretation of a chroma mask, in enumeration order.

    An empty chord yields nothing: silence has no root to canonicalize.

    Args:
        chroma: Chroma mask (C at bit 0); only the low 12 bits are read
        crystal: Crystal to walk (default: the 12/7 crystal)
    """
    crystal = crystal or default_harmonycrystal()
    circle_notes = chroma_to_circle(chroma)
    if circle_notes == 0:
        return

    for _, k, p in crystal.cells():
        if (kp_for_harmonycrystal(crystal, k, p) & circle_notes) != circle_notes:
            continue

        dve_input = undo_kp_for_input_val(circle_notes, k, p)
        if dve_input == 0:
            continue

        test_dve = minimize_dve_value(make_dve(dve_input))
        yield Candidate(
            kpdve=kpdve_to_binary(k, p, test_dve.d, test_dve.ve.v, test_dve.ve.e),
            dve=test_dve.bin_val,
            ve=test_dve.ve.bin_val,
        )


def enumerate_candidates(
    chroma: int,
    crystal: HarmonyCrystal | None = None,
) -> list[Candidate]:
    """All interpretations of a chroma mask, in enumeration order."""
    return list(iter_candidates(chroma, crystal))


def set_kp_list(state: HarmonyState, crystal: HarmonyCrystal | None = None) -> None:
    """
    Fill a state's candidate buffers from its chroma.

    The buffers are overwritten in place; slots past kpdve_list_length
    keep whatever an earlier analysis left there.
    """
    match_count = 0
    for candidate in iter_candidates(state.chromatic_notes, crystal):
        state.kpdve_list[match_count] = candidate.kpdve
        state.dve_list[match_count] = candidate.dve
        state.ve_list[match_count] = candidate.ve
        match_count += 1
    state.kpdve_list_length = match_count

    logger.debug(f"chroma {state.chromatic_notes:012b}: {match_count} candidates")
