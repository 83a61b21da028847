"""
Harmony state - the public entry point of the analysis pipeline.

A state bundles a chord (chroma mask), every interpretation of it, and
the one chosen by context. The only transition is a full re-analysis:

    chroma (+ context KPDVE) -> candidates -> chosen KPDVE/DVE/VE -> encoded state

Every adjust_* function replaces the chroma and/or KPDVE and reruns the
whole pipeline in place; no field is ever patched on its own.

Invalid states are data, not exceptions: bit 31 of encoded_state is set
when the chord has more than seven notes or no (Key, Pattern) reading.
The chosen fields of an invalid state are left over from earlier data and
mean nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chuk_kpdve.analysis.enumerator import Candidate, set_kp_list
from chuk_kpdve.analysis.resolver import ContextResolver, default_resolver
from chuk_kpdve.constants import (
    CHROMA_MASK,
    DEFAULT_KPDVE,
    INVALID_STATE_BIT,
    MAX_CHORD_NOTES,
)
from chuk_kpdve.core.bits import (
    bit_count,
    chroma_to_circle,
    circle_to_chroma,
    reverse_12_bits,
)
from chuk_kpdve.core.crystal import HarmonyCrystal, default_harmonycrystal
from chuk_kpdve.core.kpdve import KPDVE, binary_to_kpdve, kpdve_chord_val, kpdve_chromatic_byte
from chuk_kpdve.models.state import CandidateSummary, HarmonyStateSummary

logger = logging.getLogger(__name__)

# KPDVE bits of an encoded state (drops the validity bit)
_ENCODED_KPDVE_MASK = 0xFFFF
_ENCODED_KPDVE_SHIFT = 12


@dataclass
class HarmonyState:
    """
    A chord and its interpretations.

    The candidate buffers have one slot per crystal cell (84 for the
    default crystal) and are reused across analyses. Only the first
    kpdve_list_length entries belong to the current chord.
    """

    encoded_state: int = 0
    chromatic_notes: int = 0
    kpdve: int = 0
    dve: int = 0
    ve: int = 0
    kpdve_list_length: int = 0
    kpdve_min_index: int = 0
    kpdve_list: list[int] = field(default_factory=list)
    dve_list: list[int] = field(default_factory=list)
    ve_list: list[int] = field(default_factory=list)

    crystal: HarmonyCrystal = field(
        default_factory=default_harmonycrystal, compare=False, repr=False
    )
    resolver: ContextResolver = field(
        default_factory=default_resolver, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        capacity = self.crystal.crystal_size
        for name in ("kpdve_list", "dve_list", "ve_list"):
            buffer = getattr(self, name)
            if len(buffer) < capacity:
                buffer.extend([0] * (capacity - len(buffer)))
            else:
                del buffer[capacity:]

    @property
    def is_valid(self) -> bool:
        """False when the invalid marker is set."""
        return not self.encoded_state & INVALID_STATE_BIT

    @property
    def circle_notes(self) -> int:
        """The chord in circle-of-fifths order (F at bit 0)."""
        return chroma_to_circle(self.chromatic_notes)

    @property
    def kpdve_tuple(self) -> KPDVE:
        return binary_to_kpdve(self.kpdve)

    def candidates(self) -> list[Candidate]:
        """The current chord's interpretations, in enumeration order."""
        return [
            Candidate(self.kpdve_list[i], self.dve_list[i], self.ve_list[i])
            for i in range(self.kpdve_list_length)
        ]

    def copy(self) -> HarmonyState:
        """Independent copy with its own buffers."""
        return HarmonyState(
            encoded_state=self.encoded_state,
            chromatic_notes=self.chromatic_notes,
            kpdve=self.kpdve,
            dve=self.dve,
            ve=self.ve,
            kpdve_list_length=self.kpdve_list_length,
            kpdve_min_index=self.kpdve_min_index,
            kpdve_list=list(self.kpdve_list),
            dve_list=list(self.dve_list),
            ve_list=list(self.ve_list),
            crystal=self.crystal,
            resolver=self.resolver,
        )

    def to_summary(self) -> HarmonyStateSummary:
        """Frozen, serializable snapshot of this state."""
        candidates = []
        for candidate in self.candidates():
            k, p, d, v, e = candidate.kpdve_tuple
            candidates.append(
                CandidateSummary(
                    kpdve=candidate.kpdve,
                    key=k,
                    pattern=p,
                    degree=d,
                    voicing=v,
                    extension=e,
                    dve=candidate.dve,
                    ve=candidate.ve,
                )
            )
        return HarmonyStateSummary(
            encoded_state=self.encoded_state,
            chromatic_notes=self.chromatic_notes,
            circle_notes=self.circle_notes,
            kpdve=self.kpdve,
            kpdve_tuple=tuple(self.kpdve_tuple),
            dve=self.dve,
            ve=self.ve,
            is_valid=self.is_valid,
            min_index=self.kpdve_min_index,
            candidates=candidates,
        )


# ---------------------------------------------------------------------------
# Validity
# ---------------------------------------------------------------------------


def encode_and_validate_state(state: HarmonyState) -> None:
    """
    Pack KPDVE and chroma into encoded_state and set the invalid marker.

    Invalid when the chord has more than seven notes or no candidates.
    """
    state.encoded_state = kpdve_chromatic_byte(state.kpdve, state.chromatic_notes)
    is_invalid = (
        bit_count(state.chromatic_notes) > MAX_CHORD_NOTES or state.kpdve_list_length <= 0
    )
    if is_invalid:
        state.encoded_state |= INVALID_STATE_BIT
        logger.debug(f"chroma {state.chromatic_notes:012b} has no valid reading")


def _take_candidate(state: HarmonyState) -> None:
    index = state.kpdve_min_index
    state.kpdve = state.kpdve_list[index]
    state.dve = state.dve_list[index]
    state.ve = state.ve_list[index]


def choose_kpdve_from_context(state: HarmonyState, context: int) -> None:
    """Resolve the current candidates against a context and adopt the winner."""
    state.resolver.set_min_index(state, context)
    _take_candidate(state)
    encode_and_validate_state(state)


# ---------------------------------------------------------------------------
# Adjustments (in place, always a full re-analysis)
# ---------------------------------------------------------------------------


def adjust_harmony_state_from_kpdve(state: HarmonyState, a_kpdve: int) -> None:
    """
    Re-analyze a state from a KPDVE.

    The chord comes from the forward model; the candidates are then
    resolved against the KPDVE itself to find which one it is. The given
    KPDVE is kept as the state's KPDVE (so a non-canonical voicing survives)
    while DVE and VE come from the matched candidate. Bits above the
    16-bit KPDVE are dropped.
    """
    a_kpdve &= _ENCODED_KPDVE_MASK
    state.kpdve = a_kpdve
    state.chromatic_notes = circle_to_chroma(kpdve_chord_val(a_kpdve))

    set_kp_list(state, state.crystal)
    state.resolver.set_min_index(state, state.kpdve)

    state.dve = state.dve_list[state.kpdve_min_index]
    state.ve = state.ve_list[state.kpdve_min_index]

    encode_and_validate_state(state)


def adjust_harmony_state_from_chroma(state: HarmonyState, chroma_val: int) -> None:
    """Re-analyze from a new chord, using the state's previous KPDVE as context."""
    state.chromatic_notes = chroma_val & CHROMA_MASK
    set_kp_list(state, state.crystal)
    choose_kpdve_from_context(state, state.kpdve)


def adjust_harmony_state_from_chroma_and_context(
    state: HarmonyState, chroma_val: int, context: int
) -> None:
    """Re-analyze from a new chord and an explicit context KPDVE."""
    state.chromatic_notes = chroma_val & CHROMA_MASK
    set_kp_list(state, state.crystal)
    choose_kpdve_from_context(state, context)


def adjust_harmony_state_from_chroma_lr_and_context(
    state: HarmonyState, chroma_val: int, context: int
) -> None:
    """As adjust_harmony_state_from_chroma_and_context, for a chroma written left to right (C at bit 11)."""
    adjust_harmony_state_from_chroma_and_context(
        state, reverse_12_bits(chroma_val & CHROMA_MASK), context
    )


def adjust_harmony_state_from_min_encoding(state: HarmonyState, encoded: int) -> None:
    """Re-analyze from an encoded state: KPDVE above bit 12, chroma below."""
    adjust_harmony_state_from_kpdve(
        state, (encoded >> _ENCODED_KPDVE_SHIFT) & _ENCODED_KPDVE_MASK
    )
    state.chromatic_notes = encoded & CHROMA_MASK
    encode_and_validate_state(state)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def _new_state(
    crystal: HarmonyCrystal | None,
    resolver: ContextResolver | None,
) -> HarmonyState:
    return HarmonyState(
        crystal=crystal or default_harmonycrystal(),
        resolver=resolver or default_resolver(),
    )


def harmony_state_from_binary(
    chroma_val: int,
    crystal: HarmonyCrystal | None = None,
    resolver: ContextResolver | None = None,
) -> HarmonyState:
    """
    Analyze a chroma mask with no context.

    The first candidate in enumeration order is chosen.
    """
    state = _new_state(crystal, resolver)
    state.chromatic_notes = chroma_val & CHROMA_MASK
    set_kp_list(state, state.crystal)
    state.kpdve_min_index = 0
    _take_candidate(state)
    encode_and_validate_state(state)
    return state


def harmony_state_from_binary_w_context(
    chroma_val: int,
    context_kpdve: int,
    crystal: HarmonyCrystal | None = None,
    resolver: ContextResolver | None = None,
) -> HarmonyState:
    """Analyze a chroma mask, choosing the reading nearest the context KPDVE."""
    state = _new_state(crystal, resolver)
    adjust_harmony_state_from_chroma_and_context(state, chroma_val, context_kpdve)
    return state


def harmony_state_from_kpdve(
    a_kpdve: int,
    crystal: HarmonyCrystal | None = None,
    resolver: ContextResolver | None = None,
) -> HarmonyState:
    """Build the state a KPDVE describes (see adjust_harmony_state_from_kpdve)."""
    state = _new_state(crystal, resolver)
    adjust_harmony_state_from_kpdve(state, a_kpdve)
    return state


def harmony_state_from_min_encoding(
    encoded: int,
    crystal: HarmonyCrystal | None = None,
    resolver: ContextResolver | None = None,
) -> HarmonyState:
    """Rebuild a state from its encoded_state value."""
    state = _new_state(crystal, resolver)
    adjust_harmony_state_from_min_encoding(state, encoded)
    return state


def harmony_state_default() -> HarmonyState:
    """F major triad as the base of the lydian mode: KPDVE [0, 0, 0, 4, 2]."""
    return harmony_state_from_kpdve(DEFAULT_KPDVE)
