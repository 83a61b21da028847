"""
Progression analysis - thread each chord's reading into the next.

This is the caller-level Markov chain: every chord is resolved against
the previous chord's KPDVE, which keeps a progression in one key and
pattern for as long as the notes allow.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from chuk_kpdve.analysis.resolver import ContextResolver
from chuk_kpdve.constants import CHROMA_MASK, DEFAULT_KPDVE
from chuk_kpdve.models.state import HarmonyStateSummary
from chuk_kpdve.state.harmony_state import (
    HarmonyState,
    adjust_harmony_state_from_chroma_and_context,
    harmony_state_from_kpdve,
)

logger = logging.getLogger(__name__)


def analyze_progression(
    chromas: Iterable[int],
    context: int = DEFAULT_KPDVE,
    resolver: ContextResolver | None = None,
) -> list[HarmonyStateSummary]:
    """
    Analyze a sequence of chords.

    Invalid chords are reported but do not move the context, so one
    unreadable chord does not derail the rest of the progression.

    Args:
        chromas: Chroma masks in playing order
        context: KPDVE the first chord is resolved against
        resolver: Resolver to use (default: the standard weights)

    Returns:
        One summary per chord, in order
    """
    state = harmony_state_from_kpdve(context, resolver=resolver)
    summaries: list[HarmonyStateSummary] = []

    for position, chroma in enumerate(chromas):
        adjust_harmony_state_from_chroma_and_context(state, chroma, context)
        summaries.append(state.to_summary())
        if state.is_valid:
            context = state.kpdve
        else:
            logger.info(f"chord {position} ({chroma & CHROMA_MASK:012b}) has no reading; context kept")

    return summaries


def iter_progression_states(
    chromas: Iterable[int],
    context: int = DEFAULT_KPDVE,
    resolver: ContextResolver | None = None,
) -> Iterator[HarmonyState]:
    """
    Yield an independent state per chord, resolved as in analyze_progression.
    """
    state = harmony_state_from_kpdve(context, resolver=resolver)
    for chroma in chromas:
        adjust_harmony_state_from_chroma_and_context(state, chroma, context)
        yield state.copy()
        if state.is_valid:
            context = state.kpdve
