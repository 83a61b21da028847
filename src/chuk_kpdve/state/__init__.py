"""
Harmony state - constructors, in-place adjustments and progressions.
"""

from chuk_kpdve.state.harmony_state import (
    HarmonyState,
    adjust_harmony_state_from_chroma,
    adjust_harmony_state_from_chroma_and_context,
    adjust_harmony_state_from_chroma_lr_and_context,
    adjust_harmony_state_from_kpdve,
    adjust_harmony_state_from_min_encoding,
    choose_kpdve_from_context,
    encode_and_validate_state,
    harmony_state_default,
    harmony_state_from_binary,
    harmony_state_from_binary_w_context,
    harmony_state_from_kpdve,
    harmony_state_from_min_encoding,
)
from chuk_kpdve.state.progression import analyze_progression, iter_progression_states

__all__ = [
    "HarmonyState",
    # Constructors
    "harmony_state_default",
    "harmony_state_from_binary",
    "harmony_state_from_binary_w_context",
    "harmony_state_from_kpdve",
    "harmony_state_from_min_encoding",
    # Adjustments
    "adjust_harmony_state_from_kpdve",
    "adjust_harmony_state_from_chroma",
    "adjust_harmony_state_from_chroma_and_context",
    "adjust_harmony_state_from_chroma_lr_and_context",
    "adjust_harmony_state_from_min_encoding",
    "choose_kpdve_from_context",
    "encode_and_validate_state",
    # Progressions
    "analyze_progression",
    "iter_progression_states",
]
