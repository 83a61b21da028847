"""
chuk-kpdve - harmonic analysis by Key, Pattern, Degree, Voicing, Extension.

Give it the pitch classes of a chord and it finds every (Key, Pattern,
Degree, Voicing, Extension) reading of them, then picks the reading
closest to a harmonic context, usually the previous chord. Give it a
KPDVE and it returns the notes that KPDVE describes.

Layers, leaves first:
- core: bit algebra, the harmony crystal, canonicalization, the codec
- analysis: candidate enumeration and context resolution
- state: the HarmonyState entry point and progressions
- models/config: pydantic models and YAML resolver configs
- midi: MIDI notes and files into chroma masks
"""

from chuk_kpdve.analysis import Candidate, ContextResolver, enumerate_candidates, kpd_distance
from chuk_kpdve.config import ConfigLoader
from chuk_kpdve.core import (
    KPDVE,
    binary_to_kpdve,
    chroma_chord_from_kpdve,
    chroma_to_circle,
    circle_to_chroma,
    kpdve_to_binary,
)
from chuk_kpdve.models import HarmonyStateSummary, ResolverConfig
from chuk_kpdve.state import (
    HarmonyState,
    adjust_harmony_state_from_chroma,
    adjust_harmony_state_from_chroma_and_context,
    adjust_harmony_state_from_kpdve,
    analyze_progression,
    harmony_state_default,
    harmony_state_from_binary,
    harmony_state_from_binary_w_context,
    harmony_state_from_kpdve,
)

__version__ = "0.1.0"

__all__ = [
    # Codec
    "KPDVE",
    "kpdve_to_binary",
    "binary_to_kpdve",
    "chroma_to_circle",
    "circle_to_chroma",
    "chroma_chord_from_kpdve",
    # Analysis
    "Candidate",
    "ContextResolver",
    "enumerate_candidates",
    "kpd_distance",
    # State
    "HarmonyState",
    "harmony_state_default",
    "harmony_state_from_binary",
    "harmony_state_from_binary_w_context",
    "harmony_state_from_kpdve",
    "adjust_harmony_state_from_kpdve",
    "adjust_harmony_state_from_chroma",
    "adjust_harmony_state_from_chroma_and_context",
    "analyze_progression",
    # Models / config
    "HarmonyStateSummary",
    "ResolverConfig",
    "ConfigLoader",
]
