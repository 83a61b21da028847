"""
Pydantic models for configuration and serialized analysis results.
"""

from chuk_kpdve.models.config import (
    AxisBiases,
    AxisWeights,
    ResolverConfig,
    ResolverConfigMetadata,
)
from chuk_kpdve.models.state import CandidateSummary, HarmonyStateSummary

__all__ = [
    # Config
    "AxisWeights",
    "AxisBiases",
    "ResolverConfig",
    "ResolverConfigMetadata",
    # State
    "CandidateSummary",
    "HarmonyStateSummary",
]
