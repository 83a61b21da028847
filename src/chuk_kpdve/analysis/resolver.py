"""
Context resolver - pick one interpretation given a harmonic context.

The context is usually the previous chord's KPDVE. Candidates that stay
in the context's key and pattern win outright; otherwise the candidate
nearest the context in weighted circular KPD space is chosen, the first
one found winning any tie.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from chuk_kpdve.constants import KPDVE_MODS, KPDVEAxis
from chuk_kpdve.core.kpdve import binary_to_kpdve
from chuk_kpdve.models.config import ResolverConfig

if TYPE_CHECKING:
    from chuk_kpdve.state.harmony_state import HarmonyState

logger = logging.getLogger(__name__)


def mod_distance(val1: int, val2: int, mod: int) -> float:
    """Shortest distance between two positions on a circle of size mod."""
    diff = abs(float(val2) - float(val1))
    wrapped_diff = mod - diff
    return diff if diff < wrapped_diff else wrapped_diff


def biased_mod_distance(val1: int, val2: int, mod: int, bias: float) -> float:
    """
    mod_distance weighted by proximity of both values to zero.

    With bias 0 this is exactly mod_distance.
    """
    dist = mod_distance(val1, val2, mod)
    bias_factor_a = 1.0 / (abs(val1) + 1)
    bias_factor_b = 1.0 / (abs(val2) + 1)
    bias_factor = (bias_factor_a + bias_factor_b) / 2.0
    return dist * (1.0 + bias * bias_factor)


class ContextResolver:
    """
    Weighted KPD distance and candidate selection.

    Owns the axis moduli and the hyperparameters from a ResolverConfig.
    Nothing mutates a resolver after construction, so one instance can
    serve any number of states.
    """

    def __init__(self, config: ResolverConfig | None = None):
        """
        Initialize the resolver.

        Args:
            config: Resolver hyperparameters (default: the standard weights)
        """
        self.config = config or ResolverConfig()
        self.moduli: tuple[int, ...] = KPDVE_MODS
        self.axis_scale = self.config.axis_scale.as_tuple()
        self.axis_bias = self.config.axis_bias.as_tuple()

    def kpd_distance(self, kpdve_1: int, kpdve_2: int) -> float:
        """
        Weighted L1 distance between two packed KPDVEs.

        Only the leading axes (Key, Pattern, Degree by default) count:
        voicing and extension describe spelling, not harmonic identity.
        """
        temp1 = binary_to_kpdve(kpdve_1)
        temp2 = binary_to_kpdve(kpdve_2)

        inner_sum = 0.0
        for i in range(self.config.distance_axes):
            bias = self.axis_bias[i]
            if bias:
                dist = biased_mod_distance(temp1[i], temp2[i], self.moduli[i], bias)
            else:
                dist = mod_distance(temp1[i], temp2[i], self.moduli[i])
            inner_sum += dist * self.axis_scale[i]
        return inner_sum

    def min_index(self, kpdve_list: Sequence[int], length: int, context: int) -> int:
        """
        Index of the candidate closest to the context.

        Args:
            kpdve_list: Candidate buffer (only the first `length` entries are read)
            length: Number of valid candidates
            context: Packed context KPDVE

        Returns:
            Chosen index (0 when there are no candidates)
        """
        min_dist = self.config.initial_min_distance
        min_index = 0

        context_kpdve = binary_to_kpdve(context)
        context_key = context_kpdve[KPDVEAxis.KEY]
        context_pattern = context_kpdve[KPDVEAxis.PATTERN]

        for i in range(length):
            candidate = binary_to_kpdve(kpdve_list[i])

            # Stay in the same key and pattern if at all possible
            if (
                self.config.prefer_same_kp
                and candidate[KPDVEAxis.KEY] == context_key
                and candidate[KPDVEAxis.PATTERN] == context_pattern
            ):
                return i

            temp_dist = self.kpd_distance(kpdve_list[i], context)
            if temp_dist < min_dist:
                min_dist = temp_dist
                min_index = i

        return min_index

    def set_min_index(self, state: HarmonyState, context: int) -> None:
        """Resolve a state's candidates against a context, in place."""
        state.kpdve_min_index = self.min_index(
            state.kpdve_list, state.kpdve_list_length, context
        )
        logger.debug(
            f"context {context}: chose index {state.kpdve_min_index} "
            f"of {state.kpdve_list_length}"
        )


_DEFAULT_RESOLVER = ContextResolver()


def default_resolver() -> ContextResolver:
    """Resolver with the standard weights."""
    return _DEFAULT_RESOLVER


def kpd_distance(kpdve_1: int, kpdve_2: int) -> float:
    """Weighted KPD distance using the standard weights."""
    return _DEFAULT_RESOLVER.kpd_distance(kpdve_1, kpdve_2)


def set_min_index(state: HarmonyState, context: int) -> None:
    """Resolve a state against a context using the standard weights."""
    _DEFAULT_RESOLVER.set_min_index(state, context)
