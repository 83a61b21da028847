"""
Analysis - enumerate every reading of a chord, then pick one by context.
"""

from chuk_kpdve.analysis.enumerator import (
    Candidate,
    enumerate_candidates,
    iter_candidates,
    set_kp_list,
    undo_kp_for_input_val,
)
from chuk_kpdve.analysis.resolver import (
    ContextResolver,
    biased_mod_distance,
    default_resolver,
    kpd_distance,
    mod_distance,
    set_min_index,
)

__all__ = [
    # Enumerator
    "Candidate",
    "enumerate_candidates",
    "iter_candidates",
    "set_kp_list",
    "undo_kp_for_input_val",
    # Resolver
    "ContextResolver",
    "default_resolver",
    "mod_distance",
    "biased_mod_distance",
    "kpd_distance",
    "set_min_index",
]
