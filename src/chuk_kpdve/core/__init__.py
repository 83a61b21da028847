"""
Core KPDVE primitives - pure functions over small integers.

These are the invariants everything else composes on:
- bits: modular rotation, circle/chroma reindexing, shuffles
- pattern: the P-axis filter and forward chord helpers
- crystal: the (Key, Pattern) generative model
- canonical: reduction of a note shape to (Degree, Voicing, Extension)
- kpdve: the packed five-axis codec and its projections
"""

from chuk_kpdve.core.bits import (
    bit_bunch,
    bit_count,
    chroma_circle_hash,
    chroma_to_circle,
    circle_to_chroma,
    key_filt,
    largest_bit,
    loop_mod,
    mod_rot,
    reverse_12_bits,
    shuffle_bits,
    unshuffle_bits,
)
from chuk_kpdve.core.canonical import (
    DVEValue,
    KPDVEValue,
    VEValue,
    make_dve,
    make_kpdve,
    make_ve,
    minimize_dve_value,
    minimize_ve_value,
)
from chuk_kpdve.core.crystal import (
    HarmonyCrystal,
    default_harmonycrystal,
    harmonycrystal_at_multiple,
    is_prime,
    kp_for_harmonycrystal,
)
from chuk_kpdve.core.kpdve import (
    KPDVE,
    binary_to_kpdve,
    chroma_chord_from_kpdve,
    chroma_ext_from_kpdve,
    chroma_root_from_kpdve,
    chroma_scale_from_kpdve,
    circle_chord_from_kpdve,
    circle_ext_from_kpdve,
    circle_root_from_kpdve,
    circle_scale_from_kpdve,
    kpdve_chord_val,
    kpdve_chromatic_byte,
    kpdve_chromatic_byte_to_kpdve,
    kpdve_parameter,
    kpdve_to_binary,
    kpdve_val,
)
from chuk_kpdve.core.pattern import (
    apply_p_filt,
    dve_chord_val,
    dve_val,
    p_filt,
    pdve_chord_val,
    pdve_val,
    ve_chord_val,
    ve_val,
)

__all__ = [
    # Bits
    "loop_mod",
    "mod_rot",
    "bit_bunch",
    "bit_count",
    "key_filt",
    "largest_bit",
    "chroma_circle_hash",
    "chroma_to_circle",
    "circle_to_chroma",
    "reverse_12_bits",
    "shuffle_bits",
    "unshuffle_bits",
    # Pattern
    "p_filt",
    "apply_p_filt",
    "ve_val",
    "ve_chord_val",
    "dve_val",
    "dve_chord_val",
    "pdve_val",
    "pdve_chord_val",
    # Crystal
    "HarmonyCrystal",
    "harmonycrystal_at_multiple",
    "default_harmonycrystal",
    "kp_for_harmonycrystal",
    "is_prime",
    # Canonical
    "VEValue",
    "DVEValue",
    "KPDVEValue",
    "make_ve",
    "make_dve",
    "make_kpdve",
    "minimize_ve_value",
    "minimize_dve_value",
    # Codec
    "KPDVE",
    "kpdve_to_binary",
    "binary_to_kpdve",
    "kpdve_parameter",
    "kpdve_chromatic_byte",
    "kpdve_chromatic_byte_to_kpdve",
    "kpdve_val",
    "kpdve_chord_val",
    "circle_chord_from_kpdve",
    "circle_scale_from_kpdve",
    "circle_root_from_kpdve",
    "circle_ext_from_kpdve",
    "chroma_chord_from_kpdve",
    "chroma_scale_from_kpdve",
    "chroma_root_from_kpdve",
    "chroma_ext_from_kpdve",
]
