"""
Harmony crystal - the generative (Key, Pattern) model.

The 12-note circle splits into two near-equal prime runs of fifths:
7 (the lydian scale) and 5 (its pentatonic complement). For a multiple m
of twelve the divisors are 6m + 1 and 6m - 1. Every (Key, Pattern) cell
of the crystal implies exactly one note pattern; distinct cells can imply
the same notes, which is why chords need disambiguation.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from chuk_kpdve.constants import CHROMA_COUNT
from chuk_kpdve.core.bits import bit_bunch, mod_rot
from chuk_kpdve.core.pattern import apply_p_filt


def is_prime(num: int) -> bool:
    """Trial division by 2, 3 and 6k +/- 1 up to the square root."""
    if num <= 1:
        return False
    if num <= 3:
        return True
    if num % 2 == 0 or num % 3 == 0:
        return False
    i = 5
    while i * i <= num:
        if num % i == 0 or num % (i + 2) == 0:
            return False
        i += 6
    return True


@dataclass(frozen=True)
class HarmonyCrystal:
    """
    A crystal at some multiple of twelve.

    Immutable and hashable. Only multiple 1 (divisors 7 and 5, 84 cells)
    is used by the analysis pipeline; other multiples are constructible
    but their patterns have not been derived.
    """

    twelve_multiple: int
    divs: tuple[int, int]
    twin_primes: bool
    div_index: int = 0

    @property
    def crystal_size(self) -> int:
        """Number of (Key, Pattern) cells."""
        return self.divs[self.div_index] * CHROMA_COUNT * self.twelve_multiple

    @property
    def active_div(self) -> int:
        """The divisor whose run of fifths seeds the patterns."""
        return self.divs[self.div_index]

    @property
    def key_count(self) -> int:
        """Number of keys (the rotation modulus)."""
        return CHROMA_COUNT * self.twelve_multiple

    def cells(self) -> Iterator[tuple[int, int, int]]:
        """
        Iterate (index, key, pattern) in Key-major, Pattern-minor order.
        Keys run to key_count and patterns to active_div.

        This order is the tie-break order for context resolution.
        """
        div = self.active_div
        for i in range(self.crystal_size):
            yield i, i // div, i % div

    def pattern_for(self, k: int, p: int) -> int:
        """The circle-order note pattern for a (Key, Pattern) cell."""
        return kp_for_harmonycrystal(self, k, p)


def harmonycrystal_at_multiple(twelve_multiple: int) -> HarmonyCrystal:
    """Build the crystal for a multiple of twelve (1 gives divisors 7 and 5)."""
    divs = (6 * twelve_multiple + 1, 6 * twelve_multiple - 1)
    return HarmonyCrystal(
        twelve_multiple=twelve_multiple,
        divs=divs,
        twin_primes=is_prime(divs[0]) and is_prime(divs[1]),
    )


_DEFAULT_CRYSTAL = harmonycrystal_at_multiple(1)


def default_harmonycrystal() -> HarmonyCrystal:
    """The 12/7 crystal used throughout the analysis pipeline."""
    return _DEFAULT_CRYSTAL


def kp_for_harmonycrystal(crystal: HarmonyCrystal, k: int, p: int) -> int:
    """
    Note pattern for a (Key, Pattern) cell, in circle order.

    Start from the run of fifths (lydian on F for the default crystal),
    apply the pattern distortion, then rotate to the key.
    """
    mode_model = bit_bunch(crystal.active_div)
    mode_with_p = apply_p_filt(mode_model, p)
    return mod_rot(mode_with_p, k, crystal.key_count)
