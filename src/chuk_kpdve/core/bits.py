"""
Bit-algebra primitives.

Every transposition, mode rotation and pattern filter in the system is a
rotation of a small bit field in some modulus: 12 for chroma and key,
7 for scale-degree space. Chroma masks are read right to left
(bit 0 = C, bit 1 = C#, ...). Circle masks are the same notes reindexed
along the circle of fifths starting at F (bit 0 = F, bit 1 = C, ...).
"""

from __future__ import annotations

from chuk_kpdve.constants import CHROMA_COUNT, CHROMA_MASK

# Even/odd chroma positions for the circle-of-fifths reindex
_EVEN_BITS = 0x555
_ODD_BITS = 0xAAA

# Shuffle width: seven scale bits fit into an eight-bit "deck"
_SHUFFLE_HALF = 4
_SHUFFLE_TOP = 0b10000000


def loop_mod(x: int, mod: int) -> int:
    """
    Modulo that never goes negative for a positive modulus.

    A modulus of zero is treated as the identity and returns x unchanged.
    """
    if mod == 0:
        return x
    return x % mod


def bit_bunch(breadth: int) -> int:
    """Consecutive low bits set: bit_bunch(3) == 0b111."""
    return (1 << breadth) - 1


def key_filt(breadth: int) -> int:
    """
    Two-bit filter at positions 0 and breadth, e.g. key_filt(4) == 0b10001.

    Rotated into place it marks the pair of tones that turn a lydian
    pattern into one of its neighbouring pattern families.
    """
    return (1 << breadth) + 1


def mod_rot(val: int, rot: int, mod: int) -> int:
    """
    Rotate the low `mod` bits of val to the LEFT by rot (negative = right).

    Args:
        val: Value to rotate (bits at or above `mod` are ignored)
        rot: Positions to rotate left
        mod: Width of the rotating field (12 for chroma, 7 for scales)

    Returns:
        The rotated value, masked to `mod` bits
    """
    if mod <= 0:
        return 0
    mask = bit_bunch(mod)
    val &= mask
    rot_small = loop_mod(rot, mod)
    return mask & ((val << rot_small) | (val >> (mod - rot_small)))


def chroma_circle_hash(val: int) -> int:
    """
    Exchange chromatic adjacency for fifths adjacency.

    Even positions stay put, odd positions move by a tritone.
    """
    return (val & _EVEN_BITS) | mod_rot(val & _ODD_BITS, 6, CHROMA_COUNT)


def chroma_to_circle(val: int) -> int:
    """Reindex a chroma mask into circle-of-fifths order (F at bit 0)."""
    return mod_rot(chroma_circle_hash(val & CHROMA_MASK), 1, CHROMA_COUNT)


def circle_to_chroma(val: int) -> int:
    """Reindex a circle-of-fifths mask back into chroma order."""
    return chroma_circle_hash(mod_rot(val, -1, CHROMA_COUNT))


def bit_count(val: int) -> int:
    """Number of set bits in the low 12 bits."""
    return bin(val & CHROMA_MASK).count("1")


def largest_bit(val: int) -> int:
    """Position of the highest set bit, or -1 for zero."""
    if val <= 0:
        return -1
    return val.bit_length() - 1


def reverse_12_bits(val: int) -> int:
    """Mirror a 12-bit mask (left-to-right chroma <-> right-to-left chroma)."""
    reversed_val = 0
    for _ in range(CHROMA_COUNT):
        reversed_val = (reversed_val << 1) | (val & 1)
        val >>= 1
    return reversed_val


def shuffle_bits(val: int) -> int:
    """
    Perfect out-shuffle of an 8-bit value, like a cleanly shuffled deck.

    The low half interleaves upward from bit 0, the high half downward
    from bit 7. On the seven scale bits this multiplies every position
    by 2 mod 7, so three shuffles return the original value.
    """
    result = 0
    for i in range(_SHUFFLE_HALF):
        result |= (val & (1 << i)) << i
        result |= (val & (_SHUFFLE_TOP >> i)) >> i
    return result


def unshuffle_bits(val: int) -> int:
    """Undo shuffle_bits by shuffling twice more."""
    return shuffle_bits(shuffle_bits(val))
