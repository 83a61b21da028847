"""
Tests for the KPDVE codec and its projections.
"""

from itertools import product

import pytest

from chuk_kpdve.constants import FM7_LYDIAN_CHROMA, FM7_LYDIAN_KPDVE, KPDVEAxis, Voicing
from chuk_kpdve.core import (
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
    kpdve_chromatic_byte,
    kpdve_chromatic_byte_to_kpdve,
    kpdve_parameter,
    kpdve_to_binary,
)

F_MAJOR_TRIAD = 0b001000100001
C_MAJOR_TRIAD = 0b000010010001
G_MAJOR_TRIAD = 0b100010000100
C_MAJOR_SCALE = 0b101010110101


class TestPacking:
    """Tests for kpdve_to_binary / binary_to_kpdve."""

    def test_f_major_triad(self) -> None:
        assert kpdve_to_binary(0, 0, 0, 4, 2) == 34

    def test_field_layout(self) -> None:
        """KKKK PPP DDD VVV EEE, key in the high bits."""
        assert kpdve_to_binary(1, 0, 0, 0, 0) == 1 << 12
        assert kpdve_to_binary(0, 1, 0, 0, 0) == 1 << 9
        assert kpdve_to_binary(0, 0, 1, 0, 0) == 1 << 6
        assert kpdve_to_binary(0, 0, 0, 1, 0) == 1 << 3
        assert kpdve_to_binary(0, 0, 0, 0, 1) == 1
        assert kpdve_to_binary(1, 6, 6, 4, 2) == 7586

    def test_unpack(self) -> None:
        assert binary_to_kpdve(7586) == KPDVE(1, 6, 6, 4, 2)
        assert binary_to_kpdve(34) == KPDVE(0, 0, 0, 4, 2)

    def test_round_trip_in_range(self) -> None:
        for fields in product(range(12), range(7), range(7), range(7), range(7)):
            kpdve = KPDVE(*fields)
            assert binary_to_kpdve(kpdve.pack()) == kpdve

    def test_fields_are_masked_not_checked(self) -> None:
        """Out-of-range values wrap to their field width without error."""
        assert kpdve_to_binary(16, 8, 9, 15, 10) == kpdve_to_binary(0, 0, 1, 7, 2)
        assert kpdve_to_binary(-1, 0, 0, 0, 0) == 0b1111 << 12

    def test_unpack_ignores_bits_above_key(self) -> None:
        assert binary_to_kpdve((1 << 16) | 34) == KPDVE(0, 0, 0, 4, 2)

    def test_namedtuple_helpers(self) -> None:
        kpdve = KPDVE.unpack(34)
        assert kpdve.k == 0
        assert kpdve.v == Voicing.THIRDS
        assert kpdve.pack() == 34
        assert kpdve.replace_axis(KPDVEAxis.KEY, 7) == KPDVE(7, 0, 0, 4, 2)

    def test_kpdve_parameter(self) -> None:
        assert kpdve_parameter(7586, KPDVEAxis.KEY) == 1
        assert kpdve_parameter(7586, KPDVEAxis.DEGREE) == 6
        assert kpdve_parameter(7586, 4) == 2


class TestChromaticByte:
    """Tests for the KPDVE + chroma encoding."""

    def test_join(self) -> None:
        assert kpdve_chromatic_byte(34, F_MAJOR_TRIAD) == (34 << 12) | F_MAJOR_TRIAD
        assert kpdve_chromatic_byte(34, F_MAJOR_TRIAD) == 139809

    def test_chroma_is_masked(self) -> None:
        assert kpdve_chromatic_byte(0, 0xFFFF) == 0xFFF

    def test_kpdve_is_masked(self) -> None:
        assert kpdve_chromatic_byte((1 << 16) | 34, F_MAJOR_TRIAD) == 139809
        assert kpdve_chromatic_byte(1 << 19, 0) == 0

    def test_split(self) -> None:
        assert kpdve_chromatic_byte_to_kpdve(139809) == KPDVE(0, 0, 0, 4, 2)


class TestForwardModel:
    """Tests for the chord/scale/root/extension projections."""

    def test_default_chord(self) -> None:
        assert circle_chord_from_kpdve(34) == 0b10011
        assert chroma_chord_from_kpdve(34) == F_MAJOR_TRIAD

    def test_major_seventh(self) -> None:
        assert chroma_chord_from_kpdve(KPDVE(*FM7_LYDIAN_KPDVE).pack()) == FM7_LYDIAN_CHROMA

    def test_degree_moves_the_chord(self) -> None:
        assert chroma_chord_from_kpdve(KPDVE(0, 0, 1, 4, 2).pack()) == C_MAJOR_TRIAD
        assert chroma_chord_from_kpdve(KPDVE(0, 0, 2, 4, 2).pack()) == G_MAJOR_TRIAD

    def test_key_transposes_by_fifths(self) -> None:
        """Key 1 is a fifth above key 0."""
        assert chroma_chord_from_kpdve(KPDVE(1, 0, 0, 4, 2).pack()) == C_MAJOR_TRIAD

    def test_scale(self) -> None:
        assert circle_scale_from_kpdve(34) == 0b1111111
        assert chroma_scale_from_kpdve(34) == C_MAJOR_SCALE

    def test_scale_ignores_voicing_and_extension(self) -> None:
        assert chroma_scale_from_kpdve(KPDVE(0, 0, 0, 1, 0).pack()) == C_MAJOR_SCALE

    def test_root(self) -> None:
        """The root of the default chord is F."""
        assert circle_root_from_kpdve(34) == 1
        assert chroma_root_from_kpdve(34) == 1 << 5

    def test_extension(self) -> None:
        """The top of a lydian F triad is C."""
        assert circle_ext_from_kpdve(34) == 0b10
        assert chroma_ext_from_kpdve(34) == 1

    @pytest.mark.parametrize("kpdve", [34, 7586, 30562, 98, 162])
    def test_root_and_extension_are_chord_tones(self, kpdve: int) -> None:
        chord = chroma_chord_from_kpdve(kpdve)
        assert chroma_root_from_kpdve(kpdve) & chord == chroma_root_from_kpdve(kpdve)
        assert chroma_ext_from_kpdve(kpdve) & chord == chroma_ext_from_kpdve(kpdve)
