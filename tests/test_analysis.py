"""
Tests for candidate enumeration and context resolution.

Tests cover:
- Enumerator order and contents
- Weighted KPD distance
- ContextResolver selection and tie-breaking
- Config-driven resolver behaviour
"""

import pytest

from chuk_kpdve.analysis import (
    Candidate,
    ContextResolver,
    biased_mod_distance,
    default_resolver,
    enumerate_candidates,
    iter_candidates,
    kpd_distance,
    mod_distance,
    undo_kp_for_input_val,
)
from chuk_kpdve.core import KPDVE, bit_count, chroma_chord_from_kpdve, chroma_to_circle
from chuk_kpdve.models import AxisBiases, AxisWeights, ResolverConfig

F_MAJOR_TRIAD = 0b001000100001
C_MAJOR_SCALE = 0b101010110101
CHROMATIC_CLUSTER = 0b000000000111


def pack(k: int, p: int, d: int, v: int = 0, e: int = 0) -> int:
    return KPDVE(k, p, d, v, e).pack()


class TestEnumerator:
    """Tests for enumerate_candidates."""

    def test_f_major_count(self) -> None:
        assert len(enumerate_candidates(F_MAJOR_TRIAD)) == 18

    def test_f_major_order(self) -> None:
        """Candidates come out Key-major, Pattern-minor."""
        kps = [(c.kpdve_tuple.k, c.kpdve_tuple.p) for c in enumerate_candidates(F_MAJOR_TRIAD)]
        assert kps == [
            (0, 0), (0, 3), (0, 5), (0, 6),
            (1, 6),
            (7, 3), (7, 4),
            (8, 2),
            (9, 1),
            (10, 0), (10, 1), (10, 2), (10, 4), (10, 5),
            (11, 0), (11, 1), (11, 4), (11, 6),
        ]  # fmt: skip

    def test_first_candidate(self) -> None:
        assert enumerate_candidates(F_MAJOR_TRIAD)[0] == Candidate(kpdve=34, dve=19, ve=7)

    def test_other_key(self) -> None:
        candidate = enumerate_candidates(F_MAJOR_TRIAD)[4]
        assert candidate.kpdve_tuple == KPDVE(1, 6, 6, 4, 2)
        assert candidate.kpdve == 7586
        assert candidate.dve == 73
        assert candidate.ve == 7

    def test_patterns_that_miss_the_altered_tones(self) -> None:
        """In key 0, patterns 3, 5 and 6 leave F A C alone."""
        for candidate in enumerate_candidates(F_MAJOR_TRIAD)[1:4]:
            k, _, d, v, e = candidate.kpdve_tuple
            assert (k, d, v, e) == (0, 0, 4, 2)

    def test_every_candidate_rebuilds_the_chord(self) -> None:
        """Forward-modelling any candidate gives back the input notes."""
        for chroma in (F_MAJOR_TRIAD, C_MAJOR_SCALE, 0b000010010001):
            for candidate in enumerate_candidates(chroma):
                assert chroma_chord_from_kpdve(candidate.kpdve) == chroma

    def test_major_scale(self) -> None:
        kpdves = [c.kpdve for c in enumerate_candidates(C_MAJOR_SCALE)]
        assert kpdves == [pack(0, 0, 0, 4, 6), pack(1, 6, 0, 4, 6), pack(11, 1, 0, 4, 6)]

    def test_unreadable_chords(self) -> None:
        assert enumerate_candidates(CHROMATIC_CLUSTER) == []
        assert enumerate_candidates(0) == []
        assert enumerate_candidates(0xFF) == []

    def test_iter_is_lazy(self) -> None:
        candidates = iter_candidates(F_MAJOR_TRIAD)
        assert next(candidates).kpdve == 34

    def test_undo_kp(self) -> None:
        circle = chroma_to_circle(F_MAJOR_TRIAD)
        assert circle == 19
        assert undo_kp_for_input_val(circle, 0, 0) == 19
        assert undo_kp_for_input_val(circle, 1, 6) == 73

    def test_canonical_shape_has_chord_size(self) -> None:
        for candidate in enumerate_candidates(F_MAJOR_TRIAD):
            assert bit_count(candidate.ve) == 3


class TestDistances:
    """Tests for the distance functions."""

    def test_mod_distance_wraps(self) -> None:
        assert mod_distance(0, 11, 12) == 1
        assert mod_distance(0, 4, 7) == 3
        assert mod_distance(3, 3, 7) == 0

    def test_mod_distance_symmetric(self) -> None:
        for a in range(12):
            for b in range(12):
                assert mod_distance(a, b, 12) == mod_distance(b, a, 12)

    def test_biased_distance(self) -> None:
        assert biased_mod_distance(0, 3, 7, 0.0) == mod_distance(0, 3, 7)
        assert biased_mod_distance(0, 3, 7, 0.5) == pytest.approx(3.9375)

    def test_axis_weights(self) -> None:
        assert kpd_distance(pack(6, 0, 0), pack(0, 0, 0)) == pytest.approx(6.12)
        assert kpd_distance(pack(11, 0, 0), pack(0, 0, 0)) == pytest.approx(1.02)
        assert kpd_distance(pack(0, 6, 0), pack(0, 0, 0)) == pytest.approx(1.01)
        assert kpd_distance(pack(0, 0, 3), pack(0, 0, 0)) == pytest.approx(3.0)

    def test_voicing_and_extension_ignored(self) -> None:
        assert kpd_distance(34, 0) == 0.0
        assert kpd_distance(pack(0, 0, 0, 1, 6), pack(0, 0, 0, 4, 2)) == 0.0

    def test_distance_symmetric(self) -> None:
        assert kpd_distance(30562, 28672) == kpd_distance(28672, 30562)

    def test_all_axes_when_configured(self) -> None:
        resolver = ContextResolver(ResolverConfig(distance_axes=5))
        assert resolver.kpd_distance(34, 0) == pytest.approx(5.0)


class TestContextResolver:
    """Tests for ContextResolver.min_index."""

    def test_same_key_and_pattern_wins(self) -> None:
        kpdves = [c.kpdve for c in enumerate_candidates(F_MAJOR_TRIAD)]
        resolver = default_resolver()
        assert resolver.min_index(kpdves, len(kpdves), pack(1, 6, 0)) == 4
        assert resolver.min_index(kpdves, len(kpdves), pack(0, 0, 5)) == 0

    def test_nearest_when_no_key_matches(self) -> None:
        kpdves = [c.kpdve for c in enumerate_candidates(F_MAJOR_TRIAD)]
        context = pack(7, 0, 0)
        assert context == 28672

        index = default_resolver().min_index(kpdves, len(kpdves), context)
        assert index == 5
        assert kpdves[index] == pack(7, 3, 5, 4, 2)
        assert kpd_distance(kpdves[index], context) == pytest.approx(5.03)

    def test_short_circuit_beats_closer_candidates(self) -> None:
        kpdves = [pack(0, 1, 0), pack(0, 0, 3)]
        context = pack(0, 0, 0)
        assert default_resolver().min_index(kpdves, 2, context) == 1

        resolver = ContextResolver(ResolverConfig(prefer_same_kp=False))
        assert resolver.min_index(kpdves, 2, context) == 0

    def test_ties_keep_the_first(self) -> None:
        kpdves = [pack(1, 0, 0), pack(11, 0, 0)]
        assert default_resolver().min_index(kpdves, 2, pack(0, 0, 0)) == 0
        assert default_resolver().min_index(list(reversed(kpdves)), 2, pack(0, 0, 0)) == 0

    def test_only_length_entries_are_read(self) -> None:
        kpdves = [pack(5, 0, 0), pack(0, 0, 0)]
        assert default_resolver().min_index(kpdves, 1, pack(0, 0, 0)) == 0
        assert default_resolver().min_index(kpdves, 2, pack(0, 0, 0)) == 1

    def test_empty_list(self) -> None:
        assert default_resolver().min_index([], 0, 34) == 0

    def test_weights_change_the_choice(self) -> None:
        """A heavy pattern axis prefers a key change over a pattern change."""
        kpdves = [pack(0, 1, 0), pack(0, 2, 0), pack(1, 0, 0)]
        context = pack(0, 0, 0)
        plain = ContextResolver(ResolverConfig(prefer_same_kp=False))
        assert plain.min_index(kpdves, 3, context) == 0

        heavy = ContextResolver(
            ResolverConfig(
                prefer_same_kp=False,
                axis_scale=AxisWeights(pattern=2.0),
            )
        )
        assert heavy.min_index(kpdves, 3, context) == 2

    def test_bias_is_applied(self) -> None:
        resolver = ContextResolver(ResolverConfig(axis_bias=AxisBiases(pattern=0.5)))
        assert resolver.kpd_distance(pack(0, 3, 0), pack(0, 0, 0)) == pytest.approx(
            3.9375 * 1.01
        )

    def test_default_resolver_is_shared(self) -> None:
        assert default_resolver() is default_resolver()
        assert default_resolver().config == ResolverConfig()
