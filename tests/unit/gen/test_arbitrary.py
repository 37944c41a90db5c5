# tests/unit/gen/test_arbitrary.py
"""Tests for the Arbitrary catalog and shared shrinkers."""

import math

import pytest

from rosecheck.core.seed import Seed
from rosecheck.gen import (
    Arbitrary,
    booleans,
    floats,
    integers,
    lists,
    no_shrink,
    optionals,
    sampled_from,
    shrink_float,
    shrink_integral,
    shrink_list,
    text,
    tuples,
)

SEED = Seed.from_int(77)


def _produce_many(arb: Arbitrary, n: int = 200, size: int = 30) -> list:
    out = []
    seed = SEED
    for _ in range(n):
        this, seed = seed.split()
        out.append(arb.produce(size, this))
    return out


class TestShrinkIntegral:
    def test_zero_has_no_candidates(self) -> None:
        assert list(shrink_integral(0)) == []

    def test_positive(self) -> None:
        assert list(shrink_integral(10)) == [0, 5, 8, 9]

    def test_negative_tries_absolute_first(self) -> None:
        assert list(shrink_integral(-10)) == [10, 0, -5, -8, -9]

    def test_candidates_strictly_closer_to_zero(self) -> None:
        for x in range(-50, 51):
            for candidate in shrink_integral(x):
                assert abs(candidate) < abs(x) or candidate == -x


class TestShrinkList:
    def test_empty(self) -> None:
        assert list(shrink_list([], shrink_integral)) == []

    def test_removes_chunks_then_shrinks_elements(self) -> None:
        candidates = list(shrink_list([1, 2], shrink_integral))
        assert candidates[:3] == [[], [2], [1]]
        assert [0, 2] in candidates
        assert [1, 0] in candidates
        assert [1, 1] in candidates

    def test_candidates_are_smaller(self) -> None:
        xs = [3, 1, 4, 1, 5]
        for candidate in shrink_list(xs, shrink_integral):
            assert len(candidate) < len(xs) or sum(map(abs, candidate)) < sum(map(abs, xs))


class TestIntegers:
    def test_bounded_draws_in_range(self) -> None:
        assert all(0 <= x <= 100 for x in _produce_many(integers(0, 100)))

    def test_unbounded_draws_scale_with_size(self) -> None:
        assert all(-5 <= x <= 5 for x in _produce_many(integers(), size=5))

    def test_min_only(self) -> None:
        assert all(x >= 10 for x in _produce_many(integers(min_value=10)))

    def test_max_only(self) -> None:
        assert all(x <= -10 for x in _produce_many(integers(max_value=-10)))

    def test_rejects_inverted_bounds(self) -> None:
        with pytest.raises(ValueError):
            integers(5, 1)

    def test_shrinks_toward_zero(self) -> None:
        assert list(integers(0, 100).shrink(10)) == [0, 5, 8, 9]

    def test_shrinks_toward_lower_bound(self) -> None:
        candidates = list(integers(5, 100).shrink(20))
        assert candidates[0] == 5
        assert candidates[-1] == 19
        assert all(5 <= c <= 100 for c in candidates)

    def test_shrinks_toward_upper_bound_when_negative(self) -> None:
        candidates = list(integers(-100, -5).shrink(-20))
        assert candidates[0] == -5
        assert all(-100 <= c <= -5 for c in candidates)

    def test_origin_has_no_candidates(self) -> None:
        assert list(integers(5, 100).shrink(5)) == []


class TestOtherArbitraries:
    def test_booleans(self) -> None:
        assert set(_produce_many(booleans())) == {True, False}
        assert list(booleans().shrink(True)) == [False]
        assert list(booleans().shrink(False)) == []

    def test_floats_in_size_range(self) -> None:
        assert all(-30.0 <= x <= 30.0 for x in _produce_many(floats()))

    def test_shrink_float_terminates(self) -> None:
        x = 12345.678
        steps = 0
        while True:
            candidates = list(shrink_float(x))
            nonzero = [c for c in candidates if c != 0.0]
            if not nonzero:
                break
            x = nonzero[-1]
            steps += 1
            assert steps < 200

    def test_shrink_float_non_finite(self) -> None:
        assert list(shrink_float(math.inf)) == [0.0]

    def test_sampled_from(self) -> None:
        arb = sampled_from(["a", "b", "c"])
        assert set(_produce_many(arb)) == {"a", "b", "c"}
        assert list(arb.shrink("c")) == ["a", "b"]
        assert list(arb.shrink("a")) == []

    def test_text_alphabet_and_length(self) -> None:
        values = _produce_many(text("xy", max_size=4))
        assert all(set(s) <= {"x", "y"} and len(s) <= 4 for s in values)

    def test_text_shrinks_toward_first_character(self) -> None:
        assert "x" in list(text("xy").shrink("y"))

    def test_text_rejects_empty_alphabet(self) -> None:
        with pytest.raises(ValueError):
            text("")

    def test_lists_respect_max_size(self) -> None:
        assert all(len(xs) <= 20 for xs in _produce_many(lists(integers(), max_size=20), size=100))

    def test_tuples_shrink_component_wise(self) -> None:
        arb = tuples(integers(), booleans())
        candidates = list(arb.shrink((2, True)))
        assert (0, True) in candidates
        assert (2, False) in candidates

    def test_optionals_shrink_to_none_first(self) -> None:
        arb = optionals(integers())
        assert list(arb.shrink(4))[0] is None
        assert list(arb.shrink(None)) == []
        assert None in _produce_many(arb)


class TestArbitraryAdapters:
    def test_default_shrinker_is_empty(self) -> None:
        assert Arbitrary(integers().gen).shrinker is no_shrink

    def test_map_round_trips_shrinks(self) -> None:
        as_text = integers(0, 100).map(str, int)
        assert list(as_text.shrink("10")) == ["0", "5", "8", "9"]

    def test_filter_applies_to_shrinks(self) -> None:
        evens = integers(0, 100).filter(lambda x: x % 2 == 0)
        assert all(x % 2 == 0 for x in evens.shrink(10))
        assert all(x % 2 == 0 for x in _produce_many(evens, n=50))
