# tests/unit/gen/test_generator.py
"""Tests for Gen and the primitive generator combinators."""

import pytest

from rosecheck.contracts import GeneratorExhaustedError
from rosecheck.core.seed import Seed
from rosecheck.gen import (
    Gen,
    choose,
    choose_float,
    elements,
    frequency,
    list_of,
    one_of,
    sequence,
    sized,
    tuple_of,
    vector_of,
)

SEED = Seed.from_int(2024)


def _draws(gen: Gen, n: int = 200, size: int = 10) -> list:
    out = []
    seed = SEED
    for _ in range(n):
        this, seed = seed.split()
        out.append(gen.run(this, size))
    return out


class TestGenCore:
    def test_pure_ignores_seed_and_size(self) -> None:
        assert Gen.pure(5).run(SEED, 0) == 5
        assert Gen.pure(5).run(Seed.from_int(1), 99) == 5

    def test_run_is_deterministic(self) -> None:
        gen = choose(0, 10**9)
        assert gen.run(SEED, 10) == gen.run(SEED, 10)

    def test_map(self) -> None:
        assert Gen.pure(2).map(lambda x: x * 10).run(SEED, 0) == 20

    def test_bind_uses_independent_halves(self) -> None:
        gen = choose(0, 10**9).bind(lambda a: choose(0, 10**9).map(lambda b: (a, b)))
        a, b = gen.run(SEED, 0)
        assert a != b

    def test_sized_sees_size(self) -> None:
        assert sized(Gen.pure).run(SEED, 42) == 42

    def test_resize_fixes_size(self) -> None:
        assert sized(Gen.pure).resize(3).run(SEED, 42) == 3


class TestSuchThat:
    def test_returns_satisfying_value(self) -> None:
        for value in _draws(choose(0, 100).such_that(lambda x: x % 2 == 0), n=50):
            assert value % 2 == 0

    def test_exhaustion_raises(self) -> None:
        gen = choose(0, 10).such_that(lambda x: x > 10, max_tries=5)
        with pytest.raises(GeneratorExhaustedError) as exc_info:
            gen.run(SEED, 10)
        assert exc_info.value.attempts == 5


class TestPrimitives:
    def test_choose_in_range(self) -> None:
        values = _draws(choose(-3, 3))
        assert set(values) == set(range(-3, 4))

    def test_choose_single_point(self) -> None:
        assert set(_draws(choose(7, 7), n=10)) == {7}

    def test_choose_rejects_inverted_bounds(self) -> None:
        with pytest.raises(ValueError):
            choose(3, 2)

    def test_choose_float_in_range(self) -> None:
        assert all(-1.0 <= v <= 1.0 for v in _draws(choose_float(-1.0, 1.0)))

    def test_elements(self) -> None:
        assert set(_draws(elements("abc"))) == {"a", "b", "c"}

    def test_elements_rejects_empty(self) -> None:
        with pytest.raises(ValueError):
            elements([])

    def test_one_of(self) -> None:
        assert set(_draws(one_of([Gen.pure(1), Gen.pure(2)]))) == {1, 2}

    def test_frequency_respects_zero_weight(self) -> None:
        gen = frequency([(0, Gen.pure("never")), (1, Gen.pure("always"))])
        assert set(_draws(gen, n=50)) == {"always"}

    def test_frequency_mixes_by_weight(self) -> None:
        values = _draws(frequency([(1, Gen.pure("rare")), (9, Gen.pure("common"))]), n=500)
        assert values.count("common") > values.count("rare")

    @pytest.mark.parametrize("weighted", [[], [(0, Gen.pure(1))], [(-1, Gen.pure(1)), (2, Gen.pure(2))]])
    def test_frequency_rejects_bad_weights(self, weighted: list) -> None:
        with pytest.raises(ValueError):
            frequency(weighted)


class TestCollections:
    def test_sequence_preserves_order(self) -> None:
        assert sequence([Gen.pure(1), Gen.pure(2), Gen.pure(3)]).run(SEED, 0) == [1, 2, 3]

    def test_vector_of_exact_length(self) -> None:
        assert len(vector_of(4, choose(0, 9)).run(SEED, 0)) == 4

    def test_vector_of_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            vector_of(-1, Gen.pure(0))

    def test_list_of_bounded_by_size(self) -> None:
        assert all(len(xs) <= 5 for xs in _draws(list_of(choose(0, 1)), size=5))

    def test_list_of_bounded_by_max_size(self) -> None:
        assert all(len(xs) <= 3 for xs in _draws(list_of(choose(0, 1), max_size=3), size=50))

    def test_list_of_size_zero_is_empty(self) -> None:
        assert list_of(choose(0, 1)).run(SEED, 0) == []

    def test_tuple_of(self) -> None:
        assert tuple_of(Gen.pure("a"), Gen.pure(1)).run(SEED, 0) == ("a", 1)
