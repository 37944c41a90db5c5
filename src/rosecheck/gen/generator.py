# src/rosecheck/gen/generator.py
"""Gen: size- and seed-parameterized value producers.

The engine only ever runs a generator (run(seed, size)) and combines
generators functionally. It never inspects the produced values.

Seed discipline:
- bind() and sequence() split the seed so each sub-generator draws from an
  independent stream
- Primitive draws (choose, elements, ...) derive a stdlib Random from the
  seed they receive, so equal (seed, size) pairs give equal values
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from rosecheck.contracts.errors import GeneratorExhaustedError
from rosecheck.core.seed import Seed

T = TypeVar("T")
U = TypeVar("U")


class Gen(Generic[T]):
    """A value producer run with a seed and a size hint.

    Example:
        pairs = choose(0, 9).bind(lambda n: vector_of(n, choose(0, 1)))
        value = pairs.run(Seed.from_int(7), size=10)
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[Seed, int], T]) -> None:
        self._run = run

    def run(self, seed: Seed, size: int) -> T:
        return self._run(seed, size)

    @staticmethod
    def pure(value: T) -> Gen[T]:
        return Gen(lambda seed, size: value)

    def map(self, f: Callable[[T], U]) -> Gen[U]:
        return Gen(lambda seed, size: f(self._run(seed, size)))

    def bind(self, f: Callable[[T], Gen[U]]) -> Gen[U]:
        def run(seed: Seed, size: int) -> U:
            left, right = seed.split()
            return f(self._run(left, size)).run(right, size)

        return Gen(run)

    def resize(self, size: int) -> Gen[T]:
        """Run with a fixed size, ignoring the size handed in."""
        return Gen(lambda seed, _size: self._run(seed, size))

    def such_that(self, predicate: Callable[[T], bool], max_tries: int = 100) -> Gen[T]:
        """Keep drawing until predicate holds, growing the size on each retry.

        Raises (when run):
            GeneratorExhaustedError: If max_tries draws were all rejected.
        """

        def run(seed: Seed, size: int) -> T:
            for attempt in range(max_tries):
                draw_seed, seed = seed.split()
                value = self._run(draw_seed, size + 2 * attempt)
                if predicate(value):
                    return value
            raise GeneratorExhaustedError(max_tries)

        return Gen(run)


def sized(f: Callable[[int], Gen[T]]) -> Gen[T]:
    """Expose the current size to a generator body."""
    return Gen(lambda seed, size: f(size).run(seed, size))


def choose(lo: int, hi: int) -> Gen[int]:
    """Uniform integer in [lo, hi]."""
    if lo > hi:
        raise ValueError(f"choose() needs lo <= hi, got ({lo}, {hi})")
    return Gen(lambda seed, size: seed.random().randint(lo, hi))


def choose_float(lo: float, hi: float) -> Gen[float]:
    """Uniform float in [lo, hi]."""
    if lo > hi:
        raise ValueError(f"choose_float() needs lo <= hi, got ({lo}, {hi})")
    return Gen(lambda seed, size: seed.random().uniform(lo, hi))


def elements(values: Sequence[T]) -> Gen[T]:
    """One of the given values, uniformly."""
    if not values:
        raise ValueError("elements() needs at least one value")
    pool = tuple(values)
    return choose(0, len(pool) - 1).map(lambda i: pool[i])


def one_of(gens: Sequence[Gen[T]]) -> Gen[T]:
    """Run one of the given generators, picked uniformly."""
    if not gens:
        raise ValueError("one_of() needs at least one generator")
    pool = tuple(gens)
    return choose(0, len(pool) - 1).bind(lambda i: pool[i])


def frequency(weighted: Sequence[tuple[int, Gen[T]]]) -> Gen[T]:
    """Run one of the given generators with probability proportional to its weight."""
    if any(weight < 0 for weight, _ in weighted):
        raise ValueError("frequency() weights must not be negative")
    pool = [(weight, gen) for weight, gen in weighted if weight > 0]
    total = sum(weight for weight, _ in pool)
    if total <= 0:
        raise ValueError("frequency() needs a positive total weight")

    def pick(n: int) -> Gen[T]:
        for weight, gen in pool:
            if n <= weight:
                return gen
            n -= weight
        raise AssertionError("frequency() pick exceeded total weight")  # pragma: no cover

    return choose(1, total).bind(pick)


def sequence(gens: Sequence[Gen[Any]]) -> Gen[list[Any]]:
    """Run each generator in order with its own split seed."""
    pool = tuple(gens)

    def run(seed: Seed, size: int) -> list[Any]:
        out: list[Any] = []
        for gen in pool:
            draw_seed, seed = seed.split()
            out.append(gen.run(draw_seed, size))
        return out

    return Gen(run)


def vector_of(count: int, gen: Gen[T]) -> Gen[list[T]]:
    """Exactly count values from gen."""
    if count < 0:
        raise ValueError(f"vector_of() needs a non-negative count, got {count}")
    return sequence([gen] * count)


def list_of(gen: Gen[T], max_size: int | None = None) -> Gen[list[T]]:
    """A list whose length is drawn from [0, size], capped at max_size."""

    def with_size(size: int) -> Gen[list[T]]:
        upper = size if max_size is None else min(size, max_size)
        return choose(0, max(upper, 0)).bind(lambda n: vector_of(n, gen))

    return sized(with_size)


def tuple_of(*gens: Gen[Any]) -> Gen[tuple[Any, ...]]:
    return sequence(gens).map(tuple)
