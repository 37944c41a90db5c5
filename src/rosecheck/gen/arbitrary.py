# src/rosecheck/gen/arbitrary.py
"""Arbitrary: explicit generator/shrinker capability records.

Instead of resolving "the arbitrary instance for type T" by reflection, a
property names its Arbitrary values directly:

    for_all(integers(0, 100), lists(integers()), lambda x, xs: ...)

Shrinker contract:
- shrink(x) yields candidates lazily, in preference order
- every candidate is strictly "smaller" than x, so repeated shrinking
  terminates
- shrinking need not be exhaustive
"""

from __future__ import annotations

import math
import string
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from rosecheck.core.seed import Seed
from rosecheck.gen.generator import (
    Gen,
    choose,
    choose_float,
    elements,
    frequency,
    list_of,
    sized,
    tuple_of,
)

T = TypeVar("T")
U = TypeVar("U")

Shrinker = Callable[[T], Iterable[T]]

DEFAULT_ALPHABET = string.ascii_letters + string.digits + string.punctuation + " "


def no_shrink(value: object) -> tuple[()]:
    return ()


@dataclass(frozen=True, slots=True)
class Arbitrary(Generic[T]):
    """A generator paired with the shrinker for the values it produces.

    Attributes:
        gen: Produces values from a seed and size
        shrinker: Maps a value to its smaller candidates
    """

    gen: Gen[T]
    shrinker: Shrinker[T] = no_shrink

    def produce(self, size: int, seed: Seed) -> T:
        return self.gen.run(seed, size)

    def shrink(self, value: T) -> Iterator[T]:
        return iter(self.shrinker(value))

    def map(self, forward: Callable[[T], U], backward: Callable[[U], T]) -> Arbitrary[U]:
        """Adapt to another type through a pair of conversions."""
        shrinker = self.shrinker

        def shrink(value: U) -> Iterator[U]:
            return (forward(candidate) for candidate in shrinker(backward(value)))

        return Arbitrary(self.gen.map(forward), shrink)

    def filter(self, predicate: Callable[[T], bool]) -> Arbitrary[T]:
        """Restrict generation and shrinking to values satisfying predicate."""
        shrinker = self.shrinker

        def shrink(value: T) -> Iterator[T]:
            return (candidate for candidate in shrinker(value) if predicate(candidate))

        return Arbitrary(self.gen.such_that(predicate), shrink)


def _quot(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def shrink_integral(x: int) -> Iterator[int]:
    """Candidates toward zero: the negation of a negative, 0, then x - x/2, x - x/4, ... x - 1."""
    if x < 0:
        yield -x
    if x != 0:
        yield 0
    i = _quot(x, 2)
    while i != 0:
        yield x - i
        i = _quot(i, 2)


def shrink_list(xs: Sequence[T], shrink_element: Shrinker[T]) -> Iterator[list[T]]:
    """Remove chunks of halving sizes, then shrink one element at a time."""
    items = list(xs)
    n = len(items)
    k = n
    while k > 0:
        for start in range(0, n - k + 1, k):
            yield items[:start] + items[start + k :]
        k //= 2
    for i, item in enumerate(items):
        for smaller in shrink_element(item):
            yield [*items[:i], smaller, *items[i + 1 :]]


def integers(min_value: int | None = None, max_value: int | None = None) -> Arbitrary[int]:
    """Integers, optionally bounded.

    Unbounded sides scale with the size hint. Shrinking moves toward the
    in-range value closest to zero.
    """
    if min_value is not None and max_value is not None and min_value > max_value:
        raise ValueError(f"integers() needs min_value <= max_value, got ({min_value}, {max_value})")

    def with_size(size: int) -> Gen[int]:
        if min_value is not None:
            return choose(min_value, min_value + size)
        if max_value is not None:
            return choose(max_value - size, max_value)
        return choose(-size, size)

    if min_value is not None and max_value is not None:
        gen = choose(min_value, max_value)
    else:
        gen = sized(with_size)

    origin = 0
    if min_value is not None and min_value > 0:
        origin = min_value
    elif max_value is not None and max_value < 0:
        origin = max_value

    def in_range(x: int) -> bool:
        return (min_value is None or x >= min_value) and (max_value is None or x <= max_value)

    def shrink(x: int) -> Iterator[int]:
        return (origin + d for d in shrink_integral(x - origin) if in_range(origin + d))

    return Arbitrary(gen, shrink)


def booleans() -> Arbitrary[bool]:
    def shrink(b: bool) -> tuple[bool, ...]:
        return (False,) if b else ()

    return Arbitrary(choose(0, 1).map(bool), shrink)


def shrink_float(x: float) -> Iterator[float]:
    """0.0, then the truncation, then half (only while |x| >= 1, so it terminates)."""
    if not math.isfinite(x):
        yield 0.0
        return
    if x != 0.0:
        yield 0.0
    truncated = float(math.trunc(x))
    if truncated not in (x, 0.0):
        yield truncated
    if abs(x) >= 1.0 and x / 2 != truncated:
        yield x / 2


def floats() -> Arbitrary[float]:
    return Arbitrary(sized(lambda n: choose_float(-float(n), float(n))), shrink_float)


def sampled_from(values: Sequence[T]) -> Arbitrary[T]:
    """One of values; shrinks toward earlier entries."""
    pool = tuple(values)

    def shrink(x: T) -> Iterator[T]:
        return iter(pool[: pool.index(x)])

    return Arbitrary(elements(pool), shrink)


def text(alphabet: str = DEFAULT_ALPHABET, max_size: int | None = None) -> Arbitrary[str]:
    """Strings over alphabet; characters shrink toward alphabet[0]."""
    if not alphabet:
        raise ValueError("text() needs a non-empty alphabet")
    first = alphabet[0]

    def shrink_char(c: str) -> tuple[str, ...]:
        return (first,) if c != first else ()

    def shrink(s: str) -> Iterator[str]:
        return ("".join(chars) for chars in shrink_list(s, shrink_char))

    return Arbitrary(list_of(elements(alphabet), max_size).map("".join), shrink)


def lists(element: Arbitrary[T], max_size: int | None = None) -> Arbitrary[list[T]]:
    def shrink(xs: list[T]) -> Iterator[list[T]]:
        return shrink_list(xs, element.shrinker)

    return Arbitrary(list_of(element.gen, max_size), shrink)


def tuples(*components: Arbitrary[Any]) -> Arbitrary[tuple[Any, ...]]:
    """Fixed-length tuples; shrinks one component at a time, left to right."""

    def shrink(values: tuple[Any, ...]) -> Iterator[tuple[Any, ...]]:
        for i, (component, value) in enumerate(zip(components, values, strict=True)):
            for smaller in component.shrinker(value):
                yield (*values[:i], smaller, *values[i + 1 :])

    return Arbitrary(tuple_of(*(c.gen for c in components)), shrink)


def optionals(inner: Arbitrary[T]) -> Arbitrary[T | None]:
    """None one time in four; shrinks a value to None first."""

    def shrink(value: T | None) -> Iterator[T | None]:
        if value is None:
            return
        yield None
        yield from inner.shrinker(value)

    return Arbitrary(frequency([(1, Gen.pure(None)), (3, inner.gen)]), shrink)
