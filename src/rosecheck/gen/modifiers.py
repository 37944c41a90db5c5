# src/rosecheck/gen/modifiers.py
"""Input modifiers: wrapper types that adapt an existing Arbitrary.

Each wrapper constrains or re-presents the wrapped value and keeps that
constraint under shrinking. They add no engine behaviour.

Example:
    for_all(Positive.arbitrary(integers()), lambda p: p.value > 0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from rosecheck.gen.arbitrary import Arbitrary, lists, optionals

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Blind(Generic[T]):
    """Shrinks like the wrapped value but is reported as '(*)'."""

    value: T

    def __str__(self) -> str:
        return "(*)"

    @classmethod
    def arbitrary(cls, inner: Arbitrary[T]) -> Arbitrary[Blind[T]]:
        return inner.map(cls, lambda b: b.value)


@dataclass(frozen=True, slots=True)
class Static(Generic[T]):
    """Generated like the wrapped value but never shrunk."""

    value: T

    def __str__(self) -> str:
        return f"Static({self.value})"

    @classmethod
    def arbitrary(cls, inner: Arbitrary[T]) -> Arbitrary[Static[T]]:
        return Arbitrary(inner.gen.map(cls))


@dataclass(frozen=True, slots=True)
class ArrayOf(Generic[T]):
    """An immutable sequence of wrapped values."""

    values: tuple[T, ...]

    def __str__(self) -> str:
        return str(list(self.values))

    @classmethod
    def arbitrary(cls, inner: Arbitrary[T], max_size: int | None = None) -> Arbitrary[ArrayOf[T]]:
        return lists(inner, max_size).map(lambda xs: cls(tuple(xs)), lambda a: list(a.values))


@dataclass(frozen=True, slots=True)
class OptionalOf(Generic[T]):
    """A wrapped value or None."""

    value: T | None

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def arbitrary(cls, inner: Arbitrary[T]) -> Arbitrary[OptionalOf[T]]:
        return optionals(inner).map(cls, lambda o: o.value)


@dataclass(frozen=True, slots=True)
class Positive(Generic[T]):
    """A number strictly greater than zero."""

    value: T

    def __post_init__(self) -> None:
        if not self.value > 0:  # type: ignore[operator]
            raise ValueError(f"Positive requires a value > 0, got {self.value}")

    def __str__(self) -> str:
        return f"Positive({self.value})"

    @classmethod
    def arbitrary(cls, inner: Arbitrary[T]) -> Arbitrary[Positive[T]]:
        magnitude = Arbitrary(inner.gen.map(abs), inner.shrinker)  # type: ignore[arg-type]
        return magnitude.filter(lambda x: x > 0).map(cls, lambda p: p.value)  # type: ignore[operator]


@dataclass(frozen=True, slots=True)
class NonZero(Generic[T]):
    """A number other than zero."""

    value: T

    def __post_init__(self) -> None:
        if self.value == 0:
            raise ValueError("NonZero requires a value != 0")

    def __str__(self) -> str:
        return f"NonZero({self.value})"

    @classmethod
    def arbitrary(cls, inner: Arbitrary[T]) -> Arbitrary[NonZero[T]]:
        return inner.filter(lambda x: x != 0).map(cls, lambda n: n.value)


@dataclass(frozen=True, slots=True)
class NonNegative(Generic[T]):
    """A number greater than or equal to zero."""

    value: T

    def __post_init__(self) -> None:
        if not self.value >= 0:  # type: ignore[operator]
            raise ValueError(f"NonNegative requires a value >= 0, got {self.value}")

    def __str__(self) -> str:
        return f"NonNegative({self.value})"

    @classmethod
    def arbitrary(cls, inner: Arbitrary[T]) -> Arbitrary[NonNegative[T]]:
        return inner.filter(lambda x: x >= 0).map(cls, lambda n: n.value)  # type: ignore[operator]
