# src/rosecheck/engine/quantifiers.py
"""Universal and existential quantification over generated values.

for_all(a, b, predicate) is nested single-argument quantification:

    for_all(a, b, p) == for_all(a, lambda x: for_all(b, lambda y: p(x, y)))

so the first argument is drawn first and varies slowest. Shrinking an
earlier argument rebuilds the whole quantification over the later ones,
while shrinking a later argument keeps the earlier value fixed.

A predicate that raises is converted into a failed outcome right where it
is called, so nothing raised by user code escapes the tree as an exception.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace
from functools import partial
from typing import Any, TypeVar

from rosecheck.contracts.enums import Quantifier
from rosecheck.contracts.outcome import TestResult, exception_result
from rosecheck.engine.property import Property, Testable, as_property
from rosecheck.engine.rose import Lazy, MkRose, Rose, join_rose, promote
from rosecheck.gen.arbitrary import Arbitrary, Shrinker, no_shrink
from rosecheck.gen.generator import Gen

T = TypeVar("T")
Source = Arbitrary[Any] | Gen[Any]


def _call_predicate(predicate: Callable[[T], Testable], value: T) -> Testable:
    try:
        return predicate(value)
    except Exception as e:
        return exception_result("Test case threw an exception", e)


def _props(shrinker: Shrinker[T], value: T, predicate: Callable[[T], Property]) -> Rose[Gen[Rose[TestResult]]]:
    return MkRose(
        Lazy(lambda: predicate(value).gen),
        lambda: (_props(shrinker, smaller, predicate) for smaller in shrinker(value)),
    )


def shrinking(shrinker: Shrinker[T], value: T, predicate: Callable[[T], Property]) -> Property:
    """Property whose tree is predicate(value) with one child per shrink of value.

    Each child is built the same way from its own shrinks, so the tree keeps
    unfolding as long as the shrinker produces candidates.
    """
    return Property(promote(_props(shrinker, value, predicate)).map(join_rose))


def for_all_shrink(gen: Gen[T], shrinker: Shrinker[T], predicate: Callable[[T], Testable]) -> Property:
    """Quantify predicate over values drawn from gen, shrinking failures with shrinker."""

    def guarded(value: T) -> Property:
        return (
            as_property(_call_predicate(predicate, value))
            .counterexample(str(value))
            .map_total_result(lambda res: res.with_argument(value))
        )

    return Property(gen.bind(lambda value: shrinking(shrinker, value, guarded).gen))


def _unpack(source: Source, *, shrink: bool) -> tuple[Gen[Any], Shrinker[Any]]:
    if isinstance(source, Arbitrary):
        return source.gen, source.shrink if shrink else no_shrink
    if isinstance(source, Gen):
        return source, no_shrink
    raise TypeError(f"Expected an Arbitrary or a Gen to quantify over, got {type(source).__name__}")


def _quantify(sources: Sequence[Source], predicate: Callable[..., Testable], *, shrink: bool) -> Property:
    gen, shrinker = _unpack(sources[0], shrink=shrink)
    rest = sources[1:]
    if not rest:
        return for_all_shrink(gen, shrinker, predicate)
    return for_all_shrink(gen, shrinker, lambda value: _quantify(rest, partial(predicate, value), shrink=shrink))


def _split_arguments(args: tuple[Any, ...], caller: str) -> tuple[Sequence[Source], Callable[..., Testable]]:
    if len(args) < 2:
        raise TypeError(f"{caller}() takes at least one generator followed by a predicate")
    *sources, predicate = args
    if not callable(predicate):
        raise TypeError(f"{caller}() expects a callable predicate as its last argument")
    return sources, predicate


def for_all(*args: Any) -> Property:
    """Quantify a predicate over one or more sources.

    Usage:
        for_all(integers(), integers(), lambda a, b: a + b == b + a)

    Each source is an Arbitrary (failing values are shrunk) or a bare Gen
    (values are not shrunk). The predicate is the last argument and receives
    one value per source, in order.
    """
    sources, predicate = _split_arguments(args, "for_all")
    return _quantify(sources, predicate, shrink=True)


def for_all_no_shrink(*args: Any) -> Property:
    """Like for_all, but never shrinks any argument."""
    sources, predicate = _split_arguments(args, "for_all_no_shrink")
    return _quantify(sources, predicate, shrink=False)


def exists(source: Source, predicate: Callable[[T], Testable]) -> Property:
    """There is a value from source satisfying predicate.

    Checked as the negation of "for all x, not predicate(x)" without
    shrinking. The run stops at the first witness; if the discard budget
    runs out first, the run ends in ExistentialFailure. A predicate that
    raises never counts as a witness.
    """
    gen, _ = _unpack(source, shrink=False)
    refutation = for_all_no_shrink(gen, lambda value: as_property(_call_predicate(predicate, value)).invert())
    return refutation.invert().map_total_result(lambda res: replace(res, quantifier=Quantifier.EXISTENTIAL))
