# src/rosecheck/engine/property.py
"""Property: a generator of evaluation trees, plus its combinators.

A Property is what the run loop executes: given a seed and a size it
produces a Rose[TestResult]. Every combinator returns a NEW Property; none
of them runs the predicate or any callback when applied. Effects happen
only when the run loop forces and dispatches.

Testable values (anything a predicate may return):
- bool: True passes, False fails with reason "Falsifiable"
- TestResult: used as-is
- Property: used as-is (lets predicates nest quantifiers and combinators)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import Union

from rosecheck.contracts.enums import CallbackKind, CallbackTiming
from rosecheck.contracts.outcome import Callback, TestResult, lift_bool, rejected
from rosecheck.engine.report import echo
from rosecheck.engine.rose import MkRose, Rose, fmap, on_rose, protect_results
from rosecheck.gen.generator import Gen, sized

Testable = Union["Property", bool, TestResult]


class Property:
    """A runnable test: Gen[Rose[TestResult]].

    Example:
        prop = for_all(integers(), lambda x: x + 0 == x).label("identity")
        result = check(prop, name="additive identity")
    """

    __slots__ = ("gen",)

    def __init__(self, gen: Gen[Rose[TestResult]]) -> None:
        self.gen = gen

    @classmethod
    def from_result(cls, result: TestResult) -> Property:
        return cls(Gen.pure(MkRose.leaf(result)))

    # -- structural maps ---------------------------------------------------

    def map_rose(self, f: Callable[[Rose[TestResult]], Rose[TestResult]]) -> Property:
        return Property(self.gen.map(f))

    def map_result(self, f: Callable[[TestResult], TestResult]) -> Property:
        """Transform every outcome; the resulting tree replays forced outcomes."""
        return self.map_rose(lambda rose: protect_results(fmap(f, rose)))

    def map_total_result(self, f: Callable[[TestResult], TestResult]) -> Property:
        """Transform every outcome. f must not raise."""
        return self.map_rose(lambda rose: fmap(f, rose))

    def map_size(self, f: Callable[[int], int]) -> Property:
        return Property(sized(lambda n: self.gen.resize(f(n))))

    # -- callbacks ---------------------------------------------------------

    def callback(self, cb: Callback) -> Property:
        return self.map_total_result(lambda res: res.with_callback(cb))

    def counterexample(self, text: str) -> Property:
        """Print text when this property's final counterexample is reported."""
        return self.callback(
            Callback(
                timing=CallbackTiming.POST_FINAL_FAILURE,
                kind=CallbackKind.COUNTEREXAMPLE,
                fn=lambda state, res: echo(text),
            )
        )

    def when_fail(self, action: Callable[[], None]) -> Property:
        """Run action once, after shrinking settles on a counterexample."""
        return self.callback(
            Callback(
                timing=CallbackTiming.POST_FINAL_FAILURE,
                kind=CallbackKind.NOT_COUNTEREXAMPLE,
                fn=lambda state, res: action(),
            )
        )

    def when_each_fail(self, action: Callable[[TestResult], None]) -> Property:
        """Run action after every failing evaluation, shrink candidates included."""

        def on_test(state: object, res: TestResult) -> None:
            if res.ok is False:
                action(res)

        return self.callback(
            Callback(timing=CallbackTiming.POST_TEST, kind=CallbackKind.NOT_COUNTEREXAMPLE, fn=on_test)
        )

    # -- expectations and control -------------------------------------------

    def expect_failure(self) -> Property:
        """Declare that this property should fail. Passing every test is then an error."""
        return self.map_total_result(lambda res: replace(res, expect=False))

    def once(self) -> Property:
        """Stop the run after the first test that passes."""
        return self.map_total_result(lambda res: replace(res, abort=True))

    def no_shrinking(self) -> Property:
        """Drop every shrink candidate."""
        return self.map_rose(lambda rose: on_rose(lambda result, _children: MkRose(result), rose))

    def invert(self) -> Property:
        """Swap passed and falsified outcomes. Discards are unchanged."""
        return self.map_total_result(TestResult.invert)

    # -- statistics ----------------------------------------------------------

    def cover(self, condition: bool, percentage: int, tag: str) -> Property:
        """Stamp tag when condition holds and require it in percentage% of tests."""
        if not 0 <= percentage <= 100:
            raise ValueError(f"cover() percentage must be within 0..100, got {percentage}")
        if not condition:
            return self
        return self.map_total_result(lambda res: res.with_label(tag, percentage))

    def classify(self, condition: bool, tag: str) -> Property:
        return self.cover(condition, 0, tag)

    def label(self, tag: str) -> Property:
        return self.classify(True, tag)

    def collect(self, value: object) -> Property:
        return self.label(str(value))


def as_property(testable: Testable) -> Property:
    """Convert a predicate's return value into a Property.

    Raises:
        TypeError: If the value is not a bool, TestResult or Property.
    """
    if isinstance(testable, Property):
        return testable
    if isinstance(testable, bool):
        return Property.from_result(lift_bool(testable))
    if isinstance(testable, TestResult):
        return Property.from_result(testable)
    raise TypeError(
        f"Cannot use {type(testable).__name__} as a property. Return a bool, TestResult or Property."
    )


def implies(condition: bool, testable: Testable | Callable[[], Testable]) -> Property:
    """Discard the test unless condition holds.

    testable may be a zero-argument callable, evaluated only when the
    condition holds (so the body can rely on the precondition).
    """
    if not condition:
        return Property.from_result(rejected())
    if callable(testable):
        return as_property(testable())
    return as_property(testable)
