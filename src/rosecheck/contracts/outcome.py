"""Outcome of one concrete test evaluation.

These types answer: "What did a single evaluation of the predicate produce?"

IMPORTANT:
- TestResult.ok is tri-state: True (passed), False (falsified), None (discarded)
- TestResult is a value object. Combinators return modified copies via
  dataclasses.replace(); nothing mutates an outcome after construction.
- Labels and callbacks are PREPENDED and never deduplicated here. Reporting
  deduplicates when it summarises a run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from rosecheck.contracts.enums import CallbackKind, CallbackTiming, Quantifier

if TYPE_CHECKING:
    from rosecheck.engine.state import CheckerState


@dataclass(frozen=True, slots=True)
class Callback:
    """A hook dispatched by the run loop, never at combinator-application time.

    Attributes:
        timing: POST_TEST (every evaluation) or POST_FINAL_FAILURE (once)
        kind: Whether the hook describes the counterexample
        fn: Receives the checker state and the outcome being reported
    """

    timing: CallbackTiming
    kind: CallbackKind
    fn: Callable[[CheckerState, TestResult], None]


@dataclass(frozen=True, slots=True)
class TestResult:
    """Tri-state result of one evaluation plus its statistics and hooks.

    Fields:
        ok: True passed, False falsified, None discarded
        expect: False once expect_failure() has been applied
        reason: Human-readable explanation of a failure
        exception: repr() of an exception raised by the predicate, if any
        labels: (tag, minimum required percentage) stamps, most recent first
        callbacks: Hooks for the run loop, most recent first
        abort: Stop the run after this outcome ("run once")
        quantifier: Universal unless rewritten by exists()
        arguments: Quantified values that produced this outcome, outermost first
    """

    __test__ = False  # Not a pytest test class

    ok: bool | None
    expect: bool = True
    reason: str = ""
    exception: str | None = None
    labels: tuple[tuple[str, int], ...] = ()
    callbacks: tuple[Callback, ...] = ()
    abort: bool = False
    quantifier: Quantifier = Quantifier.UNIVERSAL
    arguments: tuple[object, ...] = ()

    @property
    def stamp(self) -> frozenset[str]:
        """Set of tags carried by this outcome (the per-test label snapshot)."""
        return frozenset(tag for tag, _ in self.labels)

    def invert(self) -> TestResult:
        """Swap passed and falsified. Discards stay discards."""
        if self.ok is None:
            return self
        return replace(self, ok=not self.ok)

    def with_callback(self, callback: Callback) -> TestResult:
        return replace(self, callbacks=(callback, *self.callbacks))

    def with_label(self, tag: str, required_percentage: int = 0) -> TestResult:
        return replace(self, labels=((tag, required_percentage), *self.labels))

    def with_argument(self, value: object) -> TestResult:
        return replace(self, arguments=(value, *self.arguments))

    def callbacks_for(self, timing: CallbackTiming) -> tuple[Callback, ...]:
        return tuple(cb for cb in self.callbacks if cb.timing == timing)


def succeeded() -> TestResult:
    return TestResult(ok=True)


def failed(reason: str = "") -> TestResult:
    return TestResult(ok=False, reason=reason)


def rejected() -> TestResult:
    return TestResult(ok=None)


def lift_bool(value: bool) -> TestResult:
    """Map a boolean predicate result onto an outcome."""
    if value:
        return succeeded()
    return failed("Falsifiable")


def exception_result(message: str, exc: BaseException) -> TestResult:
    """Failed outcome carrying a captured exception description.

    Args:
        message: Context for where the exception surfaced
        exc: The exception raised by the predicate

    Returns:
        TestResult with ok=False, the description in reason, repr(exc) in exception
    """
    description = f"{type(exc).__name__}: {exc}"
    return TestResult(ok=False, reason=f'{message}: "{description}"', exception=repr(exc))
