"""Terminal results of a full check run.

These types answer: "How did checking the property end?"

Exactly one of these is produced per run. CheckResult is a closed union;
callers match on the concrete class (or use .passed for a yes/no answer).
Labels are the reporting summary: (tag, percentage of successful tests).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from rosecheck.contracts.outcome import TestResult

Summary = tuple[tuple[str, int], ...]


@dataclass(frozen=True, slots=True)
class Success:
    """The target number of tests passed, or a property failed as expected."""

    passed: ClassVar[bool] = True

    num_tests: int
    labels: Summary
    output: str = ""


@dataclass(frozen=True, slots=True)
class GaveUp:
    """The discard budget ran out before enough tests passed."""

    passed: ClassVar[bool] = False

    num_tests: int
    labels: Summary
    output: str = ""


@dataclass(frozen=True, slots=True)
class Failure:
    """A universal property was falsified.

    Fields:
        num_tests: Tests run up to and including the failing one
        num_shrinks: Completed shrink passes
        num_shrink_tries: Shrink candidates that passed before the final pass
        num_shrink_final: Shrink candidates that passed in the final pass
        seed: Text form of the seed that produced the failure (for replay)
        size: Size that produced the failure (for replay)
        reason: Reason carried by the shrunk outcome
        counterexample: Quantified values of the shrunk outcome, outermost first
    """

    passed: ClassVar[bool] = False

    num_tests: int
    num_shrinks: int
    num_shrink_tries: int
    num_shrink_final: int
    seed: str
    size: int
    reason: str
    labels: Summary
    counterexample: tuple[object, ...] = ()
    output: str = ""


@dataclass(frozen=True, slots=True)
class ExistentialFailure:
    """No witness for an existential property was found within the budget."""

    passed: ClassVar[bool] = False

    num_tests: int
    seed: str
    size: int
    reason: str
    labels: Summary
    last_result: TestResult
    output: str = ""


@dataclass(frozen=True, slots=True)
class NoExpectedFailure:
    """The property was declared to fail (expect_failure) but never did."""

    passed: ClassVar[bool] = False

    num_tests: int
    labels: Summary
    output: str = ""


CheckResult = Success | GaveUp | Failure | ExistentialFailure | NoExpectedFailure
