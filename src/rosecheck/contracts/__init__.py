"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine
(CheckerState is referenced for typing only).

Import patterns:
    from rosecheck.contracts import TestResult, Failure, Quantifier
"""

from rosecheck.contracts.enums import CallbackKind, CallbackTiming, Quantifier
from rosecheck.contracts.errors import FatalOracleError, GeneratorExhaustedError, TreeInvariantError
from rosecheck.contracts.outcome import (
    Callback,
    TestResult,
    exception_result,
    failed,
    lift_bool,
    rejected,
    succeeded,
)
from rosecheck.contracts.results import (
    CheckResult,
    ExistentialFailure,
    Failure,
    GaveUp,
    NoExpectedFailure,
    Success,
    Summary,
)

__all__ = [
    "Callback",
    "CallbackKind",
    "CallbackTiming",
    "CheckResult",
    "ExistentialFailure",
    "Failure",
    "FatalOracleError",
    "GaveUp",
    "GeneratorExhaustedError",
    "NoExpectedFailure",
    "Quantifier",
    "Success",
    "Summary",
    "TestResult",
    "TreeInvariantError",
    "exception_result",
    "failed",
    "lift_bool",
    "rejected",
    "succeeded",
]
