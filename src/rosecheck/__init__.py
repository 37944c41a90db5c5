"""
Rosecheck: property-based testing with lazy shrink trees.

Properties quantify over generated inputs, run for a configurable number of
tests, and shrink any failing input to a small counterexample.

Example:
    from rosecheck import check, for_all, integers

    result = check(for_all(integers(0, 100), lambda x: x < 10), name="small")
    assert result.counterexample == (10,)
"""

from rosecheck.contracts import (
    CheckResult,
    ExistentialFailure,
    Failure,
    FatalOracleError,
    GaveUp,
    NoExpectedFailure,
    Success,
    TestResult,
)
from rosecheck.core import CheckerSettings, ReplaySettings, Seed, load_settings
from rosecheck.engine import Property, check, exists, for_all, for_all_no_shrink, implies, quick_check
from rosecheck.gen import (
    Arbitrary,
    Gen,
    booleans,
    floats,
    integers,
    lists,
    optionals,
    sampled_from,
    text,
    tuples,
)

__version__ = "0.1.0"

__all__ = [
    "Arbitrary",
    "CheckResult",
    "CheckerSettings",
    "ExistentialFailure",
    "Failure",
    "FatalOracleError",
    "Gen",
    "GaveUp",
    "NoExpectedFailure",
    "Property",
    "ReplaySettings",
    "Seed",
    "Success",
    "TestResult",
    "__version__",
    "booleans",
    "check",
    "exists",
    "floats",
    "for_all",
    "for_all_no_shrink",
    "implies",
    "integers",
    "lists",
    "load_settings",
    "optionals",
    "quick_check",
    "sampled_from",
    "text",
    "tuples",
]
