# src/rosecheck/engine/__init__.py
"""Property engine: evaluation trees, quantifiers, the run loop and shrinking.

This module provides:
- Property and its combinators (label, cover, expect_failure, ...)
- for_all / for_all_no_shrink / exists quantifiers
- check(): runs a property to one terminal CheckResult
- Rose tree primitives used to build and reduce evaluation trees

Example:
    from rosecheck.engine import check, for_all
    from rosecheck.gen import integers, lists

    prop = for_all(lists(integers()), lambda xs: list(reversed(list(reversed(xs)))) == xs)
    result = check(prop, name="reverse is an involution")
"""

from rosecheck.engine.property import Property, Testable, as_property, implies
from rosecheck.engine.quantifiers import exists, for_all, for_all_no_shrink, for_all_shrink, shrinking
from rosecheck.engine.rose import IORose, Lazy, MkRose, Rose, fmap, join_rose, on_rose, promote, protect_results, reduce
from rosecheck.engine.runner import check, quick_check
from rosecheck.engine.sizing import SizeSchedule, make_size_schedule
from rosecheck.engine.state import CheckerState

__all__ = [
    "CheckerState",
    "IORose",
    "Lazy",
    "MkRose",
    "Property",
    "Rose",
    "SizeSchedule",
    "Testable",
    "as_property",
    "check",
    "exists",
    "fmap",
    "for_all",
    "for_all_no_shrink",
    "for_all_shrink",
    "implies",
    "join_rose",
    "make_size_schedule",
    "on_rose",
    "promote",
    "protect_results",
    "quick_check",
    "reduce",
    "shrinking",
]
