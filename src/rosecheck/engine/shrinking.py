# src/rosecheck/engine/shrinking.py
"""Greedy shrink search over the evaluation tree of a failing test.

Starting from the failing root, each pass forces the current candidates in
generation order and descends into the FIRST one that still fails. The
search stops when a pass finds no failing candidate (or there are no
candidates left), so the result is a local minimum along one path, not the
smallest failing input overall.

All counters are local to one search and handed back in the returned state.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace

from rosecheck.contracts.enums import CallbackTiming
from rosecheck.contracts.errors import FatalOracleError
from rosecheck.contracts.outcome import TestResult
from rosecheck.core.logging import get_logger
from rosecheck.engine.report import echo, pluralize
from rosecheck.engine.rose import Rose, reduce
from rosecheck.engine.state import CheckerState

logger = get_logger(__name__)


def dispatch_callbacks(state: CheckerState, result: TestResult, timing: CallbackTiming) -> None:
    """Run the outcome's callbacks for one timing, most recently attached first."""
    for callback in result.callbacks_for(timing):
        callback.fn(state, result)


def dispatch_after_test_callbacks(state: CheckerState, result: TestResult) -> None:
    dispatch_callbacks(state, result, CallbackTiming.POST_TEST)


def dispatch_after_final_failure_callbacks(state: CheckerState, result: TestResult) -> None:
    dispatch_callbacks(state, result, CallbackTiming.POST_FINAL_FAILURE)


def raise_on_exception(state: CheckerState, result: TestResult) -> None:
    """Abort the run when a failing outcome came from the predicate raising."""
    if result.exception is not None:
        raise FatalOracleError(state.name, result.reason, result.arguments)


def find_minimal_failing_case(
    state: CheckerState,
    result: TestResult,
    children: Iterator[Rose[TestResult]],
) -> tuple[CheckerState, TestResult]:
    """Shrink a failing outcome and report the minimal case found.

    Args:
        state: State at the failing test (shrink counters start from it)
        result: The failing outcome
        children: Shrink candidates of the failing outcome

    Returns:
        (state carrying the shrink counters, the minimal failing outcome)

    Raises:
        FatalOracleError: If the failing outcome or an adopted candidate
            carries a captured exception.
    """
    raise_on_exception(state, result)

    last_result = result
    branches = children
    shrink_count = state.successful_shrink_count
    step_distance = state.failed_shrink_step_distance
    step_count = state.failed_shrink_step_count

    while True:
        passing_in_pass = 0
        saw_candidate = False
        next_branches: Iterator[Rose[TestResult]] | None = None
        for branch in branches:
            saw_candidate = True
            node = reduce(branch)
            candidate = node.result
            dispatch_after_test_callbacks(state, candidate)
            if candidate.ok is False:
                raise_on_exception(state, candidate)
                last_result = candidate
                next_branches = node.children()
                break
            passing_in_pass += 1
            step_count += 1

        if not saw_candidate:
            break
        step_distance = passing_in_pass
        shrink_count += 1
        if next_branches is None:
            break
        branches = next_branches

    shrunk = replace(
        state,
        successful_shrink_count=shrink_count,
        failed_shrink_step_distance=step_distance,
        failed_shrink_step_count=step_count,
    )
    logger.debug(
        "shrink_search_finished",
        name=state.name,
        shrinks=shrink_count,
        passing_candidates=step_count,
    )
    report_minimum_case_found(shrunk, last_result)
    return shrunk, last_result


def report_minimum_case_found(state: CheckerState, result: TestResult) -> None:
    """Print the proposition and reason line, then run final-failure callbacks."""
    num_tests = state.success_count + 1
    line = f"{result.reason} (after {num_tests} {pluralize('test', num_tests)}"
    if state.successful_shrink_count > 1:
        line += f" and {state.successful_shrink_count} {pluralize('shrink', state.successful_shrink_count)}"
    echo(f"Proposition: {state.name}")
    echo(line + "):")
    dispatch_after_final_failure_callbacks(state, result)
