# src/rosecheck/engine/runner.py
"""Run loop: evaluates a property test by test until a terminal result.

Each iteration:
1. Computes the size from the success and discard counts and splits the
   seed into one half for this test and one half for the next
2. Forces the property's evaluation tree and dispatches POST_TEST callbacks
3. Classifies the outcome:
   - passed: count a success (labels merged, snapshot recorded)
   - discarded: count a discard
   - falsified, existential: count a discard and remember an
     ExistentialFailure in case the budget runs out without a witness
   - falsified, expected to fail: Success ("failed as expected")
   - falsified: shrink to a minimal counterexample and end with Failure

The loop stops through one of:
- done testing: success target reached, abort requested, or an
  existential witness found -> Success or NoExpectedFailure
- give up: discard budget exhausted -> GaveUp (or ExistentialFailure)

Every iteration raises either the success or the discard count, so a run
evaluates at most max_success + max_discard tests before shrinking.
"""

from __future__ import annotations

from dataclasses import replace

from rosecheck.contracts.enums import Quantifier
from rosecheck.contracts.results import (
    CheckResult,
    ExistentialFailure,
    Failure,
    GaveUp,
    NoExpectedFailure,
    Success,
)
from rosecheck.core.config import CheckerSettings
from rosecheck.core.logging import get_logger
from rosecheck.core.seed import Seed
from rosecheck.engine.property import Property, Testable, as_property
from rosecheck.engine.report import capture, echo, pluralize, print_distribution_graph, summary
from rosecheck.engine.rose import reduce
from rosecheck.engine.shrinking import (
    dispatch_after_final_failure_callbacks,
    dispatch_after_test_callbacks,
    find_minimal_failing_case,
    raise_on_exception,
    report_minimum_case_found,
)
from rosecheck.engine.state import CheckerState

logger = get_logger(__name__)

EXISTENTIAL_REASON = "Could not satisfy existential"


def check(
    testable: Testable,
    name: str = "",
    settings: CheckerSettings | None = None,
    *,
    seed: Seed | None = None,
) -> CheckResult:
    """Check a property and return how the run ended.

    The textual report is written to stdout and also returned in the
    result's output field.

    Args:
        testable: A Property, bool or TestResult
        name: Proposition name shown in the report
        settings: Run limits and optional replay (defaults when omitted)
        seed: Starting seed when not replaying; fresh entropy when omitted

    Returns:
        Exactly one of Success, GaveUp, Failure, ExistentialFailure,
        NoExpectedFailure.

    Raises:
        FatalOracleError: If the predicate raised for a failing test.
        TypeError: If testable is not a Property, bool or TestResult.
    """
    prop = as_property(testable)
    state = CheckerState.initial(name, settings if settings is not None else CheckerSettings(), seed)
    logger.info(
        "check_started",
        name=name,
        seed=str(state.seed),
        max_success=state.max_success,
        max_discard=state.max_discard,
        max_size=state.max_size,
    )

    with capture() as buffer:
        result = _run(state, prop)
    result = replace(result, output="".join(buffer))

    logger.info(
        "check_finished",
        name=name,
        result=type(result).__name__,
        passed=result.passed,
        num_tests=result.num_tests,
    )
    return result


def quick_check(testable: Testable, name: str = "", **overrides: int) -> bool:
    """Check with default settings (optionally overridden) and return only pass/fail.

    Usage:
        assert quick_check(for_all(integers(), lambda x: x == x), max_success=50)
    """
    return check(testable, name, CheckerSettings(**overrides)).passed


def _run(state: CheckerState, prop: Property) -> CheckResult:
    while True:
        outcome, state = _run_a_test(state, prop)

        if isinstance(outcome, ExistentialFailure):
            if state.discard_count >= state.max_discard:
                if state.success_count == 0:
                    return _report_existential_failure(state, outcome)
                return _done_testing(state)
            continue
        if outcome is not None:
            return outcome

        if (
            state.success_count >= state.max_success
            or state.should_abort
            or (state.quantifier is Quantifier.EXISTENTIAL and state.success_count > 0)
        ):
            return _done_testing(state)
        if state.discard_count > 0 and state.discard_count >= state.max_discard:
            return _give_up(state)


def _run_a_test(state: CheckerState, prop: Property) -> tuple[CheckResult | None, CheckerState]:
    """Evaluate one test.

    Returns:
        (None, next state) to keep looping, (ExistentialFailure, next state)
        for an existential non-witness, or (terminal result, state).
    """
    size = state.current_size
    this_seed, next_seed = state.seed.split()

    node = reduce(prop.gen.run(this_seed, size))
    result = node.result
    dispatch_after_test_callbacks(state, result)

    if result.ok is True:
        return None, state.after_success(result, next_seed)
    if result.ok is None:
        return None, state.after_discard(result, next_seed)

    if result.quantifier is Quantifier.EXISTENTIAL:
        next_state = state.after_discard(result, next_seed, keep_labels=True)
        candidate = ExistentialFailure(
            num_tests=next_state.discard_count,
            seed=str(state.seed),
            size=size,
            reason=EXISTENTIAL_REASON,
            labels=summary(state),
            last_result=result,
        )
        return candidate, next_state

    raise_on_exception(state, result)
    num_tests = state.success_count + 1

    if not result.expect:
        echo("+++ OK, failed as expected. ", end="")
        report_minimum_case_found(state, result)
        return Success(num_tests=num_tests, labels=summary(state)), state

    echo("*** Failed! ", end="")
    shrunk, minimal = find_minimal_failing_case(state, result, node.children())
    echo(f"Replay with seed {state.seed} and size {size}")
    logger.info(
        "property_falsified",
        name=state.name,
        num_tests=num_tests,
        shrinks=shrunk.successful_shrink_count,
        seed=str(state.seed),
        size=size,
    )
    failure = Failure(
        num_tests=num_tests,
        num_shrinks=shrunk.successful_shrink_count,
        num_shrink_tries=shrunk.failed_shrink_step_count - shrunk.failed_shrink_step_distance,
        num_shrink_final=shrunk.failed_shrink_step_distance,
        seed=str(state.seed),
        size=size,
        reason=minimal.reason,
        labels=summary(state),
        counterexample=minimal.arguments,
    )
    return failure, shrunk


def _done_testing(state: CheckerState) -> CheckResult:
    count = state.success_count
    if state.has_fulfilled_expected_failure:
        echo(f"*** Passed {count} {pluralize('test', count)}", end="")
        print_distribution_graph(state)
        return Success(num_tests=count, labels=summary(state))
    echo(f"*** Failed! Passed {count} {pluralize('test', count)} but expected a failure", end="")
    print_distribution_graph(state)
    return NoExpectedFailure(num_tests=count, labels=summary(state))


def _give_up(state: CheckerState) -> GaveUp:
    count = state.success_count
    echo(f"*** Gave up! Passed only {count} {pluralize('test', count)}", end="")
    print_distribution_graph(state)
    logger.warning(
        "check_gave_up",
        name=state.name,
        num_tests=count,
        discarded=state.discard_count,
    )
    return GaveUp(num_tests=count, labels=summary(state))


def _report_existential_failure(state: CheckerState, result: ExistentialFailure) -> ExistentialFailure:
    count = state.discard_count
    echo("*** Failed! ", end="")
    echo(f"Proposition: {state.name}")
    echo(f"{result.reason} (after {count} {pluralize('test', count)}):")
    dispatch_after_final_failure_callbacks(state, result.last_result)
    logger.info(
        "existential_exhausted",
        name=state.name,
        discarded=count,
        seed=result.seed,
        size=result.size,
    )
    return result
