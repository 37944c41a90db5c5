# tests/unit/contracts/test_results.py
"""Tests for terminal run results."""

import pytest

from rosecheck.contracts import (
    ExistentialFailure,
    Failure,
    GaveUp,
    NoExpectedFailure,
    Success,
    rejected,
)


class TestPassedFlag:
    """Only Success counts as passed."""

    def test_success_passed(self) -> None:
        assert Success(num_tests=100, labels=()).passed is True

    @pytest.mark.parametrize(
        "result",
        [
            GaveUp(num_tests=3, labels=()),
            Failure(
                num_tests=4,
                num_shrinks=2,
                num_shrink_tries=1,
                num_shrink_final=0,
                seed="0:1",
                size=3,
                reason="Falsifiable",
                labels=(),
            ),
            ExistentialFailure(
                num_tests=500,
                seed="0:1",
                size=0,
                reason="Could not satisfy existential",
                labels=(),
                last_result=rejected(),
            ),
            NoExpectedFailure(num_tests=100, labels=()),
        ],
        ids=["gave-up", "failure", "existential-failure", "no-expected-failure"],
    )
    def test_non_success_not_passed(self, result: object) -> None:
        assert result.passed is False  # type: ignore[attr-defined]


class TestDefaults:
    def test_output_defaults_to_empty(self) -> None:
        assert Success(num_tests=1, labels=()).output == ""

    def test_failure_counterexample_defaults_to_empty(self) -> None:
        failure = Failure(
            num_tests=1,
            num_shrinks=0,
            num_shrink_tries=0,
            num_shrink_final=0,
            seed="0:1",
            size=0,
            reason="Falsifiable",
            labels=(),
        )
        assert failure.counterexample == ()

    def test_passed_is_not_a_field(self) -> None:
        """passed is a class-level constant, so it cannot be overridden per instance."""
        with pytest.raises(TypeError):
            Success(num_tests=1, labels=(), passed=False)  # type: ignore[call-arg]
