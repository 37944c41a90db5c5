# src/rosecheck/engine/state.py
"""CheckerState: the immutable record threaded through the run loop.

Each loop iteration produces a new state with dataclasses.replace(); no
state is shared or mutated between iterations.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from rosecheck.contracts.enums import Quantifier
from rosecheck.contracts.outcome import TestResult
from rosecheck.core.config import CheckerSettings
from rosecheck.core.seed import Seed
from rosecheck.engine.sizing import SizeSchedule, make_size_schedule


@dataclass(frozen=True, slots=True)
class CheckerState:
    """Counters, limits and statistics for one check run.

    Fields:
        name: Property name used in reports
        max_success / max_discard / max_size: Configured limits
        compute_size: (success_count, discard_count) -> size
        labels: Tag -> highest required coverage percentage seen
        collected: Per-test label snapshots of passing tests, most recent first
        has_fulfilled_expected_failure: expect flag of the latest counted outcome
        seed: Seed for the next test
        successful_shrink_count: Completed shrink passes
        failed_shrink_step_distance: Passing candidates in the current shrink pass
        failed_shrink_step_count: Passing candidates over the whole shrink search
        should_abort: Stop after the current test
        quantifier: Quantifier of the latest counted outcome
    """

    name: str
    max_success: int
    max_discard: int
    max_size: int
    compute_size: SizeSchedule
    seed: Seed
    success_count: int = 0
    discard_count: int = 0
    labels: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    collected: tuple[frozenset[str], ...] = ()
    has_fulfilled_expected_failure: bool = False
    successful_shrink_count: int = 0
    failed_shrink_step_distance: int = 0
    failed_shrink_step_count: int = 0
    should_abort: bool = False
    quantifier: Quantifier = Quantifier.UNIVERSAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    @classmethod
    def initial(cls, name: str, settings: CheckerSettings, seed: Seed | None = None) -> CheckerState:
        """Starting state for a run.

        The seed comes from, in order: the replay settings, the explicit
        seed argument, fresh system entropy.
        """
        replay = settings.replay
        if replay is not None:
            start_seed = replay.parsed_seed
        elif seed is not None:
            start_seed = seed
        else:
            start_seed = Seed.new()
        return cls(
            name=name,
            max_success=settings.max_success,
            max_discard=settings.max_discard,
            max_size=settings.max_size,
            compute_size=make_size_schedule(
                max_success=settings.max_success,
                max_size=settings.max_size,
                replay_size=replay.size if replay is not None else None,
            ),
            seed=start_seed,
        )

    @property
    def current_size(self) -> int:
        return self.compute_size(self.success_count, self.discard_count)

    def merge_labels(self, result: TestResult) -> Mapping[str, int]:
        """Union of the known labels and the outcome's, keeping the max requirement per tag."""
        merged = dict(self.labels)
        for tag, required in result.labels:
            merged[tag] = max(required, merged.get(tag, required))
        return merged

    def after_success(self, result: TestResult, next_seed: Seed) -> CheckerState:
        return replace(
            self,
            success_count=self.success_count + 1,
            labels=self.merge_labels(result),
            collected=(result.stamp, *self.collected),
            has_fulfilled_expected_failure=result.expect,
            seed=next_seed,
            should_abort=result.abort,
            quantifier=result.quantifier,
        )

    def after_discard(self, result: TestResult, next_seed: Seed, *, keep_labels: bool = False) -> CheckerState:
        """State after a discarded test (or an existential non-witness, with keep_labels=True)."""
        return replace(
            self,
            discard_count=self.discard_count + 1,
            labels=self.labels if keep_labels else self.merge_labels(result),
            has_fulfilled_expected_failure=result.expect,
            seed=next_seed,
            should_abort=result.abort,
            quantifier=result.quantifier,
        )

