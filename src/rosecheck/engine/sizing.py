# src/rosecheck/engine/sizing.py
"""Size scheduling: which size hint each test is generated with.

Sizes cycle through [0, max_size) as tests pass, so small inputs are tried
first and every size gets roughly equal coverage across the success target.
When the target is not a multiple of max_size, the last partial cycle is
stretched to still reach sizes close to max_size. Discards nudge the size
up by discard_count // 10 so a run that keeps discarding does not keep
retrying the same size.
"""

from __future__ import annotations

from collections.abc import Callable

SizeSchedule = Callable[[int, int], int]


def _round_to(n: int, m: int) -> int:
    return (n // m) * m


def make_size_schedule(*, max_success: int, max_size: int, replay_size: int | None = None) -> SizeSchedule:
    """Build the (success_count, discard_count) -> size function for a run.

    Args:
        max_success: Successful tests needed to pass
        max_size: Largest size handed to generators
        replay_size: Fixed size for the very first test of a replayed run

    Returns:
        A pure function returning a size in [0, max_size]
        (or replay_size for the first test of a replay).
    """

    def compute(success_count: int, discard_count: int) -> int:
        if max_size == 0:
            return 0
        nudge = discard_count // 10
        if (
            _round_to(success_count, max_size) + max_size <= max_success
            or success_count >= max_success
            or max_success % max_size == 0
        ):
            return min(success_count % max_size + nudge, max_size)
        stretched = (success_count % max_size) * max_size // (max_success % max_size)
        return min(stretched + nudge, max_size)

    if replay_size is None:
        return compute

    def replaying(success_count: int, discard_count: int) -> int:
        if success_count == 0 and discard_count == 0:
            return replay_size
        return compute(success_count, discard_count)

    return replaying
