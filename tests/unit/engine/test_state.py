# tests/unit/engine/test_state.py
"""Tests for the immutable checker state."""

import dataclasses
from types import MappingProxyType

import pytest

from rosecheck.contracts import Quantifier, failed, rejected, succeeded
from rosecheck.core.config import CheckerSettings, ReplaySettings
from rosecheck.core.seed import Seed


@pytest.fixture
def state():
    from rosecheck.engine.state import CheckerState

    return CheckerState.initial("prop", CheckerSettings(max_success=10, max_discard=20, max_size=5), Seed.from_int(1))


class TestInitial:
    def test_copies_limits(self, state) -> None:
        assert (state.max_success, state.max_discard, state.max_size) == (10, 20, 5)
        assert state.success_count == 0
        assert state.discard_count == 0
        assert state.quantifier is Quantifier.UNIVERSAL

    def test_uses_explicit_seed(self, state) -> None:
        assert state.seed == Seed.from_int(1)

    def test_replay_seed_wins(self) -> None:
        from rosecheck.engine.state import CheckerState

        replay_seed = Seed.from_int(99)
        settings = CheckerSettings(replay=ReplaySettings(seed=str(replay_seed), size=33))

        state = CheckerState.initial("prop", settings, Seed.from_int(1))

        assert state.seed == replay_seed
        assert state.current_size == 33

    def test_fresh_seed_when_none_given(self) -> None:
        from rosecheck.engine.state import CheckerState

        state = CheckerState.initial("prop", CheckerSettings())
        assert isinstance(state.seed, Seed)

    def test_frozen(self, state) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.success_count = 3

    def test_labels_read_only(self, state) -> None:
        assert isinstance(state.labels, MappingProxyType)


class TestTransitions:
    def test_after_success(self, state) -> None:
        next_seed = Seed.from_int(2)
        result = succeeded().with_label("small", 20)

        nxt = state.after_success(result, next_seed)

        assert nxt.success_count == 1
        assert nxt.discard_count == 0
        assert nxt.seed == next_seed
        assert dict(nxt.labels) == {"small": 20}
        assert nxt.collected == (frozenset({"small"}),)
        assert nxt.has_fulfilled_expected_failure is True
        assert state.success_count == 0

    def test_after_success_carries_abort(self, state) -> None:
        result = dataclasses.replace(succeeded(), abort=True)
        assert state.after_success(result, Seed.from_int(2)).should_abort is True

    def test_collected_most_recent_first(self, state) -> None:
        first = state.after_success(succeeded().with_label("a"), Seed.from_int(2))
        second = first.after_success(succeeded().with_label("b"), Seed.from_int(3))
        assert second.collected == (frozenset({"b"}), frozenset({"a"}))

    def test_labels_keep_max_requirement(self, state) -> None:
        first = state.after_success(succeeded().with_label("t", 30), Seed.from_int(2))
        second = first.after_success(succeeded().with_label("t", 10), Seed.from_int(3))
        assert second.labels["t"] == 30

    def test_after_discard(self, state) -> None:
        nxt = state.after_discard(rejected().with_label("skipped"), Seed.from_int(2))

        assert nxt.discard_count == 1
        assert nxt.success_count == 0
        assert nxt.collected == ()
        assert "skipped" in nxt.labels

    def test_after_discard_keep_labels(self, state) -> None:
        nxt = state.after_discard(failed().with_label("ignored"), Seed.from_int(2), keep_labels=True)
        assert dict(nxt.labels) == {}

    def test_current_size_follows_schedule(self, state) -> None:
        nxt = state.after_success(succeeded(), Seed.from_int(2))
        assert state.current_size == 0
        assert nxt.current_size == 1
