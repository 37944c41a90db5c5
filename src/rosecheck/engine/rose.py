# src/rosecheck/engine/rose.py
"""Lazy evaluation tree (rose tree) carrying a test and its shrink candidates.

A node is either:
- MkRose: a lazily forced outcome plus a thunk producing child nodes, one per
  "smaller" candidate, each expandable in turn
- IORose: a step that must run first to produce a node

Invariants:
- reduce() turns any node into an MkRose, running each IORose step at most
  once (the step is memoized on the node)
- An MkRose forces its outcome at most once; reading it again returns the
  same object
- Children are produced on demand. Each call to children() re-runs the
  child thunk, so the tree may be conceptually infinite
- Each node owns its thunks outright: the structure is a tree, never a graph
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from itertools import chain
from typing import Generic, TypeVar

from rosecheck.contracts.errors import TreeInvariantError
from rosecheck.contracts.outcome import TestResult, exception_result
from rosecheck.gen.generator import Gen

T = TypeVar("T")
U = TypeVar("U")

ChildThunk = Callable[[], Iterable["Rose[T]"]]


def _no_children() -> tuple[()]:
    return ()


class Lazy(Generic[T]):
    """Memoized thunk. The thunk runs at most once and is then released.

    A thunk that raises is memoized too: later forces re-raise the same
    exception without running the thunk again.
    """

    __slots__ = ("_error", "_forced", "_forcing", "_thunk", "_value")

    def __init__(self, thunk: Callable[[], T]) -> None:
        self._thunk: Callable[[], T] | None = thunk
        self._value: T | None = None
        self._error: BaseException | None = None
        self._forced = False
        self._forcing = False

    @classmethod
    def of(cls, value: T) -> Lazy[T]:
        """An already-forced value."""
        lazy: Lazy[T] = cls.__new__(cls)
        lazy._thunk = None
        lazy._value = value
        lazy._error = None
        lazy._forced = True
        lazy._forcing = False
        return lazy

    @property
    def is_forced(self) -> bool:
        return self._forced

    def force(self) -> T:
        if self._error is not None:
            raise self._error
        if self._forced:
            return self._value  # type: ignore[return-value]
        if self._forcing:
            raise TreeInvariantError("Evaluation node forced re-entrantly: the tree contains a cycle")
        assert self._thunk is not None, "unforced Lazy always holds its thunk"
        self._forcing = True
        try:
            self._value = self._thunk()
        except BaseException as e:
            self._error = e
            self._thunk = None
            raise
        finally:
            self._forcing = False
        self._forced = True
        self._thunk = None
        return self._value


class Rose(Generic[T]):
    """Base class for evaluation nodes. Use MkRose or IORose."""

    __slots__ = ()


class MkRose(Rose[T]):
    """Node holding a lazily forced outcome and its shrink candidates."""

    __slots__ = ("_children", "_result")

    def __init__(self, result: Lazy[T], children: ChildThunk[T] = _no_children) -> None:
        self._result = result
        self._children = children

    @classmethod
    def leaf(cls, value: T) -> MkRose[T]:
        return cls(Lazy.of(value))

    @property
    def result(self) -> T:
        """The node's outcome, forced on first access."""
        return self._result.force()

    @property
    def lazy_result(self) -> Lazy[T]:
        return self._result

    @property
    def child_thunk(self) -> ChildThunk[T]:
        return self._children

    def children(self) -> Iterator[Rose[T]]:
        """A fresh iterator over this node's shrink candidates."""
        return iter(self._children())


class IORose(Rose[T]):
    """Node that must run a side-effecting step before it can be read."""

    __slots__ = ("_action",)

    def __init__(self, action: Callable[[], Rose[T]]) -> None:
        self._action: Lazy[Rose[T]] = Lazy(action)

    def step(self) -> Rose[T]:
        return self._action.force()


def reduce(rose: Rose[T]) -> MkRose[T]:
    """Run pending steps until an MkRose is reached.

    Iterative, so long chains of IORose steps do not grow the stack.

    Raises:
        TreeInvariantError: If a step produces something that is not a node.
    """
    current: object = rose
    while isinstance(current, IORose):
        current = current.step()
    if not isinstance(current, MkRose):
        raise TreeInvariantError(f"Expected an evaluation node, got {type(current).__name__}")
    return current


def fmap(f: Callable[[T], U], rose: Rose[T]) -> Rose[U]:
    """Apply f lazily to every outcome in the tree."""
    if isinstance(rose, IORose):
        return IORose(lambda: fmap(f, reduce(rose)))
    node = reduce(rose)  # validates the node type
    return MkRose(
        Lazy(lambda: f(node.result)),
        lambda: (fmap(f, child) for child in node.children()),
    )


def on_rose(f: Callable[[Lazy[T], ChildThunk[T]], Rose[U]], rose: Rose[T]) -> Rose[U]:
    """Rebuild the root from its lazy outcome and child thunk."""
    if isinstance(rose, IORose):
        return IORose(lambda: on_rose(f, reduce(rose)))
    node = reduce(rose)
    return f(node.lazy_result, node.child_thunk)


def join_rose(rose: Rose[Rose[T]]) -> Rose[T]:
    """Flatten a tree of trees.

    The root's outcome is the inner root's outcome. Children are the outer
    shrink candidates (each flattened) followed by the inner candidates, so
    shrinking an outer quantifier is tried before shrinking a nested one.
    """

    def flatten() -> Rose[T]:
        outer = reduce(rose)
        inner = reduce(outer.result)
        return MkRose(
            inner.lazy_result,
            lambda: chain((join_rose(child) for child in outer.children()), inner.children()),
        )

    return IORose(flatten)


def protect_results(rose: Rose[TestResult]) -> Rose[TestResult]:
    """Force each outcome once, converting exceptions into failed outcomes.

    The returned tree holds already-forced outcomes, so traversing it again
    replays the same results without re-running any effect.
    """

    def protect(node: MkRose[TestResult]) -> Rose[TestResult]:
        try:
            result = node.result
        except Exception as e:
            result = exception_result("Exception thrown while forcing result", e)
        return MkRose(
            Lazy.of(result),
            lambda: (protect_results(child) for child in node.children()),
        )

    return IORose(lambda: protect(reduce(rose)))


def promote(rose: Rose[Gen[T]]) -> Gen[Rose[T]]:
    """Turn a tree of generators into a generator of trees.

    Every generator in the tree runs with the same seed and size, so a
    shrink candidate replays the draws of its parent.
    """
    return Gen(lambda seed, size: fmap(lambda gen: gen.run(seed, size), rose))
