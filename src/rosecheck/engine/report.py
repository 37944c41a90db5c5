# src/rosecheck/engine/report.py
"""Textual test report and label statistics.

All report text goes through echo(), which writes to sys.stdout (looked up
at call time) and to the innermost active capture() buffer, so a run result
can carry the exact text it printed.

Label statistics:
- summary(): every tag seen, as a percentage of successful tests
- distribution_lines(): unmet coverage requirements first, then the
  observed distribution of plain labels, most frequent first
"""

from __future__ import annotations

import sys
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rosecheck.contracts.results import Summary
    from rosecheck.engine.state import CheckerState

_capture: ContextVar[list[str] | None] = ContextVar("rosecheck_report_capture", default=None)


def echo(text: str = "", *, end: str = "\n") -> None:
    """Write report text to stdout and the active capture buffer."""
    sys.stdout.write(text + end)
    buffer = _capture.get()
    if buffer is not None:
        buffer.append(text + end)


@contextmanager
def capture() -> Iterator[list[str]]:
    """Collect everything echoed inside the block (still printed to stdout)."""
    buffer: list[str] = []
    token = _capture.set(buffer)
    try:
        yield buffer
    finally:
        _capture.reset(token)


def pluralize(text: str, count: int) -> str:
    return text if count == 1 else text + "s"


def summary(state: CheckerState) -> Summary:
    """Each tag seen in a passing test, with its share of successful tests."""
    if state.success_count == 0:
        return ()
    counts = Counter(tag for stamp in state.collected for tag in stamp)
    return tuple((tag, counts[tag] * 100 // state.success_count) for tag in sorted(counts))


def label_percentage(tag: str, state: CheckerState) -> int:
    """Occurrences of tag as a percentage of the successful-test target."""
    occurrences = sum(1 for stamp in state.collected if tag in stamp)
    return 100 * occurrences // state.max_success


def _show_percentage(n: int) -> str:
    return f"{n:>2}%"


def distribution_lines(state: CheckerState) -> list[str]:
    """Unmet coverage requirements, then plain-label distribution (descending)."""
    covers = []
    for tag, required in state.labels.items():
        observed = label_percentage(tag, state)
        if observed < required:
            covers.append(f"only {observed}% {tag}, not {required}%")

    # A test's plain labels (no coverage requirement) form one combined entry
    combined = [
        ", ".join(sorted(tag for tag in stamp if state.labels.get(tag) == 0)) for stamp in state.collected
    ]
    groups = Counter(entry for entry in combined if entry)
    observed_lines = [
        f"{_show_percentage(count * 100 // state.success_count)} {entry}" for entry, count in groups.items()
    ]
    return covers + sorted(observed_lines, reverse=True)


def print_distribution_graph(state: CheckerState) -> None:
    """Finish the current report line with the distribution graph.

    Prints "." when there is nothing to show, " (entry)" for a single entry,
    otherwise ":" followed by one entry per line.
    """
    lines = distribution_lines(state)
    if not lines:
        echo(".")
    elif len(lines) == 1:
        echo(f" ({lines[0]})")
    else:
        echo(":")
        for line in lines:
            echo(line)
