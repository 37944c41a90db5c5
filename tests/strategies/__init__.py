# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import seeds, sizes
"""

from tests.strategies.seeds import raw_seeds, seed_texts, seeds, sizes

__all__ = [
    "raw_seeds",
    "seed_texts",
    "seeds",
    "sizes",
]
