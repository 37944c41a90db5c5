# tests/strategies/seeds.py
"""Strategies for seeds and size hints."""

from hypothesis import strategies as st

from rosecheck.core.seed import Seed

MAX_UINT64 = 2**64 - 1

seeds = st.builds(Seed.from_int, st.integers(min_value=0, max_value=MAX_UINT64))

raw_seeds = st.builds(
    Seed,
    st.integers(min_value=0, max_value=MAX_UINT64),
    st.integers(min_value=0, max_value=MAX_UINT64 // 2).map(lambda n: 2 * n + 1),
)

seed_texts = seeds.map(str)

sizes = st.integers(min_value=0, max_value=100)
