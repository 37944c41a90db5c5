# src/rosecheck/core/seed.py
"""Splittable deterministic seed.

Implements the SplitMix64 scheme: a seed is a 64-bit state plus an odd
64-bit gamma. split() is a pure function producing two statistically
independent child seeds, so a whole run is reproducible from the initial
seed and configuration.

The text form "<state hex>:<gamma hex>" is what failures report and what
replay configuration accepts.
"""

from __future__ import annotations

import random
import secrets
from dataclasses import dataclass

_MASK64 = 0xFFFF_FFFF_FFFF_FFFF
_GOLDEN_GAMMA = 0x9E37_79B9_7F4A_7C15


def _mix64(z: int) -> int:
    z = ((z ^ (z >> 33)) * 0xFF51_AFD7_ED55_8CCD) & _MASK64
    z = ((z ^ (z >> 33)) * 0xC4CE_B9FE_1A85_EC53) & _MASK64
    return z ^ (z >> 33)


def _mix64_variant13(z: int) -> int:
    z = ((z ^ (z >> 30)) * 0xBF58_476D_1CE4_E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D0_49BB_1331_11EB) & _MASK64
    return z ^ (z >> 31)


def _mix_gamma(z: int) -> int:
    z = _mix64_variant13(z) | 1
    # Gammas with too few bit transitions produce correlated streams
    if bin(z ^ (z >> 1)).count("1") < 24:
        z ^= 0xAAAA_AAAA_AAAA_AAAA
    return z


@dataclass(frozen=True, slots=True)
class Seed:
    """Immutable SplitMix64 seed.

    Example:
        seed = Seed.from_int(42)
        left, right = seed.split()
        value = left.random().randint(0, 10)
        assert Seed.parse(str(seed)) == seed
    """

    state: int
    gamma: int

    def __post_init__(self) -> None:
        if not 0 <= self.state <= _MASK64:
            raise ValueError(f"Seed state must fit in 64 bits, got {self.state}")
        if not 0 < self.gamma <= _MASK64 or self.gamma % 2 == 0:
            raise ValueError(f"Seed gamma must be an odd 64-bit value, got {self.gamma}")

    @classmethod
    def from_int(cls, value: int) -> Seed:
        return cls(_mix64(value & _MASK64), _mix_gamma((value + _GOLDEN_GAMMA) & _MASK64))

    @classmethod
    def new(cls) -> Seed:
        """Draw a fresh seed from system entropy."""
        return cls.from_int(secrets.randbits(64))

    @classmethod
    def parse(cls, text: str) -> Seed:
        """Inverse of str(seed).

        Raises:
            ValueError: If the text is not two hex fields or the gamma is even.
        """
        state_text, sep, gamma_text = text.strip().partition(":")
        if not sep:
            raise ValueError(f"Seed text must look like '<state>:<gamma>', got {text!r}")
        try:
            state = int(state_text, 16)
            gamma = int(gamma_text, 16)
        except ValueError as e:
            raise ValueError(f"Seed fields must be hexadecimal, got {text!r}") from e
        return cls(state, gamma)

    def split(self) -> tuple[Seed, Seed]:
        """Return two independent seeds. Pure: same input, same output."""
        first = (self.state + self.gamma) & _MASK64
        second = (first + self.gamma) & _MASK64
        return Seed(second, self.gamma), Seed(_mix64(first), _mix_gamma(second))

    def next_int(self) -> tuple[int, Seed]:
        """Return a 64-bit value and the advanced seed."""
        state = (self.state + self.gamma) & _MASK64
        return _mix64(state), Seed(state, self.gamma)

    def random(self) -> random.Random:
        """A stdlib Random seeded deterministically from this seed."""
        value, _ = self.next_int()
        return random.Random(value)

    def __str__(self) -> str:
        return f"{self.state:016x}:{self.gamma:016x}"
