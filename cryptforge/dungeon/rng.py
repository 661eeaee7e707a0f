"""Seeded Lehmer generator used by every stochastic decision in generation.

Each sub-generator owns its own ``SeededRandom`` built from the same top-level
seed, so two runs with the same seed and the same call order produce the same
sequence in every layer. The stdlib ``random`` module is only consulted once,
to pick a seed when none was supplied.
"""
from __future__ import annotations

import math
import random
from typing import Optional, Sequence, TypeVar, Union

T = TypeVar("T")

LCG_MODULUS = 2147483647  # 2^31 - 1
LCG_MULTIPLIER = 16807  # 7^5
LCG_INCREMENT = 0

SeedLike = Union[str, int, float, None]


def string_seed(text: str) -> int:
    """Fold a string into a non-negative int with the 31x rolling hash.

    Works on UTF-16 code units and wraps to a signed 32-bit accumulator after
    every step, then takes the absolute value. ``"abc"`` folds to 96354.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def resolve_seed(seed: SeedLike = None) -> int:
    """Turn a user supplied seed into the numeric seed the generator runs on."""
    if seed is None:
        return random.randrange(1, LCG_MODULUS)
    if isinstance(seed, bool):
        return int(seed)
    if isinstance(seed, (int, float)):
        return int(seed)
    return string_seed(str(seed))


class SeededRandom:
    """Linear congruential generator: state = (a * state + c) mod m."""

    def __init__(self, seed: SeedLike = None):
        self.seed = resolve_seed(seed)
        self._initial_state = self._state_for(self.seed)
        self.state = self._initial_state

    @staticmethod
    def _state_for(seed: int) -> int:
        # A zero state would pin the sequence at 0 forever
        state = seed % LCG_MODULUS
        return state or 1

    def reset(self) -> None:
        self.state = self._initial_state

    def next(self) -> float:
        """Return the next value in [0, 1)."""
        self.state = (LCG_MULTIPLIER * self.state + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS

    def next_int(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi], both ends inclusive."""
        return math.floor(self.next() * (hi - lo + 1)) + lo

    def next_float(self, lo: float, hi: float) -> float:
        return self.next() * (hi - lo) + lo

    def next_bool(self, probability: float = 0.5) -> bool:
        return self.next() < probability

    def next_element(self, seq: Sequence[T]) -> T:
        """Pick one element; raises IndexError on an empty sequence."""
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.next_int(0, len(seq) - 1)]

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r}, state={self.state!r})"


def coerce_seed(value) -> Optional[Union[int, str]]:
    """Normalize loosely typed seed input (query strings, CLI flags, JSON).

    Blank or missing values mean "pick one"; all-digit strings become ints so
    ``"42"`` and ``42`` generate the same dungeon; other text stays a string
    and is folded by ``string_seed``.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"seed must be finite: {value!r}")
        return int(value)
    s = str(value).strip()
    if not s:
        return None
    if s.isdigit() or (s.startswith("-") and s[1:].isdigit()):
        return int(s)
    return s


__all__ = [
    "LCG_MODULUS",
    "LCG_MULTIPLIER",
    "LCG_INCREMENT",
    "SeededRandom",
    "coerce_seed",
    "resolve_seed",
    "string_seed",
]
