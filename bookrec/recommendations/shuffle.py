from __future__ import annotations

import math
import random
from typing import Any, Protocol, Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_GOLDEN_GAMMA = 0x6D2B79F5


class RandomSource(Protocol):
    def random(self) -> float: ...


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class Mulberry32:
    """
    Mulberry32 generator over a 32-bit state.

    Produces the same stream as the common JavaScript implementation for the
    same integer seed, so shuffles are reproducible across clients.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK32

    def random(self) -> float:
        self._state = (self._state + _GOLDEN_GAMMA) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296


def parse_seed(seed: Any) -> int | None:
    """
    Turn a request seed into an integer, or ``None`` when it is unusable.

    Numbers and numeric strings are accepted and floored. Coercion follows
    JavaScript ``Number()``: booleans become 0 or 1 and a blank string is 0.
    Non-numeric strings and non-finite values are treated as absent.
    """
    if seed is None:
        return None
    if isinstance(seed, bool):
        return int(seed)
    if isinstance(seed, str):
        seed = seed.strip()
        if not seed:
            return 0
    try:
        value = float(seed)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return math.floor(value)


def make_rng(seed: Any = None) -> RandomSource:
    """Build a fresh generator for one request."""
    parsed = parse_seed(seed)
    if parsed is None:
        return random.Random()
    return Mulberry32(parsed)


def shuffle(items: Sequence[T], rng: RandomSource) -> list[T]:
    """Fisher-Yates shuffle into a new list; ``items`` is left untouched."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = math.floor(rng.random() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out
