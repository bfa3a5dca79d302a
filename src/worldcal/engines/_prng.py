"""
worldcal.engines._prng
----------------------
Deterministic string hashing and pseudo-random generation with exact
32-bit wrap-around semantics, so selections agree with the browser-side
widgets bit for bit.
"""

from __future__ import annotations

from typing import Callable, List, MutableSequence, TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit multiply, result as unsigned 32-bit."""
    return ((a & MASK32) * (b & MASK32)) & MASK32


def _utf16_units(s: str) -> List[int]:
    data = s.encode("utf-16-le")
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


def cyrb53(s: str, seed: int = 0) -> int:
    """53-bit hash of a string (two 32-bit lanes, folded)."""
    h1 = (0xDEADBEEF ^ seed) & MASK32
    h2 = (0x41C6CE57 ^ seed) & MASK32
    for ch in _utf16_units(s):
        h1 = _imul(h1 ^ ch, 2654435761)
        h2 = _imul(h2 ^ ch, 1597334677)
    h1 = _imul(h1 ^ (h1 >> 16), 2246822507) ^ _imul(h2 ^ (h2 >> 13), 3266489909)
    h2 = _imul(h2 ^ (h2 >> 16), 2246822507) ^ _imul(h1 ^ (h1 >> 13), 3266489909)
    return 4294967296 * (0x1FFFFF & h2) + h1


def mulberry32(seed: int) -> Callable[[], float]:
    """Returns a generator of floats in [0, 1) seeded with `seed`."""
    state = seed

    def next_random() -> float:
        nonlocal state
        state += 0x6D2B79F5
        t = state & MASK32
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / 4294967296

    return next_random


def shuffle_in_place(items: MutableSequence[T], rand: Callable[[], float]) -> MutableSequence[T]:
    """Fisher-Yates from the tail, consuming one draw per position."""
    m = len(items)
    while m:
        i = int(rand() * m)
        m -= 1
        items[m], items[i] = items[i], items[m]
    return items
