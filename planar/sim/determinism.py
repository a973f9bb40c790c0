"""
Determinism helpers.

Goals:
- Provide a small seedable stream (SFC32) whose output is bit-identical on every platform
- Provide stable sub-streams derived from a base seed (avoid hidden coupling between systems)

Non-goals:
- Cryptographic security

An all-zero register state is not rejected: it produces a defined (if poor) sequence.
"""

from __future__ import annotations

import zlib

from config import PLANE_WARMUP_DRAWS

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296


class Sfc32Stream:
    """
    Simple Fast Counter (Chris Doty-Humphrey, PractRand) over four 32-bit registers.

    All mixing is integer arithmetic with 32-bit wraparound; the only float
    operation is the final division by 2^32.
    """

    __slots__ = ("a", "b", "c", "d")

    def __init__(self, a: int, b: int, c: int, d: int):
        self.a = int(a) & _MASK32
        self.b = int(b) & _MASK32
        self.c = int(c) & _MASK32
        self.d = int(d) & _MASK32

    @classmethod
    def from_seed(cls, seed: int, warmup: int = PLANE_WARMUP_DRAWS) -> "Sfc32Stream":
        """Build the stream used for plane generation: registers (0, seed, seed, 1) plus warm-up draws."""
        seed = int(seed) & _MASK32
        stream = cls(0, seed, seed, 1)
        stream.skip(warmup)
        return stream

    @classmethod
    def from_state(cls, state: tuple[int, int, int, int]) -> "Sfc32Stream":
        a, b, c, d = state
        return cls(a, b, c, d)

    @property
    def state(self) -> tuple[int, int, int, int]:
        return (self.a, self.b, self.c, self.d)

    def next_u32(self) -> int:
        a, b, c, d = self.a, self.b, self.c, self.d
        t = (a + b) & _MASK32
        a = b ^ (b >> 9)
        b = (c + (c << 3)) & _MASK32
        c = ((c << 21) | (c >> 11)) & _MASK32
        d = (d + 1) & _MASK32
        t = (t + d) & _MASK32
        c = (c + t) & _MASK32
        self.a, self.b, self.c, self.d = a, b, c, d
        return t

    def next(self) -> float:
        """Return a float in [0, 1) and advance the stream."""
        return self.next_u32() / _TWO_POW_32

    # `random.Random`-style alias so callers can treat this like other RNGs.
    random = next

    def randrange(self, n: int) -> int:
        """Uniform integer in [0, n) using floor(next() * n)."""
        return int(self.next() * n)

    def skip(self, count: int) -> None:
        for _ in range(int(count)):
            self.next_u32()


def derive_seed(base_seed: int, tag: str) -> int:
    # Use stable hashing (NEVER Python's built-in hash(), which is randomized per process).
    crc = zlib.crc32(str(tag).encode("utf-8")) & _MASK32
    return (int(base_seed) ^ crc) & _MASK32


def get_stream(base_seed: int, tag: str) -> Sfc32Stream:
    """
    Get an independent stream for a specific system, derived from the base seed.

    Two systems asking with different tags never share draws, so adding a draw
    in one system does not shift the other's sequence.
    """
    seed = derive_seed(base_seed, tag)
    return Sfc32Stream(seed, seed ^ 0x9E3779B9, seed ^ 0x85EBCA6B, 1)
