"""Small shared helpers: a xorshift64* generator, 64-bit arithmetic and list/string utilities."""

from __future__ import annotations

from typing import Callable, List, MutableSequence, TypeVar

T = TypeVar("T")

_MASK64 = (1 << 64) - 1
_MULTIPLIER = 2685821657736338717


class PRNG:
    """xorshift64* pseudo-random number generator with a 64-bit state.

    Outputs 64-bit numbers, needs no warm-up and has period 2**64 - 1.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        seed &= _MASK64
        if not seed:
            raise ValueError("PRNG seed must be non-zero")
        self._state = seed

    def rand64(self) -> int:
        """Return the next 64-bit pseudo-random number."""
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & _MASK64
        s ^= s >> 27
        self._state = s
        return (s * _MULTIPLIER) & _MASK64

    def sparse_rand(self) -> int:
        """Return a 64-bit number with about one eighth of its bits set."""
        return self.rand64() & self.rand64() & self.rand64()


def mul_hi64(a: int, b: int) -> int:
    """Return the high 64 bits of the 128-bit product of two 64-bit values."""
    return ((a & _MASK64) * (b & _MASK64)) >> 64


def split(s: str, delimiter: str) -> List[str]:
    """Split ``s`` on every occurrence of ``delimiter``.

    An empty string yields an empty list; otherwise empty fields are kept.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    if not s:
        return []
    return s.split(delimiter)


def move_to_front(items: MutableSequence[T], pred: Callable[[T], bool]) -> None:
    """Move the first item satisfying ``pred`` to the front, keeping the others in order."""
    for position, item in enumerate(items):
        if pred(item):
            if position:
                del items[position]
                items.insert(0, item)
            return