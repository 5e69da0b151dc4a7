"""Seeded pseudo-random generator for KnightSprint.

Every randomized outcome in a game (obstacle placement, AI tie-breaks, AI
noise) is drawn from one xorshift32 stream derived from the game seed, so a
seed plus the sequence of human intents fully determines a game.
"""

from __future__ import annotations

_MASK_32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296


def coerce_seed(seed: int) -> int:
    """Coerce a seed to a nonzero unsigned 32-bit state.

    Zero is the fixed point of xorshift, so it maps to 1.

    Examples:
        >>> coerce_seed(42)
        42
        >>> coerce_seed(0)
        1
        >>> coerce_seed(-1)
        4294967295
    """
    state = int(seed) & _MASK_32
    return state or 1


class SeededGenerator:
    """xorshift32 stream returning floats in [0, 1).

    Calling the generator advances it by one step. Two generators built from
    the same seed produce the same values forever.

    Attributes:
        seed: The seed the stream was created from
        draws: Number of values produced so far
    """

    __slots__ = ("seed", "draws", "_state")

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self.draws = 0
        self._state = coerce_seed(seed)

    @property
    def state(self) -> int:
        """Current unsigned 32-bit internal state."""
        return self._state

    def next_uint32(self) -> int:
        """Advance one step and return the raw unsigned 32-bit value."""
        x = self._state
        x ^= (x << 13) & _MASK_32
        x ^= x >> 17
        x ^= (x << 5) & _MASK_32
        self._state = x
        self.draws += 1
        return x

    def __call__(self) -> float:
        return self.next_uint32() / _TWO_POW_32

    def randbelow(self, n: int) -> int:
        """Return floor(rng() * n)."""
        return int(self() * n)

    def clone(self) -> SeededGenerator:
        """Independent copy positioned at the same point in the stream."""
        twin = SeededGenerator(self.seed)
        twin._state = self._state
        twin.draws = self.draws
        return twin

    def __repr__(self) -> str:
        return f"SeededGenerator(seed={self.seed}, draws={self.draws})"


def make_generator(seed: int) -> SeededGenerator:
    """Create the game's random stream from an integer seed."""
    return SeededGenerator(seed)
