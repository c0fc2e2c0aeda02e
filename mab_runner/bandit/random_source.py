"""Random sources for Thompson sampling.

``SeededRandom`` is a linear congruential generator whose whole state is a
single integer, so it can be written to the tournament record after every
command and resumed bit-for-bit by the next invocation.
"""

from __future__ import annotations

import random
from typing import Protocol

# Numerical Recipes LCG parameters: X_{n+1} = (a * X_n + c) mod m
_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2**32

# Seeds are folded into [1, 2^31 - 2]
_SEED_MODULUS = 2**31 - 1


class RandomSource(Protocol):
    """Uniform [0, 1) draws plus an optional serializable state."""

    def next(self) -> float: ...

    def get_state(self) -> int | None: ...


class SeededRandom:
    """Deterministic LCG with exportable state."""

    def __init__(self, seed: int) -> None:
        # Floored modulo: a negative seed lands on a different state than a
        # truncating % would give, so earlier tools do not share its stream
        state = seed % _SEED_MODULUS
        if state <= 0:
            state += _SEED_MODULUS - 1
        self._state = state

    def get_state(self) -> int:
        return self._state

    def set_state(self, state: int) -> None:
        # Records written with signed 32-bit arithmetic map onto the same stream
        self._state = int(state) % _MODULUS

    def next(self) -> float:
        self._state = (_MULTIPLIER * self._state + _INCREMENT) % _MODULUS
        return self._state / _MODULUS


class SystemRandomSource:
    """Non-deterministic source used when no seed is configured.

    Its state is never persisted, so unseeded tournaments are not
    reproducible.
    """

    def __init__(self) -> None:
        self._rng = random.Random()

    def next(self) -> float:
        return self._rng.random()

    def get_state(self) -> None:
        return None


def create_random_source(
    seed: int | None, state: int | None = None
) -> RandomSource:
    """Build the random source for a tournament.

    With a seed, the generator is rebuilt from it and then advanced to the
    persisted ``state`` (if any) so the stream continues where the previous
    command left it.
    """
    if seed is None:
        return SystemRandomSource()
    rng = SeededRandom(seed)
    if state is not None:
        rng.set_state(state)
    return rng
