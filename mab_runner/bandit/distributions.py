"""Distribution primitives built on a :class:`RandomSource`.

Only :func:`normal_sample` is on the Thompson sampling path.
:func:`gamma_sample` is kept for posterior families other than Gaussian.
"""

from __future__ import annotations

import math
import sys

from mab_runner.bandit.random_source import RandomSource

_TINY = sys.float_info.min


def _positive_uniform(rng: RandomSource) -> float:
    """Uniform draw with 0 replaced by the smallest positive float."""
    u = rng.next()
    return u if u > 0.0 else _TINY


def standard_normal(rng: RandomSource) -> float:
    """Box-Muller transform: one N(0, 1) draw from two uniforms."""
    u1 = _positive_uniform(rng)
    u2 = rng.next()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def normal_sample(rng: RandomSource, mean: float, std_dev: float) -> float:
    """Draw from N(mean, std_dev^2). Consumes exactly two uniforms."""
    return mean + std_dev * standard_normal(rng)


def gamma_sample(rng: RandomSource, shape: float) -> float:
    """Draw from Gamma(shape, 1).

    shape == 1 is the exponential distribution. Smaller shapes use the
    Ahrens-Dieter rejection method, larger ones Marsaglia-Tsang (2000).
    """
    if shape <= 0:
        raise ValueError(f"Gamma shape must be positive, got {shape}")

    if shape == 1.0:
        return -math.log(_positive_uniform(rng))

    if shape < 1.0:
        while True:
            u = rng.next()
            v = -math.log(_positive_uniform(rng))
            if u <= 1.0 - shape:
                x = math.pow(u, 1.0 / shape)
                if x <= v:
                    return x
            else:
                y = -math.log((1.0 - u) / shape)
                x = math.pow(1.0 - shape + shape * y, 1.0 / shape)
                if x <= v + y:
                    return x

    d = shape - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)
    while True:
        z = standard_normal(rng)
        if z <= -1.0 / c:
            continue
        v = (1.0 + c * z) ** 3
        u = _positive_uniform(rng)
        if math.log(u) < 0.5 * z * z + d - d * v + d * math.log(v):
            return d * v
