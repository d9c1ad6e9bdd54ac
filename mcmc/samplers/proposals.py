"""
Ready-made proposal kernels for the Metropolis-Hastings sampler.

Each factory returns a ``(jump, log_jump_prob)`` pair: ``jump`` maps a
state to a candidate state and ``log_jump_prob(old, new)`` returns the
log forward and log backward proposal densities. Only density *ratios*
enter the acceptance rule, so constant normalisations are omitted.
"""

from typing import Callable, Tuple

import numpy as np
from scipy import stats

from ..core.utils import as_generator


def _size(x):
    """Draw shape matching x; None for scalars so draws stay plain floats."""
    shape = np.shape(x)
    return shape if shape else None


def _symmetric(x, y) -> Tuple[float, float]:
    return 0.0, 0.0


def gaussian_random_walk(scale: float = 1.0, rng=None) -> Tuple[Callable, Callable]:
    """Random walk with N(0, scale**2) increments in every coordinate."""
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    rng = as_generator(rng)

    def jump(x):
        return x + scale * rng.standard_normal(_size(x))

    return jump, _symmetric


def uniform_random_walk(width: float = 1.0, rng=None) -> Tuple[Callable, Callable]:
    """Random walk with increments U(-1, 1) * width in every coordinate."""
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    rng = as_generator(rng)

    def jump(x):
        return x + width * rng.uniform(-1.0, 1.0, _size(x))

    return jump, _symmetric


def asymmetric_uniform_walk(width: float = 2.0, p_down: float = 0.3,
                            rng=None) -> Tuple[Callable, Callable]:
    """
    Scalar walk that steps down with probability ``p_down`` and up otherwise.

    Step sizes are U(0, width) in either direction, so the proposal density
    ratio reduces to the ratio of the direction probabilities.
    """
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    if not 0.0 < p_down < 1.0:
        raise ValueError(f"p_down must lie in (0, 1), got {p_down}")
    rng = as_generator(rng)
    log_down, log_up = np.log(p_down), np.log1p(-p_down)

    def jump(x):
        if rng.random() < p_down:
            return x - width * rng.random()
        return x + width * rng.random()

    def log_jump_prob(x, y):
        if y < x:
            return log_down, log_up
        return log_up, log_down

    return jump, log_jump_prob


def independent_gaussian(mean=0.0, scale: float = 1.0,
                         rng=None) -> Tuple[Callable, Callable]:
    """
    Independence proposal drawing every candidate from N(mean, scale**2).

    The forward density is evaluated at the candidate and the backward
    density at the current state.
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    rng = as_generator(rng)
    mean = np.asarray(mean, dtype=np.float64)

    def jump(x):
        return mean + scale * rng.standard_normal(_size(x))

    def log_density(x):
        return float(np.sum(stats.norm.logpdf(x, loc=mean, scale=scale)))

    def log_jump_prob(x, y):
        return log_density(y), log_density(x)

    return jump, log_jump_prob
