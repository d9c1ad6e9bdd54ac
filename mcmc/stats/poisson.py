"""Poisson-process sampling and Poisson log-densities."""

from typing import Callable

import numpy as np
from scipy.special import gammaln

from ..core.utils import as_generator


def inhomogeneous_poisson_array(f: Callable[[float], float], rng=None,
                                tmin: float = 0.0, tmax: float = 1.0,
                                fmax: float = 1.0) -> np.ndarray:
    """
    Sample event times of the inhomogeneous Poisson process with rate ``f``.

    Candidates are drawn from a homogeneous process at rate ``fmax`` and
    each is kept with probability f(t) / fmax (thinning). ``fmax`` must
    bound ``f`` on [tmin, tmax].

    Args:
        f: Rate function t -> rate
        rng: numpy Generator, integer seed, or None
        tmin: Start of the observation window
        tmax: End of the observation window
        fmax: Upper bound of f on the window

    Returns:
        Event times in increasing order
    """
    if fmax <= 0:
        raise ValueError(f"fmax must be positive, got {fmax}")
    if tmax < tmin:
        raise ValueError(f"tmax must not precede tmin, got [{tmin}, {tmax}]")
    rng = as_generator(rng)

    samples = []
    t = tmin
    while True:
        t += rng.exponential(1.0 / fmax)
        if t > tmax:
            break
        if fmax * rng.random() <= f(t):
            samples.append(t)

    return np.array(samples, dtype=np.float64)


def log_poisson_pdf(lam: float, n: int) -> float:
    """Returns log P(n | lam) for a Poisson distribution with rate ``lam``."""
    return float(n * np.log(lam) - gammaln(n + 1) - lam)
