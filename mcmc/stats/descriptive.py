"""
Descriptive statistics over finite collections of numeric samples.

All functions accept any finite iterable, including a slice taken from a
sampler's output sequence.
"""

from typing import Callable, Iterable, Optional

import numpy as np


def _as_array(xs) -> np.ndarray:
    if isinstance(xs, np.ndarray):
        return xs.astype(np.float64, copy=False)
    return np.fromiter(xs, dtype=np.float64)


def mean(xs: Iterable[float]) -> float:
    """Returns the mean of a sequence."""
    xs = _as_array(xs)
    return float(np.sum(xs) / len(xs))


def variance(xs: Iterable[float], mu: Optional[float] = None) -> float:
    """
    Returns the unbiased estimator for the variance of a sequence.

    Args:
        xs: Samples
        mu: Pre-computed mean of the samples (computed if omitted)
    """
    xs = _as_array(xs)
    if mu is None:
        mu = mean(xs)
    d = xs - mu
    return float(np.dot(d, d) / (len(xs) - 1))


def std(xs: Iterable[float], mu: Optional[float] = None) -> float:
    """
    Returns the square root of the unbiased variance (itself a biased
    estimator of the standard deviation).
    """
    return float(np.sqrt(variance(xs, mu)))


def p_value(x: float, xs: Iterable[float]) -> float:
    """Returns the fraction of ``xs`` strictly below ``x``."""
    xs = _as_array(xs)
    return float(np.count_nonzero(xs < x) / len(xs))


def percentile(p: float, xs: Iterable, key: Optional[Callable] = None):
    """
    Returns the element closest to percentile ``p`` (in [0, 1]) of ``xs``.

    Uses selection rather than a full sort, so runs in O(n). Returns None
    for an empty collection.

    Args:
        p: Percentile as a fraction in [0, 1]
        xs: Collection to rank; must be numeric unless ``key`` is given
        key: Optional function mapping each element to the number it is
            ranked by, for collections of records or other non-numeric
            elements. The element itself (not its key) is returned.
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Percentile must lie in [0, 1], got {p}")

    if key is None:
        xs = _as_array(xs)
        if len(xs) == 0:
            return None
        i = int(round((len(xs) - 1) * p))
        return float(np.partition(xs, i)[i])

    items = list(xs)
    if not items:
        return None
    i = int(round((len(items) - 1) * p))
    keys = np.fromiter((key(x) for x in items), dtype=np.float64, count=len(items))
    return items[np.argpartition(keys, i)[i]]
