"""
MCMC Sampler Package

Lazy Metropolis-Hastings and affine-invariant ensemble samplers for
Bayesian inference with arbitrary state types and proposal kernels.
"""

__version__ = "1.0.0"

from . import core
from . import samplers
from . import stats

from .samplers import make_sampler, make_ensemble_sampler, InsufficientWalkersError

__all__ = ["core", "samplers", "stats",
           "make_sampler", "make_ensemble_sampler", "InsufficientWalkersError"]
