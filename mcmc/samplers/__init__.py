"""MCMC samplers: single-chain Metropolis-Hastings and stretch-move ensembles."""

from .metropolis import MetropolisHastingsSampler, make_sampler
from .ensemble import (EnsembleSampler, EnsembleState, InsufficientWalkersError,
                       make_ensemble_sampler, stretch_factor)
from . import proposals

__all__ = ["MetropolisHastingsSampler", "make_sampler",
           "EnsembleSampler", "EnsembleState", "InsufficientWalkersError",
           "make_ensemble_sampler", "stretch_factor", "proposals"]
