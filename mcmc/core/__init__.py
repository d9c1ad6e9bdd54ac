"""Core functionality shared by the MCMC samplers."""

from .base_sampler import BaseSampler, ChainStep, SamplingStats
from .utils import as_generator, spawn_generators, setup_logging

__all__ = ["BaseSampler", "ChainStep", "SamplingStats",
           "as_generator", "spawn_generators", "setup_logging"]
