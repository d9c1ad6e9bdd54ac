"""Base class for lazy MCMC samplers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, Iterator, NamedTuple
import logging
import time

import numpy as np
from tqdm import tqdm

from .utils import as_generator

logger = logging.getLogger(__name__)


class ChainStep(NamedTuple):
    """A state together with its cached model evaluations."""
    state: Any
    log_likelihood: float
    log_prior: float

    @property
    def log_posterior(self) -> float:
        return self.log_likelihood + self.log_prior


@dataclass
class SamplingStats:
    """Acceptance statistics collected while a sequence is consumed."""
    proposals: int = 0
    accepted: int = 0
    time_elapsed: float = 0.0

    @property
    def acceptance_rate(self) -> float:
        """Fraction of accepted proposals (0 before any proposal)."""
        if self.proposals == 0:
            return 0.0
        return self.accepted / self.proposals


class BaseSampler(ABC):
    """
    Abstract base class for MCMC samplers.

    A sampler is constructed from the model functions and is then called
    with an initial condition. The call returns an infinite iterator; no
    model evaluation happens until the iterator is advanced.

    Subclasses implement steps(), which yields the full per-step record,
    and _project(), which maps that record to the emitted sample.
    """

    def __init__(self, log_likelihood: Callable, log_prior: Callable,
                 rng=None):
        """
        Initialize the sampler.

        Args:
            log_likelihood: state -> float, log of the likelihood
            log_prior: state -> float, log of the prior
            rng: numpy Generator, integer seed, or None for a freshly
                seeded default generator
        """
        if not callable(log_likelihood):
            raise ValueError("log_likelihood must be callable")
        if not callable(log_prior):
            raise ValueError("log_prior must be callable")

        self.log_likelihood = log_likelihood
        self.log_prior = log_prior
        self.rng = as_generator(rng)
        self.stats = SamplingStats()

    def evaluate(self, state) -> ChainStep:
        """Evaluate the model at a state and cache the result."""
        return ChainStep(state,
                         float(self.log_likelihood(state)),
                         float(self.log_prior(state)))

    @abstractmethod
    def steps(self, initial) -> Iterator:
        """
        Produce the infinite sequence of per-step records.

        Args:
            initial: Initial state (or ensemble)

        Returns:
            Lazy iterator over step records
        """
        pass

    @abstractmethod
    def _project(self, step):
        """Map a step record to the sample value emitted by __call__."""
        pass

    def __call__(self, initial) -> Iterator:
        """Return the lazy, infinite sequence of samples from ``initial``."""
        return map(self._project, self.steps(initial))

    def sample(self, initial, n_samples: int, burn_in: int = 0,
               thin: int = 1, progress: bool = False) -> np.ndarray:
        """
        Materialise a finite stretch of the sample sequence.

        Args:
            initial: Initial state (or ensemble)
            n_samples: Number of samples to keep
            burn_in: Number of leading sequence elements to discard
            thin: Keep every thin-th element after burn-in

        Returns:
            Array of the kept samples, stacked along the first axis
        """
        if n_samples < 0:
            raise ValueError(f"n_samples must be non-negative, got {n_samples}")
        if burn_in < 0:
            raise ValueError(f"burn_in must be non-negative, got {burn_in}")
        if thin < 1:
            raise ValueError(f"thin must be at least 1, got {thin}")

        start_time = time.time()
        stop = burn_in + n_samples * thin
        kept = islice(self(initial), burn_in, stop, thin)
        if progress:
            kept = tqdm(kept, total=n_samples,
                        desc=f"{self.__class__.__name__}")

        samples = np.array(list(kept))
        self.stats.time_elapsed += time.time() - start_time

        logger.debug(f"Drew {n_samples} samples with acceptance rate "
                     f"{self.stats.acceptance_rate:.2%}")
        return samples

    @property
    def acceptance_rate(self) -> float:
        """Acceptance rate over everything consumed so far."""
        return self.stats.acceptance_rate

    def reset_stats(self):
        """Reset acceptance statistics."""
        self.stats = SamplingStats()
