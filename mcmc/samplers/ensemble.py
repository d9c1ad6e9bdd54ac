"""
Affine-invariant ensemble sampler using the stretch move.

Implements the algorithm of Goodman & Weare (2010), "Ensemble samplers
with affine invariance", Comm. App. Math. Comp. Sci. 5(1), 65-80.

The ensemble is split positionally into two halves. Every walker of the
first half is stretched toward a random walker of the second half, then
every walker of the second half is stretched toward a random walker of
the *updated* first half. Within a half the walker updates are
independent and are mapped in parallel with joblib; each walker draws
from its own generator so no random state is shared between workers.
"""

from typing import Callable, Iterator, List, NamedTuple, Tuple
import logging

import numpy as np
from joblib import Parallel, delayed

from ..core.base_sampler import BaseSampler, ChainStep
from ..core.utils import log_uniform, spawn_generators

logger = logging.getLogger(__name__)


class InsufficientWalkersError(ValueError):
    """Raised when an ensemble is too small to be split into two halves."""


class EnsembleState(NamedTuple):
    """Snapshot of the whole ensemble after one iteration."""
    positions: np.ndarray
    log_likelihoods: np.ndarray
    log_priors: np.ndarray

    @property
    def log_posteriors(self) -> np.ndarray:
        return self.log_likelihoods + self.log_priors


def stretch_factor(u: float, a: float = 2.0) -> float:
    """
    Map a U[0, 1) draw to a stretch factor z with density g(z) ~ 1/sqrt(z)
    on [1/a, a].

    For a = 2 this is 0.5 * (1 + 2u + u**2).
    """
    return ((a - 1.0) * u + 1.0) ** 2 / a


class EnsembleSampler(BaseSampler):
    """
    Affine-invariant stretch-move ensemble sampler.

    Calling the sampler with an initial ensemble of shape
    (n_walkers, dimension) returns an infinite lazy iterator of ensemble
    snapshots with the same shape. The first element is the ensemble
    after the first full update; the initial ensemble is not emitted.

    One generator per walker is derived from the sampler's master
    generator each time the sampler is called.
    """

    def __init__(self, log_likelihood: Callable, log_prior: Callable,
                 rng=None, a: float = 2.0, n_jobs: int = 1,
                 backend: str = "threading"):
        """
        Initialize the ensemble sampler.

        Args:
            log_likelihood: position vector -> log likelihood
            log_prior: position vector -> log prior
            rng: Master numpy Generator, integer seed, or None
            a: Stretch scale; stretch factors lie in [1/a, a]
            n_jobs: joblib worker count for the per-half walker updates
            backend: joblib backend used for the per-half map
        """
        super().__init__(log_likelihood, log_prior, rng)
        self.a = float(a)
        self.n_jobs = n_jobs
        self.backend = backend

        self._validate_parameters()

        logger.info(f"Initialized {self.__class__.__name__} with a={self.a}, "
                    f"n_jobs={self.n_jobs}, backend={self.backend}")

    def _validate_parameters(self):
        """Validate sampler parameters."""
        if not np.isfinite(self.a) or self.a <= 1.0:
            raise ValueError(f"Stretch scale a must be finite and > 1, got {self.a}")
        if self.n_jobs == 0:
            raise ValueError("n_jobs must be non-zero")

    def _validate_ensemble(self, initial_ensemble) -> np.ndarray:
        """Check shape and size of an initial ensemble and return a float copy."""
        positions = np.array(initial_ensemble, dtype=np.float64)

        n_walkers = positions.shape[0] if positions.ndim > 0 else 0
        if n_walkers < 2:
            raise InsufficientWalkersError(
                f"Insufficient walkers: the stretch move needs at least 2 "
                f"walkers to form two non-empty halves, got {n_walkers}"
            )
        if positions.ndim != 2:
            raise ValueError(
                f"Ensemble must have shape (n_walkers, dimension), got {positions.shape}"
            )

        dimension = positions.shape[1]
        if n_walkers < 2 * dimension:
            logger.warning(
                f"{n_walkers} walkers for dimension {dimension}; at least "
                f"{2 * dimension} are recommended"
            )
        return positions

    def _stretch_move(self, walker: ChainStep, rng: np.random.Generator,
                      complement: np.ndarray) -> Tuple[ChainStep, bool, np.random.Generator]:
        """
        Propose and accept/reject a stretch move for a single walker.

        The generator is returned alongside the result so that its advanced
        state survives process-based joblib backends.
        """
        z = stretch_factor(rng.random(), self.a)
        partner = complement[rng.integers(len(complement))]

        proposal = self.evaluate(partner + z * (walker.state - partner))

        dimension = len(walker.state)
        log_accept = (proposal.log_posterior - walker.log_posterior
                      + (dimension - 1) * np.log(z))

        if log_uniform(rng) < log_accept:
            return proposal, True, rng
        return walker, False, rng

    def _update_half(self, parallel: Parallel, walkers: List[ChainStep],
                     rngs: List[np.random.Generator],
                     complement: List[ChainStep]) -> List[ChainStep]:
        """Update one half against a fixed complementary half."""
        complement_positions = np.array([w.state for w in complement])

        results = parallel(
            delayed(self._stretch_move)(walker, rng, complement_positions)
            for walker, rng in zip(walkers, rngs)
        )

        updated = []
        for i, (walker, accepted, rng) in enumerate(results):
            rngs[i] = rng
            updated.append(walker)
            self.stats.proposals += 1
            self.stats.accepted += int(accepted)
        return updated

    def steps(self, initial_ensemble) -> Iterator[EnsembleState]:
        """
        Validate the initial ensemble and return the lazy sequence of snapshots.

        Raises:
            InsufficientWalkersError: if the ensemble has fewer than 2 walkers
            ValueError: if the ensemble is not two-dimensional
        """
        positions = self._validate_ensemble(initial_ensemble)
        rngs = spawn_generators(self.rng, len(positions))
        return self._iterate(positions, rngs)

    def _iterate(self, positions: np.ndarray,
                 rngs: List[np.random.Generator]) -> Iterator[EnsembleState]:
        half = len(positions) // 2
        first_rngs, second_rngs = rngs[:half], rngs[half:]

        with Parallel(n_jobs=self.n_jobs, backend=self.backend) as parallel:
            walkers = parallel(delayed(self.evaluate)(p) for p in positions)

            while True:
                first = self._update_half(parallel, walkers[:half],
                                          first_rngs, walkers[half:])
                second = self._update_half(parallel, walkers[half:],
                                           second_rngs, first)
                walkers = first + second

                yield EnsembleState(
                    np.array([w.state for w in walkers]),
                    np.array([w.log_likelihood for w in walkers]),
                    np.array([w.log_prior for w in walkers]),
                )

    def _project(self, step: EnsembleState) -> np.ndarray:
        return step.positions

    def __repr__(self) -> str:
        return (f"EnsembleSampler(a={self.a}, n_jobs={self.n_jobs}, "
                f"acceptance_rate={self.stats.acceptance_rate:.2%})")


def make_ensemble_sampler(log_likelihood: Callable, log_prior: Callable,
                          rng=None, a: float = 2.0, n_jobs: int = 1,
                          backend: str = "threading") -> EnsembleSampler:
    """
    Build an affine-invariant ensemble sampler.

    Returns a callable that maps an initial ensemble, shaped
    (n_walkers, dimension), to an infinite lazy iterator of updated
    ensembles.
    """
    return EnsembleSampler(log_likelihood, log_prior, rng=rng, a=a,
                           n_jobs=n_jobs, backend=backend)
