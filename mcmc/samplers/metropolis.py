"""
Single-chain Metropolis-Hastings sampler.

The chain is driven by one or more proposal ("jump") kernels applied in
rotation. Each kernel is paired with a function returning the log of the
forward and backward proposal densities, so asymmetric proposals are
corrected for in the acceptance ratio.
"""

from typing import Callable, Iterator, List, Sequence, Tuple, Union
import logging

from ..core.base_sampler import BaseSampler, ChainStep
from ..core.utils import log_uniform

logger = logging.getLogger(__name__)

JumpFn = Callable[[object], object]
LogJumpProbFn = Callable[[object, object], Tuple[float, float]]


def _as_function_list(fns, name: str) -> List[Callable]:
    """Normalise a single callable or a sequence of callables to a list."""
    if callable(fns):
        return [fns]
    fns = list(fns)
    if not fns:
        raise ValueError(f"{name} must contain at least one function")
    for i, fn in enumerate(fns):
        if not callable(fn):
            raise ValueError(f"{name}[{i}] is not callable")
    return fns


class MetropolisHastingsSampler(BaseSampler):
    """
    Metropolis-Hastings sampler with a cyclic rotation of proposal kernels.

    Calling the sampler with an initial state returns an infinite, lazy
    iterator whose first element is the initial state itself and whose
    i-th element is the state after i accept/reject steps. Step i uses
    kernel ``i mod k``.

    The random generator is shared across calls: invoking the sampler
    twice with the same initial state continues the generator rather
    than replaying it.
    """

    def __init__(self, log_likelihood: Callable, log_prior: Callable,
                 jump: Union[JumpFn, Sequence[JumpFn]],
                 log_jump_prob: Union[LogJumpProbFn, Sequence[LogJumpProbFn]],
                 rng=None):
        """
        Initialize the sampler.

        Args:
            log_likelihood: state -> log likelihood
            log_prior: state -> log prior
            jump: A proposal kernel (state -> state) or a sequence of them
            log_jump_prob: (old, new) -> (log forward density, log backward
                density), or a sequence matching ``jump`` one-to-one
            rng: numpy Generator, integer seed, or None
        """
        super().__init__(log_likelihood, log_prior, rng)

        self.jumps = _as_function_list(jump, "jump")
        self.log_jump_probs = _as_function_list(log_jump_prob, "log_jump_prob")

        if len(self.jumps) != len(self.log_jump_probs):
            raise ValueError(
                f"Got {len(self.jumps)} jump kernels but "
                f"{len(self.log_jump_probs)} jump density functions"
            )

        logger.info(f"Initialized {self.__class__.__name__} with "
                    f"{len(self.jumps)} jump kernel(s)")

    @property
    def n_kernels(self) -> int:
        return len(self.jumps)

    def step(self, current: ChainStep, index: int) -> Tuple[ChainStep, bool]:
        """
        Perform one Metropolis-Hastings step with kernel ``index``.

        Args:
            current: Current state with cached log likelihood and prior
            index: Position in the kernel rotation

        Returns:
            Tuple of (next step, accepted)
        """
        jump = self.jumps[index]
        log_jump_prob = self.log_jump_probs[index]

        proposal = self.evaluate(jump(current.state))
        log_forward, log_backward = log_jump_prob(current.state, proposal.state)

        log_accept = ((proposal.log_posterior + float(log_backward))
                      - (current.log_posterior + float(log_forward)))

        accepted = log_accept > 0 or log_uniform(self.rng) < log_accept

        self.stats.proposals += 1
        if accepted:
            self.stats.accepted += 1
            return proposal, True
        return current, False

    def steps(self, initial_state) -> Iterator[ChainStep]:
        """
        Yield the chain as ChainStep records, starting with the initial state.

        Args:
            initial_state: Starting point of the chain

        Returns:
            Infinite lazy iterator of ChainStep
        """
        current = self.evaluate(initial_state)
        index = 0
        while True:
            yield current
            current, _ = self.step(current, index)
            index = (index + 1) % self.n_kernels

    def _project(self, step: ChainStep):
        return step.state

    def __repr__(self) -> str:
        return (f"MetropolisHastingsSampler(n_kernels={self.n_kernels}, "
                f"acceptance_rate={self.stats.acceptance_rate:.2%})")


def make_sampler(log_likelihood: Callable, log_prior: Callable,
                 jump, log_jump_prob, rng=None) -> MetropolisHastingsSampler:
    """
    Build a Metropolis-Hastings sampler.

    Returns a callable that maps an initial state to an infinite lazy
    iterator of samples. The first element of every such iterator is the
    initial state.

    Example:
        >>> sampler = make_sampler(log_like, log_prior, jump, log_jump_prob,
        ...                        rng=np.random.default_rng(0))
        >>> samples = list(itertools.islice(sampler(0.0), 1000))
    """
    return MetropolisHastingsSampler(log_likelihood, log_prior, jump,
                                     log_jump_prob, rng=rng)
