"""
Random-number and logging helpers shared by the samplers.

Samplers never touch numpy's global random state: every sampler owns a
Generator, either injected by the caller or created here.
"""

from typing import List, Optional, Union
import logging
import os

import numpy as np

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Upper bound (exclusive) for seeds drawn from a master generator.
MAX_SEED = 2**63 - 1

RandomLike = Union[None, int, np.random.Generator]


def as_generator(rng: RandomLike = None) -> np.random.Generator:
    """
    Coerce ``rng`` into a numpy Generator.

    Args:
        rng: None for library-default seeding, an integer seed, or an
            existing Generator (returned unchanged)

    Returns:
        numpy Generator
    """
    if rng is None:
        return np.random.default_rng()
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return np.random.default_rng(int(rng))
    raise ValueError(
        f"rng must be None, an integer seed or a numpy Generator, got {type(rng).__name__}"
    )


def spawn_generators(master: np.random.Generator, n: int) -> List[np.random.Generator]:
    """
    Derive ``n`` independent generators from one master generator.

    Draws ``n`` seeds from ``master`` so the whole family is reproducible
    from the master's seed.
    """
    seeds = master.integers(0, MAX_SEED, size=n)
    return [np.random.default_rng(int(seed)) for seed in seeds]


def log_uniform(rng: np.random.Generator) -> float:
    """Log of a U[0, 1) draw; a zero draw gives -inf."""
    with np.errstate(divide='ignore'):
        return float(np.log(rng.random()))


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None):
    """
    Setup logging configuration for scripts using the samplers.

    Args:
        level: Logging level for the root logger
        log_file: Optional path of an additional log file
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
