"""Descriptive statistics and Poisson utilities for sampler output."""

from .descriptive import mean, variance, std, p_value, percentile
from .poisson import inhomogeneous_poisson_array, log_poisson_pdf

__all__ = ["mean", "variance", "std", "p_value", "percentile",
           "inhomogeneous_poisson_array", "log_poisson_pdf"]
