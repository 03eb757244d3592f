"""
Numerical tolerances and kernel constants.

Matrices store IEEE-754 single precision values, so every tolerance here
is calibrated for float32 (machine epsilon ~1.19e-7):
- NEAR_ZERO: threshold for treating a value or vector norm as zero
- FP32: comparison tier for short reductions (small matrices)
- FP32_ACCUMULATED: relaxed tier for long float32 reductions

Used by the decomposition kernels, the test suite, and the benchmarks.
"""

from dataclasses import dataclass

import numpy as np


# Machine epsilon for the storage type
EPSILON_32: float = float(np.finfo(np.float32).eps)

# Values (and vector norms) below this are treated as zero
NEAR_ZERO: float = 1e-6

# Maximum block length of the unrolled dot-product loop in naive multiply
UNROLL_FACTOR: int = 16

# Strassen recursion falls back to naive multiply at or below this dimension
STRASSEN_BASE_SIZE: int = 2

# Reductions longer than this use the accumulated tier
ACCUMULATION_THRESHOLD: int = 64


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Short float32 reductions (dimension <= ACCUMULATION_THRESHOLD)
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-4,
    name='fp32',
    description='Single precision, short reductions',
)

# Long float32 reductions, Strassen recombination, Gram-Schmidt on
# moderately conditioned input
FP32_ACCUMULATED = ToleranceTier(
    rtol=1e-3,
    atol=1e-2,
    name='fp32_accumulated',
    description='Single precision, long reductions or recursive recombination',
)


def select_tolerance(n: int) -> ToleranceTier:
    """Select the tolerance tier for a reduction over `n` terms."""
    if n > ACCUMULATION_THRESHOLD:
        return FP32_ACCUMULATED
    return FP32
