"""
Shared compute infrastructure for PyMatrix.

This module provides host detection, work partitioning, timing utilities
and numerical tolerances shared by all matrix kernels.

IMPORTANT: This is NOT where the matrix algorithms live. Those go in
pymatrix/matrix/. This module contains shared NUMERIC infrastructure.

Submodules:
    parallel: CPU detection, worker resolution, index-range partitioning
    timing: Execution timing utilities
    tolerances: Float32 tolerance tiers and kernel constants
"""

from pymatrix.core.compute.parallel import (
    CPUInfo,
    get_cpu_info,
    partition,
    resolve_workers,
)
from pymatrix.core.compute.timing import Timer, timed
from pymatrix.core.compute.tolerances import (
    FP32,
    FP32_ACCUMULATED,
    NEAR_ZERO,
    ToleranceTier,
    select_tolerance,
)

__all__ = [
    # Host / partitioning
    "CPUInfo",
    "get_cpu_info",
    "partition",
    "resolve_workers",
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "FP32",
    "FP32_ACCUMULATED",
    "NEAR_ZERO",
    "ToleranceTier",
    "select_tolerance",
]
