"""
Host detection and work partitioning for data-parallel kernels.

Kernels that fan out over a thread pool ask this module how many workers
to use and how to split a flat index range between them. Chunks are
contiguous and disjoint, so workers never write to the same index.
"""

from dataclasses import dataclass
import os
import platform

from pymatrix.core.validation import check_positive_int


@dataclass(frozen=True)
class CPUInfo:
    """
    Information about the host CPU.

    Attributes:
        name: Human-readable processor name
        n_cores: Number of logical execution units available
    """
    name: str
    n_cores: int

    def __str__(self) -> str:
        return f"CPU ({self.name}, {self.n_cores} cores)"


def get_cpu_info() -> CPUInfo:
    """
    Get information about the CPU.

    Returns:
        CPUInfo for the host; n_cores falls back to 1 when undetectable
    """
    processor = platform.processor()
    if not processor:
        processor = platform.machine() or "Unknown CPU"

    return CPUInfo(name=processor, n_cores=os.cpu_count() or 1)


def resolve_workers(workers: int | None) -> int:
    """
    Resolve the worker count for a parallel kernel.

    Args:
        workers: Explicit worker count, or None for one per logical core

    Returns:
        Positive worker count

    Raises:
        ValidationError: If workers is given and is not a positive integer
    """
    if workers is None:
        return get_cpu_info().n_cores
    return check_positive_int(workers, 'workers')


def partition(size: int, parts: int) -> list[tuple[int, int]]:
    """
    Split [0, size) into at most `parts` contiguous, disjoint chunks.

    Every chunk except possibly the last has ceil(size / parts) indices.
    Empty trailing chunks are dropped, so fewer than `parts` chunks are
    returned when size < parts.

    Returns:
        List of (start, end) half-open ranges covering [0, size) in order
    """
    if size <= 0:
        return []
    chunk = -(-size // parts)
    chunks = []
    for i in range(parts):
        start = i * chunk
        end = min(start + chunk, size)
        if start >= end:
            break
        chunks.append((start, end))
    return chunks
