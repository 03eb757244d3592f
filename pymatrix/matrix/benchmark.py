"""
Timing harness for the multiplication kernels.

Times one multiplication per requested size and optionally writes the
timings to a text file, one value per line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Literal

import numpy as np

from pymatrix.core.compute.timing import Timer
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_positive_int
from pymatrix.matrix.matrix import Matrix


MultiplyMethod = Literal['naive', 'strassen']


def benchmark_multiply(
    sizes: Iterable[int],
    *,
    method: MultiplyMethod = 'naive',
    path: str | Path | None = None,
    rng: np.random.Generator | int | None = None,
) -> dict[int, float]:
    """
    Time A @ A for square matrices of each size.

    Parameters
    ----------
    sizes : iterable of int
        Matrix dimensions to time. Strassen requires powers of two.
    method : str
        'naive' or 'strassen'.
    path : str or Path, optional
        If given, the timings (seconds) are written there, one per line.
    rng : Generator or int, optional
        If given, operands are random matrices drawn from this generator;
        otherwise they are all ones.

    Returns
    -------
    dict mapping each size to elapsed seconds. A size listed more than
    once is timed on every occurrence and its runs are summed under one
    key, so the file holds one line per distinct size.
    """
    if method not in ('naive', 'strassen'):
        raise ValidationError(
            f"Unknown multiply method: {method!r}. Must be 'naive' or 'strassen'."
        )

    dimensions = [check_positive_int(n, 'size') for n in sizes]
    generator = np.random.default_rng(rng) if rng is not None else None

    timer = Timer()
    timer.start()
    for n in dimensions:
        A = Matrix.random(n, n, rng=generator) if generator is not None else Matrix.ones(n, n)
        with timer.section(f"{method}_{n}"):
            if method == 'naive':
                A.naive_multiply(A)
            else:
                A.strassen_multiply(A)
    timer.stop()

    # Repeated sizes accumulate into one section
    result = timer.result()
    timings = {n: result[f"{method}_{n}"] for n in dimensions}

    if path is not None:
        lines = "\n".join(repr(seconds) for seconds in timings.values())
        Path(path).write_text(lines + "\n" if lines else "", encoding='utf-8')

    return timings
