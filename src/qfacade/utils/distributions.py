# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Count-distribution helpers for measurement results.

Counts are plain ``{bitstring: shots}`` dicts as returned by
:func:`qfacade.backends.get_counts` and the sampler wrappers.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def normalize_counts(counts: dict[str, int]) -> dict[str, float]:
    """
    Normalize raw shot counts into probabilities.

    Parameters
    ----------
    counts : dict
        Raw counts mapping outcome bitstrings to shot counts.

    Returns
    -------
    dict
        Probabilities in [0, 1].

    Raises
    ------
    ValueError
        If the counts are empty or sum to zero.
    """
    total = sum(counts.values())
    if total <= 0:
        raise ValueError("Counts are empty or sum to zero")
    return {k: v / total for k, v in counts.items()}


def counts_to_arrays(
    counts_a: dict[str, int],
    counts_b: dict[str, int],
) -> tuple[NDArray[np.float64], NDArray[np.float64], list[str]]:
    """
    Convert two count dictionaries to aligned probability arrays.

    Returns
    -------
    p_a, p_b : ndarray
        Probability arrays sharing the key order, zero-filled for
        outcomes missing from one side.
    keys : list of str
        Sorted outcome keys.

    Raises
    ------
    ValueError
        If either side is empty or sums to zero.
    """
    total_a = sum(counts_a.values())
    total_b = sum(counts_b.values())
    if total_a <= 0 or total_b <= 0:
        raise ValueError("Counts are empty or sum to zero")

    keys = sorted(set(counts_a) | set(counts_b))
    p_a = np.array([counts_a.get(k, 0) / total_a for k in keys], dtype=np.float64)
    p_b = np.array([counts_b.get(k, 0) / total_b for k in keys], dtype=np.float64)
    return p_a, p_b, keys


def bhattacharyya_overlap(counts_a: dict[str, int], counts_b: dict[str, int]) -> float:
    """
    Overlap ``sum(sqrt(p(x) * q(x)))`` of two count distributions.

    1.0 for identical distributions, 0.0 for disjoint support.
    """
    p_a, p_b, _ = counts_to_arrays(counts_a, counts_b)
    return float(np.sum(np.sqrt(p_a * p_b)))
