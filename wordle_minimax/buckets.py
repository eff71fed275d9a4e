"""
Bucket partitioner.

A bucket is every candidate that gets the same grade from a guess as some
reference solution does. Buckets are always new arrays, in candidate order.
"""

from typing import Dict, Optional, Sequence

import numpy as np
from numba import jit

from .grading import N_GRADES


@jit(nopython=True, cache=True, nogil=True)
def bucket_sizes(grade_row: np.ndarray, candidates: np.ndarray) -> np.ndarray:
    """
    Count how many candidates fall into each grade.

    Args:
        grade_row: grades of one guess against every solution
        candidates: solution ids still in play

    Returns:
        Array of 243 bucket sizes
    """
    sizes = np.zeros(N_GRADES, dtype=np.int32)
    for c in candidates:
        sizes[grade_row[c]] += 1
    return sizes


def bucket(guess: int, reference: int, candidates: Sequence[int], banks) -> np.ndarray:
    """
    Candidates graded by `guess` exactly like `reference` is.

    The reference is included whenever it is itself a candidate.
    """
    banks.check_guess_id(guess)
    banks.check_solution_id(reference)
    candidates = banks.as_candidates(candidates)
    grade_row = banks.grade_matrix[guess]
    return candidates[grade_row[candidates] == grade_row[reference]]


def partition(guess: int, candidates: Optional[Sequence[int]], banks) -> Dict[int, np.ndarray]:
    """Split candidates into buckets keyed by grade, in first-seen order."""
    banks.check_guess_id(guess)
    candidates = banks.as_candidates(candidates)
    grades = banks.grade_matrix[guess][candidates]
    buckets = {}
    for g in dict.fromkeys(grades.tolist()):
        buckets[g] = candidates[grades == g]
    return buckets


def largest_bucket(guess: int, candidates: Optional[Sequence[int]], banks) -> np.ndarray:
    """The biggest bucket `guess` can leave behind (first found on ties)."""
    parts = partition(guess, candidates, banks)
    if not parts:
        raise ValueError("No candidates")
    return max(parts.values(), key=len)
