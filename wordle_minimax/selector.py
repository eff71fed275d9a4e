"""
Minimax Guess Selector
======================

Picks the guess whose largest bucket over the remaining candidates is as
small as possible:

    worst(g) = max_{s in C} |bucket(g, s, C)|
    choice   = argmin_{g in guess bank} worst(g)

Every word in the guess bank is considered, not just remaining candidates.
Counting bucket sizes per guess gives the same maximum as building the bucket
of every candidate, in O(|C|) instead of O(|C|^2) per guess.

Ties go to the lowest guess id. Per-guess values do not depend on how the
scan is split across threads, so the choice is the same for every split.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np
from numba import jit, prange

from .buckets import bucket_sizes


# ============================================================================
# NUMBA KERNELS
# ============================================================================

@jit(nopython=True, cache=True, nogil=True)
def worst_bucket(grade_row: np.ndarray, candidates: np.ndarray) -> int:
    """Size of the largest bucket one guess leaves over the candidates."""
    sizes = bucket_sizes(grade_row, candidates)
    worst = 0
    for i in range(sizes.shape[0]):
        if sizes[i] > worst:
            worst = sizes[i]
    return worst


@jit(nopython=True, parallel=True, cache=True)
def worst_case_scan_parallel(grade_matrix: np.ndarray, candidates: np.ndarray) -> np.ndarray:
    """Worst bucket of every guess, split across threads over the guess bank."""
    n_guesses = grade_matrix.shape[0]
    result = np.zeros(n_guesses, dtype=np.int32)
    for g in prange(n_guesses):
        result[g] = worst_bucket(grade_matrix[g], candidates)
    return result


@jit(nopython=True, cache=True, nogil=True)
def worst_case_scan(grade_matrix: np.ndarray, candidates: np.ndarray) -> np.ndarray:
    """Single-threaded scan; releases the GIL so callers can fan out games."""
    n_guesses = grade_matrix.shape[0]
    result = np.zeros(n_guesses, dtype=np.int32)
    for g in range(n_guesses):
        result[g] = worst_bucket(grade_matrix[g], candidates)
    return result


# ============================================================================
# SELECTION
# ============================================================================

def _require_candidates(candidates: Optional[Sequence[int]], banks) -> np.ndarray:
    candidates = banks.as_candidates(candidates)
    if candidates.size == 0:
        raise ValueError("No candidates")
    return candidates


def worst_case_sizes(candidates: Optional[Sequence[int]], banks,
                     parallel: bool = True) -> np.ndarray:
    """
    Largest bucket size for every guess in the guess bank.

    Args:
        candidates: Solution ids still possible (None means all solutions)
        banks: WordBanks
        parallel: Use the multi-threaded kernel; pass False when already
            running inside a worker thread

    Returns:
        int32 array of shape (n_guesses,)
    """
    candidates = _require_candidates(candidates, banks)
    if parallel:
        return worst_case_scan_parallel(banks.grade_matrix, candidates)
    return worst_case_scan(banks.grade_matrix, candidates)


def worst_case(guess: int, candidates: Optional[Sequence[int]], banks) -> int:
    """Largest bucket size for a single guess."""
    banks.check_guess_id(guess)
    candidates = _require_candidates(candidates, banks)
    return int(worst_bucket(banks.grade_matrix[guess], candidates))


def select_guess(candidates: Optional[Sequence[int]], banks, parallel: bool = True) -> int:
    """Guess id minimizing the worst-case bucket; lowest id on ties."""
    sizes = worst_case_sizes(candidates, banks, parallel=parallel)
    # argmin returns the first minimum
    return int(np.argmin(sizes))


def rank_guesses(candidates: Optional[Sequence[int]], banks, top: int = 10,
                 parallel: bool = True) -> List[Tuple[int, int]]:
    """Best `top` guesses as (guess_id, worst_case), best first."""
    sizes = worst_case_sizes(candidates, banks, parallel=parallel)
    order = np.argsort(sizes, kind='stable')[:top]
    return [(int(g), int(sizes[g])) for g in order]
