"""
Batch analyses over the whole solution bank.

- best_opener: minimax guess for the unrestricted solution set
- worst_case_game_length: longest simulated game over every hidden solution

Simulations share the read-only WordBanks and own everything else, so they
are fanned out over a thread pool. Each worker runs the single-threaded,
GIL-releasing selector kernel.
"""

import os
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Union

from .game import GameResult, simulate_game
from .selector import select_guess, worst_case


def best_opener(banks, verbose: bool = False) -> int:
    """Guess id minimizing the worst-case bucket over every solution."""
    t0 = time.time()
    idx = select_guess(None, banks, parallel=True)
    if verbose:
        print(f"Best opener: {banks.guesses[idx]} (id {idx}, worst bucket "
              f"{worst_case(idx, None, banks)}) in {time.time() - t0:.1f}s")
    return idx


def resolve_opener(banks, opener: Union[int, str, None], verbose: bool = False) -> int:
    """
    Turn an opener given as id or word into a guess id.

    None, or a word missing from the guess bank, falls back to best_opener.
    """
    if opener is None:
        return best_opener(banks, verbose=verbose)
    if isinstance(opener, str):
        word = opener.strip().lower()
        if word in banks.guess_to_idx:
            return banks.guess_to_idx[word]
        if verbose:
            print(f"Warning: '{word}' not in guess bank, computing best...")
        return best_opener(banks, verbose=verbose)
    return banks.check_guess_id(int(opener))


def simulate_all(banks, opener: Union[int, str, None] = None,
                 workers: Optional[int] = None, verbose: bool = False) -> List[GameResult]:
    """
    Simulate one game per solution.

    Args:
        banks: WordBanks
        opener: Turn-1 guess (id or word); None computes the best opener
        workers: Thread count (defaults to the CPU count)
        verbose: Print progress

    Returns:
        One GameResult per solution, in solution-bank order
    """
    opener_idx = resolve_opener(banks, opener, verbose=verbose)
    if workers is None:
        workers = os.cpu_count() or 4
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    n = banks.n_solutions
    results: List[Optional[GameResult]] = [None] * n
    worst = 0
    t0 = time.time()

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futs = {executor.submit(simulate_game, banks, s, opener_idx, False): s
                for s in range(n)}
        try:
            for done, fut in enumerate(as_completed(futs), 1):
                res = fut.result()
                results[futs[fut]] = res
                worst = max(worst, res.turns)
                if verbose and (done % 100 == 0 or done == n):
                    elapsed = time.time() - t0
                    rate = done / elapsed if elapsed > 0 else 0
                    print(f"[{done}/{n}] {rate:.1f} games/s, worst={worst}")
        except BaseException:
            # Drop queued games; only those already running are waited for
            for f in futs:
                f.cancel()
            raise

    return results


def worst_case_game_length(banks, opener: Union[int, str, None] = None,
                           workers: Optional[int] = None, verbose: bool = False) -> int:
    """Most turns the greedy minimax strategy needs for any hidden solution."""
    results = simulate_all(banks, opener=opener, workers=workers, verbose=verbose)
    return max(r.turns for r in results)


def summarize(results: List[GameResult], hardest: int = 10) -> Dict:
    """Turn distribution and worst cases of a batch of games."""
    if not results:
        raise ValueError("No results")
    dist = Counter(r.turns for r in results)
    worst = max(dist)
    ranked = sorted(results, key=lambda r: -r.turns)
    return {
        'total': len(results),
        'worst_case': worst,
        'average': sum(r.turns for r in results) / len(results),
        'average_to_win': sum(r.guesses_to_win for r in results) / len(results),
        'distribution': dict(sorted(dist.items())),
        'hardest_words': [r.solution for r in ranked[:hardest]],
    }


def print_results(results: Dict):
    """Pretty print a summary."""
    print("\n" + "=" * 50)
    print("WORST-CASE RESULTS")
    print("=" * 50)
    print(f"Words simulated: {results['total']}")
    print(f"Worst case: {results['worst_case']} turns")
    print(f"Average turns: {results['average']:.4f}")
    print(f"Average guesses to win: {results['average_to_win']:.4f}")
    print("\nDistribution:")
    for n, count in results['distribution'].items():
        pct = 100 * count / results['total']
        bar = "█" * int(pct / 2)
        print(f"  {n}: {count:5d} ({pct:5.2f}%) {bar}")
    print(f"\nHardest words: {results['hardest_words']}")
    print("=" * 50)
