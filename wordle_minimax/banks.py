"""
Word banks shared by every component.

A WordBanks instance is built once and never written to afterwards, so any
number of simulations and worker threads can read it without locking.
"""

import time
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .grading import (DEFAULT_RULE, check_rule, check_word,
                      compute_grade_matrix, words_to_chars)


def load_words(filepath: str) -> List[str]:
    """Load word list from file."""
    with open(filepath, 'r') as f:
        return [line.strip().lower() for line in f if line.strip()]


class WordBanks:
    """
    Guess bank and solution bank with their precomputed grade matrix.

    WordIds index `guesses` when used as a guess and `solutions` when used
    as a solution.
    """

    def __init__(self, guesses: Iterable[str], solutions: Iterable[str],
                 union: bool = True, rule: str = DEFAULT_RULE,
                 verbose: bool = False):
        """
        Args:
            guesses: Words accepted as guesses (order defines guess ids)
            solutions: Words that may be the hidden answer (order defines solution
                ids; repeated words keep only their first occurrence)
            union: Append solutions missing from the guess list to the guess bank
            rule: Grading rule, "sequential" or "canonical"
            verbose: Print precomputation progress
        """
        self.rule = check_rule(rule)
        solution_words = list(dict.fromkeys(check_word(w) for w in solutions))
        guess_words = [check_word(w) for w in guesses]

        if union:
            known = set(guess_words)
            for w in solution_words:
                if w not in known:
                    guess_words.append(w)
                    known.add(w)

        if not solution_words:
            raise ValueError("Solution bank is empty")
        if not guess_words:
            raise ValueError("Guess bank is empty")

        self.guesses = tuple(guess_words)
        self.solutions = tuple(solution_words)
        self.n_guesses = len(self.guesses)
        self.n_solutions = len(self.solutions)

        # First occurrence wins for duplicated guesses
        self.guess_to_idx = {}
        for i, w in enumerate(self.guesses):
            self.guess_to_idx.setdefault(w, i)
        self.solution_to_idx = {w: i for i, w in enumerate(self.solutions)}

        self.guess_chars = words_to_chars(self.guesses)
        self.solution_chars = words_to_chars(self.solutions)

        if verbose:
            print(f"Computing grade matrix ({self.n_guesses} x {self.n_solutions})...")
        t0 = time.time()
        matrix = compute_grade_matrix(self.guess_chars, self.solution_chars,
                                      self.rule == "canonical")
        matrix.flags.writeable = False
        self.grade_matrix = matrix
        if verbose:
            print(f"Done in {time.time() - t0:.1f}s")

    @classmethod
    def from_files(cls, guesses_path: str, solutions_path: str, **kwargs) -> "WordBanks":
        return cls(load_words(guesses_path), load_words(solutions_path), **kwargs)

    def __repr__(self):
        return (f"WordBanks(guesses={self.n_guesses}, solutions={self.n_solutions}, "
                f"rule='{self.rule}')")

    def check_guess_id(self, guess: int) -> int:
        if not 0 <= guess < self.n_guesses:
            raise IndexError(f"Guess id {guess} out of range (guess bank has {self.n_guesses} words)")
        return guess

    def check_solution_id(self, solution: int) -> int:
        if not 0 <= solution < self.n_solutions:
            raise IndexError(f"Solution id {solution} out of range "
                             f"(solution bank has {self.n_solutions} words)")
        return solution

    def guess_id(self, word: str) -> int:
        """Id of a word in the guess bank."""
        idx = self.guess_to_idx.get(word.strip().lower())
        if idx is None:
            raise ValueError(f"'{word}' not in guess bank")
        return idx

    def solution_id(self, word: str) -> int:
        """Id of a word in the solution bank."""
        idx = self.solution_to_idx.get(word.strip().lower())
        if idx is None:
            raise ValueError(f"'{word}' not in solution bank")
        return idx

    def all_solutions(self) -> np.ndarray:
        """The full candidate set: every solution id in bank order."""
        return np.arange(self.n_solutions, dtype=np.int32)

    def as_candidates(self, candidates: Optional[Sequence[int]]) -> np.ndarray:
        """Validate a candidate sequence and return it as an int32 array."""
        if candidates is None:
            return self.all_solutions()
        arr = np.asarray(candidates, dtype=np.int32).reshape(-1)
        if arr.size and (arr.min() < 0 or arr.max() >= self.n_solutions):
            raise IndexError(f"Candidate ids must lie in [0, {self.n_solutions})")
        return arr
