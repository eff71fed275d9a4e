"""
Game simulation with a fixed hidden solution.

Each turn the game asks the selector for the minimax guess (or plays the
configured opener on turn 1), grades it against the hidden solution and keeps
only the bucket the solution falls into. The game is over once a single
candidate is left.

Turn counting: `turns` is the number of guesses made until exactly one
candidate remains, including the guess that isolated it. When that guess was
not the hidden word itself, one more guess is needed to actually enter it;
`GameResult.guesses_to_win` includes it.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .grading import CORRECT_GRADE
from .selector import select_guess


AWAITING_GUESS = "awaiting_guess"
TERMINAL = "terminal"


@dataclass
class GameResult:
    """Outcome of one simulated game."""
    solution: str
    turns: int
    guesses_to_win: int
    guesses: List[str] = field(default_factory=list)


class FixedWordle:
    """
    Standard Wordle game with the hidden solution held constant.

    Owns its candidate set, so independent games can run in parallel over
    the same WordBanks.
    """

    def __init__(self, banks, solution: int, opener: Optional[int] = None,
                 candidates: Optional[Sequence[int]] = None, parallel: bool = True):
        """
        Args:
            banks: WordBanks
            solution: Hidden solution id
            opener: Guess id to play on turn 1 instead of searching for one
            candidates: Starting candidate set (defaults to every solution)
            parallel: Use the multi-threaded selector kernel
        """
        self.banks = banks
        self._solution = banks.check_solution_id(solution)
        self.opener = None if opener is None else banks.check_guess_id(opener)
        self.parallel = parallel

        self.left = banks.as_candidates(candidates)
        if not np.any(self.left == self._solution):
            raise ValueError(f"Hidden solution '{banks.solutions[solution]}' "
                             f"is not among the starting candidates")

        self.turns = 0
        self.history: List[Tuple[int, int]] = []  # (guess id, grade)

    @property
    def state(self) -> str:
        return TERMINAL if len(self.left) == 1 else AWAITING_GUESS

    @property
    def is_terminal(self) -> bool:
        return self.state == TERMINAL

    def guess(self) -> int:
        """Guess id for the current turn."""
        if self.turns == 0 and self.opener is not None:
            return self.opener
        return select_guess(self.left, self.banks, parallel=self.parallel)

    def solution(self, guess: int) -> int:
        return self._solution

    def update(self) -> Optional[np.ndarray]:
        """
        Play one turn.

        Returns:
            The remaining candidates, or None once the solution is isolated
        """
        if self.is_terminal:
            raise RuntimeError("Game is already over")

        opener_turn = self.turns == 0 and self.opener is not None
        g = self.guess()
        s = self.solution(g)
        grade_row = self.banks.grade_matrix[g]
        grade = int(grade_row[s])
        new_left = self.left[grade_row[self.left] == grade]

        if not np.any(new_left == s):
            raise RuntimeError("Hidden solution eliminated - bug in grading")
        # A fixed opener may leave the set unchanged; the selector takes over next turn
        if not opener_turn and len(new_left) == len(self.left) and len(new_left) > 1:
            words = [self.banks.solutions[c] for c in new_left[:10]]
            raise RuntimeError(f"No guess separates the remaining candidates: {words}")

        self.left = new_left
        self.turns += 1
        self.history.append((g, grade))

        if self.is_terminal:
            return None
        return self.left.copy()

    def play(self) -> GameResult:
        """Run the game to the end."""
        while not self.is_terminal:
            self.update()
        return self.result()

    def result(self) -> GameResult:
        if not self.is_terminal:
            raise RuntimeError("Game is not over yet")
        guesses = [self.banks.guesses[g] for g, _ in self.history]
        solved = bool(self.history) and self.history[-1][1] == CORRECT_GRADE
        return GameResult(
            solution=self.banks.solutions[self._solution],
            turns=self.turns,
            guesses_to_win=self.turns if solved else self.turns + 1,
            guesses=guesses,
        )


def simulate_game(banks, solution: int, opener: Optional[int] = None,
                  parallel: bool = True) -> GameResult:
    """Play a full game for one hidden solution and report its length."""
    return FixedWordle(banks, solution, opener=opener, parallel=parallel).play()
