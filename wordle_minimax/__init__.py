"""
Wordle Minimax - Worst-Case Bucket Strategy
===========================================

Picks every guess by minimizing the largest bucket of solutions it can leave,
and reports the longest game that strategy needs over the whole solution bank.
"""

__version__ = "1.0.0"

from .banks import WordBanks, load_words
from .grading import GRAY, YELLOW, GREEN, CORRECT_GRADE, grade, grade_words
from .buckets import bucket, partition, largest_bucket
from .selector import select_guess, worst_case, worst_case_sizes
from .game import FixedWordle, GameResult, simulate_game
from .analysis import best_opener, worst_case_game_length, simulate_all, summarize, print_results
