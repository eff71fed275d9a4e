"""
Grading Engine
==============

Maps a (guess, solution) pair to a five-mark grade.

Grades are encoded as a single integer 0-242 (base 3, position 0 least
significant) so that equality is integer equality and a whole guess bank can
be graded into a compact uint8 matrix:

    grade = m0 + 3*m1 + 9*m2 + 27*m3 + 81*m4

Two rules are available:

- "sequential": greens first, then every non-green solution letter claims the
  first still-gray guess position holding that letter.
- "canonical": greens first, then remaining solution letter counts cap the
  yellows handed out left to right.
"""

import numpy as np
from numba import jit, prange
from typing import List, Sequence, Tuple


# ============================================================================
# CONSTANTS
# ============================================================================

WORD_LENGTH = 5
GRAY = 0
YELLOW = 1
GREEN = 2
CORRECT_GRADE = 242  # GGGGG
N_GRADES = 243

RULES = ("sequential", "canonical")
DEFAULT_RULE = "sequential"


# ============================================================================
# NUMBA KERNELS
# ============================================================================

@jit(nopython=True, cache=True)
def _encode(marks: np.ndarray) -> int:
    return marks[0] + 3*marks[1] + 9*marks[2] + 27*marks[3] + 81*marks[4]


@jit(nopython=True, cache=True)
def grade_sequential(guess: np.ndarray, answer: np.ndarray) -> int:
    """
    Grade a guess with the sequential first-match rule.

    Args:
        guess: shape (5,) array of letter codes (0-25)
        answer: shape (5,) array of letter codes

    Returns:
        Encoded grade (0-242)
    """
    marks = np.zeros(5, dtype=np.int32)

    for i in range(5):
        if guess[i] == answer[i]:
            marks[i] = GREEN

    # Each unmatched solution letter claims at most one guess position
    for i in range(5):
        if marks[i] == GREEN:
            continue
        for j in range(5):
            if marks[j] == GRAY and guess[j] == answer[i]:
                marks[j] = YELLOW
                break

    return _encode(marks)


@jit(nopython=True, cache=True)
def grade_canonical(guess: np.ndarray, answer: np.ndarray) -> int:
    """Grade a guess with the letter-count rule."""
    marks = np.zeros(5, dtype=np.int32)
    answer_counts = np.zeros(26, dtype=np.int32)

    for i in range(5):
        answer_counts[answer[i]] += 1

    for i in range(5):
        if guess[i] == answer[i]:
            marks[i] = GREEN
            answer_counts[guess[i]] -= 1

    for i in range(5):
        if marks[i] == GRAY:
            c = guess[i]
            if answer_counts[c] > 0:
                marks[i] = YELLOW
                answer_counts[c] -= 1

    return _encode(marks)


@jit(nopython=True, parallel=True, cache=True)
def compute_grade_matrix(guess_chars: np.ndarray, answer_chars: np.ndarray,
                         canonical: bool) -> np.ndarray:
    """
    Grade every guess against every solution in parallel.

    Args:
        guess_chars: shape (n_guesses, 5) array of letter codes
        answer_chars: shape (n_answers, 5) array of letter codes
        canonical: use the letter-count rule instead of the sequential one

    Returns:
        shape (n_guesses, n_answers) grade matrix
    """
    n_guesses = guess_chars.shape[0]
    n_answers = answer_chars.shape[0]
    result = np.zeros((n_guesses, n_answers), dtype=np.uint8)

    for i in prange(n_guesses):
        for j in range(n_answers):
            if canonical:
                result[i, j] = grade_canonical(guess_chars[i], answer_chars[j])
            else:
                result[i, j] = grade_sequential(guess_chars[i], answer_chars[j])

    return result


# ============================================================================
# PYTHON HELPERS
# ============================================================================

def check_rule(rule: str) -> str:
    if rule not in RULES:
        raise ValueError(f"Unknown grading rule '{rule}' (expected one of {RULES})")
    return rule


def check_word(word: str) -> str:
    """Return the lower-cased word, or raise ValueError if it is not five letters a-z."""
    w = word.strip().lower()
    if len(w) != WORD_LENGTH or not all('a' <= c <= 'z' for c in w):
        raise ValueError(f"Not a five-letter word: '{word}'")
    return w


def words_to_chars(words: Sequence[str]) -> np.ndarray:
    """Convert words to a (n, 5) letter-code array."""
    arr = np.zeros((len(words), WORD_LENGTH), dtype=np.int32)
    for i, w in enumerate(words):
        for j, c in enumerate(check_word(w)):
            arr[i, j] = ord(c) - ord('a')
    return arr


def grade_words(guess: str, solution: str, rule: str = DEFAULT_RULE) -> int:
    """Grade two words directly, without building word banks."""
    chars = words_to_chars([guess, solution])
    if check_rule(rule) == "canonical":
        return int(grade_canonical(chars[0], chars[1]))
    return int(grade_sequential(chars[0], chars[1]))


def grade(guess: int, solution: int, banks) -> int:
    """
    Grade guess-bank word `guess` against solution-bank word `solution`.

    Both ids must be valid for their banks; anything else raises IndexError.
    """
    banks.check_guess_id(guess)
    banks.check_solution_id(solution)
    return int(banks.grade_matrix[guess, solution])


def encode_marks(marks: Sequence[int]) -> int:
    """Convert five marks (e.g. [GREEN, YELLOW, GRAY, GRAY, GRAY]) to a grade."""
    if len(marks) != WORD_LENGTH:
        raise ValueError(f"A grade has {WORD_LENGTH} marks, got {len(marks)}")
    result = 0
    for i, m in enumerate(marks):
        if m not in (GRAY, YELLOW, GREEN):
            raise ValueError(f"Invalid mark: {m}")
        result += m * 3 ** i
    return result


def decode_grade(code: int) -> Tuple[int, ...]:
    """Convert a grade (0-242) back to its five marks."""
    if not 0 <= code < N_GRADES:
        raise ValueError(f"Grade out of range: {code}")
    marks: List[int] = []
    for _ in range(WORD_LENGTH):
        code, m = divmod(int(code), 3)
        marks.append(m)
    return tuple(marks)


def grade_to_string(code: int) -> str:
    """Grade as a B/Y/G string, e.g. 'BYBBB'."""
    return ''.join('BYG'[m] for m in decode_grade(code))


def grade_to_emoji(code: int) -> str:
    return ''.join('⬛🟨🟩'[m] for m in decode_grade(code))
