import pytest

from wordle_minimax.banks import WordBanks


# Four solutions that differ only in the last letter. "bcdzz" tells them all
# apart in one guess; without it, each guess only peels off one word.
CHAIN_SOLUTIONS = ["aaaab", "aaaac", "aaaad", "aaaae"]

SAMPLE_SOLUTIONS = [
    "cigar", "rebut", "sissy", "humph", "awake", "blush", "focal", "evade",
    "naval", "serve", "heath", "dwarf", "model", "karma", "stink", "grade",
    "quiet", "bench", "abate", "feign", "major", "death", "fresh", "crust",
    "stool", "colon", "abase", "marry", "react", "batty",
]
SAMPLE_GUESSES = [
    "aahed", "salet", "crane", "roate", "speed", "erase", "allot", "total",
    "abbey", "cabin", "press", "spree",
]


@pytest.fixture(scope="session")
def chain_banks():
    return WordBanks([], CHAIN_SOLUTIONS)


@pytest.fixture(scope="session")
def split_banks():
    return WordBanks(["bcdzz"], CHAIN_SOLUTIONS)


@pytest.fixture(scope="session")
def sample_banks():
    return WordBanks(SAMPLE_GUESSES, SAMPLE_SOLUTIONS)


@pytest.fixture(scope="session")
def sample_banks_canonical():
    return WordBanks(SAMPLE_GUESSES, SAMPLE_SOLUTIONS, rule="canonical")
