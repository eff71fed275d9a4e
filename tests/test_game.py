import numpy as np
import pytest

from wordle_minimax.banks import WordBanks
from wordle_minimax.game import AWAITING_GUESS, TERMINAL, FixedWordle, simulate_game
from wordle_minimax.grading import CORRECT_GRADE


def test_turn_by_turn_narrowing(chain_banks):
    game = FixedWordle(chain_banks, chain_banks.solution_id("aaaae"))
    assert game.state == AWAITING_GUESS

    assert game.update().tolist() == [1, 2, 3]
    assert game.update().tolist() == [2, 3]
    assert game.update() is None

    assert game.state == TERMINAL
    assert game.left.tolist() == [3]
    assert [g for g, _ in game.history] == [0, 1, 2]


def test_turn_count_baseline(chain_banks):
    res = simulate_game(chain_banks, chain_banks.solution_id("aaaae"))
    assert res.solution == "aaaae"
    assert res.turns == 3
    assert res.guesses == ["aaaab", "aaaac", "aaaad"]
    # the isolating guess was not the answer, so one more guess is needed
    assert res.guesses_to_win == 4


def test_guessing_the_answer_counts_once(chain_banks):
    res = simulate_game(chain_banks, chain_banks.solution_id("aaaac"))
    assert res.turns == 2
    assert res.guesses_to_win == 2


def test_opener_is_played_first(split_banks):
    game = FixedWordle(split_banks, 2, opener=0)
    assert game.guess() == 0
    assert game.update() is None
    res = game.result()
    assert res.turns == 1
    assert res.guesses == ["bcdzz"]
    assert res.guesses_to_win == 2


def test_opener_only_used_on_turn_one(chain_banks):
    game = FixedWordle(chain_banks, 3, opener=3)
    game.update()
    # "aaaae" isolated itself immediately
    assert game.is_terminal
    assert game.history == [(3, CORRECT_GRADE)]

    game = FixedWordle(chain_banks, 2, opener=3)
    game.update()
    assert game.left.tolist() == [0, 1, 2]
    assert game.guess() == 0


def test_every_game_terminates(sample_banks):
    for s in range(sample_banks.n_solutions):
        game = FixedWordle(sample_banks, s, parallel=False)
        res = game.play()
        assert game.left.tolist() == [s]
        assert 1 <= res.turns < sample_banks.n_solutions


def test_single_candidate_is_already_terminal(chain_banks):
    game = FixedWordle(chain_banks, 2, candidates=[2])
    assert game.is_terminal
    res = game.result()
    assert res.turns == 0
    assert res.guesses_to_win == 1
    with pytest.raises(RuntimeError):
        game.update()


def test_update_after_end_raises(chain_banks):
    game = FixedWordle(chain_banks, 0)
    game.play()
    with pytest.raises(RuntimeError):
        game.update()


def test_result_before_end_raises(chain_banks):
    with pytest.raises(RuntimeError):
        FixedWordle(chain_banks, 0).result()


def test_non_narrowing_opener_hands_over_to_selector():
    banks = WordBanks(["zzzzz"], ["aaaab", "aaaac", "aaaad"])
    game = FixedWordle(banks, 2, opener=0)

    # "zzzzz" shares no letters with any solution
    assert game.update().tolist() == [0, 1, 2]
    assert game.state == AWAITING_GUESS
    assert game.turns == 1
    assert game.guess() == banks.guess_id("aaaab")

    res = game.play()
    assert res.turns == 3
    assert res.guesses == ["zzzzz", "aaaab", "aaaac"]
    assert res.guesses_to_win == 4


def test_non_narrowing_opener_in_every_game():
    banks = WordBanks(["zzzzz"], ["aaaab", "aaaac", "aaaad"])
    turns = [simulate_game(banks, s, opener=0).turns for s in range(3)]
    assert turns == [2, 3, 3]


def test_selected_guess_that_cannot_separate_raises():
    # without union the only guess never tells the solutions apart
    banks = WordBanks(["zzzzz"], ["aaaab", "aaaac"], union=False)
    with pytest.raises(RuntimeError):
        simulate_game(banks, 0)
    with pytest.raises(RuntimeError):
        simulate_game(banks, 0, opener=0)


def test_repeated_solutions_are_merged():
    banks = WordBanks([], ["crane", "slate", "crane"])
    assert banks.solutions == ("crane", "slate")
    assert banks.solution_id("crane") == 0
    res = simulate_game(banks, 1)
    assert res.turns == 1


def test_solution_must_be_a_candidate(chain_banks):
    with pytest.raises(ValueError):
        FixedWordle(chain_banks, 0, candidates=[1, 2])
    with pytest.raises(IndexError):
        FixedWordle(chain_banks, 9)


def test_update_returns_a_copy(chain_banks):
    game = FixedWordle(chain_banks, 3)
    left = game.update()
    left[:] = 0
    assert game.left.tolist() == [1, 2, 3]
    assert isinstance(game.left, np.ndarray)
