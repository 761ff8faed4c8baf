"""
Tests for the simulation tool.
"""

import random

import numpy as np

from engine.game_state import Board, Cell, Difficulty
from simulate import RESULT_SLOTS, play_match, run_matches, sample_medium


def test_hard_vs_hard_always_ties():
    counts = run_matches(Difficulty.HARD, Difficulty.HARD, 4, random.Random(0))
    assert counts[RESULT_SLOTS["tie"]] == 4
    assert counts.sum() == 4


def test_hard_never_loses_to_easy():
    counts = run_matches(Difficulty.HARD, Difficulty.EASY, 30, random.Random(5))
    assert counts[RESULT_SLOTS["O"]] == 0
    assert counts.sum() == 30


def test_play_match_returns_a_result():
    result = play_match({Cell.O: Difficulty.EASY, Cell.X: Difficulty.EASY}, Cell.X, random.Random(1))
    assert result in RESULT_SLOTS


def test_sample_medium_frequencies():
    board = Board.from_string("OO.......")
    freqs = sample_medium(board, Cell.X, 2000, random.Random(9))

    assert freqs.shape == (9,)
    assert np.isclose(freqs.sum(), 1.0)
    assert freqs[0] == 0 and freqs[1] == 0
    assert freqs[2] == freqs.max()
