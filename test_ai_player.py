"""
Tests for the AI player: scoring, Minimax and the difficulty tiers.
"""

import random

import pytest

from engine.ai_player import AIPlayer, best_move, minimax, score, select_move
from engine.game_state import Board, Cell, Difficulty, OutcomeStatus
from engine.win_checker import evaluate


SAMPLE_BOARDS = [
    ".........",
    "....O....",
    "OO.......",
    "OX.X.O...",
    "XOXOX.O..",
    "OXOXOX.O.",
]


def test_score():
    assert score(Board.from_string("XXXOO...."), Cell.X) == 10
    assert score(Board.from_string("XXXOO...."), Cell.O) == -10
    assert score(Board.from_string("OXOOXXXOO"), Cell.X) == 0
    assert score(Board.empty(), Cell.O) == 0


def test_minimax_prefers_fast_wins_and_slow_losses():
    won = Board.from_string("XXXOO....")
    assert minimax(won, 2, False, Cell.X) == 8
    assert minimax(won, 2, False, Cell.O) == -8
    assert minimax(Board.from_string("OXOOXXXOO"), 5, True, Cell.X) == 0


def test_minimax_sees_forced_win():
    # X to move with two open threats on row 0 and column 0
    board = Board.from_string("XX.X.OO.O")
    assert minimax(board, 0, True, Cell.X) == 9


def test_hard_blocks_the_only_threat():
    board = Board.from_string("OO.......")
    assert select_move(board, Cell.X, Difficulty.HARD) == 2


def test_hard_takes_the_win_over_a_block():
    board = Board.from_string("OO.XX....")
    assert select_move(board, Cell.X, Difficulty.HARD) == 5


def test_ties_go_to_the_lowest_index():
    # Every opening is a draw under perfect play
    assert best_move(Board.empty(), Cell.X) == 0
    assert best_move(Board.empty(), Cell.O) == 0


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_no_move_on_a_full_board(difficulty):
    board = Board.from_string("OXOOXXXOO")
    assert select_move(board, Cell.X, difficulty, random.Random(0)) is None


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("text", SAMPLE_BOARDS)
def test_moves_are_always_on_empty_cells(difficulty, text):
    board = Board.from_string(text)
    rng = random.Random(42)
    for mark in (Cell.O, Cell.X):
        for _ in range(20):
            move = select_move(board, mark, difficulty, rng)
            assert board[move] == Cell.EMPTY


def test_easy_picks_from_the_empty_cells(fixed_random):
    board = Board.from_string("OO.......")
    assert select_move(board, Cell.X, Difficulty.EASY, fixed_random()) == 2
    assert select_move(board, Cell.X, Difficulty.EASY, fixed_random(pick_last=True)) == 8


def test_easy_covers_every_empty_cell():
    board = Board.from_string("OX.X.O...")
    rng = random.Random(3)
    seen = {select_move(board, Cell.O, Difficulty.EASY, rng) for _ in range(500)}
    assert seen == set(board.empty_cells())


def test_medium_threshold_is_strictly_greater(fixed_random):
    board = Board.from_string("OO.......")

    # Above 0.6: random play (stub picks the last empty cell)
    assert select_move(board, Cell.X, Difficulty.MEDIUM, fixed_random(value=0.61, pick_last=True)) == 8
    # 0.6 and below: optimal play
    assert select_move(board, Cell.X, Difficulty.MEDIUM, fixed_random(value=0.6, pick_last=True)) == 2
    assert select_move(board, Cell.X, Difficulty.MEDIUM, fixed_random(value=0.0, pick_last=True)) == 2


def test_medium_plays_optimally_sixty_percent_of_the_time():
    board = Board.from_string("OO.......")
    rng = random.Random(2024)
    samples = 10000

    counts = {index: 0 for index in board.empty_cells()}
    for _ in range(samples):
        counts[select_move(board, Cell.X, Difficulty.MEDIUM, rng)] += 1

    # 60% optimal plus the random draws that also land on the block
    expected_optimal = 0.6 + 0.4 / 7
    assert abs(counts[2] / samples - expected_optimal) < 0.03

    # The rest is spread evenly over the other empty cells
    for index in (3, 4, 5, 6, 7, 8):
        assert abs(counts[index] / samples - 0.4 / 7) < 0.017


def _explore(board, to_move, computer_mark):
    """Play every opponent reply against HARD; return the number of finished games."""
    outcome = evaluate(board)
    if outcome.is_terminal:
        assert outcome.mark != computer_mark.opposite(), f"HARD lost on {board}"
        return 1

    if to_move == computer_mark:
        index = select_move(board, computer_mark, Difficulty.HARD)
        return _explore(board.place(index, to_move), to_move.opposite(), computer_mark)

    return sum(
        _explore(board.place(index, to_move), to_move.opposite(), computer_mark)
        for index in board.empty_cells()
    )


@pytest.mark.parametrize("computer_mark", [Cell.O, Cell.X])
@pytest.mark.parametrize("computer_first", [True, False])
def test_hard_never_loses(computer_mark, computer_first):
    to_move = computer_mark if computer_first else computer_mark.opposite()
    games = _explore(Board.empty(), to_move, computer_mark)
    assert games > 0


@pytest.mark.parametrize("first", [Cell.O, Cell.X])
def test_hard_vs_hard_is_a_tie(first):
    board = Board.empty()
    mark = first
    while not evaluate(board).is_terminal:
        board = board.place(select_move(board, mark, Difficulty.HARD), mark)
        mark = mark.opposite()

    assert evaluate(board).status == OutcomeStatus.TIE


def test_search_does_not_touch_the_live_board():
    board = Board.from_string("OX.X.O...")
    before = str(board)
    best_move(board, Cell.O)
    assert str(board) == before


def test_ai_player(fixed_random):
    ai = AIPlayer(Cell.X, Difficulty.HARD)
    board = Board.from_string("OO.......")

    assert ai.get_move(board) == 2
    assert ai.positions_evaluated >= 0
    assert "cell 2" in ai.get_move_suggestion(board)
    assert ai.get_move_suggestion(Board.from_string("OXOOXXXOO")) == "No moves available!"

    easy = AIPlayer(Cell.O, Difficulty.EASY, fixed_random(pick_last=True))
    assert easy.get_move(board) == 8
