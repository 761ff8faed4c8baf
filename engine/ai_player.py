"""
AI player for TicTacToe.
Picks the computer's move for each difficulty tier, using the Minimax
algorithm for optimal play.
"""

import random
from functools import lru_cache
from typing import Optional

from .config import EngineConfig, debug
from .game_state import Board, Cell, Difficulty
from .win_checker import WINNING_LINES


def score(board: Board, computer_mark: Cell) -> int:
    """
    Static score of a board from the computer's point of view.

    Args:
        board: Board to score.
        computer_mark: The mark the computer plays.

    Returns:
        WIN_SCORE if the computer owns a complete line, LOSS_SCORE if the
        opponent does, DRAW_SCORE otherwise (running or tied).
    """
    for a, b, c in WINNING_LINES:
        if board[a] != Cell.EMPTY and board[a] == board[b] == board[c]:
            if board[a] == computer_mark:
                return EngineConfig.WIN_SCORE
            return EngineConfig.LOSS_SCORE
    return EngineConfig.DRAW_SCORE


@lru_cache(maxsize=None)
def _minimax(board: Board, depth: int, is_maximizing: bool, computer_mark: Cell) -> int:
    value = score(board, computer_mark)

    if value == EngineConfig.WIN_SCORE:
        return value - depth  # Win (prefer faster wins)
    if value == EngineConfig.LOSS_SCORE:
        return value + depth  # Loss (prefer slower losses)
    if not board.has_empty_cell():
        return EngineConfig.DRAW_SCORE

    mark = computer_mark if is_maximizing else computer_mark.opposite()
    results = [
        _minimax(board.place(index, mark), depth + 1, not is_maximizing, computer_mark)
        for index in board.empty_cells()
    ]
    return max(results) if is_maximizing else min(results)


def minimax(board: Board, depth: int, is_maximizing: bool, computer_mark: Cell) -> int:
    """
    Depth-aware Minimax over immutable boards.

    Args:
        board: Position to evaluate.
        depth: Plies already played below the root move.
        is_maximizing: True if the computer moves next.
        computer_mark: The mark the computer plays.

    Returns:
        10 - depth for a forced computer win, -10 + depth for a forced
        loss, 0 for a draw.
    """
    return _minimax(board, depth, is_maximizing, computer_mark)


def best_move(board: Board, computer_mark: Cell) -> Optional[int]:
    """
    Get the optimal move for the computer.

    Candidates are tried in ascending index order and only a strictly
    better value replaces the current best, so ties go to the lowest index.

    Args:
        board: Current board.
        computer_mark: The mark the computer plays.

    Returns:
        Cell index of the best move, or None if the board is full.
    """
    best_value = EngineConfig.SENTINEL_SCORE
    best_index = None

    for index in board.empty_cells():
        value = minimax(board.place(index, computer_mark), 0, False, computer_mark)
        if value > best_value:
            best_value = value
            best_index = index

    return best_index


def random_move(board: Board, rng: random.Random) -> Optional[int]:
    """Pick uniformly among the empty cells, or None if there are none."""
    empty_cells = board.empty_cells()
    if not empty_cells:
        return None
    return rng.choice(empty_cells)


def select_move(
    board: Board,
    computer_mark: Cell,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None
) -> Optional[int]:
    """
    Choose the computer's move for a difficulty tier.

    EASY plays a uniformly random empty cell. MEDIUM draws one random
    number and plays randomly when it is above MEDIUM_RANDOM_THRESHOLD,
    otherwise optimally. HARD always plays optimally.

    Args:
        board: Current board.
        computer_mark: The mark the computer plays.
        difficulty: Difficulty tier.
        rng: Random source (random.Random compatible). A fresh one is
             used if not given.

    Returns:
        Cell index, or None if the board has no empty cell.
    """
    if rng is None:
        rng = random.Random()

    if not board.has_empty_cell():
        return None

    if difficulty == Difficulty.EASY:
        return random_move(board, rng)

    if difficulty == Difficulty.MEDIUM:
        if rng.random() > EngineConfig.MEDIUM_RANDOM_THRESHOLD:
            return random_move(board, rng)

    return best_move(board, computer_mark)


class AIPlayer:
    """
    A computer opponent bound to one mark and one difficulty.

    On HARD it always plays optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    """

    def __init__(
        self,
        mark: Cell = Cell.X,
        difficulty: Difficulty = Difficulty.HARD,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the AI player.

        Args:
            mark: Which mark the AI plays (default: X).
            difficulty: Difficulty tier (default: HARD).
            rng: Random source for the EASY and MEDIUM tiers.
        """
        self.mark = mark
        self.difficulty = difficulty
        self.rng = rng if rng is not None else random.Random()

        # New positions searched by the last call (for debugging)
        self.positions_evaluated = 0

    def get_move(self, board: Board) -> Optional[int]:
        """
        Get the AI's move for the current position.

        Args:
            board: Current board.

        Returns:
            Cell index, or None if no moves are available.
        """
        misses_before = _minimax.cache_info().misses
        move = select_move(board, self.mark, self.difficulty, self.rng)
        self.positions_evaluated = _minimax.cache_info().misses - misses_before

        debug(
            f"AI ({self.mark.value}, {self.difficulty.name}) evaluated "
            f"{self.positions_evaluated} new positions. Move: {move}"
        )
        return move

    def get_move_suggestion(self, board: Board) -> str:
        """
        Get a human-readable move suggestion.

        Args:
            board: Current board.

        Returns:
            A string describing the suggested move.
        """
        move = best_move(board, self.mark)

        if move is None:
            return "No moves available!"

        row, col = divmod(move, EngineConfig.BOARD_SIZE)
        return f"Place {self.mark.value} at cell {move} (row {row}, col {col})"
