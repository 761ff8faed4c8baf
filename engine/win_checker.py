"""
Win checker for TicTacToe.
Decides whether a board is won, tied, or still in progress.
"""

from typing import Optional, Tuple

from .game_state import Board, Cell, Outcome, LINE_POSITIONS


# All possible winning lines as cell indices.
# The order matters: the first complete line found is the one reported.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


def find_winning_line(board: Board) -> Optional[int]:
    """
    Find the first complete line on the board.

    Args:
        board: The board to scan.

    Returns:
        Index into WINNING_LINES, or None if no line is complete.
    """
    for line_index, (a, b, c) in enumerate(WINNING_LINES):
        if board[a] != Cell.EMPTY and board[a] == board[b] == board[c]:
            return line_index
    return None


def evaluate(board: Board) -> Outcome:
    """
    Evaluate a board.

    Args:
        board: The board to evaluate.

    Returns:
        WIN with the first completed line and its mark, TIE if the board
        is full without a winner, otherwise IN_PROGRESS.
    """
    line_index = find_winning_line(board)
    if line_index is not None:
        line = WINNING_LINES[line_index]
        return Outcome.win(line, board[line[0]], line_index)

    if not board.has_empty_cell():
        return Outcome.tie()

    return Outcome.in_progress()


def line_position(line: Tuple[int, int, int]) -> str:
    """Strike-through label ('h0', 'v2', 'd1', ...) for a winning line."""
    return LINE_POSITIONS[WINNING_LINES.index(tuple(line))]
