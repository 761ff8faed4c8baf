"""
Move validator for TicTacToe.
Validates that moves follow the rules.
"""

from typing import Optional, List
from dataclasses import dataclass

from .config import EngineConfig
from .game_state import Cell, GameMode, GameSession, TurnOwner


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must not be over
    2. Index must be 0-8
    3. Can only place on empty cells
    4. Against the computer, only the side that owns the turn may move
    """

    def validate_move(
        self,
        session: GameSession,
        index: int,
        by_computer: bool = False
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            session: Current game session.
            index: Cell to place the current mark on (0-8).
            by_computer: True if the computer is the one moving.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is over
        if session.is_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # Check if index is in valid range
        if not isinstance(index, int) or isinstance(index, bool) \
                or not 0 <= index < EngineConfig.CELL_COUNT:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be 0-8."
            )

        # Check if cell is empty
        if session.board[index] != Cell.EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {session.board[index].value}"
            )

        # Check turn ownership
        if session.mode == GameMode.VS_COMPUTER:
            mover = TurnOwner.COMPUTER if by_computer else TurnOwner.HUMAN
            if session.turn_owner != mover:
                return ValidationResult(
                    is_valid=False,
                    error_message=f"It's not the {mover.name.lower()}'s turn!"
                )
        elif by_computer:
            return ValidationResult(
                is_valid=False,
                error_message="There is no computer player in a two-player game!"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, session: GameSession) -> List[int]:
        """
        Get all valid moves for the current mark.

        Args:
            session: Current game session.

        Returns:
            List of valid cell indices (empty once the game is over).
        """
        if session.is_over:
            return []

        return session.board.empty_cells()
