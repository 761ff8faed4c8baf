"""
TicTacToe Engine
================
Game engine for 3x3 TicTacToe with an optional computer opponent
(EASY, MEDIUM, HARD). Handles the board, win/tie detection, turn order,
and Minimax move selection. Presentation lives outside this package.
"""

from .config import EngineConfig
from .game_state import (
    Board, Cell, Difficulty, GameMode, GameSession, InvalidMove, Move,
    Outcome, OutcomeStatus, TurnOwner
)
from .win_checker import WINNING_LINES, evaluate
from .move_validator import MoveValidator, ValidationResult
from .ai_player import AIPlayer, best_move, minimax, score, select_move
from .scheduler import Scheduler, ScheduledAction
from .game_controller import (
    ControllerState, GameController, play_computer_move, start_game, submit_move
)

__version__ = "1.0.0"
