"""
Game controller for TicTacToe.
Starts sessions, applies moves in turn order, and triggers the computer's
move after its thinking delay.
"""

import random
from enum import Enum
from typing import Callable, List, Optional

from .ai_player import select_move
from .config import EngineConfig, debug
from .game_state import (
    Cell, Difficulty, GameMode, GameSession, Move, TurnOwner, Board, Outcome
)
from .move_validator import MoveValidator
from .scheduler import Scheduler, ScheduledAction
from .win_checker import evaluate


_validator = MoveValidator()


def start_game(
    mode: GameMode,
    difficulty: Optional[Difficulty] = None,
    rng: Optional[random.Random] = None
) -> GameSession:
    """
    Start a fresh game.

    The starting mark is random, and against the computer so is the side
    that moves first.

    Args:
        mode: TWO_PLAYER or VS_COMPUTER.
        difficulty: AI tier for VS_COMPUTER (default: HARD). Ignored
                    for TWO_PLAYER.
        rng: Random source (random.Random compatible).

    Returns:
        A new GameSession with an empty board.
    """
    if rng is None:
        rng = random.Random()

    current_mark = Cell.from_code(rng.randrange(2))

    if mode == GameMode.VS_COMPUTER:
        turn_owner = TurnOwner(rng.randrange(2))
        if difficulty is None:
            difficulty = Difficulty.HARD
    else:
        turn_owner = TurnOwner.HUMAN
        difficulty = None

    session = GameSession(
        mode=mode,
        difficulty=difficulty,
        board=Board.empty(),
        current_mark=current_mark,
        turn_owner=turn_owner,
        outcome=Outcome.in_progress(),
    )
    debug(
        f"New {mode.value} game: {current_mark.value} starts, "
        f"{turn_owner.name.lower()} moves first"
    )
    return session


def submit_move(session: GameSession, index: int, by_computer: bool = False) -> GameSession:
    """
    Apply a move for whoever owns the turn.

    Illegal moves (game over, bad index, occupied cell, wrong side's turn)
    are ignored and the same session is returned.

    Args:
        session: Current session.
        index: Cell index (0-8).
        by_computer: True when the computer is moving.

    Returns:
        The next session, or the unchanged session if the move was rejected.
    """
    result = _validator.validate_move(session, index, by_computer)
    if not result.is_valid:
        debug(f"Move {index!r} rejected: {result.error_message}")
        return session

    board = session.board.place(index, session.current_mark)
    outcome = evaluate(board)
    move = Move(
        index=index,
        mark=session.current_mark,
        owner=session.turn_owner,
        move_number=len(session.moves),
    )

    current_mark = session.current_mark
    turn_owner = session.turn_owner
    if not outcome.is_terminal:
        current_mark = current_mark.opposite()
        if session.mode == GameMode.VS_COMPUTER:
            turn_owner = turn_owner.opposite()

    return GameSession(
        mode=session.mode,
        difficulty=session.difficulty,
        board=board,
        current_mark=current_mark,
        turn_owner=turn_owner,
        outcome=outcome,
        moves=session.moves + (move,),
    )


def play_computer_move(session: GameSession, rng: Optional[random.Random] = None) -> GameSession:
    """
    Let the computer take its turn.

    Args:
        session: Current session.
        rng: Random source for the EASY and MEDIUM tiers.

    Returns:
        The session after the computer's move, or the unchanged session
        if it is not the computer's turn or no move is left.
    """
    if not session.is_computer_turn:
        return session

    index = select_move(session.board, session.current_mark, session.difficulty, rng)
    if index is None:
        return session

    debug(f"Computer ({session.current_mark.value}) plays cell {index}")
    return submit_move(session, index, by_computer=True)


class ControllerState(Enum):
    """Lifecycle of the controller."""
    AWAITING_START = "awaiting_start"
    IN_PROGRESS = "in_progress"
    TERMINAL = "terminal"


class GameController:
    """
    Owns the current session and sequences turns.

    Game flow:
    1. start_game() creates a session (AWAITING_START -> IN_PROGRESS)
    2. Humans call submit_move(); bad moves are ignored
    3. When the computer owns the turn, its move is scheduled after
       COMPUTER_DELAY_MS and applied when the scheduler runs it
    4. The game is TERMINAL as soon as someone wins or it's a tie
    5. start_game() again replaces the session; reset() goes back to the menu

    Starting a new game or resetting cancels a pending computer move, so
    it can never land on a newer board.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        delay_ms: Optional[float] = None
    ):
        """
        Initialize the controller.

        Args:
            scheduler: Anything with call_later(delay_ms, callback, *args)
                       returning a cancellable handle (default: Scheduler()).
            rng: Random source for starting conditions and the AI.
            delay_ms: Computer thinking delay (default: COMPUTER_DELAY_MS).
        """
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.rng = rng if rng is not None else random.Random()
        self.delay_ms = EngineConfig.COMPUTER_DELAY_MS if delay_ms is None else delay_ms

        self.session: Optional[GameSession] = None
        self._pending: Optional[ScheduledAction] = None
        self._listeners: List[Callable[[Optional[GameSession]], None]] = []

    # ==================== READ-ONLY VIEWS ====================

    @property
    def state(self) -> ControllerState:
        if self.session is None:
            return ControllerState.AWAITING_START
        if self.session.is_over:
            return ControllerState.TERMINAL
        return ControllerState.IN_PROGRESS

    @property
    def board(self) -> Optional[Board]:
        return self.session.board if self.session else None

    @property
    def outcome(self) -> Optional[Outcome]:
        return self.session.outcome if self.session else None

    @property
    def current_mark(self) -> Optional[Cell]:
        return self.session.current_mark if self.session else None

    @property
    def turn_owner(self) -> Optional[TurnOwner]:
        return self.session.turn_owner if self.session else None

    @property
    def mode(self) -> Optional[GameMode]:
        return self.session.mode if self.session else None

    @property
    def difficulty(self) -> Optional[Difficulty]:
        return self.session.difficulty if self.session else None

    @property
    def has_pending_move(self) -> bool:
        return self._pending is not None and self._pending.active

    # ==================== EVENTS ====================

    def add_listener(self, callback: Callable[[Optional[GameSession]], None]):
        """Register a callback that receives the session after every change."""
        self._listeners.append(callback)

    def start_game(self, mode: GameMode, difficulty: Optional[Difficulty] = None) -> GameSession:
        """
        Start a new game, discarding the current one.

        Args:
            mode: TWO_PLAYER or VS_COMPUTER.
            difficulty: AI tier for VS_COMPUTER (default: HARD).

        Returns:
            The new session.
        """
        self._cancel_pending()
        self._set_session(start_game(mode, difficulty, self.rng))
        return self.session

    def submit_move(self, index: int) -> Optional[GameSession]:
        """
        Submit a human move. Ignored if illegal or if it's the computer's turn.

        Args:
            index: Cell index (0-8).

        Returns:
            The current session after the move (unchanged if rejected).
        """
        if self.session is None:
            debug("Move ignored: no game has been started")
            return None

        next_session = submit_move(self.session, index)
        if next_session is not self.session:
            self._set_session(next_session)
        return self.session

    def reset(self):
        """Drop the current game and go back to AWAITING_START."""
        self._cancel_pending()
        self._set_session(None)

    # ==================== INTERNALS ====================

    def _set_session(self, session: Optional[GameSession]):
        self.session = session
        for listener in list(self._listeners):
            listener(session)

        if session is not None and session.is_computer_turn:
            self._schedule_computer_move()

    def _schedule_computer_move(self):
        self._cancel_pending()
        debug(f"Computer thinking for {self.delay_ms} ms...")
        self._pending = self.scheduler.call_later(
            self.delay_ms, self._run_computer_move, self.session
        )

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _run_computer_move(self, scheduled_for: GameSession):
        self._pending = None

        # A new game or reset happened since this was scheduled
        if scheduled_for is not self.session:
            debug("Discarding stale computer move")
            return

        next_session = play_computer_move(self.session, self.rng)
        if next_session is not self.session:
            self._set_session(next_session)
