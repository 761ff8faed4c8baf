"""
Game state for TicTacToe.
Defines the cells, the immutable board, and the game session record.
"""

from enum import Enum
from typing import Optional, List, Tuple, Iterator
from dataclasses import dataclass, field

from .config import EngineConfig


class InvalidMove(Exception):
    """Raised when a mark cannot be placed on the board."""


class Cell(Enum):
    """Contents of a single board cell."""
    EMPTY = "."
    O = "O"     # mark A, encoded as 0
    X = "X"     # mark B, encoded as 1

    def opposite(self) -> "Cell":
        """Get the opposite mark."""
        if self == Cell.EMPTY:
            raise ValueError("EMPTY has no opposite mark")
        return Cell.X if self == Cell.O else Cell.O

    @property
    def code(self) -> int:
        """Numeric encoding used at the presentation boundary (O=0, X=1)."""
        if self == Cell.EMPTY:
            raise ValueError("EMPTY has no mark code")
        return 0 if self == Cell.O else 1

    @classmethod
    def from_code(cls, code: int) -> "Cell":
        """Map the boundary encoding (0 or 1) back to a mark."""
        if code not in (0, 1):
            raise ValueError(f"Invalid mark code {code}. Must be 0 or 1.")
        return cls.O if code == 0 else cls.X


class GameMode(Enum):
    """Who is playing."""
    TWO_PLAYER = "two-player"
    VS_COMPUTER = "vs-computer"


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = 1      # Random moves
    MEDIUM = 2    # Minimax 60% of the time, random otherwise
    HARD = 3      # Full minimax


class TurnOwner(Enum):
    """Which side may submit the next move (VS_COMPUTER only)."""
    HUMAN = 0
    COMPUTER = 1

    def opposite(self) -> "TurnOwner":
        return TurnOwner.COMPUTER if self == TurnOwner.HUMAN else TurnOwner.HUMAN


@dataclass(frozen=True)
class Board:
    """
    The 3x3 board as 9 cells in row-major order (rows: 0-2, 3-5, 6-8).

    Boards are values: place() returns a new board and never touches
    the board it was called on, so the AI can search hypothetical positions freely.
    """

    cells: Tuple[Cell, ...] = field(
        default_factory=lambda: (Cell.EMPTY,) * EngineConfig.CELL_COUNT
    )

    def __post_init__(self):
        cells = tuple(self.cells)
        if len(cells) != EngineConfig.CELL_COUNT:
            raise ValueError(
                f"Board needs {EngineConfig.CELL_COUNT} cells, got {len(cells)}"
            )
        for cell in cells:
            if not isinstance(cell, Cell):
                raise ValueError(f"Invalid cell value: {cell!r}")
        object.__setattr__(self, "cells", cells)

    @classmethod
    def empty(cls) -> "Board":
        """Create a board with every cell empty."""
        return cls()

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Build a board from compact notation.

        Args:
            text: 9 characters, 'O' or 'X' for marks and '.' or ' ' for empty.
                  Newlines and '|' separators are ignored.

        Returns:
            The parsed Board.
        """
        chars = [ch for ch in text if ch not in "\n|"]
        cells = []
        for ch in chars:
            if ch in ". ":
                cells.append(Cell.EMPTY)
            else:
                cells.append(Cell(ch.upper()))
        return cls(tuple(cells))

    def place(self, index: int, mark: Cell) -> "Board":
        """
        Place a mark on an empty cell.

        Args:
            index: Cell index (0-8).
            mark: Cell.O or Cell.X.

        Returns:
            A new Board with the mark placed.

        Raises:
            InvalidMove: If the index is out of range, the cell is
                occupied, or the mark is EMPTY.
        """
        if mark == Cell.EMPTY:
            raise InvalidMove("Cannot place an EMPTY mark")
        if not isinstance(index, int) or isinstance(index, bool) \
                or not 0 <= index < EngineConfig.CELL_COUNT:
            raise InvalidMove(f"Invalid position {index!r}. Must be 0-8.")
        if self.cells[index] != Cell.EMPTY:
            raise InvalidMove(
                f"Cell {index} is already occupied by {self.cells[index].value}"
            )

        cells = list(self.cells)
        cells[index] = mark
        return Board(tuple(cells))

    def has_empty_cell(self) -> bool:
        """True if at least one cell is still empty."""
        return Cell.EMPTY in self.cells

    def empty_cells(self) -> List[int]:
        """Indices of all empty cells, in ascending order."""
        return [i for i, cell in enumerate(self.cells) if cell == Cell.EMPTY]

    def count(self, mark: Cell) -> int:
        """How many cells hold the given value."""
        return self.cells.count(mark)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __str__(self) -> str:
        return "".join(cell.value for cell in self.cells)

    def render(self) -> str:
        """Render the board as a text grid (empty cells show their index)."""
        size = EngineConfig.BOARD_SIZE
        lines = []
        for row in range(size):
            row_cells = []
            for col in range(size):
                index = row * size + col
                cell = self.cells[index]
                row_cells.append(str(index) if cell == Cell.EMPTY else cell.value)
            lines.append(" " + " | ".join(row_cells))
            if row < size - 1:
                lines.append("---+---+---")
        return "\n".join(lines)


class OutcomeStatus(Enum):
    """Whether the game is still running."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    TIE = "tie"


# Strike-through labels for each winning line, in line order
LINE_POSITIONS = ["h0", "h1", "h2", "v0", "v1", "v2", "d0", "d1"]


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board.

    For WIN, line holds the three completed indices and mark the owner.
    """
    status: OutcomeStatus = OutcomeStatus.IN_PROGRESS
    line: Optional[Tuple[int, int, int]] = None
    mark: Optional[Cell] = None
    line_index: Optional[int] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeStatus.IN_PROGRESS)

    @classmethod
    def tie(cls) -> "Outcome":
        return cls(OutcomeStatus.TIE)

    @classmethod
    def win(cls, line: Tuple[int, int, int], mark: Cell, line_index: int) -> "Outcome":
        return cls(OutcomeStatus.WIN, tuple(line), mark, line_index)

    @property
    def is_terminal(self) -> bool:
        return self.status != OutcomeStatus.IN_PROGRESS

    @property
    def position(self) -> str:
        """Label of the winning line ('h0'..'h2', 'v0'..'v2', 'd0', 'd1'), or ''."""
        if self.line_index is None:
            return ""
        return LINE_POSITIONS[self.line_index]


@dataclass(frozen=True)
class Move:
    """
    An accepted move in the game.
    """
    index: int              # Cell index (0-8)
    mark: Cell              # Mark that was placed
    owner: TurnOwner        # Who made the move
    move_number: int        # 0-based position in the game


@dataclass(frozen=True)
class GameSession:
    """
    One game, from start to finish.

    Tracks:
    - The board
    - Whose mark is next and which side owns the turn
    - The outcome (in progress, win, tie)
    - Move history

    Sessions are never modified in place; each accepted move produces
    a new session, and a terminal session is never replaced by a move.
    """

    mode: GameMode
    difficulty: Optional[Difficulty]
    board: Board = field(default_factory=Board.empty)
    current_mark: Cell = Cell.O
    turn_owner: TurnOwner = TurnOwner.HUMAN
    outcome: Outcome = field(default_factory=Outcome.in_progress)
    moves: Tuple[Move, ...] = ()

    @property
    def is_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def winner(self) -> Optional[Cell]:
        """The winning mark, or None for a tie or a running game."""
        return self.outcome.mark

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.mode == GameMode.VS_COMPUTER
            and self.turn_owner == TurnOwner.COMPUTER
            and not self.is_over
        )

    @property
    def computer_mark(self) -> Optional[Cell]:
        """The mark the computer plays, or None in TWO_PLAYER mode."""
        if self.mode != GameMode.VS_COMPUTER:
            return None
        if self.turn_owner == TurnOwner.COMPUTER:
            return self.current_mark
        return self.current_mark.opposite()

    def status_text(self) -> str:
        """Short status line for presentations."""
        if self.outcome.status == OutcomeStatus.TIE:
            return "It's a Tie!"
        if self.outcome.status == OutcomeStatus.WIN:
            return f"Player {self.outcome.mark.value} Wins!"
        return f"Current Player: {self.current_mark.value}"
