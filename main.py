"""
Terminal front-end for TicTacToe.

Plays a game in the console:
- Two players sharing the keyboard, or
- One player against the computer (EASY, MEDIUM, HARD)

Run this script to play TicTacToe in a terminal!
"""

import random
from typing import Optional

from engine.config import EngineConfig
from engine.game_controller import ControllerState, GameController
from engine.game_state import Cell, Difficulty, GameMode, GameSession, OutcomeStatus, TurnOwner
from engine.scheduler import Scheduler


class ConsoleGame:
    """
    Console loop around a GameController.

    Game flow:
    1. A game starts with a random mark and (vs computer) a random first mover
    2. The human types a cell number, the computer answers after its delay
    3. Repeat until someone wins or it's a tie
    4. 'n' starts a new game, 'q' quits
    """

    def __init__(
        self,
        mode: GameMode = GameMode.VS_COMPUTER,
        difficulty: Difficulty = Difficulty.HARD,
        seed: Optional[int] = None,
        delay_ms: float = EngineConfig.COMPUTER_DELAY_MS,
        zero_based: bool = False
    ):
        """
        Initialize the console game.

        Args:
            mode: TWO_PLAYER or VS_COMPUTER.
            difficulty: AI tier when playing the computer.
            seed: Seed for the random source (None = unpredictable).
            delay_ms: Computer thinking delay.
            zero_based: If True, cells are numbered 0-8 instead of 1-9.
        """
        self.mode = mode
        self.difficulty = difficulty
        self.zero_based = zero_based
        self.scheduler = Scheduler()
        self.controller = GameController(
            scheduler=self.scheduler,
            rng=random.Random(seed),
            delay_ms=delay_ms
        )
        self.controller.add_listener(self._on_change)
        self.is_running = False

    def start(self):
        """Start playing."""
        print("\nStarting TicTacToe game...")
        first = "1" if not self.zero_based else "0"
        last = "9" if not self.zero_based else "8"
        print(f"Enter a cell ({first}-{last}), 'n' for a new game, 'q' to quit\n")

        self.is_running = True
        self.controller.start_game(self.mode, self.difficulty)
        self._game_loop()

    def _game_loop(self):
        """Main game loop."""
        while self.is_running:
            session = self.controller.session

            if self.controller.has_pending_move:
                print(">>> Computer is thinking...")
                self.scheduler.run_pending(blocking=True)
                continue

            if self.controller.state == ControllerState.TERMINAL:
                self._show_game_result(session)
                answer = input("Play again? [y/N] ").strip().lower()
                if answer in ("y", "yes"):
                    self.controller.start_game(self.mode, self.difficulty)
                else:
                    self.is_running = False
                continue

            self._handle_input(input(f"{session.status_text()} > ").strip().lower())

    def _handle_input(self, text: str):
        """
        Handle one line of user input.

        Args:
            text: What the user typed.
        """
        if text == "q":
            print("\nGame quit by user.")
            self.is_running = False
            return
        if text == "n":
            print("\nStarting a new game...")
            self.controller.start_game(self.mode, self.difficulty)
            return

        try:
            number = int(text)
        except ValueError:
            print("!! Invalid input. Please enter a cell number.")
            return

        index = number if self.zero_based else number - 1
        if not 0 <= index <= 8:
            print("!! Invalid cell number.")
            return

        before = self.controller.session
        if self.controller.submit_move(index) is before:
            print("!! Cell already taken. Try again.")

    def _on_change(self, session: Optional[GameSession]):
        """Print the board whenever the session changes."""
        if session is None:
            return

        if not session.moves:
            print("\n" + "=" * 60)
            print(f"   New game: {session.mode.value}")
            if session.difficulty is not None:
                print(f"   Difficulty: {session.difficulty.name}")
                starter = "You" if session.turn_owner == TurnOwner.HUMAN else "Computer"
                print(f"   {starter} ({session.current_mark.value}) move first")
            print("=" * 60)
        else:
            last = session.moves[-1]
            who = "Computer" if last.owner == TurnOwner.COMPUTER else "Player"
            print(f"\n>>> {who} {last.mark.value} played cell {self._label(last.index)}")

        print()
        print(self._render(session))
        print()

    def _label(self, index: int) -> int:
        return index if self.zero_based else index + 1

    def _render(self, session: GameSession) -> str:
        rows = []
        for row in range(3):
            cells = []
            for col in range(3):
                index = row * 3 + col
                cell = session.board[index]
                cells.append(str(self._label(index)) if cell == Cell.EMPTY else cell.value)
            rows.append(" " + " | ".join(cells))
        return "\n---+---+---\n".join(rows)

    def _show_game_result(self, session: GameSession):
        """Show the final game result."""
        print("=" * 60)
        print("   GAME OVER!")
        print("=" * 60)

        if session.outcome.status == OutcomeStatus.WIN:
            if session.mode == GameMode.VS_COMPUTER:
                if session.winner == session.computer_mark:
                    print("\nComputer wins! Better luck next time!")
                else:
                    print("\nCongratulations! You won!")
            else:
                print(f"\n{session.status_text()}")
        else:
            print("\nIt's a tie! Good game!")

        print("\n" + "=" * 60)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe in the terminal")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in GameMode],
        default=GameMode.VS_COMPUTER.value,
        help="Play against a friend or the computer"
    )
    parser.add_argument(
        "--difficulty",
        choices=[level.name.lower() for level in Difficulty],
        default="hard",
        help="Computer difficulty"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible games"
    )
    parser.add_argument(
        "--delay-ms",
        type=float,
        default=EngineConfig.COMPUTER_DELAY_MS,
        help="Computer thinking delay in milliseconds"
    )
    parser.add_argument(
        "--zero-based",
        action="store_true",
        help="Number cells 0-8 instead of 1-9"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print engine debug output"
    )
    parser.add_argument(
        "--ui",
        action="store_true",
        help="Open the Tkinter window instead"
    )

    args = parser.parse_args()
    EngineConfig.DEBUG_MODE = args.debug

    if args.ui:
        from ui import TicTacToeUI
        print("\n" + "=" * 60)
        print("   TicTacToe UI")
        print("=" * 60 + "\n")
        TicTacToeUI(seed=args.seed, delay_ms=args.delay_ms).run()
        return

    game = ConsoleGame(
        mode=GameMode(args.mode),
        difficulty=Difficulty[args.difficulty.upper()],
        seed=args.seed,
        delay_ms=args.delay_ms,
        zero_based=args.zero_based
    )

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
