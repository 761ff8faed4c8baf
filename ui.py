"""
TicTacToe UI
A graphical interface for the TicTacToe engine using Tkinter.

Shows:
- Start menu (2 Players / Vs AI) and difficulty selection
- Live board (O and X)
- Game status and winner
"""

import random
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from engine.config import EngineConfig
from engine.game_controller import GameController
from engine.game_state import Cell, Difficulty, GameMode, GameSession


class TkAction:
    """Handle to a callback queued with Tk's after()."""

    def __init__(self, root: tk.Misc, callback: Callable, args: tuple):
        self._root = root
        self._callback = callback
        self._args = args
        self._after_id: Optional[str] = None
        self.cancelled = False
        self.done = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self):
        if not self.active:
            return
        self.cancelled = True
        if self._after_id is not None:
            self._root.after_cancel(self._after_id)
            self._after_id = None

    def _fire(self):
        if not self.active:
            return
        self.done = True
        self._callback(*self._args)


class TkScheduler:
    """Same call_later() surface as engine.scheduler.Scheduler, driven by Tk's event loop."""

    def __init__(self, root: tk.Misc):
        self.root = root

    def call_later(self, delay_ms: float, callback: Callable, *args) -> TkAction:
        action = TkAction(self.root, callback, args)
        action._after_id = self.root.after(int(delay_ms), action._fire)
        return action


# Colors for each mark
MARK_COLORS = {
    Cell.O: ('#065f46', '#10b981'),   # bg, fg
    Cell.X: ('#7f1d1d', '#f87171'),
}
EMPTY_BG = '#16213e'
WIN_BG = '#ca8a04'


class TicTacToeUI:
    """
    Main UI class for TicTacToe.
    """

    def __init__(self, seed: Optional[int] = None, delay_ms: float = EngineConfig.COMPUTER_DELAY_MS):
        """Initialize the UI."""
        self.difficulty = Difficulty.HARD

        self._create_ui()

        self.controller = GameController(
            scheduler=TkScheduler(self.root),
            rng=random.Random(seed),
            delay_ms=delay_ms
        )
        self.controller.add_listener(self._on_change)

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("TicTacToe")
        self.root.configure(bg='#1a1a2e')
        self.root.minsize(420, 520)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('TLabel', background='#1a1a2e', foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 20, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 14), foreground='#ffd700')

        # Start menu
        self.menu_frame = ttk.Frame(self.root)
        ttk.Label(self.menu_frame, text="Tic-Tac-Toe", style='Title.TLabel').pack(pady=(40, 5))
        self.menu_subtitle = ttk.Label(self.menu_frame, text="Choose your game mode")
        self.menu_subtitle.pack(pady=(0, 20))

        self.mode_buttons = ttk.Frame(self.menu_frame)
        self.mode_buttons.pack()
        self._menu_button(self.mode_buttons, "2 Players", '#6366f1',
                          lambda: self._start_game(GameMode.TWO_PLAYER))
        self._menu_button(self.mode_buttons, "Vs AI", '#10b981', self._show_difficulty_menu)

        self.difficulty_buttons = ttk.Frame(self.menu_frame)
        diff_buttons = [
            ("Easy", Difficulty.EASY, "#4ade80"),
            ("Medium", Difficulty.MEDIUM, "#fbbf24"),
            ("Hard", Difficulty.HARD, "#f87171")
        ]
        for text, level, color in diff_buttons:
            self._menu_button(self.difficulty_buttons, text, color,
                              lambda lv=level: self._start_game(GameMode.VS_COMPUTER, lv))

        # Game screen
        self.game_frame = ttk.Frame(self.root)
        self.status_label = ttk.Label(self.game_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=(20, 10))

        board_frame = ttk.Frame(self.game_frame)
        board_frame.pack(pady=10)

        self.board_cells = []
        for index in range(9):
            cell = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 24, 'bold'),
                width=4,
                height=2,
                bg=EMPTY_BG,
                fg='white',
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self.controller.submit_move(i)
            )
            cell.grid(row=index // 3, column=index % 3, padx=2, pady=2)
            self.board_cells.append(cell)

        control_frame = ttk.Frame(self.game_frame)
        control_frame.pack(pady=15)

        tk.Button(
            control_frame,
            text="New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#10b981',
            fg='white',
            width=12,
            command=self._new_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="Menu",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self._back_to_menu
        ).pack(side=tk.LEFT, padx=5)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)
        self.menu_frame.pack(fill=tk.BOTH, expand=True)

    def _menu_button(self, parent, text: str, color: str, command):
        tk.Button(
            parent,
            text=text,
            font=('Segoe UI', 12, 'bold'),
            width=14,
            bg=color,
            fg='white',
            activebackground=color,
            command=command
        ).pack(pady=6)

    def _show_difficulty_menu(self):
        """Swap the mode buttons for the difficulty buttons."""
        self.menu_subtitle.configure(text="Select Difficulty")
        self.mode_buttons.pack_forget()
        self.difficulty_buttons.pack()

    def _start_game(self, mode: GameMode, difficulty: Optional[Difficulty] = None):
        """Leave the menu and start a game."""
        if difficulty is not None:
            self.difficulty = difficulty
            print(f"Difficulty set to: {difficulty.name}")

        self.menu_frame.pack_forget()
        self.game_frame.pack(fill=tk.BOTH, expand=True)
        self.controller.start_game(mode, difficulty)

    def _new_game(self):
        """Restart with the same mode and difficulty."""
        print("Starting a new game...")
        self.controller.start_game(self.controller.mode, self.controller.difficulty)

    def _back_to_menu(self):
        """Drop the current game and show the start menu."""
        self.controller.reset()
        self.game_frame.pack_forget()
        self.difficulty_buttons.pack_forget()
        self.menu_subtitle.configure(text="Choose your game mode")
        self.mode_buttons.pack()
        self.menu_frame.pack(fill=tk.BOTH, expand=True)

    def _on_change(self, session: Optional[GameSession]):
        """Redraw the board and status after every engine change."""
        if session is None:
            return

        winning_cells = session.outcome.line or ()
        for index, cell in enumerate(self.board_cells):
            mark = session.board[index]
            locked = mark != Cell.EMPTY or session.is_over or session.is_computer_turn
            if mark == Cell.EMPTY:
                cell.configure(text="", bg=EMPTY_BG)
            else:
                bg_color, fg_color = MARK_COLORS[mark]
                if index in winning_cells:
                    bg_color = WIN_BG
                cell.configure(text=mark.value, bg=bg_color, fg=fg_color)
            cell.configure(state='disabled' if locked else 'normal')

        status = session.status_text()
        if session.is_computer_turn:
            status += " (thinking...)"
        self.status_label.configure(text=status)

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self.controller.reset()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe UI")
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
        "--debug",
        action="store_true",
        help="Print engine debug output"
    )

    args = parser.parse_args()
    EngineConfig.DEBUG_MODE = args.debug

    print("\n" + "=" * 60)
    print("   TicTacToe UI")
    print("=" * 60 + "\n")

    ui = TicTacToeUI(seed=args.seed, delay_ms=args.delay_ms)
    ui.run()


if __name__ == "__main__":
    main()
