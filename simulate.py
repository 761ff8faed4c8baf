"""
Simulation tool for the TicTacToe AI.

Two commands:
    match   Play computer vs computer games and tally wins/ties
    medium  Sample MEDIUM move choices on a fixed board and show the
            frequency of each cell

Usage:
    python simulate.py match --x hard --o easy --games 200
    python simulate.py medium --board "OO......." --mark X --samples 10000
"""

import random
from typing import Dict, Optional

import numpy as np

from engine.ai_player import best_move, select_move
from engine.game_state import Board, Cell, Difficulty, OutcomeStatus
from engine.win_checker import evaluate


# Outcome slots used when tallying with np.bincount
RESULT_SLOTS = {"O": 0, "X": 1, "tie": 2}


def play_match(
    difficulties: Dict[Cell, Difficulty],
    first: Cell = Cell.O,
    rng: Optional[random.Random] = None
) -> str:
    """
    Play one computer vs computer game.

    Args:
        difficulties: Difficulty for each mark.
        first: Mark that moves first.
        rng: Random source.

    Returns:
        "O", "X" or "tie".
    """
    board = Board.empty()
    mark = first
    outcome = evaluate(board)

    while not outcome.is_terminal:
        index = select_move(board, mark, difficulties[mark], rng)
        board = board.place(index, mark)
        outcome = evaluate(board)
        mark = mark.opposite()

    if outcome.status == OutcomeStatus.TIE:
        return "tie"
    return outcome.mark.value


def run_matches(
    x_level: Difficulty,
    o_level: Difficulty,
    games: int,
    rng: random.Random
) -> np.ndarray:
    """
    Play a batch of games, alternating who starts.

    Returns:
        Counts indexed by RESULT_SLOTS (O wins, X wins, ties).
    """
    difficulties = {Cell.X: x_level, Cell.O: o_level}
    results = []
    for game in range(games):
        first = Cell.O if game % 2 == 0 else Cell.X
        results.append(RESULT_SLOTS[play_match(difficulties, first, rng)])
    return np.bincount(np.array(results, dtype=int), minlength=len(RESULT_SLOTS))


def sample_medium(
    board: Board,
    mark: Cell,
    samples: int,
    rng: random.Random
) -> np.ndarray:
    """
    Sample MEDIUM move choices on one board.

    Returns:
        Relative frequency of each cell index (length 9).
    """
    moves = [select_move(board, mark, Difficulty.MEDIUM, rng) for _ in range(samples)]
    counts = np.bincount(np.array(moves, dtype=int), minlength=len(board))
    return counts / float(samples)


def _print_match(args, rng: random.Random):
    x_level = Difficulty[args.x.upper()]
    o_level = Difficulty[args.o.upper()]
    counts = run_matches(x_level, o_level, args.games, rng)
    shares = counts / float(max(args.games, 1))

    print(f"   X ({x_level.name}) vs O ({o_level.name}), {args.games} games")
    print("-" * 60)
    for name, slot in RESULT_SLOTS.items():
        label = "Ties" if name == "tie" else f"{name} wins"
        print(f"   {label:<8} {counts[slot]:>6}  ({shares[slot]:6.1%})")


def _print_medium(args, rng: random.Random):
    board = Board.from_string(args.board)
    mark = Cell(args.mark.upper())
    optimal = best_move(board, mark)
    freqs = sample_medium(board, mark, args.samples, rng)

    print(board.render())
    print("-" * 60)
    print(f"   MEDIUM as {mark.value}, {args.samples} samples, optimal cell: {optimal}")
    for index in board.empty_cells():
        marker = "  <- optimal" if index == optimal else ""
        print(f"   cell {index}: {freqs[index]:6.1%}{marker}")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe AI simulation")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    commands = parser.add_subparsers(dest="command", required=True)

    match = commands.add_parser("match", help="Computer vs computer games")
    levels = [level.name.lower() for level in Difficulty]
    match.add_argument("--x", choices=levels, default="hard", help="Difficulty for X")
    match.add_argument("--o", choices=levels, default="hard", help="Difficulty for O")
    match.add_argument("--games", type=int, default=100, help="Number of games")

    medium = commands.add_parser("medium", help="Sample MEDIUM move choices")
    medium.add_argument("--board", default="OO.......", help="Board, e.g. 'OO.......'")
    medium.add_argument("--mark", choices=["O", "X", "o", "x"], default="X", help="Computer mark")
    medium.add_argument("--samples", type=int, default=10000, help="Number of samples")

    args = parser.parse_args()
    rng = random.Random(args.seed)

    print("\n" + "=" * 60)
    print("   TicTacToe AI Simulation")
    print("=" * 60)

    if args.command == "match":
        _print_match(args, rng)
    else:
        _print_medium(args, rng)

    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
