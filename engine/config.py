"""
Engine configuration for TicTacToe.
All the tunable numbers for the computer opponent and turn timing.
"""


class EngineConfig:
    """
    Configuration class for engine settings.
    Change these values to tune the computer opponent.
    """

    # ==================== BOARD SETTINGS ====================
    # TicTacToe is a 3x3 grid
    BOARD_SIZE = 3
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE  # 9 cells, row-major

    # ==================== TIMING SETTINGS ====================
    # How long the computer "thinks" before its move is applied
    COMPUTER_DELAY_MS = 500

    # ==================== AI SETTINGS ====================
    # MEDIUM plays randomly when rng.random() > this value (40% of the time)
    MEDIUM_RANDOM_THRESHOLD = 0.6

    # Minimax scores
    WIN_SCORE = 10
    LOSS_SCORE = -10
    DRAW_SCORE = 0

    # Lower than any achievable minimax score
    SENTINEL_SCORE = -1000

    # ==================== DEBUG SETTINGS ====================
    DEBUG_MODE = False


def debug(message: str):
    """Print a debug message when DEBUG_MODE is on."""
    if EngineConfig.DEBUG_MODE:
        print(f"[engine] {message}")
