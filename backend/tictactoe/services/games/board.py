from typing import List, Optional

from tictactoe.models import BOARD_SIZE, O, TIE, X

# Rows, then columns, then diagonals
WIN_PATTERNS = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def empty_board() -> List[Optional[str]]:
    return [None] * BOARD_SIZE


def other_symbol(symbol: str) -> str:
    return O if symbol == X else X


def evaluate(board: List[Optional[str]]) -> Optional[str]:
    """Return the winning symbol, 'Tie' for a full board with no line, else None."""
    for a, b, c in WIN_PATTERNS:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    if None in board:
        return None
    return TIE
