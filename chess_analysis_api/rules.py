"""
Chess-rules oracle backed by python-chess.

The analysis API never implements chess rules itself; it only needs to know
whether a FEN is usable and whether the game is already over.
"""

from dataclasses import dataclass
from typing import Optional

import chess


# Placement, side to move, castling, en passant, half-move clock, move number
FEN_FIELDS = 6


@dataclass(frozen=True)
class FenValidation:
    """Outcome of a FEN check."""

    valid: bool
    error: Optional[str] = None


def validate_fen(fen: str) -> FenValidation:
    """
    Check that a FEN string describes a legal, analysable position.

    Args:
        fen: Position in FEN format

    Returns:
        FenValidation, with the reason in error when invalid
    """
    fields = fen.split()
    if len(fields) != FEN_FIELDS:
        return FenValidation(
            valid=False,
            error=f"expected {FEN_FIELDS} space-separated fields, got {len(fields)}",
        )

    try:
        board = chess.Board(fen)
    except ValueError as e:
        return FenValidation(valid=False, error=str(e))

    status = board.status()
    if status != chess.STATUS_VALID:
        return FenValidation(valid=False, error=f"illegal position ({status!r})")

    return FenValidation(valid=True)


def is_game_over(fen: str) -> bool:
    """
    True if the position is checkmate, stalemate or drawn by rule.

    Draws that only need to be claimed count too, so a half-move clock of
    100 or more ends the game.
    """
    return chess.Board(fen).is_game_over(claim_draw=True)


def played_moves(fen: str) -> Optional[int]:
    """
    Move counter used to gauge how far into the game a position is.

    Reads the trailing FEN field (the move counter). Returns None when the
    field is missing or not a number.
    """
    fields = fen.split()
    if not fields:
        return None
    try:
        return int(fields[-1])
    except ValueError:
        return None
