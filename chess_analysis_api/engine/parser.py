"""
UCI Engine Output Parsing

Decodes the textual lines a UCI engine prints while searching into
structured data.

Example info line:
    info depth 12 seldepth 20 multipv 2 score cp 35 nodes 48213 pv e2e4 e7e5

    → EngineEntry(depth=12, multipv=2, score=Score("cp", 35),
                  moves=["e2e4", "e7e5"])

The parser is deliberately forgiving: engines emit plenty of info lines that
carry only part of this data (currmove updates, "info string" banners), so
missing fields are left as NaN instead of raising.

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


Number = Union[int, float]

UCI_MOVE_PATTERN = re.compile(r"^[a-h][1-8][a-h][1-8][qrbn]?$")
NUMBER_PREFIX = re.compile(r"[-+]?(?:\d+(\.\d*)?|(\.\d+))([eE][-+]?\d+)?")

# Scanned one after another, each over the whole line
INFO_MARKERS = ("depth", "multipv", "score", "pv")


@dataclass
class Score:
    """Engine score: centipawns ("cp") or signed mate distance ("mate")."""

    type: str = "mate"
    value: Number = math.nan

    @property
    def is_mate(self) -> bool:
        return self.type == "mate"


@dataclass
class EngineEntry:
    """One parsed engine info line."""

    depth: Number = math.nan
    multipv: Number = math.nan
    score: Score = field(default_factory=Score)
    moves: List[str] = field(default_factory=list)

    @property
    def variation_index(self) -> Optional[int]:
        """1-based variation index, or None when the line carried none."""
        if isinstance(self.multipv, int) and self.multipv >= 1:
            return self.multipv
        return None


@dataclass(frozen=True)
class DecodedMove:
    """A move split into origin, destination and optional promotion piece."""

    from_square: str
    to_square: str
    promotion: Optional[str] = None

    def as_dict(self) -> Dict[str, str]:
        """Render as {"from", "to"[, "promotion"]}."""
        move = {"from": self.from_square, "to": self.to_square}
        if self.promotion is not None:
            move["promotion"] = self.promotion
        return move

    def uci(self) -> str:
        return f"{self.from_square}{self.to_square}{self.promotion or ''}"


def _parse_number(token: Optional[str]) -> Number:
    """
    Parse the number a token starts with; no leading number gives NaN.

    Trailing characters are ignored, so "35," reads as 35.
    """
    if token is None:
        return math.nan

    match = NUMBER_PREFIX.match(token)
    if match is None:
        return math.nan

    number = match.group(0)
    if not any(match.groups()):
        return int(number)
    return float(number)


def _token_after(tokens: List[str], index: int, offset: int = 1) -> Optional[str]:
    position = index + offset
    if position < len(tokens):
        return tokens[position]
    return None


def parse_line(raw_line: str) -> EngineEntry:
    """
    Parse one engine info line.

    Each marker is looked up by its own pass over the full token list.
    Once "pv" is seen, every following token that looks like a UCI move
    is collected. Tokens before "pv" are never moves.

    Args:
        raw_line: Line of engine output

    Returns:
        EngineEntry, possibly only partially populated
    """
    tokens = raw_line.split()
    entry = EngineEntry()
    in_moves = False

    for marker in INFO_MARKERS:
        for index, token in enumerate(tokens):
            if in_moves:
                if UCI_MOVE_PATTERN.match(token):
                    entry.moves.append(token)
                continue

            if token != marker:
                continue

            if marker == "depth":
                entry.depth = _parse_number(_token_after(tokens, index))
            elif marker == "multipv":
                entry.multipv = _parse_number(_token_after(tokens, index))
            elif marker == "score":
                entry.score = Score(
                    type=_token_after(tokens, index) or "mate",
                    value=_parse_number(_token_after(tokens, index, 2)),
                )
            else:
                in_moves = True

    return entry


def select_best_lines(history: Dict[int, List[EngineEntry]]) -> List[EngineEntry]:
    """
    Reduce the per-variation history to one entry per variation.

    The most recent entry of each variation wins (not the deepest one).
    Variations come out in the order their buckets were created. The chosen
    entry is popped from its bucket.

    Args:
        history: Variation index → entries in arrival order

    Returns:
        One EngineEntry per non-empty variation
    """
    best_lines = []
    for entries in history.values():
        if entries:
            best_lines.append(entries.pop())
    return best_lines


def decode_move(token: str) -> DecodedMove:
    """
    Split a UCI move token into squares and promotion piece.

    e7e8q → DecodedMove("e7", "e8", "q"); g1f3 → DecodedMove("g1", "f3").
    The token is expected to be well formed (at least four characters).
    """
    if not token[-1].isdigit():
        return DecodedMove(
            from_square=token[:2],
            to_square=token[2:-1],
            promotion=token[-1],
        )
    return DecodedMove(from_square=token[:2], to_square=token[2:])
