"""
Output Normalization

Each provider answers in its own shape (engine session result, cloud
cache entry, opening explorer stats). normalize() folds all of them into
one AnalysisOutput so callers never care which provider answered.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from chess_analysis_api.engine.parser import DecodedMove, Score, decode_move
from chess_analysis_api.engine.session import EvaluationResult
from chess_analysis_api.orchestration.fallback import ProviderOutcome
from chess_analysis_api.providers.lichess_cloud import CloudEvaluation
from chess_analysis_api.providers.lichess_opening import (
    BookMove,
    Opening,
    OpeningBookResult,
)


@dataclass(frozen=True)
class OutputLine:
    """One candidate line. Book lines have no score but carry game stats."""

    moves: List[str]
    score: Optional[Score] = None
    book: Optional[BookMove] = None

    def to_dict(self) -> Dict[str, Any]:
        line: Dict[str, Any] = {"moves": list(self.moves)}
        if self.score is not None:
            value = self.score.value
            line["score"] = {
                "type": self.score.type,
                "value": None if isinstance(value, float) and math.isnan(value) else value,
            }
        if self.book is not None:
            line["games"] = {
                "white": self.book.white,
                "draws": self.book.draws,
                "black": self.book.black,
            }
        return line


@dataclass(frozen=True)
class AnalysisOutput:
    """Provider-independent analysis of a position."""

    fen: str
    provider: str
    depth: Optional[int]
    multipv: int
    lines: List[OutputLine] = field(default_factory=list)
    best_move: Optional[DecodedMove] = None
    opening: Optional[Opening] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fen": self.fen,
            "provider": self.provider,
            "depth": self.depth,
            "multipv": self.multipv,
            "lines": [line.to_dict() for line in self.lines],
            "bestMove": self.best_move.as_dict() if self.best_move else None,
            "opening": (
                {"eco": self.opening.eco, "name": self.opening.name}
                if self.opening else None
            ),
        }


def _from_engine(result: EvaluationResult, provider: str) -> AnalysisOutput:
    return AnalysisOutput(
        fen=result.fen,
        provider=provider,
        depth=result.depth,
        multipv=result.multipv,
        lines=[
            OutputLine(moves=list(entry.moves), score=entry.score)
            for entry in result.lines
        ],
        best_move=result.best_move,
    )


def _from_cloud(evaluation: CloudEvaluation, provider: str) -> AnalysisOutput:
    lines = []
    for pv in evaluation.pvs:
        if pv.mate is not None:
            score = Score(type="mate", value=pv.mate)
        else:
            score = Score(type="cp", value=pv.cp if pv.cp is not None else math.nan)
        lines.append(OutputLine(moves=list(pv.moves), score=score))

    best_move = None
    if lines and lines[0].moves:
        best_move = decode_move(lines[0].moves[0])

    return AnalysisOutput(
        fen=evaluation.fen,
        provider=provider,
        depth=evaluation.depth,
        multipv=len(lines),
        lines=lines,
        best_move=best_move,
    )


def _from_book(book: OpeningBookResult, provider: str) -> AnalysisOutput:
    lines = [OutputLine(moves=[move.uci], book=move) for move in book.moves]
    best_move = decode_move(book.moves[0].uci) if book.moves else None

    return AnalysisOutput(
        fen=book.fen,
        provider=provider,
        depth=None,
        multipv=len(lines),
        lines=lines,
        best_move=best_move,
        opening=book.opening,
    )


def normalize(outcome: ProviderOutcome) -> AnalysisOutput:
    """
    Convert a provider outcome to the canonical output shape.

    Raises:
        TypeError: If the result type is not one of the known providers'
    """
    result = outcome.result

    if isinstance(result, EvaluationResult):
        return _from_engine(result, outcome.provider_name)
    elif isinstance(result, CloudEvaluation):
        return _from_cloud(result, outcome.provider_name)
    elif isinstance(result, OpeningBookResult):
        return _from_book(result, outcome.provider_name)

    raise TypeError(f"Cannot normalize provider result of type {type(result).__name__}")
