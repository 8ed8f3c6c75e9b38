"""
Opening-book provider backed by the Lichess opening explorer.

Succeeds only when the explorer knows at least one continuation from the
position; otherwise the position is out of book and the provider fails so
the next source can take over.

Reference:
    https://lichess.org/api#tag/Opening-Explorer
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from chess_analysis_api.config import AnalysisConfig, get_config
from chess_analysis_api.errors import ProviderError
from chess_analysis_api.parameters import AnalysisParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Opening:
    eco: str
    name: str


@dataclass(frozen=True)
class BookMove:
    """One explorer continuation with its game statistics."""

    uci: str
    san: str
    white: int = 0
    draws: int = 0
    black: int = 0
    average_rating: Optional[int] = None

    @property
    def games(self) -> int:
        return self.white + self.draws + self.black


@dataclass(frozen=True)
class OpeningBookResult:
    """Book continuations for a position, most played first."""

    fen: str
    moves: List[BookMove] = field(default_factory=list)
    opening: Optional[Opening] = None


def parse_explorer_response(fen: str, payload: dict) -> OpeningBookResult:
    """Build an OpeningBookResult from the explorer's JSON payload."""
    moves = [
        BookMove(
            uci=move["uci"],
            san=move.get("san", move["uci"]),
            white=int(move.get("white", 0)),
            draws=int(move.get("draws", 0)),
            black=int(move.get("black", 0)),
            average_rating=move.get("averageRating"),
        )
        for move in payload.get("moves", [])
        if move.get("uci")
    ]

    opening = None
    if payload.get("opening"):
        opening = Opening(
            eco=payload["opening"].get("eco", ""),
            name=payload["opening"].get("name", ""),
        )

    return OpeningBookResult(fen=fen, moves=moves, opening=opening)


async def lichess_opening(
    params: AnalysisParameters,
    config: Optional[AnalysisConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> OpeningBookResult:
    """
    Look the position up in the opening explorer.

    Args:
        params: Normalized analysis parameters (multipv caps the move list)
        config: Provider configuration (default: get_config())
        client: HTTP client to reuse (default: a fresh one per call)

    Returns:
        OpeningBookResult with at most params.multipv moves

    Raises:
        ProviderError: If the request fails or the position is out of book
    """
    config = config or get_config()
    query = {"fen": params.fen, "moves": params.multipv}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=config.http_timeout) as own_client:
                response = await own_client.get(config.opening_endpoint, params=query)
        else:
            response = await client.get(config.opening_endpoint, params=query)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPError as e:
        raise ProviderError(f"Opening explorer request failed: {e}") from e

    result = parse_explorer_response(params.fen, payload)
    if not result.moves:
        raise ProviderError(f"No opening book entry for {params.fen}")

    result = OpeningBookResult(
        fen=result.fen,
        moves=result.moves[: params.multipv],
        opening=result.opening,
    )
    logger.debug(f"Opening book hit: {[m.uci for m in result.moves]}")
    return result
