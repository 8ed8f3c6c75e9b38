"""
Analysis Entry Point

Validates the request, picks which providers make sense for the position
and hands them to the fallback coordinator.

Provider choice by move counter (trailing FEN field):
    < 15   opening book → cloud eval → engine
    < 35   cloud eval → engine
    else   engine
"""

import logging
from typing import Iterable, List, Mapping, Optional, Tuple

from chess_analysis_api import rules
from chess_analysis_api.errors import GameOverError, InvalidFenError
from chess_analysis_api.orchestration.fallback import (
    ProviderChain,
    ProviderOutcome,
    run_chain,
)
from chess_analysis_api.parameters import AnalysisParameters, normalize_parameters
from chess_analysis_api.providers import DEFAULT_PROVIDERS, PROVIDERS, ProviderFunction

logger = logging.getLogger(__name__)


OPENING_PHASE_MOVES = 15
MIDDLEGAME_PHASE_MOVES = 35


def default_provider_order(fen: str) -> List[PROVIDERS]:
    """Provider names to try for this position, before exclusions."""
    played = rules.played_moves(fen)

    if played is not None and played < OPENING_PHASE_MOVES:
        return [PROVIDERS.LICHESS_BOOK, PROVIDERS.LICHESS_CLOUD_EVAL, PROVIDERS.STOCKFISH]
    elif played is not None and played < MIDDLEGAME_PHASE_MOVES:
        return [PROVIDERS.LICHESS_CLOUD_EVAL, PROVIDERS.STOCKFISH]
    return [PROVIDERS.STOCKFISH]


def prepare_analysis(
    fen: str,
    multipv: Optional[int] = None,
    depth: Optional[int] = None,
    excludes: Optional[Iterable[str]] = None,
    registry: Optional[Mapping[PROVIDERS, ProviderFunction]] = None,
) -> Tuple[ProviderChain, AnalysisParameters]:
    """
    Synchronous half of an analysis request.

    Args:
        fen: Position in FEN format
        multipv: Requested number of variations
        depth: Requested search depth
        excludes: Provider names to leave out
        registry: Provider implementations by name (default: DEFAULT_PROVIDERS)

    Returns:
        (chain, params) ready for run_chain

    Raises:
        InvalidFenError: If the FEN is invalid
        GameOverError: If the position is already terminal
    """
    params = normalize_parameters(fen, multipv, depth)

    validation = rules.validate_fen(fen)
    if not validation.valid:
        raise InvalidFenError(fen, validation.error)

    if rules.is_game_over(fen):
        raise GameOverError(fen)

    names = default_provider_order(fen)
    if excludes:
        excluded = {getattr(name, "value", name) for name in excludes}
        names = [name for name in names if name.value not in excluded]

    registry = registry or DEFAULT_PROVIDERS
    chain = ProviderChain.from_pairs([(name.value, registry[name]) for name in names])

    logger.debug(
        f"Analysis request: providers={list(chain.names)}, "
        f"multipv={params.multipv}, depth={params.depth}"
    )
    return chain, params


async def get_analysis(
    fen: str,
    multipv: Optional[int] = None,
    depth: Optional[int] = None,
    excludes: Optional[Iterable[str]] = None,
    registry: Optional[Mapping[PROVIDERS, ProviderFunction]] = None,
) -> ProviderOutcome:
    """
    Analyse a position with the first provider that succeeds.

    Precondition failures are raised before any provider is invoked.

    Raises:
        InvalidFenError: If the FEN is invalid
        GameOverError: If the position is already terminal
        ProvidersExhaustedError: If every provider failed
    """
    chain, params = prepare_analysis(fen, multipv, depth, excludes, registry)
    return await run_chain(chain, params)
