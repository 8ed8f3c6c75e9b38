"""
Public analysis API.
"""

from typing import Iterable, Mapping, Optional

from chess_analysis_api.normalizer import AnalysisOutput, normalize
from chess_analysis_api.orchestration.manager import get_analysis
from chess_analysis_api.providers import PROVIDERS, ProviderFunction


async def analyze(
    fen: str,
    multipv: Optional[int] = None,
    depth: Optional[int] = None,
    excludes: Optional[Iterable[str]] = None,
    registry: Optional[Mapping[PROVIDERS, ProviderFunction]] = None,
) -> AnalysisOutput:
    """
    Best-effort evaluation of a position.

    Args:
        fen: Position in FEN format
        multipv: Number of variations wanted (clamped, default 1)
        depth: Search depth wanted (clamped, default 15)
        excludes: Provider names not to use (see PROVIDERS)
        registry: Provider implementations by name, mainly for testing

    Returns:
        AnalysisOutput from the first provider that succeeded

    Raises:
        InvalidFenError: If the FEN is invalid
        GameOverError: If the position is already terminal
        ProvidersExhaustedError: If every provider failed
    """
    outcome = await get_analysis(fen, multipv, depth, excludes, registry)
    return normalize(outcome)

