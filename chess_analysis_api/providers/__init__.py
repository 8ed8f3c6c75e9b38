"""
Analysis providers.

Every provider is an async callable taking AnalysisParameters and either
returning a result or raising. PROVIDERS names them; DEFAULT_PROVIDERS maps
each name to its implementation.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict

from chess_analysis_api.parameters import AnalysisParameters
from chess_analysis_api.providers.lichess_cloud import CloudEvaluation, lichess_cloud_eval
from chess_analysis_api.providers.lichess_opening import OpeningBookResult, lichess_opening
from chess_analysis_api.providers.stockfish import stockfish_eval


ProviderFunction = Callable[[AnalysisParameters], Awaitable[Any]]


class PROVIDERS(str, Enum):
    LICHESS_BOOK = "lichessOpening"
    LICHESS_CLOUD_EVAL = "lichessCloudEval"
    STOCKFISH = "stockfishEval"


DEFAULT_PROVIDERS: Dict[PROVIDERS, ProviderFunction] = {
    PROVIDERS.LICHESS_BOOK: lichess_opening,
    PROVIDERS.LICHESS_CLOUD_EVAL: lichess_cloud_eval,
    PROVIDERS.STOCKFISH: stockfish_eval,
}

__all__ = [
    'PROVIDERS',
    'DEFAULT_PROVIDERS',
    'ProviderFunction',
    'CloudEvaluation',
    'OpeningBookResult',
    'lichess_cloud_eval',
    'lichess_opening',
    'stockfish_eval',
]
