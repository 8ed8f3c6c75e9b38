"""
Exception Taxonomy

Errors raised by the analysis API fall into three families:

    - PreconditionError: the request itself is unusable (invalid FEN,
      position already decided). Raised before any provider is tried.
    - ProviderError / EngineError: a single analysis source failed. The
      fallback coordinator recovers from these by moving to the next source.
    - ProvidersExhaustedError: every source in the chain failed. Only the
      last source's error is kept.
"""

from typing import Optional


class AnalysisError(Exception):
    """Base class for all analysis API errors."""


class PreconditionError(AnalysisError, ValueError):
    """The requested position cannot be analysed."""


class InvalidFenError(PreconditionError):
    """FEN string is syntactically or semantically invalid."""

    def __init__(self, fen: str, reason: Optional[str] = None):
        self.fen = fen
        self.reason = reason
        message = "FEN is not valid, analysis has been aborted"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class GameOverError(PreconditionError):
    """Position is already terminal (checkmate, stalemate, draw by rule)."""

    def __init__(self, fen: str):
        self.fen = fen
        super().__init__(f"FEN position is already resolved: {fen}")


class ProviderError(AnalysisError):
    """An analysis source could not produce a result."""


class EngineError(ProviderError):
    """Base class for engine session failures."""


class EngineTerminatedError(EngineError):
    """Engine channel closed before a best move was reported."""


class EngineTimeoutError(EngineError):
    """Engine did not report a best move within the session timeout."""


class ProvidersExhaustedError(AnalysisError):
    """
    Every provider in the chain failed.

    Attributes:
        last_error: Error raised by the last provider tried (None when the
            chain was empty to begin with)
        provider_name: Name of the last provider tried
    """

    def __init__(
        self,
        last_error: Optional[BaseException] = None,
        provider_name: Optional[str] = None,
    ):
        self.last_error = last_error
        self.provider_name = provider_name
        super().__init__("all providers exhausted")
