"""
Analysis Parameter Normalization

Every analysis source receives the same three parameters: the position,
the number of principal variations and the search depth. Tunable values
are defaulted and clamped here so downstream code never has to check them.
"""

from dataclasses import dataclass
from typing import Optional


DEFAULT_MULTI_PV = 1
MIN_MULTI_PV = 1
MAX_MULTI_PV = 5

DEFAULT_DEPTH = 15
MIN_DEPTH = 10
MAX_DEPTH = 25


@dataclass(frozen=True)
class AnalysisParameters:
    """Normalized parameters shared by every provider."""

    fen: str
    multipv: int = DEFAULT_MULTI_PV
    depth: int = DEFAULT_DEPTH


def clamp(value: int, minimum: int, maximum: int) -> int:
    """Cap value to the inclusive [minimum, maximum] range."""
    if value > maximum:
        return maximum
    elif value < minimum:
        return minimum
    return value


def normalize_parameters(
    fen: str,
    multipv: Optional[int] = None,
    depth: Optional[int] = None,
) -> AnalysisParameters:
    """
    Default and clamp the tunable analysis parameters.

    A missing (or zero) value takes the default; anything out of range is
    pulled back to the nearest bound. Never raises.

    Args:
        fen: Position in FEN format (passed through untouched)
        multipv: Requested number of principal variations
        depth: Requested search depth

    Returns:
        AnalysisParameters with both tunables inside their bounds
    """
    return AnalysisParameters(
        fen=fen,
        multipv=clamp(multipv or DEFAULT_MULTI_PV, MIN_MULTI_PV, MAX_MULTI_PV),
        depth=clamp(depth or DEFAULT_DEPTH, MIN_DEPTH, MAX_DEPTH),
    )
