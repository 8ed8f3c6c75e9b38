"""
Engine provider: runs a local UCI engine (Stockfish by default).
"""

import logging
from typing import Optional

from chess_analysis_api.config import AnalysisConfig, get_config
from chess_analysis_api.engine.channel import SubprocessChannel
from chess_analysis_api.engine.session import EngineSession, EvaluationResult
from chess_analysis_api.errors import EngineError
from chess_analysis_api.parameters import AnalysisParameters

logger = logging.getLogger(__name__)


async def stockfish_eval(
    params: AnalysisParameters,
    config: Optional[AnalysisConfig] = None,
) -> EvaluationResult:
    """
    Evaluate the position with a fresh engine process.

    Args:
        params: Normalized analysis parameters
        config: Provider configuration (default: get_config())

    Returns:
        EvaluationResult from the engine session

    Raises:
        EngineError: If the engine cannot be started or the session fails
    """
    config = config or get_config()

    try:
        channel = await SubprocessChannel.open(config.engine_path)
    except OSError as e:
        raise EngineError(f"Could not start engine {config.engine_path!r}: {e}") from e

    session = EngineSession(channel, timeout=config.engine_timeout)
    logger.debug(
        f"Engine session started: depth={params.depth}, multipv={params.multipv}"
    )
    return await session.run(params)
