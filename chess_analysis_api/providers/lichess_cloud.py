"""
Cloud-eval provider backed by the Lichess cloud evaluation cache.

Lichess keeps engine evaluations of popular positions. A cached evaluation
is only used when it was searched at least as deep as requested.

Reference:
    https://lichess.org/api#tag/Analysis/operation/apiCloudEval
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
class CloudLine:
    """One cached principal variation; exactly one of cp / mate is set."""

    moves: List[str]
    cp: Optional[int] = None
    mate: Optional[int] = None


@dataclass(frozen=True)
class CloudEvaluation:
    fen: str
    depth: int
    knodes: int = 0
    pvs: List[CloudLine] = field(default_factory=list)


def parse_cloud_response(payload: dict) -> CloudEvaluation:
    """Build a CloudEvaluation from the cloud-eval JSON payload."""
    return CloudEvaluation(
        fen=payload.get("fen", ""),
        depth=int(payload.get("depth", 0)),
        knodes=int(payload.get("knodes", 0)),
        pvs=[
            CloudLine(
                moves=pv.get("moves", "").split(),
                cp=pv.get("cp"),
                mate=pv.get("mate"),
            )
            for pv in payload.get("pvs", [])
        ],
    )


async def lichess_cloud_eval(
    params: AnalysisParameters,
    config: Optional[AnalysisConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> CloudEvaluation:
    """
    Fetch a cached cloud evaluation of the position.

    Args:
        params: Normalized analysis parameters
        config: Provider configuration (default: get_config())
        client: HTTP client to reuse (default: a fresh one per call)

    Returns:
        CloudEvaluation searched to at least params.depth

    Raises:
        ProviderError: If nothing is cached, the cache is too shallow, or
            the request fails
    """
    config = config or get_config()
    query = {"fen": params.fen, "multiPv": params.multipv}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=config.http_timeout) as own_client:
                response = await own_client.get(config.cloud_eval_url, params=query)
        else:
            response = await client.get(config.cloud_eval_url, params=query)

        if response.status_code == 404:
            raise ProviderError(f"No cloud evaluation for {params.fen}")
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPError as e:
        raise ProviderError(f"Cloud eval request failed: {e}") from e

    evaluation = parse_cloud_response(payload)
    if evaluation.depth < params.depth:
        raise ProviderError(
            f"Cloud evaluation too shallow: depth {evaluation.depth} < {params.depth}"
        )
    if not evaluation.pvs:
        raise ProviderError(f"Cloud evaluation for {params.fen} has no lines")

    logger.debug(f"Cloud eval hit at depth {evaluation.depth} ({evaluation.knodes} knodes)")
    return evaluation
