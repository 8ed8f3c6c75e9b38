"""
Orchestration Module

Key Components:
    - ProviderChain / run_chain: Sequential provider fallback
    - prepare_analysis / get_analysis: Request validation and provider choice
"""

from chess_analysis_api.orchestration.fallback import (
    ProviderChain,
    ProviderOutcome,
    run_chain,
)
from chess_analysis_api.orchestration.manager import (
    default_provider_order,
    get_analysis,
    prepare_analysis,
)

__all__ = [
    'ProviderChain',
    'ProviderOutcome',
    'run_chain',
    'default_provider_order',
    'get_analysis',
    'prepare_analysis',
]
