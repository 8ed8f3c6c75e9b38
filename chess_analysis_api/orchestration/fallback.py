"""
Provider Fallback Coordinator

Tries analysis providers one after another until one succeeds.

Algorithm:
    1. Invoke the head provider with the shared parameters
    2. Success → return (result, provider name); nothing else is tried
    3. Failure with providers left → advance the cursor and repeat
    4. Failure of the last provider → ProvidersExhaustedError carrying
       that provider's error (earlier errors are dropped)

Providers never run concurrently: a provider is only invoked once the
previous one has definitively failed.
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from chess_analysis_api.errors import ProvidersExhaustedError
from chess_analysis_api.parameters import AnalysisParameters
from chess_analysis_api.providers import ProviderFunction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderChain:
    """
    Ordered providers plus a cursor on the one to try next.

    The chain is immutable: advance() returns a new chain, so a chain can
    be shared between requests without one request consuming the other's.
    """

    providers: Tuple[Tuple[str, ProviderFunction], ...] = ()
    cursor: int = 0

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[str, ProviderFunction]]) -> "ProviderChain":
        return cls(providers=tuple((getattr(name, "value", name), fn) for name, fn in pairs))

    @property
    def head(self) -> Tuple[str, ProviderFunction]:
        return self.providers[self.cursor]

    @property
    def remaining(self) -> int:
        return len(self.providers) - self.cursor

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.providers[self.cursor:])

    def advance(self) -> "ProviderChain":
        return ProviderChain(providers=self.providers, cursor=self.cursor + 1)

    def __len__(self) -> int:
        return self.remaining


@dataclass(frozen=True)
class ProviderOutcome:
    """Result of the first provider that succeeded."""

    result: Any
    provider_name: str


async def run_chain(chain: ProviderChain, params: AnalysisParameters) -> ProviderOutcome:
    """
    Run providers in order until one succeeds.

    Args:
        chain: Providers to try
        params: Normalized parameters handed to every provider

    Returns:
        ProviderOutcome of the first successful provider

    Raises:
        ProvidersExhaustedError: If every provider failed (or the chain
            was empty)
    """
    if chain.remaining == 0:
        raise ProvidersExhaustedError()

    while True:
        name, provider = chain.head
        logger.debug(f"Trying provider {name} ({chain.remaining} left)")

        try:
            result = await provider(params)
        except Exception as e:
            if chain.remaining > 1:
                logger.warning(f"Provider {name} failed, falling back: {e}")
                chain = chain.advance()
                continue

            logger.warning(f"Provider {name} failed, no providers left: {e}")
            raise ProvidersExhaustedError(last_error=e, provider_name=name) from e

        logger.info(f"Analysis provided by {name}")
        return ProviderOutcome(result=result, provider_name=name)
