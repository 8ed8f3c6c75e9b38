"""
Runtime configuration for analysis providers.
"""

from dataclasses import dataclass
from typing import Optional


OPENING_DATABASES = ("lichess", "masters")


@dataclass
class AnalysisConfig:
    """Configuration shared by the analysis providers.

    Providers take an optional config and fall back to the process-wide
    default returned by get_config().
    """

    # Engine
    engine_path: str = "stockfish"
    """Path or command name of the UCI engine binary"""

    engine_timeout: Optional[float] = 60.0
    """Seconds to wait for the engine's best move (None waits forever)"""

    # HTTP sources
    http_timeout: float = 5.0
    """Timeout in seconds for opening-book and cloud-eval requests"""

    opening_explorer_url: str = "https://explorer.lichess.ovh"
    """Base URL of the opening explorer"""

    opening_database: str = "lichess"
    """Opening explorer database: 'lichess' or 'masters'"""

    cloud_eval_url: str = "https://lichess.org/api/cloud-eval"
    """Cloud evaluation endpoint"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.engine_path:
            raise ValueError("engine_path must not be empty")

        if self.engine_timeout is not None and self.engine_timeout <= 0:
            raise ValueError(
                f"engine_timeout must be positive or None, got {self.engine_timeout}"
            )

        if self.http_timeout <= 0:
            raise ValueError(f"http_timeout must be positive, got {self.http_timeout}")

        if self.opening_database not in OPENING_DATABASES:
            raise ValueError(
                f"opening_database should be one of {OPENING_DATABASES}, "
                f"got {self.opening_database!r}"
            )

        self.opening_explorer_url = self.opening_explorer_url.rstrip("/")

    @property
    def opening_endpoint(self) -> str:
        """Full opening explorer URL for the configured database."""
        return f"{self.opening_explorer_url}/{self.opening_database}"


# Global config instance (lazy loaded)
_global_config: Optional[AnalysisConfig] = None


def get_config() -> AnalysisConfig:
    """Return the process-wide default configuration."""
    global _global_config
    if _global_config is None:
        _global_config = AnalysisConfig()
    return _global_config


def set_config(config: Optional[AnalysisConfig]) -> None:
    """Replace the process-wide default configuration (None resets it)."""
    global _global_config
    _global_config = config
