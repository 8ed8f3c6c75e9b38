"""
chess_analysis_api

Best-effort chess position evaluation. A position is sent to one analysis
source after another until one answers, and the answer is normalized into a
single output shape.

## Architecture

1. **parameters**: Default and clamp multipv / depth
2. **rules**: FEN validation and game-over detection (python-chess)
3. **engine**: UCI engine driver
   - Info line parser, best-line selection, move decoding
   - Session state machine over a line-oriented channel
4. **providers**: Analysis sources
   - Lichess opening explorer
   - Lichess cloud evaluation
   - Local Stockfish
5. **orchestration**: Provider choice by game phase and sequential fallback
6. **normalizer**: Canonical AnalysisOutput

## Quick Start

```python
import asyncio
from chess_analysis_api import analyze

output = asyncio.run(analyze(
    "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
    multipv=3,
))
print(output.provider, output.best_move)
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from chess_analysis_api.api import analyze
from chess_analysis_api.config import AnalysisConfig, get_config, set_config
from chess_analysis_api.errors import (
    AnalysisError,
    GameOverError,
    InvalidFenError,
    PreconditionError,
    ProviderError,
    ProvidersExhaustedError,
)
from chess_analysis_api.normalizer import AnalysisOutput
from chess_analysis_api.providers import PROVIDERS

__all__ = [
    'analyze',
    'AnalysisConfig',
    'get_config',
    'set_config',
    'AnalysisError',
    'GameOverError',
    'InvalidFenError',
    'PreconditionError',
    'ProviderError',
    'ProvidersExhaustedError',
    'AnalysisOutput',
    'PROVIDERS',
]
