"""
Engine Module

Talks UCI to an external chess engine and turns its output into structured
evaluations.

Key Components:
    - parse_line: Decode one "info" line into an EngineEntry
    - select_best_lines: Keep the latest entry per variation
    - decode_move: Split a UCI move token into squares and promotion
    - EngineChannel / SubprocessChannel: Line-oriented engine transport
    - EngineSession: UCI state machine for one analysis run
"""

from chess_analysis_api.engine.channel import EngineChannel, SubprocessChannel
from chess_analysis_api.engine.parser import (
    DecodedMove,
    EngineEntry,
    Score,
    decode_move,
    parse_line,
    select_best_lines,
)
from chess_analysis_api.engine.session import (
    EngineSession,
    EvaluationResult,
    SessionState,
)

__all__ = [
    'EngineChannel',
    'SubprocessChannel',
    'DecodedMove',
    'EngineEntry',
    'Score',
    'decode_move',
    'parse_line',
    'select_best_lines',
    'EngineSession',
    'EvaluationResult',
    'SessionState',
]
