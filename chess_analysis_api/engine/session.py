"""
Engine Session Driver

Drives one analysis run over an engine channel using the UCI protocol.

Protocol Flow:
    → uci
    ← uciok                              (AWAITING_HANDSHAKE → AWAITING_READY)
    → position fen <fen>
    → setoption name multipv value <n>
    → isready
    ← readyok                            (AWAITING_READY → SEARCHING)
    → go depth <d>
    ← info depth ... multipv k ... pv ...   (collected per variation)
    ← bestmove <move>                    (SEARCHING → DONE)
    → quit

A session exclusively owns its channel and closes it exactly once, when the
run ends (successfully or not). Sessions are single use.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from chess_analysis_api.engine.channel import EngineChannel
from chess_analysis_api.engine.parser import (
    DecodedMove,
    EngineEntry,
    UCI_MOVE_PATTERN,
    decode_move,
    parse_line,
    select_best_lines,
)
from chess_analysis_api.errors import (
    EngineError,
    EngineTerminatedError,
    EngineTimeoutError,
)
from chess_analysis_api.parameters import AnalysisParameters

logger = logging.getLogger(__name__)


HANDSHAKE_ACK = "uciok"
READY_ACK = "readyok"
INFO_PREFIX = "info"
BESTMOVE_PREFIX = "bestmove"


class SessionState(Enum):
    """Stage of the UCI exchange."""
    AWAITING_HANDSHAKE = 0
    AWAITING_READY = 1
    SEARCHING = 2
    DONE = 3


@dataclass(frozen=True)
class EvaluationResult:
    """Final engine evaluation of a position."""

    depth: int
    multipv: int
    fen: str
    lines: List[EngineEntry]  # one per variation, in bucket-creation order
    best_move: DecodedMove


class EngineSession:
    """
    One engine analysis run.

    Attributes:
        channel: Engine channel owned by this session
        timeout: Seconds to wait for the best move (None waits forever)
        state: Current SessionState
        history: Variation index → parsed entries in arrival order

    Usage:
        channel = await SubprocessChannel.open("stockfish")
        session = EngineSession(channel, timeout=30.0)
        result = await session.run(params)
    """

    def __init__(self, channel: EngineChannel, timeout: Optional[float] = None):
        self.channel = channel
        self.timeout = timeout
        self.state = SessionState.AWAITING_HANDSHAKE
        self.history: Dict[int, List[EngineEntry]] = {}
        self._started = False
        self._closed = False

    async def run(self, params: AnalysisParameters) -> EvaluationResult:
        """
        Analyse params.fen and return the evaluation.

        Raises:
            EngineTerminatedError: If the channel ends before "bestmove"
            EngineTimeoutError: If the timeout expires first
            EngineError: If the engine reports no usable best move
            RuntimeError: If the session was already run
        """
        if self._started:
            raise RuntimeError("EngineSession can only be run once")
        self._started = True

        try:
            return await asyncio.wait_for(self._drive(params), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise EngineTimeoutError(
                f"Engine gave no best move within {self.timeout}s "
                f"(state={self.state.name})"
            ) from None
        finally:
            await self.close()

    async def close(self) -> None:
        """Tear down the channel (idempotent)."""
        if self._closed:
            return
        self._closed = True
        await self.channel.close()

    async def _send(self, command: str) -> None:
        logger.debug(f">>> {command}")
        await self.channel.send(command)

    async def _drive(self, params: AnalysisParameters) -> EvaluationResult:
        await self._send("uci")

        while True:
            line = await self.channel.readline()
            if line is None:
                raise EngineTerminatedError(
                    f"Engine channel closed before best move (state={self.state.name})"
                )

            line = line.strip()
            if not line:
                continue
            logger.debug(f"<<< {line}")

            result = await self._handle_line(line, params)
            if result is not None:
                return result

    async def _handle_line(
        self, line: str, params: AnalysisParameters
    ) -> Optional[EvaluationResult]:
        if self.state == SessionState.AWAITING_HANDSHAKE:
            if line == HANDSHAKE_ACK:
                await self._send(f"position fen {params.fen}")
                await self._send(f"setoption name multipv value {params.multipv}")
                await self._send("isready")
                self.state = SessionState.AWAITING_READY

        elif self.state == SessionState.AWAITING_READY:
            if line == READY_ACK:
                await self._send(f"go depth {params.depth}")
                self.state = SessionState.SEARCHING

        elif self.state == SessionState.SEARCHING:
            if line.startswith(INFO_PREFIX):
                self._record(parse_line(line))
            elif line.startswith(BESTMOVE_PREFIX):
                return await self._finish(line, params)

        return None

    def _record(self, entry: EngineEntry) -> None:
        index = entry.variation_index
        if index is None:
            # currmove updates, "info string" banners and the like
            return

        if index not in self.history:
            self.history[index] = []
        self.history[index].append(entry)

    async def _finish(self, line: str, params: AnalysisParameters) -> EvaluationResult:
        await self._send("quit")
        self.state = SessionState.DONE

        tokens = line.split()
        token = tokens[1] if len(tokens) > 1 else ""
        if not UCI_MOVE_PATTERN.match(token):
            raise EngineError(f"Engine reported no usable best move: {line!r}")

        best_move = decode_move(token)
        lines = select_best_lines(self.history)

        logger.info(
            f"Engine search complete: best_move={token}, depth={params.depth}, "
            f"variations={len(lines)}"
        )

        return EvaluationResult(
            depth=params.depth or 1,
            multipv=params.multipv or 1,
            fen=params.fen,
            lines=lines,
            best_move=best_move,
        )
