"""
Unit Tests for the Analysis Entry Point

Tests for:
    - Provider choice by move counter
    - Exclusion filtering
    - Precondition failures before any provider runs
    - End-to-end fallback through a fake provider registry
"""

import asyncio

import pytest

from chess_analysis_api.api import analyze
from chess_analysis_api.engine.parser import DecodedMove, EngineEntry, Score
from chess_analysis_api.engine.session import EvaluationResult
from chess_analysis_api.errors import (
    GameOverError,
    InvalidFenError,
    PreconditionError,
    ProviderError,
    ProvidersExhaustedError,
)
from chess_analysis_api.orchestration.manager import (
    default_provider_order,
    get_analysis,
    prepare_analysis,
)
from chess_analysis_api.parameters import MAX_DEPTH
from chess_analysis_api.providers import PROVIDERS


def fen_at_move(move_number):
    return f"rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 {move_number}"


FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 60"


class FakeRegistry(dict):
    """Provider registry whose providers record their calls."""

    def __init__(self, failing=(), result=None):
        super().__init__()
        self.calls = []
        for name in PROVIDERS:
            self[name] = self._make(name, name in failing, result)

    def _make(self, name, fails, result):
        async def provider(params):
            self.calls.append((name.value, params))
            if fails:
                raise ProviderError(f"{name.value} failed")
            return result if result is not None else name.value
        return provider


class TestDefaultProviderOrder:
    """Tests for provider choice by game phase."""

    def test_opening(self):
        assert default_provider_order(fen_at_move(10)) == [
            PROVIDERS.LICHESS_BOOK,
            PROVIDERS.LICHESS_CLOUD_EVAL,
            PROVIDERS.STOCKFISH,
        ]

    def test_middlegame(self):
        assert default_provider_order(fen_at_move(20)) == [
            PROVIDERS.LICHESS_CLOUD_EVAL,
            PROVIDERS.STOCKFISH,
        ]

    def test_endgame(self):
        assert default_provider_order(fen_at_move(40)) == [PROVIDERS.STOCKFISH]

    @pytest.mark.parametrize(
        "move_number, expected_len",
        [(14, 3), (15, 2), (34, 2), (35, 1)],
    )
    def test_thresholds(self, move_number, expected_len):
        assert len(default_provider_order(fen_at_move(move_number))) == expected_len



class TestPrepareAnalysis:
    """Tests for request validation and chain construction."""

    def test_chain_names(self):
        chain, params = prepare_analysis(fen_at_move(10), registry=FakeRegistry())

        assert chain.names == ("lichessOpening", "lichessCloudEval", "stockfishEval")
        assert params.fen == fen_at_move(10)

    def test_exclude_opening_book(self):
        chain, _ = prepare_analysis(
            fen_at_move(10), excludes=["lichessOpening"], registry=FakeRegistry()
        )

        assert chain.names == ("lichessCloudEval", "stockfishEval")

    def test_exclude_by_enum(self):
        chain, _ = prepare_analysis(
            fen_at_move(10),
            excludes=[PROVIDERS.LICHESS_CLOUD_EVAL],
            registry=FakeRegistry(),
        )

        assert chain.names == ("lichessOpening", "stockfishEval")

    def test_exclude_everything(self):
        chain, _ = prepare_analysis(
            fen_at_move(40), excludes=["stockfishEval"], registry=FakeRegistry()
        )

        assert chain.remaining == 0

    def test_parameters_normalized(self):
        _, params = prepare_analysis(fen_at_move(10), multipv=None, depth=99)

        assert params.multipv == 1
        assert params.depth == MAX_DEPTH

    def test_invalid_fen(self):
        with pytest.raises(InvalidFenError, match="FEN is not valid"):
            prepare_analysis("not a fen")

    def test_illegal_position(self):
        with pytest.raises(InvalidFenError):
            prepare_analysis("8/8/8/8/8/8/8/8 w - - 0 1")

    def test_checkmate(self):
        with pytest.raises(GameOverError):
            prepare_analysis(FOOLS_MATE)

    def test_stalemate(self):
        with pytest.raises(GameOverError):
            prepare_analysis(STALEMATE)

    def test_fifty_move_rule(self):
        fen = "4k3/8/8/8/8/8/4P3/4K3 w - - 100 80"

        with pytest.raises(PreconditionError):
            prepare_analysis(fen)

    def test_missing_counters(self):
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -"

        with pytest.raises(PreconditionError):
            prepare_analysis(fen)

    def test_precondition_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            prepare_analysis("not a fen")


class TestGetAnalysis:
    """End-to-end tests through a fake registry."""

    def test_invalid_fen_invokes_no_provider(self):
        registry = FakeRegistry()

        with pytest.raises(InvalidFenError):
            asyncio.run(get_analysis("not a fen", registry=registry))

        assert registry.calls == []

    def test_game_over_invokes_no_provider(self):
        registry = FakeRegistry()

        with pytest.raises(PreconditionError):
            asyncio.run(get_analysis(FOOLS_MATE, registry=registry))

        assert registry.calls == []

    def test_first_provider_answers(self):
        registry = FakeRegistry()

        outcome = asyncio.run(get_analysis(fen_at_move(10), registry=registry))

        assert outcome.provider_name == "lichessOpening"
        assert [name for name, _ in registry.calls] == ["lichessOpening"]

    def test_falls_back_to_engine(self):
        registry = FakeRegistry(
            failing={PROVIDERS.LICHESS_BOOK, PROVIDERS.LICHESS_CLOUD_EVAL}
        )

        outcome = asyncio.run(get_analysis(fen_at_move(10), multipv=3, registry=registry))

        assert outcome.provider_name == "stockfishEval"
        assert [name for name, _ in registry.calls] == [
            "lichessOpening",
            "lichessCloudEval",
            "stockfishEval",
        ]
        assert all(params.multipv == 3 for _, params in registry.calls)

    def test_all_fail(self):
        registry = FakeRegistry(failing=set(PROVIDERS))

        with pytest.raises(ProvidersExhaustedError) as exc_info:
            asyncio.run(get_analysis(fen_at_move(20), registry=registry))

        assert str(exc_info.value.last_error) == "stockfishEval failed"


class TestAnalyze:
    """Tests for the normalized public entry point."""

    def test_engine_result_normalized(self):
        fen = fen_at_move(40)
        result = EvaluationResult(
            depth=15,
            multipv=1,
            fen=fen,
            lines=[EngineEntry(depth=15, multipv=1, score=Score("cp", 22), moves=["e2e4", "e7e5"])],
            best_move=DecodedMove("e2", "e4"),
        )

        output = asyncio.run(analyze(fen, registry=FakeRegistry(result=result)))

        assert output.provider == "stockfishEval"
        assert output.depth == 15
        assert output.best_move.as_dict() == {"from": "e2", "to": "e4"}
        assert output.lines[0].moves == ["e2e4", "e7e5"]
