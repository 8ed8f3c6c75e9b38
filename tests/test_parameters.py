"""Tests for analysis parameter normalization and configuration."""

import pytest

from chess_analysis_api.config import AnalysisConfig, get_config, set_config
from chess_analysis_api.parameters import (
    DEFAULT_DEPTH,
    DEFAULT_MULTI_PV,
    MAX_DEPTH,
    MAX_MULTI_PV,
    MIN_DEPTH,
    MIN_MULTI_PV,
    AnalysisParameters,
    clamp,
    normalize_parameters,
)

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


class TestClamp:
    def test_inside_range_unchanged(self):
        assert clamp(5, 1, 10) == 5

    def test_bounds_are_inclusive(self):
        assert clamp(1, 1, 10) == 1
        assert clamp(10, 1, 10) == 10

    def test_above_max(self):
        assert clamp(11, 1, 10) == 10

    def test_below_min(self):
        assert clamp(-3, 1, 10) == 1


class TestNormalizeParameters:
    """Test defaulting and clamping of multipv / depth."""

    def test_defaults_when_absent(self):
        params = normalize_parameters(START_FEN)

        assert params == AnalysisParameters(
            fen=START_FEN, multipv=DEFAULT_MULTI_PV, depth=DEFAULT_DEPTH
        )

    def test_zero_treated_as_absent(self):
        params = normalize_parameters(START_FEN, multipv=0, depth=0)

        assert params.multipv == DEFAULT_MULTI_PV
        assert params.depth == DEFAULT_DEPTH

    @pytest.mark.parametrize("depth", [MIN_DEPTH, 12, 20, MAX_DEPTH])
    def test_depth_inside_range_unchanged(self, depth):
        assert normalize_parameters(START_FEN, depth=depth).depth == depth

    @pytest.mark.parametrize(
        "depth, expected",
        [(MAX_DEPTH + 1, MAX_DEPTH), (99, MAX_DEPTH), (MIN_DEPTH - 1, MIN_DEPTH), (-5, MIN_DEPTH)],
    )
    def test_depth_outside_range_clamped(self, depth, expected):
        assert normalize_parameters(START_FEN, depth=depth).depth == expected

    def test_multipv_clamped(self):
        assert normalize_parameters(START_FEN, multipv=50).multipv == MAX_MULTI_PV
        assert normalize_parameters(START_FEN, multipv=-1).multipv == MIN_MULTI_PV
        assert normalize_parameters(START_FEN, multipv=3).multipv == 3

    def test_fen_passed_through(self):
        assert normalize_parameters("anything").fen == "anything"


class TestAnalysisConfig:
    """Test AnalysisConfig validation and the global default."""

    @pytest.fixture(autouse=True)
    def reset_global_config(self):
        set_config(None)
        yield
        set_config(None)

    def test_defaults(self):
        config = AnalysisConfig()

        assert config.engine_path == "stockfish"
        assert config.opening_endpoint == "https://explorer.lichess.ovh/lichess"

    def test_masters_endpoint(self):
        config = AnalysisConfig(
            opening_explorer_url="https://explorer.example/", opening_database="masters"
        )

        assert config.opening_endpoint == "https://explorer.example/masters"

    def test_empty_engine_path_raises(self):
        with pytest.raises(ValueError, match="engine_path"):
            AnalysisConfig(engine_path="")

    def test_bad_timeouts_raise(self):
        with pytest.raises(ValueError, match="engine_timeout"):
            AnalysisConfig(engine_timeout=0)
        with pytest.raises(ValueError, match="http_timeout"):
            AnalysisConfig(http_timeout=-1.0)

    def test_no_engine_timeout_allowed(self):
        assert AnalysisConfig(engine_timeout=None).engine_timeout is None

    def test_unknown_database_raises(self):
        with pytest.raises(ValueError, match="opening_database"):
            AnalysisConfig(opening_database="chesscom")

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_config_replaces_default(self):
        custom = AnalysisConfig(engine_path="/opt/sf")
        set_config(custom)

        assert get_config() is custom
