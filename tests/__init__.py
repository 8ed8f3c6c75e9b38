"""
Unit Tests for chess_analysis_api

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_parser.py

Dependencies:
    - pytest: Test framework
    - httpx: MockTransport stands in for the Lichess endpoints

Tests that need a real engine are skipped when Stockfish is not installed.
"""
