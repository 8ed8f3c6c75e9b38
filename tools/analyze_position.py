#!/usr/bin/env python3
"""
CLI tool for analysing a single chess position.

Usage:
    python tools/analyze_position.py \\
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1" \\
        --multipv 3 \\
        --depth 18

    python tools/analyze_position.py "<FEN>" \\
        --exclude lichessOpening lichessCloudEval \\
        --engine-path /usr/local/bin/stockfish
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chess_analysis_api import (
    PROVIDERS,
    AnalysisConfig,
    AnalysisError,
    PreconditionError,
    analyze,
    set_config,
)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def engine_timeout(seconds):
    """Map the --engine-timeout value to AnalysisConfig (0 means no timeout)."""
    if seconds == 0:
        return None
    return seconds


def analyze_position(args):
    """Run the analysis and print the normalized output as JSON."""
    set_config(
        AnalysisConfig(
            engine_path=args.engine_path,
            engine_timeout=engine_timeout(args.engine_timeout),
            http_timeout=args.http_timeout,
            opening_database=args.opening_database,
        )
    )

    output = asyncio.run(
        analyze(
            args.fen,
            multipv=args.multipv,
            depth=args.depth,
            excludes=args.exclude,
        )
    )

    print(json.dumps(output.to_dict(), indent=2))


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Evaluate a chess position with provider fallback",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "fen",
        help="Position to analyse, in FEN format",
    )
    parser.add_argument(
        "--multipv",
        type=int,
        default=None,
        help="Number of variations (default: 1, clamped to 1-5)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Search depth (default: 15, clamped to 10-25)",
    )
    parser.add_argument(
        "--exclude",
        nargs="+",
        default=None,
        choices=[p.value for p in PROVIDERS],
        help="Providers to skip",
    )
    parser.add_argument(
        "--engine-path",
        type=str,
        default="stockfish",
        help="Path to the UCI engine binary",
    )
    parser.add_argument(
        "--engine-timeout",
        type=float,
        default=60.0,
        help="Seconds to wait for the engine's best move (0 waits forever)",
    )
    parser.add_argument(
        "--http-timeout",
        type=float,
        default=5.0,
        help="Timeout for opening-book and cloud-eval requests",
    )
    parser.add_argument(
        "--opening-database",
        choices=["lichess", "masters"],
        default="lichess",
        help="Opening explorer database",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    try:
        analyze_position(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except PreconditionError as e:
        print(f"Error: {e}")
        sys.exit(2)
    except AnalysisError as e:
        print(f"\n\nError: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
