"""Command-line interface for flowcut."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from flowcut.io import load_graph_file
from flowcut.logging import get_logger, set_global_log_level
from flowcut.report import format_graph, format_result

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _run_graph(
    path: Path,
    source: Optional[str] = None,
    sink: Optional[str] = None,
    results_path: Optional[Path] = None,
    stdout: bool = False,
) -> None:
    """Compute max flow / min cut for a graph file and report it.

    Args:
        path: Graph YAML file.
        source: Source node id or label overriding the file's ``source``.
        sink: Sink node id or label overriding the file's ``sink``.
        results_path: Optional path where JSON results are written.
        stdout: Print JSON results instead of the text report.
    """
    logger.info(f"Loading graph from: {path}")
    _start_time = perf_counter()

    try:
        state = load_graph_file(path)
        if source is not None:
            state.set_source(state.resolve(source))
        if sink is not None:
            state.set_sink(state.resolve(sink))

        result = state.compute()
        payload = {"graph": state.to_dict(), "result": result.to_dict()}
        json_str = json.dumps(payload, indent=2, default=str)

        if results_path is not None:
            results_path.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Writing results to: {results_path}")
            results_path.write_text(json_str)
            print(f"✅ Results written to: {results_path}")

        if stdout:
            print(json_str)
        else:
            print(format_result(result, state))

        _elapsed = perf_counter() - _start_time
        logger.info(f"Max flow computed in {_format_duration(_elapsed)}")

    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to compute max flow: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to compute max flow: {type(e).__name__}: {e}")
        sys.exit(1)


def _inspect_graph(path: Path) -> None:
    """Validate a graph file and print its node and edge tables."""
    logger.info(f"Inspecting graph from: {path}")

    try:
        state = load_graph_file(path)
        logger.info("✓ Graph validated and loaded successfully")

        print("\n" + "=" * 60)
        print("FLOWCUT GRAPH INSPECTION")
        print("=" * 60)
        print(format_graph(state))

        if state.source is None or state.sink is None:
            print("\n⚠️  Source and sink must both be set before running.")

    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect graph: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to inspect graph: {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``flowcut`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="flowcut",
        description="Compute maximum flow and minimum cut of a graph.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Compute max flow and min cut")
    run_parser.add_argument("graph", type=Path, help="Path to graph YAML")
    run_parser.add_argument(
        "--source", "-s", default=None, help="Source node id or label"
    )
    run_parser.add_argument("--sink", "-t", default=None, help="Sink node id or label")
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export results to this JSON file",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print JSON results to stdout instead of the text report",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a graph file and show its contents"
    )
    inspect_parser.add_argument("graph", type=Path, help="Path to graph YAML")

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    # Without -v/--quiet the level from FLOWCUT_LOG_LEVEL (default INFO) stays
    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)

    if args.command == "run":
        _run_graph(
            path=args.graph,
            source=args.source,
            sink=args.sink,
            results_path=args.results,
            stdout=args.stdout,
        )
    elif args.command == "inspect":
        _inspect_graph(args.graph)


if __name__ == "__main__":
    main()
