"""Command-line interface for augflow."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from augflow.algorithms.base import PathStrategy
from augflow.config import ENGINE_CONFIG
from augflow.io import FlowProblem, load_problem
from augflow.logging import cli_log_level, get_logger, set_global_log_level

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 6,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = [
        max(max(len(str(row[col_idx])) for row in all_data), min_width)
        for col_idx in range(len(headers))
    ]

    def format_row(row_data: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _load(path: Path, source: Optional[int], sink: Optional[int]) -> FlowProblem:
    """Load a problem file, exiting with status 1 on failure."""
    try:
        return load_problem(path, source=source, sink=sink)
    except FileNotFoundError:
        logger.error(f"Problem file not found: {path}")
        print(f"ERROR: Problem file not found: {path}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Invalid flow problem {path}: {e}")
        print(f"ERROR: Invalid flow problem: {e}")
        sys.exit(1)


def _solve(
    path: Path,
    source: Optional[int],
    sink: Optional[int],
    algorithm: Optional[str],
    show_flows: bool,
    show_cut: bool,
    as_json: bool,
) -> None:
    """Solve a problem file and print the maximum flow."""
    problem = _load(path, source, sink)
    if algorithm is None:
        strategy = ENGINE_CONFIG.resolve_strategy()
    else:
        strategy = PathStrategy.from_name(algorithm)

    _start_time = perf_counter()
    value, summary = problem.solve(strategy=strategy, return_summary=True)
    _elapsed = perf_counter() - _start_time
    logger.info(
        f"Solved {path.name} with {strategy.name.lower()} "
        f"in {_format_duration(_elapsed)}"
    )

    if as_json:
        doc: Dict[str, Any] = {
            "source": problem.source,
            "sink": problem.sink,
            "algorithm": strategy.name.lower(),
            "max_flow": value,
            "augmentations": len(summary.augmentations),
        }
        if show_flows:
            doc["flows"] = [
                {"src": u, "dst": v, "flow": f}
                for (u, v), f in summary.edge_flow.items()
            ]
        if show_cut:
            doc["min_cut"] = {
                "source_side": sorted(summary.reachable),
                "edges": [list(edge) for edge in summary.min_cut],
                "capacity": summary.cut_capacity,
            }
        print(json.dumps(doc, indent=2))
        return

    print(value)
    if show_flows:
        rows = [
            [u, v, problem.network.capacity(u, v), f]
            for (u, v), f in summary.edge_flow.items()
        ]
        print()
        print("Edge flows:")
        print(_format_table(["src", "dst", "capacity", "flow"], rows))
    if show_cut:
        print()
        print(f"Min cut (capacity {summary.cut_capacity}):")
        print(f"   source side: {sorted(summary.reachable)}")
        for u, v in summary.min_cut:
            print(f"   {u} -> {v} ({problem.network.capacity(u, v)})")


def _compare(path: Path, source: Optional[int], sink: Optional[int]) -> None:
    """Solve with every strategy and exit with status 1 on disagreement."""
    problem = _load(path, source, sink)

    rows = []
    values = set()
    for strategy in PathStrategy:
        _start_time = perf_counter()
        value, summary = problem.solve(strategy=strategy, return_summary=True)
        _elapsed = perf_counter() - _start_time
        values.add(value)
        rows.append(
            [
                strategy.name.lower(),
                value,
                len(summary.augmentations),
                _format_duration(_elapsed),
            ]
        )

    print(_format_table(["strategy", "max_flow", "augmentations", "time"], rows))
    if len(values) != 1:
        logger.error(f"Strategies disagree on max flow for {path}: {sorted(values)}")
        print("ERROR: strategies disagree")
        sys.exit(1)


def _inspect(
    path: Path, source: Optional[int], sink: Optional[int], detail: bool
) -> None:
    """Print basic characteristics of a problem file."""
    problem = _load(path, source, sink)
    network = problem.network

    print(f"Problem: {path}")
    print(f"   vertices: {network.num_vertices}")
    print(f"   edges:    {network.num_edges}")
    print(f"   source:   {problem.source}")
    print(f"   sink:     {problem.sink}")
    print(
        "   capacity out of source: "
        f"{network.out_degree(problem.source, weight='capacity')}"
    )
    print(
        "   capacity into sink:     "
        f"{network.in_degree(problem.sink, weight='capacity')}"
    )
    if detail:
        print()
        print(_format_table(["src", "dst", "capacity"], network.edge_list()))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``augflow`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="augflow",
        description="Compute maximum flows with augmenting paths.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        type=str.lower,
        default=None,
        help="Explicit log level; overrides --verbose and --quiet",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{solve,compare,inspect}",
        help="Available commands",
    )

    solve_parser = subparsers.add_parser("solve", help="Compute the maximum flow")
    solve_parser.add_argument(
        "--algorithm",
        "-a",
        choices=["bfs", "dfs"],
        default=None,
        help=(
            "Path search: bfs (Edmonds-Karp) or dfs (Ford-Fulkerson);"
            " defaults to the configured strategy"
        ),
    )
    solve_parser.add_argument(
        "--flows", action="store_true", help="Print the flow on every edge"
    )
    solve_parser.add_argument(
        "--min-cut", action="store_true", help="Print the minimum cut"
    )
    solve_parser.add_argument(
        "--json", action="store_true", help="Print results as JSON"
    )

    compare_parser = subparsers.add_parser(
        "compare", help="Solve with both strategies and check they agree"
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Inspect and validate a problem file"
    )
    inspect_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="Show the complete edge table",
    )

    for p in (solve_parser, compare_parser, inspect_parser):
        p.add_argument(
            "problem",
            type=Path,
            help="Edge-list file ('n m' header, then 'u v capacity') or YAML",
        )
        p.add_argument(
            "--source", "-s", type=int, default=None, help="Source vertex (default 0)"
        )
        p.add_argument(
            "--sink", "-t", type=int, default=None, help="Sink vertex (default n-1)"
        )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.log_level is not None:
        level = set_global_log_level(args.log_level)
    else:
        level = set_global_log_level(cli_log_level(args.verbose, args.quiet))
    if level <= logging.DEBUG:
        logger.debug("Debug logging enabled")

    if args.command == "solve":
        _solve(
            path=args.problem,
            source=args.source,
            sink=args.sink,
            algorithm=args.algorithm,
            show_flows=args.flows,
            show_cut=args.min_cut,
            as_json=args.json,
        )
    elif args.command == "compare":
        _compare(args.problem, args.source, args.sink)
    elif args.command == "inspect":
        _inspect(args.problem, args.source, args.sink, args.detail)


if __name__ == "__main__":
    main()
