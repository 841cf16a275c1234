#!/usr/bin/env python3
"""
Command-line entry point: count the cooling ducts for a datacenter grid.

    count_ducts grid.txt
    count_ducts - < grid.txt
    count_ducts --concise --show grid_concise.txt
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import render
from ductpath import DuctSearch, SearchRules
from grid_parser import parse_grid, parse_grid_concise

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="count_ducts",
        description="Count the cooling ducts (Hamiltonian paths) from intake to air conditioner.",
    )
    parser.add_argument("path", nargs="?", default="-", help="Grid file, or '-' for stdin (default)")
    parser.add_argument("--concise", action="store_true", help="Input uses the single-character format")
    parser.add_argument("--no-degree", action="store_true", help="Disable the degree pruning check")
    parser.add_argument("--reachability", action="store_true", help="Enable the reachability pruning check")
    parser.add_argument("--iterative", action="store_true", help="Use the explicit-stack search")
    parser.add_argument("--show", action="store_true", help="Render the grid before counting")
    parser.add_argument("--stats", action="store_true", help="Print search statistics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search progress")
    return parser


def read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    """Run the CLI. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    console = Console()
    error_console = Console(stderr=True)

    try:
        text = read_input(args.path)
        grid = parse_grid_concise(text) if args.concise else parse_grid(text)
    except (OSError, ValueError) as e:
        error_console.print(Text(f"Error: {e}", style="bold red"))
        return 1

    if args.show:
        grid_text = Text.from_ansi(render(grid))
        console.print(Panel(grid_text, title=f"Datacenter {grid.width}x{grid.height}", expand=False))

    rules = SearchRules(prune_degree=not args.no_degree, prune_reachability=args.reachability)
    search = DuctSearch(grid, rules)
    logger.info("Counting ducts with %s", rules)
    total = search.count_paths_iterative() if args.iterative else search.count_paths()

    print(total)
    if args.stats:
        stats = search.stats
        console.print(
            f"nodes={stats.nodes} paths={stats.paths} "
            f"pruned_degree={stats.pruned_degree} pruned_reachability={stats.pruned_reachability}",
            highlight=False,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
