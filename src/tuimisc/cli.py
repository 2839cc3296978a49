"""CLI argument parser and commands for tuimisc."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from tuimisc.config import ComboConfig
from tuimisc.errors import ConfigurationError
from tuimisc.layout import auto_set_cells, parse_child

logger = logging.getLogger(__name__)

SAMPLE_ITEMS = ["Alice", "Bob", "Carol", "Chloé", "Dave", "Zoë"]


def load_items(path: str | None) -> list[Any]:
    """Read a JSON array of strings or objects. No path gives sample items."""
    if path is None:
        return list(SAMPLE_ITEMS)
    data = json.loads(Path(path).read_text())
    if not isinstance(data, list):
        raise ConfigurationError(f"{path}: expected a JSON array of items")
    return data


def build_config(args) -> ComboConfig:
    """Merge an optional JSON config file with command-line overrides."""
    data: dict[str, Any] = {}
    if args.config:
        loaded = json.loads(Path(args.config).read_text())
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"{args.config}: expected a JSON object")
        data.update(loaded)
    if args.delay is not None:
        data["delay"] = args.delay
    if args.display_member is not None:
        data["display_member_path"] = args.display_member
    if args.case_sensitive:
        data["ignore_case"] = False
    if args.keep_accents:
        data["ignore_accents"] = False
    return ComboConfig.from_mapping(data)


def demo(args) -> int:
    """Run the demo TUI."""
    from textual.logging import TextualHandler

    from tuimisc.ui.app import DemoApp

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        handlers=[TextualHandler()],
    )
    try:
        items = load_items(args.items)
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logger.info("starting demo with %d items, delay %dms", len(items), config.delay)
    DemoApp(items, config).run()
    return 0


def grid(args) -> int:
    """Print the cells auto-assigned to a row of grid children."""
    try:
        children = [parse_child(spec) for spec in args.children]
        rows = auto_set_cells(children, args.columns)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        out = [{"child": c.name, "row": c.row, "column": c.column, "span": c.column_span} for c in children]
        print(json.dumps({"rows": rows, "cells": out}, indent=2))
        return 0

    for child in children:
        print(f"{child.name}\trow {child.row}\tcolumn {child.column}")
    print(f"{rows} row(s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="tuimisc",
        description="Filtered combo box and grid layout helpers for Textual",
    )
    commands = parser.add_subparsers(dest="command")

    # --- demo ---
    demo_p = commands.add_parser("demo", help="Run the filtered combo box demo")
    demo_p.add_argument("items", nargs="?", help="JSON file with an array of items (default: sample names)")
    demo_p.add_argument("--config", help="JSON file with combo box options")
    demo_p.add_argument("--delay", type=int, help="Filter delay in milliseconds (default: 500)")
    demo_p.add_argument("--display-member", help="Field holding the display text of object items")
    demo_p.add_argument("--case-sensitive", action="store_true", help="Match case when filtering")
    demo_p.add_argument("--keep-accents", action="store_true", help="Match accents when filtering")
    demo_p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    demo_p.set_defaults(func=demo)

    # --- grid ---
    grid_p = commands.add_parser("grid", help="Show auto-assigned grid cells")
    grid_p.add_argument("columns", type=int, help="Number of grid columns")
    grid_p.add_argument(
        "children",
        nargs="+",
        help="Child specs: SPAN, SPAN! to force a row break, or @ROW,COL for a pinned child",
    )
    grid_p.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    grid_p.set_defaults(func=grid)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)
