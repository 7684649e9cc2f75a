"""
graphdesc command line

Usage:
    graphdesc describe schema.json
    graphdesc describe schema.json --width 120 -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import PrinterConfig
from .errors import GraphPrintError, SchemaError
from .loader import load_graph
from .printer import fprint_graph

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphdesc",
        description="Describe the types of a generated schema graph as tables.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    describe = sub.add_parser("describe", help="print a table description of a graph file")
    describe.add_argument("path", help="graph description (JSON)")
    describe.add_argument("--width", type=int, default=PrinterConfig().width,
                          help="maximum table width before cells are squeezed")
    describe.add_argument("--padding", type=int, default=PrinterConfig().padding,
                          help="spaces on each side of a cell")
    describe.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def describe(args: argparse.Namespace) -> int:
    """Load the graph at args.path and print it to stdout"""
    try:
        config = PrinterConfig(width=args.width, padding=args.padding)
    except ValidationError as e:
        print(f"Error: invalid options: {e}", file=sys.stderr)
        return 2

    try:
        graph = load_graph(args.path)
    except SchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        fprint_graph(sys.stdout, graph, config)
    except GraphPrintError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Running %s", args.command)

    if args.command == "describe":
        return describe(args)
    return 2
