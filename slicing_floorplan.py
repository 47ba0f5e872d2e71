"""Command line tool reconstructing a slicing floorplan from a token file.

The input file lists a slicing tree in post-order, one token per line: leaf
blocks as ``label(width,height)`` and cuts as ``H`` or ``V``. Three reports
are written:

1. the tree structure in pre-order, echoing leaf descriptors as given;
2. every node in post-order with its enclosing dimensions;
3. every leaf in pre-order with its dimensions and lower-left coordinates.

Exit statuses: ``0`` success, ``1`` an input or output file could not be
opened, ``2`` usage error, ``3`` malformed token file, ``4`` the computed
layout failed ``--verify``.
"""

from __future__ import annotations

import argparse
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Sequence

from floorplan import (
    FloorplanError,
    Node,
    build_tree,
    check_tiling,
    compute_coordinates,
    compute_dimensions,
    coordinate_report,
    dimension_report,
    find_overlaps,
    read_tokens,
    structure_report,
    write_report,
)
from floorplan.summary import render_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_INVALID_INPUT = 3
EXIT_VERIFICATION_FAILED = 4


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rebuild a slicing floorplan and report its dimensions and coordinates.",
    )
    parser.add_argument("in_file", type=Path, help="Post-order token file to read")
    parser.add_argument(
        "out_file1", type=Path, help="Destination for the pre-order structure report"
    )
    parser.add_argument(
        "out_file2", type=Path, help="Destination for the post-order dimension report"
    )
    parser.add_argument(
        "out_file3", type=Path, help="Destination for the leaf coordinate report"
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a table of block placements after the reports are written",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Fail when sibling tiling or leaf non-overlap checks do not hold",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def _verify(root: Node) -> bool:
    problems = check_tiling(root)
    for problem in problems:
        logger.error("Tiling violation: %s", problem)
    overlaps = find_overlaps(root)
    for first, second in overlaps:
        logger.error("Blocks %d and %d overlap", first.label, second.label)
    return not problems and not overlaps


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level, logging.WARNING))

    try:
        tokens = read_tokens(args.in_file)
    except OSError as exc:
        logger.error("Cannot read input file %s: %s", args.in_file, exc)
        return EXIT_IO_ERROR
    except FloorplanError as exc:
        logger.error("Invalid floorplan in %s: %s", args.in_file, exc)
        return EXIT_INVALID_INPUT

    with ExitStack() as stack:
        try:
            structure_out, dimension_out, coordinate_out = (
                stack.enter_context(path.open("w", encoding="utf-8"))
                for path in (args.out_file1, args.out_file2, args.out_file3)
            )
        except OSError as exc:
            logger.error("Cannot create output file: %s", exc)
            return EXIT_IO_ERROR

        try:
            root = build_tree(tokens)
            write_report(structure_report(root), structure_out)

            width, height = compute_dimensions(root)
            write_report(dimension_report(root), dimension_out)

            compute_coordinates(root, 0, 0)
            blocks = write_report(coordinate_report(root), coordinate_out)
        except FloorplanError as exc:
            logger.error("Invalid floorplan in %s: %s", args.in_file, exc)
            return EXIT_INVALID_INPUT
        except OSError as exc:
            logger.error("Failed writing reports: %s", exc)
            return EXIT_IO_ERROR

    logger.info("Placed %d blocks in a %dx%d floorplan", blocks, width, height)

    if args.verify and not _verify(root):
        return EXIT_VERIFICATION_FAILED
    if args.summary:
        render_summary(root)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
