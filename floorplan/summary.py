"""Rich console rendering of an annotated floorplan."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from .geometry import leaf_placements, node_dimensions
from .nodes import Node

__all__ = ["build_summary_table", "render_summary"]


def build_summary_table(root: Node) -> Table:
    """Return a table listing every leaf placement of *root*."""

    placements = leaf_placements(root)
    width, height = node_dimensions(root)

    table = Table(
        title="Slicing floorplan",
        caption=f"{len(placements)} blocks in a {width}x{height} floorplan",
    )
    for column in ("Block", "X", "Y", "Width", "Height"):
        table.add_column(column, justify="right")
    for placement in placements:
        table.add_row(
            str(placement.label),
            str(placement.x),
            str(placement.y),
            str(placement.width),
            str(placement.height),
        )
    return table


def render_summary(root: Node, *, console: Optional[Console] = None) -> None:
    """Print the placement table for *root* to *console* (stdout by default)."""

    (console or Console()).print(build_summary_table(root))
