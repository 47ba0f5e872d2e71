"""Text reports for slicing trees.

Every report is a generator of lines without trailing newlines and never
mutates the tree:

* ``structure_report`` - pre-order; leaves as ``label(width,height)`` and cuts
  as their operator character.
* ``dimension_report`` - post-order; leaves as ``label(width,height)`` and cuts
  as ``operator(width,height)`` using the computed enclosing dimensions.
* ``coordinate_report`` - pre-order over leaves only, as
  ``label((width,height)(x,y))``.

``postorder_tokens`` re-encodes a tree in the input format accepted by
``floorplan.tree_builder.build_tree``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, TextIO, Union

from .errors import LayoutStateError
from .geometry import node_dimensions
from .nodes import Leaf, Node, iter_postorder, iter_preorder

logger = logging.getLogger(__name__)

__all__ = [
    "coordinate_report",
    "dimension_report",
    "format_leaf",
    "postorder_tokens",
    "structure_report",
    "write_report",
]


def format_leaf(leaf: Leaf) -> str:
    """Return the ``label(width,height)`` descriptor of *leaf*."""

    return f"{leaf.label}({leaf.width},{leaf.height})"


def structure_report(root: Node) -> Iterator[str]:
    """Yield the pre-order structure lines, echoing leaf descriptors as given."""

    for node in iter_preorder(root):
        if isinstance(node, Leaf):
            yield format_leaf(node)
        else:
            yield node.orientation.value


def dimension_report(root: Node) -> Iterator[str]:
    """Yield every node in post-order with its enclosing dimensions."""

    for node in iter_postorder(root):
        if isinstance(node, Leaf):
            yield format_leaf(node)
        else:
            width, height = node_dimensions(node)
            yield f"{node.orientation.value}({width},{height})"


def coordinate_report(root: Node) -> Iterator[str]:
    """Yield each placed leaf in pre-order with its dimensions and origin."""

    for node in iter_preorder(root):
        if not isinstance(node, Leaf):
            continue
        if not node.is_placed:
            raise LayoutStateError(
                f"leaf {node.label} has no coordinates; run compute_coordinates first"
            )
        yield f"{node.label}(({node.width},{node.height})({node.x},{node.y}))"


def postorder_tokens(root: Node) -> Iterator[str]:
    """Yield the post-order token sequence that rebuilds *root*."""

    for node in iter_postorder(root):
        if isinstance(node, Leaf):
            yield format_leaf(node)
        else:
            yield node.orientation.value


def write_report(lines: Iterable[str], destination: Union[TextIO, Path]) -> int:
    """Write *lines* one per line to *destination* and return the line count.

    *destination* may be an open text handle, which is left open, or a path,
    which is created (parents included) and overwritten.
    """

    if isinstance(destination, Path):
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("w", encoding="utf-8") as handle:
            return write_report(lines, handle)

    count = 0
    for line in lines:
        destination.write(line)
        destination.write("\n")
        count += 1
    logger.debug("Wrote %d report lines", count)
    return count
