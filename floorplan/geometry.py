"""Dimension and coordinate passes over slicing trees.

The dimension pass walks the tree bottom-up and records on every ``Cut`` the
smallest rectangle enclosing its two children:

* horizontal cut - children are stacked, so widths take the maximum and
  heights add up;
* vertical cut - children sit side by side, so widths add up and heights
  take the maximum.

The coordinate pass then walks top-down from the origin. A horizontal cut
places its right child at its own origin and stacks the left child above it;
a vertical cut places its left child at its own origin and the right child
immediately to its right. Placing a child depends on the dimensions of its
sibling, so every cut in the tree must be measured before the coordinate
pass begins.

Both passes use explicit stacks, so deep chain-shaped trees are not limited
by the interpreter recursion limit. The module also provides the checks used
to verify a finished layout: the tiling relation between siblings and the
pairwise no-overlap property of leaf rectangles.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
import logging
from typing import Dict, List, Tuple

from .errors import LayoutStateError
from .nodes import Cut, Leaf, Node, Orientation, iter_postorder, iter_preorder

logger = logging.getLogger(__name__)

Dimensions = Tuple[int, int]

__all__ = [
    "Dimensions",
    "Placement",
    "annotate",
    "check_tiling",
    "compute_coordinates",
    "compute_dimensions",
    "find_overlaps",
    "leaf_placements",
    "node_dimensions",
]


@dataclass(frozen=True)
class Placement:
    """Absolute rectangle occupied by a placed leaf."""

    label: int
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def overlaps(self, other: "Placement") -> bool:
        """Return ``True`` when the rectangles share a region of positive area.

        Rectangles that only touch along an edge or at a corner do not overlap.
        """

        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.top
            and other.y < self.top
        )


def node_dimensions(node: Node) -> Dimensions:
    """Return ``(width, height)`` of *node*.

    Raises ``LayoutStateError`` for a cut the dimension pass has not reached.
    """

    if isinstance(node, Leaf):
        return node.width, node.height
    if node.width is None or node.height is None:
        raise LayoutStateError(
            f"{node.orientation.value} cut has no dimensions; run compute_dimensions first"
        )
    return node.width, node.height


def _combine(orientation: Orientation, left: Dimensions, right: Dimensions) -> Dimensions:
    left_width, left_height = left
    right_width, right_height = right
    if orientation is Orientation.HORIZONTAL:
        return max(left_width, right_width), left_height + right_height
    return left_width + right_width, max(left_height, right_height)


def compute_dimensions(root: Node) -> Dimensions:
    """Annotate every cut under *root* with its enclosing dimensions.

    Children are always measured before their parent. Leaves keep their
    intrinsic dimensions. Returns the dimensions of *root*.
    """

    for node in iter_postorder(root):
        if isinstance(node, Cut):
            node.width, node.height = _combine(
                node.orientation,
                node_dimensions(node.left),
                node_dimensions(node.right),
            )

    dimensions = node_dimensions(root)
    logger.debug("Floorplan dimensions: %dx%d", *dimensions)
    return dimensions


def compute_coordinates(root: Node, x: int = 0, y: int = 0) -> None:
    """Assign absolute coordinates to every leaf under *root*.

    *root* is placed with its lower-left corner at ``(x, y)``.

    Raises
    ------
    LayoutStateError
        If any cut in the tree has not been measured yet. The check covers
        the whole tree before a single coordinate is written.
    """

    unmeasured = sum(
        1 for node in iter_preorder(root) if isinstance(node, Cut) and not node.is_measured
    )
    if unmeasured:
        raise LayoutStateError(
            f"{unmeasured} cut(s) have no dimensions; run compute_dimensions first"
        )

    stack: List[Tuple[Node, int, int]] = [(root, x, y)]
    while stack:
        node, origin_x, origin_y = stack.pop()
        if isinstance(node, Leaf):
            node.x, node.y = origin_x, origin_y
            continue
        if node.orientation is Orientation.HORIZONTAL:
            _, right_height = node_dimensions(node.right)
            stack.append((node.right, origin_x, origin_y))
            stack.append((node.left, origin_x, origin_y + right_height))
        else:
            left_width, _ = node_dimensions(node.left)
            stack.append((node.right, origin_x + left_width, origin_y))
            stack.append((node.left, origin_x, origin_y))


def annotate(root: Node) -> Dimensions:
    """Run the dimension pass and then the coordinate pass from the origin."""

    dimensions = compute_dimensions(root)
    compute_coordinates(root, 0, 0)
    return dimensions


def leaf_placements(root: Node) -> List[Placement]:
    """Return the placed rectangles of all leaves in pre-order."""

    placements: List[Placement] = []
    for node in iter_preorder(root):
        if not isinstance(node, Leaf):
            continue
        if node.x is None or node.y is None:
            raise LayoutStateError(
                f"leaf {node.label} has no coordinates; run compute_coordinates first"
            )
        placements.append(Placement(node.label, node.x, node.y, node.width, node.height))
    return placements


def find_overlaps(root: Node) -> List[Tuple[Placement, Placement]]:
    """Return every pair of leaves whose rectangles overlap."""

    return [
        (first, second)
        for first, second in combinations(leaf_placements(root), 2)
        if first.overlaps(second)
    ]


def _subtree_origins(root: Node) -> Dict[int, Tuple[int, int]]:
    """Map ``id(node)`` to the lower-left corner of the node's subtree."""

    origins: Dict[int, Tuple[int, int]] = {}
    for node in iter_postorder(root):
        if isinstance(node, Leaf):
            if node.x is None or node.y is None:
                raise LayoutStateError(
                    f"leaf {node.label} has no coordinates; run compute_coordinates first"
                )
            origins[id(node)] = (node.x, node.y)
        else:
            left_x, left_y = origins[id(node.left)]
            right_x, right_y = origins[id(node.right)]
            origins[id(node)] = (min(left_x, right_x), min(left_y, right_y))
    return origins


def check_tiling(root: Node) -> List[str]:
    """Describe every cut whose children are not tiled against each other.

    For a horizontal cut the left subtree must sit directly on top of the
    right one with the same x; for a vertical cut the right subtree must
    start where the left one ends with the same y. An empty list means the
    layout is consistent.
    """

    origins = _subtree_origins(root)
    problems: List[str] = []
    for index, node in enumerate(iter_preorder(root)):
        if not isinstance(node, Cut):
            continue
        left_x, left_y = origins[id(node.left)]
        right_x, right_y = origins[id(node.right)]
        left_width, _ = node_dimensions(node.left)
        _, right_height = node_dimensions(node.right)
        if node.orientation is Orientation.HORIZONTAL:
            expected = (right_x, right_y + right_height)
            actual = (left_x, left_y)
            side = "left"
        else:
            expected = (left_x + left_width, left_y)
            actual = (right_x, right_y)
            side = "right"
        if actual != expected:
            problems.append(
                f"{node.orientation.value} cut at pre-order position {index}: "
                f"{side} child at {actual}, expected {expected}"
            )
    return problems
