"""Node types for slicing floorplan trees.

A slicing tree has two kinds of nodes:

* ``Leaf`` - a labelled block with intrinsic dimensions. Its placement
  ``(x, y)`` is unknown until the coordinate pass assigns it.
* ``Cut`` - a horizontal or vertical partition owning exactly two children.
  Its enclosing dimensions are unknown until the dimension pass computes them.

Both are slotted dataclasses so a cut without children, or a leaf carrying an
orientation, cannot be constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

__all__ = ["Cut", "Leaf", "Node", "Orientation", "iter_postorder", "iter_preorder"]


class Orientation(Enum):
    """Direction of a slicing cut, valued by its token character."""

    HORIZONTAL = "H"
    VERTICAL = "V"


def _require_positive(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"Leaf {name} must be an integer")
    if value <= 0:
        raise ValueError(f"Leaf {name} must be positive, got {value}")


@dataclass(slots=True)
class Leaf:
    """A terminal block of the floorplan."""

    label: int
    width: int
    height: int
    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self) -> None:
        _require_positive("label", self.label)
        _require_positive("width", self.width)
        _require_positive("height", self.height)

    @property
    def is_placed(self) -> bool:
        return self.x is not None and self.y is not None


@dataclass(slots=True)
class Cut:
    """An internal node splitting its area between ``left`` and ``right``."""

    orientation: Orientation
    left: "Node"
    right: "Node"
    width: Optional[int] = None
    height: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.orientation, Orientation):
            raise TypeError("Cut orientation must be an Orientation member")
        for child in (self.left, self.right):
            if not isinstance(child, (Leaf, Cut)):
                raise TypeError("Cut children must be Leaf or Cut nodes")

    @property
    def is_measured(self) -> bool:
        return self.width is not None and self.height is not None


Node = Union[Leaf, Cut]


def iter_preorder(root: Node) -> Iterator[Node]:
    """Yield nodes parent first, then the left subtree, then the right."""

    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Cut):
            stack.append(node.right)
            stack.append(node.left)


def iter_postorder(root: Node) -> Iterator[Node]:
    """Yield nodes left subtree first, then the right, then the parent."""

    stack: List[Tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded or isinstance(node, Leaf):
            yield node
            continue
        stack.append((node, True))
        stack.append((node.right, False))
        stack.append((node.left, False))
