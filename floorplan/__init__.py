"""Slicing floorplan reconstruction.

The package rebuilds a slicing tree from its post-order token encoding,
computes enclosing dimensions and absolute leaf coordinates, and renders the
structure, dimension and coordinate reports.
"""

from .errors import (
    FloorplanError,
    LayoutStateError,
    ParseError,
    ResourceError,
    StructuralError,
)
from .geometry import (
    Placement,
    annotate,
    check_tiling,
    compute_coordinates,
    compute_dimensions,
    find_overlaps,
    leaf_placements,
    node_dimensions,
)
from .nodes import Cut, Leaf, Node, Orientation, iter_postorder, iter_preorder
from .serializer import (
    coordinate_report,
    dimension_report,
    format_leaf,
    postorder_tokens,
    structure_report,
    write_report,
)
from .tree_builder import LeafSpec, build_tree, load_tree, parse_token, read_tokens

__all__ = [
    "Cut",
    "FloorplanError",
    "LayoutStateError",
    "Leaf",
    "LeafSpec",
    "Node",
    "Orientation",
    "ParseError",
    "Placement",
    "ResourceError",
    "StructuralError",
    "annotate",
    "build_tree",
    "check_tiling",
    "compute_coordinates",
    "compute_dimensions",
    "coordinate_report",
    "dimension_report",
    "find_overlaps",
    "format_leaf",
    "iter_postorder",
    "iter_preorder",
    "leaf_placements",
    "load_tree",
    "node_dimensions",
    "parse_token",
    "postorder_tokens",
    "read_tokens",
    "structure_report",
    "write_report",
]
