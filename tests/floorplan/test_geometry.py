from __future__ import annotations

import pytest

from floorplan.errors import LayoutStateError
from floorplan.geometry import (
    Placement,
    annotate,
    check_tiling,
    compute_coordinates,
    compute_dimensions,
    find_overlaps,
    leaf_placements,
    node_dimensions,
)
from floorplan.nodes import Cut, Leaf, Orientation, iter_preorder
from floorplan.tree_builder import build_tree

SAMPLE_TOKENS = ["1(2,3)", "2(4,5)", "H", "3(3,8)", "V", "4(7,2)", "H"]


def _leaves(root) -> dict[int, Leaf]:
    return {node.label: node for node in iter_preorder(root) if isinstance(node, Leaf)}


def test_horizontal_cut_stacks_heights() -> None:
    root = build_tree(["1(2,3)", "2(4,5)", "H"])
    assert compute_dimensions(root) == (4, 8)
    assert (root.width, root.height) == (4, 8)


def test_vertical_cut_adds_widths() -> None:
    root = build_tree(["1(2,3)", "2(4,5)", "V"])
    assert compute_dimensions(root) == (6, 5)


def test_compute_dimensions_nested_tree() -> None:
    root = build_tree(SAMPLE_TOKENS)
    assert compute_dimensions(root) == (7, 10)
    assert isinstance(root, Cut) and isinstance(root.left, Cut)
    assert node_dimensions(root.left) == (7, 8)
    assert isinstance(root.left.left, Cut)
    assert node_dimensions(root.left.left) == (4, 8)


def test_compute_dimensions_leaf_is_unchanged() -> None:
    leaf = Leaf(7, 10, 20)
    assert compute_dimensions(leaf) == (10, 20)
    assert (leaf.width, leaf.height) == (10, 20)


def test_dimension_rules_hold_for_every_cut() -> None:
    root = build_tree(SAMPLE_TOKENS)
    compute_dimensions(root)
    for node in iter_preorder(root):
        if not isinstance(node, Cut):
            continue
        left_width, left_height = node_dimensions(node.left)
        right_width, right_height = node_dimensions(node.right)
        if node.orientation is Orientation.HORIZONTAL:
            assert node.width == max(left_width, right_width)
            assert node.height == left_height + right_height
        else:
            assert node.width == left_width + right_width
            assert node.height == max(left_height, right_height)


def test_node_dimensions_rejects_unmeasured_cut() -> None:
    root = build_tree(["1(2,3)", "2(4,5)", "V"])
    with pytest.raises(LayoutStateError):
        node_dimensions(root)


def test_horizontal_cut_places_left_above_right() -> None:
    root = build_tree(["1(2,3)", "2(4,5)", "H"])
    annotate(root)
    leaves = _leaves(root)
    assert (leaves[1].x, leaves[1].y) == (0, 5)
    assert (leaves[2].x, leaves[2].y) == (0, 0)


def test_vertical_cut_places_right_after_left() -> None:
    root = build_tree(["1(2,3)", "2(4,5)", "V"])
    annotate(root)
    leaves = _leaves(root)
    assert (leaves[1].x, leaves[1].y) == (0, 0)
    assert (leaves[2].x, leaves[2].y) == (2, 0)


def test_compute_coordinates_nested_tree() -> None:
    root = build_tree(SAMPLE_TOKENS)
    annotate(root)
    assert [(p.label, p.x, p.y) for p in leaf_placements(root)] == [
        (1, 0, 7),
        (2, 0, 2),
        (3, 4, 2),
        (4, 0, 0),
    ]


def test_compute_coordinates_honours_origin() -> None:
    root = build_tree(["1(2,3)", "2(4,5)", "V"])
    compute_dimensions(root)
    compute_coordinates(root, 10, 20)
    leaves = _leaves(root)
    assert (leaves[1].x, leaves[1].y) == (10, 20)
    assert (leaves[2].x, leaves[2].y) == (12, 20)


def test_compute_coordinates_requires_dimension_pass() -> None:
    root = build_tree(SAMPLE_TOKENS)
    with pytest.raises(LayoutStateError):
        compute_coordinates(root)
    assert all(not leaf.is_placed for leaf in _leaves(root).values())


def test_compute_coordinates_rejects_partially_measured_tree() -> None:
    root = build_tree(SAMPLE_TOKENS)
    compute_dimensions(root)
    assert isinstance(root, Cut) and isinstance(root.left, Cut)
    root.left.left.width = None
    with pytest.raises(LayoutStateError, match="1 cut"):
        compute_coordinates(root)


def test_deep_chain_does_not_hit_recursion_limit() -> None:
    tokens = ["1(1,1)"]
    for label in range(2, 5002):
        tokens.extend([f"{label}(1,1)", "V"])
    root = build_tree(tokens)
    assert annotate(root) == (5001, 1)
    placements = leaf_placements(root)
    assert placements[0].label == 1 and placements[0].x == 0
    assert max(p.x for p in placements) == 5000


def test_valid_layout_has_no_tiling_problems_or_overlaps() -> None:
    root = build_tree(SAMPLE_TOKENS)
    annotate(root)
    assert check_tiling(root) == []
    assert find_overlaps(root) == []


def test_check_tiling_and_overlaps_detect_moved_block() -> None:
    root = build_tree(SAMPLE_TOKENS)
    annotate(root)
    _leaves(root)[3].x = 3

    problems = check_tiling(root)
    assert len(problems) == 1
    assert problems[0].startswith("V cut")

    overlapping = {(first.label, second.label) for first, second in find_overlaps(root)}
    assert overlapping == {(2, 3)}


def test_leaf_placements_requires_coordinate_pass() -> None:
    root = build_tree(SAMPLE_TOKENS)
    compute_dimensions(root)
    with pytest.raises(LayoutStateError):
        leaf_placements(root)


@pytest.mark.parametrize(
    "other, expected",
    [
        (Placement(2, 1, 1, 2, 2), True),
        (Placement(2, 2, 0, 2, 2), False),
        (Placement(2, 0, 2, 2, 2), False),
        (Placement(2, 2, 2, 1, 1), False),
        (Placement(2, 5, 5, 1, 1), False),
    ],
)
def test_placement_overlap_ignores_shared_edges(other: Placement, expected: bool) -> None:
    block = Placement(1, 0, 0, 2, 2)
    assert block.overlaps(other) is expected
    assert other.overlaps(block) is expected


def test_placement_properties() -> None:
    block = Placement(1, 3, 4, 5, 6)
    assert (block.right, block.top, block.area) == (8, 10, 30)
