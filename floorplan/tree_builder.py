"""Reconstruct slicing trees from post-order token sequences.

Each token is either a leaf descriptor ``label(width,height)`` or a single
operator character ``H``/``V``. The builder keeps a stack of finished
subtrees: leaves are pushed as they arrive and every operator pops its right
then its left operand before pushing the combined ``Cut``. A well-formed
sequence leaves exactly one subtree, the root.

The stack is an ordinary list, so the number of nodes is bounded only by
available memory.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

from .errors import ParseError, ResourceError, StructuralError
from .nodes import Cut, Leaf, Node, Orientation

logger = logging.getLogger(__name__)

OPERATOR_TOKENS = {orientation.value: orientation for orientation in Orientation}

_LEAF_PATTERN = re.compile(
    r"^(?P<label>\d+)\s*\(\s*(?P<width>\d+)\s*,\s*(?P<height>\d+)\s*\)$"
)

__all__ = [
    "LeafSpec",
    "OPERATOR_TOKENS",
    "build_tree",
    "load_tree",
    "parse_token",
    "read_tokens",
]


@dataclass(frozen=True)
class LeafSpec:
    """Parsed leaf descriptor."""

    label: int
    width: int
    height: int

    def to_leaf(self) -> Leaf:
        return Leaf(self.label, self.width, self.height)


Token = Union[LeafSpec, Orientation]


def parse_token(text: str, *, line_number: int | None = None) -> Token:
    """Parse a single token into a ``LeafSpec`` or an ``Orientation``.

    Raises
    ------
    ParseError
        If *text* is not an operator and does not match
        ``label(width,height)`` with positive integers.
    """

    stripped = text.strip()
    orientation = OPERATOR_TOKENS.get(stripped)
    if orientation is not None:
        return orientation

    match = _LEAF_PATTERN.match(stripped)
    if match is None:
        raise ParseError(
            f"expected 'H', 'V' or 'label(width,height)', got {stripped!r}",
            token=stripped,
            line_number=line_number,
        )

    label, width, height = (
        int(match.group(name)) for name in ("label", "width", "height")
    )
    for name, value in (("label", label), ("width", width), ("height", height)):
        if value <= 0:
            raise ParseError(
                f"leaf {name} must be a positive integer in {stripped!r}",
                token=stripped,
                line_number=line_number,
            )
    return LeafSpec(label, width, height)


def build_tree(tokens: Iterable[str]) -> Node:
    """Rebuild the slicing tree whose post-order traversal is *tokens*.

    Whitespace-only tokens are skipped. The most recently pushed subtree
    becomes the right child of an operator and the one beneath it the left.

    Raises
    ------
    ParseError
        If a token cannot be parsed.
    StructuralError
        If an operator has fewer than two operands, the input is empty, or
        more than one subtree remains once the input is exhausted.
    ResourceError
        If memory runs out while growing the stack.
    """

    stack: List[Node] = []
    leaves = 0
    cuts = 0

    for line_number, text in enumerate(tokens, start=1):
        if not text.strip():
            continue
        token = parse_token(text, line_number=line_number)
        try:
            if isinstance(token, Orientation):
                if len(stack) < 2:
                    raise StructuralError(
                        f"line {line_number}: operator {token.value!r} needs two "
                        f"subtrees but only {len(stack)} available"
                    )
                right = stack.pop()
                left = stack.pop()
                stack.append(Cut(token, left, right))
                cuts += 1
            else:
                stack.append(token.to_leaf())
                leaves += 1
        except MemoryError as exc:
            raise ResourceError(
                f"line {line_number}: out of memory after {leaves + cuts} nodes"
            ) from exc

    if not stack:
        raise StructuralError("input contains no tokens; there is no root")
    if len(stack) > 1:
        raise StructuralError(
            f"input leaves {len(stack)} disconnected subtrees; expected exactly one root"
        )

    logger.debug("Built slicing tree with %d leaves and %d cuts", leaves, cuts)
    return stack[0]


def read_tokens(path: Path) -> List[str]:
    """Return the lines of the token file at *path*.

    Raises ``ParseError`` when the file is not valid UTF-8; ``OSError``
    propagates unchanged.
    """

    payload = path.read_bytes()
    try:
        lines = payload.decode("utf-8").splitlines()
    except UnicodeDecodeError as exc:
        bad_bytes = payload[exc.start : exc.end]
        raise ParseError(
            f"invalid UTF-8 byte(s) {bad_bytes!r} at offset {exc.start}",
            token=bad_bytes.decode("utf-8", errors="backslashreplace"),
            line_number=payload.count(b"\n", 0, exc.start) + 1,
        ) from exc
    logger.debug("Read %d lines from %s", len(lines), path)
    return lines


def load_tree(path: Path) -> Node:
    """Read *path* and rebuild the slicing tree it encodes."""

    return build_tree(read_tokens(path))
