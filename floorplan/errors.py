"""Exception hierarchy shared by the floorplan builder, geometry and reports."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "FloorplanError",
    "LayoutStateError",
    "ParseError",
    "ResourceError",
    "StructuralError",
]


class FloorplanError(ValueError):
    """Base class for every error raised while processing a floorplan."""


class ParseError(FloorplanError):
    """Raised when a token is neither an operator nor a leaf descriptor."""

    def __init__(
        self, message: str, *, token: str, line_number: Optional[int] = None
    ) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.token = token
        self.line_number = line_number


class StructuralError(FloorplanError):
    """Raised when the token sequence does not encode exactly one tree."""


class LayoutStateError(FloorplanError):
    """Raised when a pass runs before the pass it depends on has completed."""


class ResourceError(FloorplanError):
    """Raised when memory is exhausted while reconstructing the tree."""
