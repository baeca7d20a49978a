"""
Exceptions for dino-tree package.

Defines all custom exceptions used throughout the package.
"""


class DinoTreeError(Exception):
    """Base exception for DinoTree errors."""

    pass


class ProfileError(DinoTreeError):
    """Raised when a directory profile lacks the identifiers needed to place it."""

    pass


class TreeCycleError(DinoTreeError):
    """Raised when a walk over the flat tree revisits an index."""

    def __init__(self, index: int, message: str | None = None):
        self.index = index
        super().__init__(message or f"Index {index} visited twice during tree walk")
