"""
Common exceptions and error handling.

Provides standardized exception types for funscript parsing, saving,
point access and video probing.
"""

from typing import List, Optional, Tuple


class FunscriptException(Exception):
    """Base exception for all funscript-kit errors."""
    pass


class SchemaError(FunscriptException, ValueError):
    """
    Document content does not match the funscript schema.

    Raised for malformed JSON, unknown keys, wrong value types or widths and
    malformed array elements. ``errors`` holds one ``(path, message)`` pair per
    problem, with paths such as ``actions.2.pos`` (``<root>`` for the document
    itself).
    """

    def __init__(self, message: str, errors: Optional[List[Tuple[str, str]]] = None):
        super().__init__(message)
        self.errors: List[Tuple[str, str]] = list(errors or [])

    @property
    def paths(self) -> List[str]:
        return [path for path, _ in self.errors]


class ExtensionError(FunscriptException, OSError):
    """Save destination does not end with the .funscript extension."""

    def __init__(self, path: str):
        super().__init__(f"invalid file extension: '{path}' (expected .funscript)")
        self.path = path


class PointIndexError(FunscriptException, IndexError):
    """Requested action index is outside the action list."""

    def __init__(self, operation: str, index: int):
        super().__init__(f"failed to {operation} point at index {index}")
        self.operation = operation
        self.index = index


class ContainerError(FunscriptException):
    """Video container could not be probed for its sample count."""
    pass
