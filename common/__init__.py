"""
Common utilities shared across funscript-kit modules.
"""

from .exceptions import (
    ContainerError,
    ExtensionError,
    FunscriptException,
    PointIndexError,
    SchemaError,
)

__version__ = "0.1.0"

__all__ = [
    'FunscriptException',
    'SchemaError',
    'ExtensionError',
    'PointIndexError',
    'ContainerError',
]
