"""
Reading and writing .funscript documents.

Parsing is strict: unknown keys, wrong value types and out-of-range numbers
fail the whole document with a SchemaError. Missing keys take the defaults
declared on the models. Saving only accepts .funscript destinations and
replaces the destination atomically.
"""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import orjson
from pydantic import ValidationError

from common.exceptions import ExtensionError, PointIndexError, SchemaError
from config.constants import FUNSCRIPT_FILE_EXTENSION, SAVE_TEMP_SUFFIX
from funscript.models import ActionPoint, FunscriptDocument

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_DUMP_OPTIONS = orjson.OPT_INDENT_2


def _format_validation_errors(exc: ValidationError) -> List[Tuple[str, str]]:
    errors = []
    for err in exc.errors(include_url=False):
        path = '.'.join(str(part) for part in err['loc']) or '<root>'
        errors.append((path, err['msg']))
    return errors


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    seen = {}
    for key, value in pairs:
        if key in seen:
            raise ValueError(f"duplicate field '{key}'")
        seen[key] = value
    return seen


def _check_duplicate_keys(data: Union[bytes, str]) -> None:
    # Validation resolves repeated keys last-wins, so they are looked for separately
    try:
        json.loads(data, object_pairs_hook=_reject_duplicate_keys)
    except ValueError as e:
        raise SchemaError(f"invalid funscript: {e}", [('<root>', str(e))]) from e


def parse(data: Union[bytes, str]) -> FunscriptDocument:
    """
    Parse raw .funscript content into a document.

    Args:
        data: UTF-8 JSON content

    Returns:
        The parsed document, with defaults for every absent key

    Raises:
        SchemaError: If the content is not valid JSON, repeats a key within
            an object or does not match the schema
    """
    try:
        doc = FunscriptDocument.model_validate_json(data, by_alias=True, by_name=False)
    except ValidationError as e:
        errors = _format_validation_errors(e)
        summary = '; '.join(f"{path}: {msg}" for path, msg in errors)
        raise SchemaError(f"invalid funscript ({len(errors)} error(s)): {summary}", errors) from e

    _check_duplicate_keys(data)
    return doc


def serialize(doc: FunscriptDocument) -> bytes:
    """Return the pretty-printed JSON form of ``doc`` using the file key names."""
    try:
        return orjson.dumps(doc.model_dump(mode='json', by_alias=True), option=_DUMP_OPTIONS)
    except orjson.JSONEncodeError as e:
        raise SchemaError(f"funscript cannot be encoded: {e}", [('<root>', str(e))]) from e


def to_pretty_json(doc: FunscriptDocument) -> str:
    return serialize(doc).decode('utf-8')


def load(path: PathLike) -> FunscriptDocument:
    """
    Load a .funscript file.

    File-system problems propagate as OSError (FileNotFoundError,
    PermissionError, ...); content problems raise SchemaError.
    """
    with open(path, 'rb') as f:
        content = f.read()

    doc = parse(content)
    logger.info(f"Loaded {len(doc.actions)} actions from {os.path.basename(os.fspath(path))}")
    return doc


def save(path: PathLike, doc: FunscriptDocument) -> None:
    """
    Save ``doc`` to ``path``.

    The destination must end with ``.funscript``; anything else raises
    ExtensionError before the file system is touched. Content is written to a
    temporary file in the destination directory and renamed over the target,
    so a failed save never leaves a partially written destination.
    """
    path_str = os.fspath(path)
    if not path_str.endswith(FUNSCRIPT_FILE_EXTENSION):
        raise ExtensionError(path_str)

    content = serialize(doc)

    directory = os.path.dirname(os.path.abspath(path_str))
    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(path_str)}.", suffix=SAVE_TEMP_SUFFIX, dir=directory
    )
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(path_str):
            shutil.copymode(path_str, tmp_path)
        os.replace(tmp_path, path_str)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise

    logger.info(f"Funscript saved to {os.path.basename(path_str)} ({len(doc.actions)} actions)")


def get_point(doc: FunscriptDocument, index: int) -> ActionPoint:
    """
    Return the action point at ``index`` for in-place editing.

    The returned object is the one stored in ``doc.actions``, so assigning to
    its ``pos`` or ``at`` changes the document.

    Raises:
        PointIndexError: If ``index`` is not a position in ``doc.actions``
    """
    if index < 0 or index >= len(doc.actions):
        raise PointIndexError("get", index)
    return doc.actions[index]
