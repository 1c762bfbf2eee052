"""
Funscript document model.

Typed representation of a .funscript file. The field declarations below are
the single table of recognized keys and their defaults: any subset of these
keys parses, any other key is rejected, and numeric fields only accept values
that fit their declared width.
"""

import logging
import math
from typing import Annotated, Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, JsonValue, field_validator
from pydantic.alias_generators import to_camel

from config.constants import (
    FLOAT32_MAX,
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    JSON_INT_MAX,
    JSON_INT_MIN,
    UNSET_FLOAT,
    UNSET_INT,
)

logger = logging.getLogger(__name__)

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
Float32 = Annotated[float, Field(ge=-FLOAT32_MAX, le=FLOAT32_MAX, allow_inf_nan=False)]


def _widen_oversized_ints(value: Any) -> Any:
    # Integers outside the writable JSON range are kept as floats, as JSON readers do
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if JSON_INT_MIN <= value <= JSON_INT_MAX:
            return value
        try:
            return float(value)
        except OverflowError as e:
            raise ValueError("integer is out of range for a JSON number") from e
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("number is out of range for a JSON number")
    if isinstance(value, list):
        return [_widen_oversized_ints(item) for item in value]
    if isinstance(value, dict):
        return {key: _widen_oversized_ints(item) for key, item in value.items()}
    return value


class FunscriptModel(BaseModel):
    """
    Base for every funscript structure: strict, camelCase, no unknown keys.

    Python callers may pass field names to the constructor. JSON input is
    validated by alias only, see ``funscript_io.parse``.
    """

    model_config = ConfigDict(
        extra='forbid',
        strict=True,
        alias_generator=to_camel,
        validate_by_alias=True,
        validate_by_name=True,
        validate_assignment=True,
    )


class ActionPoint(FunscriptModel):
    """A single action point: device position ``pos`` at ``at`` milliseconds."""

    pos: Int32
    at: Int32


class SimulatorPreset(FunscriptModel):
    """Named configuration of a playback simulator."""

    name: str = ""
    full_range: bool = False
    direction: Int32 = 0
    rotation: Float32 = 0.0
    length: Float32 = 0.0
    width: Float32 = 0.0
    offset: str = ""
    color: str = ""


class EditorMetadata(FunscriptModel):
    """Free-form descriptive fields written by script editors."""

    bookmarks: List[Int32] = Field(default_factory=list)
    chapters: List[str] = Field(default_factory=list)
    creator: str = ""
    description: str = ""
    duration: Int32 = UNSET_INT
    license: str = ""
    notes: str = ""
    performers: List[str] = Field(default_factory=list)
    # Editors write these two in snake case; camelCase is accepted on input only
    script_url: str = Field(
        default="",
        alias="script_url",
        validation_alias=AliasChoices("script_url", "scriptUrl"),
    )
    tags: List[str] = Field(default_factory=list)
    title: str = ""
    script_type: str = Field(default="", alias="type")
    video_url: str = Field(
        default="",
        alias="video_url",
        validation_alias=AliasChoices("video_url", "videoUrl"),
    )


class FunscriptDocument(FunscriptModel):
    """
    Root of a .funscript file.

    ``actions`` is the primary payload. ``raw_actions`` is an independent
    backup of the unprocessed sequence and is never touched by simplification.
    ``clips`` holds editor-defined JSON values that are carried through
    load/save without interpretation.
    """

    version: str = ""
    inverted: bool = False
    range: Int32 = UNSET_INT
    bookmark: Int32 = UNSET_INT
    last_position: Int64 = UNSET_INT
    graph_duration: Int32 = UNSET_INT
    speed_ratio: Float32 = UNSET_FLOAT
    injection_speed: Int32 = UNSET_INT
    injection_bias: Float32 = UNSET_FLOAT
    scripting_mode: Int32 = UNSET_INT
    simulator_presets: List[SimulatorPreset] = Field(default_factory=list)
    active_simulator: Int32 = UNSET_INT
    reduction_tolerance: Float32 = UNSET_FLOAT
    reduction_stretch: Float32 = UNSET_FLOAT
    clips: List[JsonValue] = Field(default_factory=list)
    actions: List[ActionPoint] = Field(default_factory=list)
    raw_actions: List[ActionPoint] = Field(default_factory=list)
    metadata: EditorMetadata = Field(default_factory=EditorMetadata)

    @field_validator('clips')
    @classmethod
    def _clips_fit_json(cls, clips: List[JsonValue]) -> List[JsonValue]:
        return [_widen_oversized_ints(clip) for clip in clips]

    def get_point(self, index: int) -> ActionPoint:
        """Return the live action point at ``index`` for in-place editing."""
        from funscript.funscript_io import get_point
        return get_point(self, index)

    def simplify(self, epsilon: float) -> None:
        """Reduce ``actions`` with RDP, keeping ``raw_actions`` as is."""
        from funscript.plugins.rdp_simplify_plugin import simplify
        simplify(self, epsilon)

    def list_available_plugins(self) -> List[Dict]:
        """Return a list of available plugins with their metadata."""
        from funscript.plugins.base_plugin import plugin_registry
        from funscript.plugins.plugin_loader import ensure_plugins_loaded

        ensure_plugins_loaded()
        return plugin_registry.list_plugins()

    def apply_plugin(self, plugin_name: str, **parameters) -> bool:
        """
        Apply a registered transformation plugin to this document.

        Args:
            plugin_name: Name of the plugin to apply
            **parameters: Plugin-specific parameters

        Returns:
            True if plugin was applied successfully, False otherwise
        """
        from funscript.plugins.base_plugin import plugin_registry
        from funscript.plugins.plugin_loader import ensure_plugins_loaded

        ensure_plugins_loaded()

        plugin = plugin_registry.get_plugin(plugin_name)
        if not plugin:
            logger.error(f"Plugin '{plugin_name}' not found")
            return False

        try:
            plugin.transform(self, **parameters)
            return True
        except ValueError as e:
            logger.error(f"Error applying plugin '{plugin_name}': {e}")
            return False

    def get_plugin_preview(self, plugin_name: str, **parameters) -> Dict[str, Any]:
        """Get a preview of what a plugin would do without applying it."""
        from funscript.plugins.base_plugin import plugin_registry
        from funscript.plugins.plugin_loader import ensure_plugins_loaded

        ensure_plugins_loaded()

        plugin = plugin_registry.get_plugin(plugin_name)
        if not plugin:
            return {"error": f"Plugin '{plugin_name}' not found"}
        return plugin.get_preview(self, **parameters)
