"""
Funscript package initialization.
"""

from .models import ActionPoint, EditorMetadata, FunscriptDocument, SimulatorPreset
from .funscript_io import get_point, load, parse, save, serialize, to_pretty_json
from .plugins.base_plugin import (
    FunscriptTransformationPlugin,
    PluginRegistry,
    plugin_registry
)
from .plugins.plugin_loader import PluginLoader, plugin_loader
from .plugins.rdp_simplify_plugin import RdpSimplifyPlugin, simplify

__all__ = [
    'ActionPoint',
    'EditorMetadata',
    'FunscriptDocument',
    'SimulatorPreset',
    'parse',
    'serialize',
    'to_pretty_json',
    'load',
    'save',
    'get_point',
    'simplify',
    'RdpSimplifyPlugin',
    'FunscriptTransformationPlugin',
    'PluginRegistry',
    'plugin_registry',
    'PluginLoader',
    'plugin_loader'
]
