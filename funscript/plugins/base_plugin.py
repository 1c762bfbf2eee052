"""
Base plugin interface for funscript transformations.

This module defines the interface that every transformation of a
FunscriptDocument's action list implements, along with the registry that
plugins are looked up from by name.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
import logging


class FunscriptTransformationPlugin(ABC):
    """
    Abstract base class for all funscript transformation plugins.

    Each plugin represents a single transformation that can be applied to a
    FunscriptDocument. Plugins receive the document, validate their
    parameters against ``parameters_schema`` and modify ``actions`` in place.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the plugin with optional logger."""
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique name of this plugin."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Return a human-readable description of what this plugin does."""
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Return the version of this plugin."""
        pass

    @property
    @abstractmethod
    def parameters_schema(self) -> Dict[str, Any]:
        """
        Return the schema for parameters this plugin accepts.

        Schema format:
        {
            'parameter_name': {
                'type': str|int|float|bool|list,
                'required': bool,
                'default': Any,
                'description': str,
                'constraints': Dict (optional - min/max values, choices, etc.)
            }
        }
        """
        pass

    @property
    def modifies_inplace(self) -> bool:
        """Return True if this plugin modifies the document in-place."""
        return True

    def validate_parameters(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and normalize the provided parameters against the schema.

        Args:
            parameters: Dictionary of parameter values

        Returns:
            Validated and normalized parameters with defaults applied

        Raises:
            ValueError: If parameters don't match the schema
        """
        schema = self.parameters_schema
        validated = {}

        unknown = set(parameters) - set(schema)
        if unknown:
            raise ValueError(f"Unknown parameter(s) for '{self.name}': {sorted(unknown)}")

        for param_name, param_info in schema.items():
            if param_info.get('required', False) and param_name not in parameters:
                raise ValueError(f"Required parameter '{param_name}' is missing")

        for param_name, param_info in schema.items():
            if param_name in parameters:
                value = parameters[param_name]
                expected_type = param_info['type']

                # Allow None values when explicitly set as default
                if value is not None and not isinstance(value, expected_type):
                    try:
                        value = expected_type(value)
                    except (ValueError, TypeError):
                        raise ValueError(f"Parameter '{param_name}' must be of type {expected_type.__name__}")

                if value is not None and 'constraints' in param_info:
                    constraints = param_info['constraints']
                    if 'min' in constraints and value < constraints['min']:
                        raise ValueError(f"Parameter '{param_name}' must be >= {constraints['min']}")
                    if 'max' in constraints and value > constraints['max']:
                        raise ValueError(f"Parameter '{param_name}' must be <= {constraints['max']}")
                    if 'choices' in constraints and value not in constraints['choices']:
                        raise ValueError(f"Parameter '{param_name}' must be one of {constraints['choices']}")

                validated[param_name] = value
            elif 'default' in param_info:
                validated[param_name] = param_info['default']

        return validated

    @abstractmethod
    def transform(self, document, **parameters) -> None:
        """
        Apply the transformation to the document's actions.

        Args:
            document: The FunscriptDocument to transform
            **parameters: Plugin-specific parameters

        Raises:
            ValueError: If parameters are invalid
        """
        pass

    def get_preview(self, document, **parameters) -> Dict[str, Any]:
        """
        Describe what the transformation would do without applying it.

        Returns:
            Dictionary with preview information (implementation-specific)
        """
        return {"preview": "Not implemented"}


class PluginRegistry:
    """Registry for managing funscript transformation plugins."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('PluginRegistry')
        self._plugins: Dict[str, FunscriptTransformationPlugin] = {}
        self._global_plugins_loaded = False

    def register(self, plugin: FunscriptTransformationPlugin) -> bool:
        """
        Register a plugin, replacing any plugin already registered under its name.

        Returns:
            True once the plugin is registered
        """
        self._plugins[plugin.name] = plugin
        self.logger.debug(f"Registered plugin '{plugin.name}' v{plugin.version}")
        return True

    def unregister(self, plugin_name: str) -> bool:
        """
        Unregister a plugin by name.

        Returns:
            True if successful, False if plugin not found
        """
        if plugin_name in self._plugins:
            del self._plugins[plugin_name]
            self.logger.info(f"Unregistered plugin '{plugin_name}'")
            return True
        return False

    def get_plugin(self, plugin_name: str) -> Optional[FunscriptTransformationPlugin]:
        """Get a plugin by name."""
        return self._plugins.get(plugin_name)

    def list_plugins(self) -> List[Dict[str, Any]]:
        """List all registered plugins with their metadata."""
        return [
            {
                'name': plugin.name,
                'description': plugin.description,
                'version': plugin.version,
                'parameters_schema': plugin.parameters_schema,
                'modifies_inplace': plugin.modifies_inplace,
            }
            for plugin in self._plugins.values()
        ]

    def is_global_plugins_loaded(self) -> bool:
        """Check if plugins have been loaded globally."""
        return self._global_plugins_loaded

    def set_global_plugins_loaded(self, loaded: bool = True):
        """Set the global plugins loaded flag."""
        self._global_plugins_loaded = loaded


# Global plugin registry instance
plugin_registry = PluginRegistry()
