"""
Plugin loader system for funscript transformations.

Discovers transformation plugins shipped in this package and, optionally,
plugin files from a user directory, and registers them with the global
plugin registry.
"""

import importlib
import importlib.util
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import Dict, List, Optional, Type

from .base_plugin import FunscriptTransformationPlugin, plugin_registry

_INFRASTRUCTURE_MODULES = {'base_plugin', 'plugin_loader'}


class PluginLoader:
    """
    Loads funscript transformation plugins.

    Can load plugins from:
    - Built-in plugin modules in this package
    - User-defined plugin files in a directory
    - Individual plugin files
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('PluginLoader')
        self.loaded_modules = {}

    def load_builtin_plugins(self) -> Dict[str, bool]:
        """
        Import every built-in plugin module and register its plugin classes.

        Returns:
            Dictionary mapping module names to load success status
        """
        results = {}
        for module_info in pkgutil.iter_modules([str(Path(__file__).parent)]):
            module_name = module_info.name
            if module_name.startswith('_') or module_name in _INFRASTRUCTURE_MODULES:
                continue
            module = importlib.import_module(f"{__package__}.{module_name}")
            self.loaded_modules[module_name] = module
            results[module_name] = self._register_module_plugins(module, module_name)
        return results

    def load_plugins_from_directory(self, directory: str, recursive: bool = False) -> Dict[str, bool]:
        """
        Load all plugins from a directory of plugin files.

        Args:
            directory: Path to directory containing plugin files
            recursive: If True, search subdirectories as well

        Returns:
            Dictionary mapping plugin file names to load success status
        """
        results = {}
        directory_path = Path(directory)

        if not directory_path.is_dir():
            self.logger.warning(f"Plugin directory does not exist: {directory}")
            return results

        pattern = "**/*.py" if recursive else "*.py"
        plugin_files = [p for p in sorted(directory_path.glob(pattern)) if not p.name.startswith('_')]

        if plugin_files:
            self.logger.info(f"Loading {len(plugin_files)} plugins from: {directory}")

        for plugin_file in plugin_files:
            results[plugin_file.name] = self.load_plugin_from_file(plugin_file)

        return results

    def load_plugin_from_file(self, file_path) -> bool:
        """
        Load a single plugin from a file.

        Returns:
            True if at least one plugin class was registered, False otherwise
        """
        file_path = Path(file_path)

        if not file_path.exists():
            self.logger.error(f"Plugin file does not exist: {file_path}")
            return False

        if file_path.suffix != '.py':
            self.logger.warning(f"Skipping non-Python file: {file_path}")
            return False

        module_name = file_path.stem
        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            self.logger.error(f"Could not create module spec for: {file_path}")
            return False

        module = importlib.util.module_from_spec(spec)
        # Keep a reference so the module is not garbage collected
        self.loaded_modules[module_name] = module
        spec.loader.exec_module(module)

        return self._register_module_plugins(module, str(file_path))

    def _register_module_plugins(self, module, source: str) -> bool:
        plugin_classes = self._find_plugin_classes(module)
        if not plugin_classes:
            self.logger.warning(f"No plugin classes found in: {source}")
            return False

        for plugin_class in plugin_classes:
            plugin = plugin_class()
            plugin_registry.register(plugin)
            self.logger.debug(f"Registered plugin '{plugin.name}' from {source}")
        return True

    def _find_plugin_classes(self, module) -> List[Type[FunscriptTransformationPlugin]]:
        """Find all concrete plugin classes defined in a module."""
        plugin_classes = []

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (obj is not FunscriptTransformationPlugin and
                    issubclass(obj, FunscriptTransformationPlugin) and
                    obj.__module__ == module.__name__ and
                    not inspect.isabstract(obj)):
                plugin_classes.append(obj)

        return plugin_classes


# Global plugin loader instance
plugin_loader = PluginLoader()


def ensure_plugins_loaded() -> None:
    """Load the built-in plugins into the registry once per process."""
    if not plugin_registry.is_global_plugins_loaded():
        plugin_loader.load_builtin_plugins()
        plugin_registry.set_global_plugins_loaded(True)
