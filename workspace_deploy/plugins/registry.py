"""Plugin loading and type resolution"""

import importlib
import logging
from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional

from ..api.exceptions import ConfigurationError
from ..constants import BUILTIN_PLUGIN_MODULES, PLUGIN_FACTORY_NAME
from ..core.context import DeployContext
from .base import DeployPlugin


class PluginRegistry:
    """Loads transport plugins and maps target types to instances"""

    def __init__(self, context: DeployContext):
        """
        Initialize plugin registry

        Args:
            context: Context handed to every plugin of this session
        """
        self.context = context
        self.logger = logging.getLogger("PluginRegistry")
        self._plugins: List[DeployPlugin] = []
        self._loaded_modules = set()

        context.bind_registry(self)

    @property
    def plugins(self) -> List[DeployPlugin]:
        return list(self._plugins)

    def load_all(self) -> int:
        """
        Load builtin plugins, then the modules listed in the configuration

        Returns:
            Number of plugins loaded
        """
        count = self.load_builtin_plugins()

        for module_id in self.context.config().modules:
            count += self.load_from_module(module_id)

        return count

    def load_builtin_plugins(self) -> int:
        """
        Load all built-in plugins

        Returns:
            Number of plugins loaded
        """
        count = 0
        for module_name in BUILTIN_PLUGIN_MODULES:
            count += self.load_from_module(module_name)
        return count

    def load_from_directory(self, plugin_dir: Path) -> int:
        """
        Load every plugin module of a directory

        Args:
            plugin_dir: Directory containing plugin modules

        Returns:
            Number of plugins loaded
        """
        if not plugin_dir.exists() or not plugin_dir.is_dir():
            self.logger.warning(f"Plugin directory does not exist: {plugin_dir}")
            return 0

        count = 0
        for py_file in sorted(plugin_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            count += self.load_from_module(str(py_file))

        return count

    def load_from_module(self, module_id: str) -> int:
        """
        Load the plugin of one module

        Args:
            module_id: Dotted module name or path of a ``.py`` file

        Returns:
            1 if a plugin was registered, 0 otherwise
        """
        if module_id in self._loaded_modules:
            self.logger.info(f"Module {module_id} already loaded")
            return 0

        try:
            if module_id.endswith(".py") or "/" in module_id:
                module = self.context.require(module_id)
            else:
                module = importlib.import_module(module_id)
        except Exception as e:
            self.logger.error(f"Failed to import plugin module {module_id}: {e}")
            return 0

        self._loaded_modules.add(module_id)

        plugin = self._create_plugin(module, module_id)
        if plugin is None:
            return 0

        self.register(plugin, module)
        return 1

    def register(self, plugin: DeployPlugin, module: ModuleType) -> None:
        """
        Assign identity to a plugin and add it to the registry

        Args:
            plugin: Plugin instance
            module: Module the plugin was created from
        """
        file_path = getattr(module, "__file__", None) or module.__name__
        plugin_type = _plugin_type(module)

        plugin.assign_identity(str(file_path), len(self._plugins), plugin_type)
        self._plugins.append(plugin)

        self.logger.info(f"Registered plugin: {plugin_type} ({plugin.file})")

    def _create_plugin(self, module: ModuleType, module_id: str) -> Optional[DeployPlugin]:
        factory = getattr(module, PLUGIN_FACTORY_NAME, None)
        if not callable(factory):
            self.logger.error(f"Module {module_id} does not provide {PLUGIN_FACTORY_NAME}()")
            return None

        try:
            plugin = factory(self.context)
        except Exception as e:
            self.logger.error(f"Failed to instantiate plugin from {module_id}: {e}")
            return None

        if not isinstance(plugin, DeployPlugin):
            self.logger.error(f"{module_id}.{PLUGIN_FACTORY_NAME}() did not return a DeployPlugin")
            return None

        return plugin

    def find(self, plugin_type: str) -> List[DeployPlugin]:
        """All plugins registered for a type (case-insensitive)"""
        wanted = str(plugin_type or "").strip().lower()
        return [p for p in self._plugins if p.type == wanted]

    def resolve(self, plugin_type: str) -> DeployPlugin:
        """
        Resolve the plugin for a target type

        Raises:
            ConfigurationError: If no plugin or more than one plugin is
                registered for the type
        """
        matches = self.find(plugin_type)

        if not matches:
            known = ", ".join(sorted({p.type for p in self._plugins})) or "none"
            raise ConfigurationError(
                f"No plugin found for target type '{plugin_type}' (available: {known})"
            )

        if len(matches) > 1:
            origins = ", ".join(p.file_path for p in matches)
            raise ConfigurationError(
                f"Target type '{plugin_type}' is provided by more than one plugin: {origins}"
            )

        return matches[0]

    def describe(self) -> Dict[str, str]:
        """Map of plugin type to description"""
        return {p.type: p.info().description for p in self._plugins}


def _plugin_type(module: ModuleType) -> str:
    """Type tag of a plugin module: its file stem, lower-cased"""
    file_path = getattr(module, "__file__", None)
    if file_path:
        return Path(file_path).stem.lower()
    return module.__name__.rsplit(".", 1)[-1].lower()
