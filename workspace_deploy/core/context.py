"""Deployment context shared by all transport plugins of a session"""

import importlib
import importlib.util
import logging
import os
import threading
from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional, Union, TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from ..api.exceptions import PluginError
from ..models.config import DeployConfiguration
from ..models.package import Package
from ..models.target import Target

if TYPE_CHECKING:
    from ..plugins.base import DeployPlugin
    from ..plugins.registry import PluginRegistry


class CancellationToken:
    """Cooperative cancellation flag polled at pipeline checkpoints"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class OutputChannel:
    """Append-only operator output rendered through rich

    With ``echo`` off the text is only buffered in ``lines``.
    """

    def __init__(self, console: Optional[Console] = None, echo: bool = True):
        self.console = console or Console()
        self.echo = echo
        self._lines: List[str] = []
        self._pending = ""

    def append(self, text: str) -> 'OutputChannel':
        """Write text without a line break"""
        text = str(text)
        self._pending += text
        if self.echo:
            self.console.print(escape(text), end="", highlight=False)
        return self

    def append_line(self, text: str = "") -> 'OutputChannel':
        """Write text followed by a line break"""
        text = str(text)
        self._lines.append(self._pending + text)
        self._pending = ""
        if self.echo:
            self.console.print(escape(text), highlight=False)
        return self

    @property
    def lines(self) -> List[str]:
        """Completed lines written so far"""
        return list(self._lines)


class DeployContext:
    """Facade every plugin receives

    The configuration, workspace root and output channel are fixed at
    construction. The plugin registry is bound once, when it is created.
    """

    def __init__(self,
                 config: DeployConfiguration,
                 workspace_root: Union[str, Path],
                 output: Optional[OutputChannel] = None,
                 cancellation: Optional[CancellationToken] = None):
        self._config = config
        self._workspace_root = Path(workspace_root).resolve()
        self._output = output or OutputChannel()
        self._cancellation = cancellation or CancellationToken()
        self._registry: Optional['PluginRegistry'] = None
        self._modules: Dict[str, ModuleType] = {}
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def workspace_root(self) -> Path:
        return self._workspace_root

    @property
    def output(self) -> OutputChannel:
        return self._output

    @property
    def cancellation(self) -> CancellationToken:
        return self._cancellation

    def config(self) -> DeployConfiguration:
        return self._config

    def is_cancelling(self) -> bool:
        """Returns if a cancellation is requested or not"""
        return self._cancellation.is_cancelled

    def targets(self) -> List[Target]:
        """All targets, ordered by sort order"""
        return self._config.sorted_targets()

    def packages(self) -> List[Package]:
        """All packages, ordered by sort order"""
        return self._config.sorted_packages()

    def plugins(self) -> List['DeployPlugin']:
        """All loaded plugins, in load order"""
        if self._registry is None:
            return []
        return self._registry.plugins

    def bind_registry(self, registry: 'PluginRegistry') -> None:
        """Attach the plugin registry of this session (only once)"""
        if self._registry is not None and self._registry is not registry:
            raise PluginError("A plugin registry is already bound to this context")
        self._registry = registry

    def require(self, module_id: str) -> ModuleType:
        """Load a user extension module

        Args:
            module_id: Path of a ``.py`` file (relative to the workspace
                root) or a dotted module name

        Returns:
            The loaded module, cached per id
        """
        if module_id in self._modules:
            return self._modules[module_id]

        if module_id.endswith(".py") or os.sep in module_id or "/" in module_id:
            module = self._load_from_file(module_id)
        else:
            module = importlib.import_module(module_id)

        self._modules[module_id] = module
        return module

    def _load_from_file(self, module_id: str) -> ModuleType:
        path = Path(os.path.expanduser(module_id))
        if not path.is_absolute():
            path = self._workspace_root / path

        if not path.is_file():
            raise ImportError(f"Module file not found: {path}")

        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {path}")

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        self.logger.debug(f"Loaded module {path}")
        return module

    # Messages go to the logger and the output channel

    def log(self, msg) -> 'DeployContext':
        self.logger.debug(str(msg))
        self._output.append_line(str(msg))
        return self

    def info(self, msg) -> 'DeployContext':
        self.logger.info(str(msg))
        self._output.append_line(str(msg))
        return self

    def warn(self, msg) -> 'DeployContext':
        self.logger.warning(str(msg))
        self._output.append_line(f"[WARN] {msg}")
        return self

    def error(self, msg) -> 'DeployContext':
        self.logger.error(str(msg))
        self._output.append_line(f"[ERROR] {msg}")
        return self
