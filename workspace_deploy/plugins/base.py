"""Transport plugin contract"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

from ..api.exceptions import DeployError, PluginError
from ..constants import ErrorCode
from ..core.context import DeployContext
from ..core.path_mapper import PathMapper
from ..models.events import (
    BeforeDeployFileEvent,
    DeployFileOptions,
    DeployWorkspaceOptions,
    FileDeployedEvent,
    WorkspaceDeployedEvent,
)
from ..models.target import Target

E = TypeVar('E')


@dataclass(frozen=True)
class DeployPluginInfo:
    """Information about a plugin"""
    description: str = ""


class CompletionGuard(Generic[E]):
    """Delivers a terminal event exactly once

    The first call builds the event, hands it to the callback and
    remembers it. Later calls are logged and return the first event.
    """

    def __init__(self,
                 sender: Any,
                 callback: Optional[Callable[[Any, E], None]],
                 factory: Callable[..., E],
                 logger: Optional[logging.Logger] = None):
        self.sender = sender
        self.callback = callback
        self.factory = factory
        self.event: Optional[E] = None
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def done(self) -> bool:
        return self.event is not None

    def __call__(self, error: Optional[BaseException] = None, canceled: bool = False) -> E:
        if self.event is not None:
            self.logger.warning("Completion already reported, ignoring repeated call")
            return self.event

        self.event = self.factory(error=error, canceled=canceled)

        if self.callback:
            try:
                self.callback(self.sender, self.event)
            except Exception as e:
                self.logger.error(f"Completion callback failed: {e}")

        return self.event


class DeployPlugin(ABC):
    """Base class for transport plugins

    Identity fields (file, file_path, index, type) are assigned by the
    registry when the plugin is loaded and cannot be changed afterwards.
    """

    def __init__(self, context: DeployContext):
        self.context = context
        self.path_mapper = PathMapper(context.workspace_root)
        self.logger = logging.getLogger(self.__class__.__name__)
        self._identity: Optional[tuple] = None

    # Identity

    def assign_identity(self, file_path: str, index: int, plugin_type: str) -> None:
        """Assign registry identity (once)"""
        if self._identity is not None:
            raise PluginError(f"Identity of plugin '{self.type}' is already assigned")
        self._identity = (str(file_path), int(index), str(plugin_type))

    @property
    def file_path(self) -> Optional[str]:
        """Full path of the module the plugin was created from"""
        return self._identity[0] if self._identity else None

    @property
    def file(self) -> Optional[str]:
        """File name of the plugin module"""
        return Path(self._identity[0]).name if self._identity else None

    @property
    def index(self) -> Optional[int]:
        """Load order index"""
        return self._identity[1] if self._identity else None

    @property
    def type(self) -> Optional[str]:
        """Type tag targets refer to"""
        return self._identity[2] if self._identity else None

    # Contract

    @abstractmethod
    async def deploy_file(self, file: str, target: Target,
                          opts: Optional[DeployFileOptions] = None) -> FileDeployedEvent:
        """Deploy one file

        Implementations report every outcome through exactly one
        ``opts.on_completed`` call and never raise.

        Args:
            file: Path of the local file
            target: The target
            opts: Callbacks

        Returns:
            The completion event that was reported
        """
        pass

    async def deploy_workspace(self, files: List[Union[str, Path]], target: Target,
                               opts: Optional[DeployWorkspaceOptions] = None) -> WorkspaceDeployedEvent:
        """Deploy files one after another

        Every file is reported through ``opts.on_file_completed``; the run
        ends with a single ``opts.on_completed``.
        """
        opts = opts or DeployWorkspaceOptions()
        completed = self.workspace_completion(target, opts)

        if self.context.is_cancelling():
            return completed(canceled=True)

        file_opts = DeployFileOptions(
            on_before_deploy=opts.on_before_deploy_file,
            on_completed=opts.on_file_completed,
            base_directory=opts.base_directory,
        )

        for file in files:
            # deploy_file checks the flag too and reports the file as canceled
            await self.deploy_file(str(file), target, file_opts)

        return completed(canceled=self.context.is_cancelling())

    def info(self) -> DeployPluginInfo:
        """Return information of the plugin"""
        return DeployPluginInfo()

    # Helpers

    def before_deploy(self, opts: DeployFileOptions, event: BeforeDeployFileEvent) -> None:
        """Invoke ``opts.on_before_deploy``

        Raises:
            DeployError: If the hook raises
        """
        if not opts.on_before_deploy:
            return

        try:
            opts.on_before_deploy(self, event)
        except Exception as e:
            raise DeployError(
                f"Before-deploy hook failed for '{event.file}': {e}", ErrorCode.HOOK_FAILED,
            ) from e

    def file_completion(self, file: str, target: Target,
                        opts: DeployFileOptions) -> CompletionGuard[FileDeployedEvent]:
        return CompletionGuard(
            self,
            opts.on_completed,
            lambda error, canceled: FileDeployedEvent(
                file=file, target=target, canceled=bool(canceled), error=error,
            ),
            self.logger,
        )

    def workspace_completion(self, target: Target,
                             opts: DeployWorkspaceOptions) -> CompletionGuard[WorkspaceDeployedEvent]:
        return CompletionGuard(
            self,
            opts.on_completed,
            lambda error, canceled: WorkspaceDeployedEvent(
                target=target, canceled=bool(canceled), error=error,
            ),
            self.logger,
        )
