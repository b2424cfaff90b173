"""Workspace deployment orchestration"""

import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Union, TYPE_CHECKING

import click

from ..api.exceptions import DeployError
from ..constants import ErrorCode, OPERATION_TYPE_OPEN
from ..models.events import (
    DeployFileOptions,
    DeployWorkspaceOptions,
    FileDeployedEvent,
    WorkspaceDeployedEvent,
)
from ..models.package import Package
from ..models.result import DeployResult
from ..models.target import AfterDeployedOperation, Target
from ..utils.async_utils import run_blocking
from .context import DeployContext

if TYPE_CHECKING:
    from ..plugins.registry import PluginRegistry


class FileCompletionTracker:
    """Forwards at most one completion per requested file

    Files listed twice may complete twice. Completions for files that were
    never requested, or reported again, are logged and dropped.
    """

    def __init__(self, files: Sequence[str],
                 callback: Optional[Callable[[Any, FileDeployedEvent], None]] = None):
        self.files = list(files)
        self.callback = callback
        self.events: List[FileDeployedEvent] = []
        self._remaining = Counter(self.files)
        self.logger = logging.getLogger(self.__class__.__name__)

    def __call__(self, sender: Any, event: FileDeployedEvent) -> None:
        if self._remaining[event.file] <= 0:
            self.logger.warning(f"Ignoring unexpected completion for '{event.file}'")
            return

        self._remaining[event.file] -= 1
        self.events.append(event)

        if self.callback:
            try:
                self.callback(sender, event)
            except Exception as e:
                self.logger.error(f"File completion callback failed: {e}")

    def missing(self) -> List[str]:
        """Requested files without a completion, in request order"""
        remaining = Counter(self._remaining)
        result = []
        for file in self.files:
            if remaining[file] > 0:
                remaining[file] -= 1
                result.append(file)
        return result

    def complete_missing(self, sender: Any, target: Target,
                         error: Optional[BaseException] = None,
                         canceled: bool = False) -> None:
        """Report every file the transport left unreported"""
        for file in self.missing():
            file_error = error
            if file_error is None and not canceled:
                file_error = DeployError(
                    f"Deployment of '{file}' was not reported by the transport",
                    ErrorCode.WRITE_FAILED,
                )
            self(sender, FileDeployedEvent(
                file=file, target=target, canceled=canceled, error=file_error,
            ))


class WorkspaceOrchestrator:
    """Drives transport plugins for single files and whole workspaces"""

    def __init__(self, context: DeployContext, registry: 'PluginRegistry'):
        self.context = context
        self.registry = registry
        self.logger = logging.getLogger(self.__class__.__name__)

    async def deploy_file(self, file: Union[str, Path], target: Target,
                          opts: Optional[DeployFileOptions] = None) -> FileDeployedEvent:
        """
        Deploy a single file

        Args:
            file: File to deploy
            target: Destination target
            opts: Callbacks

        Returns:
            The completion event (also handed to ``opts.on_completed``)

        Raises:
            ConfigurationError: If the target type has no plugin
        """
        plugin = self.registry.resolve(target.type)
        opts = opts or DeployFileOptions()
        file = str(file)

        tracker = FileCompletionTracker([file], opts.on_completed)
        error = None

        try:
            await plugin.deploy_file(file, target, DeployFileOptions(
                on_before_deploy=opts.on_before_deploy,
                on_completed=tracker,
                base_directory=opts.base_directory,
            ))
        except Exception as e:
            self.logger.error(f"Plugin '{plugin.type}' failed on '{file}': {e}")
            error = e

        tracker.complete_missing(plugin, target, error=error,
                                 canceled=error is None and self.context.is_cancelling())
        return tracker.events[0]

    async def deploy_workspace(self, files: Sequence[Union[str, Path]], target: Target,
                               opts: Optional[DeployWorkspaceOptions] = None) -> DeployResult:
        """
        Deploy a list of files to one target

        Every file is reported exactly once through ``opts.on_file_completed``
        and the run ends with exactly one ``opts.on_completed``, fired after
        the last file completion.

        Args:
            files: Files to deploy, in order
            target: Destination target
            opts: Callbacks

        Returns:
            Aggregated result

        Raises:
            ConfigurationError: If the target type has no plugin
        """
        plugin = self.registry.resolve(target.type)
        opts = opts or DeployWorkspaceOptions()
        files = [str(f) for f in files]
        start_time = datetime.now()

        tracker = FileCompletionTracker(files, opts.on_file_completed)
        reported: List[WorkspaceDeployedEvent] = []

        def on_completed(sender: Any, event: WorkspaceDeployedEvent) -> None:
            if reported:
                self.logger.warning(f"Plugin '{plugin.type}' reported completion more than once")
                return
            reported.append(event)

        if self.context.is_cancelling():
            reported.append(WorkspaceDeployedEvent(target=target, canceled=True))
        else:
            self.logger.info(f"Deploying {len(files)} file(s) to '{target.name}' ({plugin.type})")
            try:
                returned = await plugin.deploy_workspace(files, target, DeployWorkspaceOptions(
                    on_before_deploy_file=opts.on_before_deploy_file,
                    on_file_completed=tracker,
                    on_completed=on_completed,
                    base_directory=opts.base_directory,
                ))
                if not reported and isinstance(returned, WorkspaceDeployedEvent):
                    reported.append(returned)
            except Exception as e:
                self.logger.error(f"Plugin '{plugin.type}' failed on workspace deploy: {e}")
                if not reported:
                    reported.append(WorkspaceDeployedEvent(target=target, error=e))

        if reported:
            event = reported[0]
        else:
            event = WorkspaceDeployedEvent(target=target, canceled=self.context.is_cancelling())

        tracker.complete_missing(plugin, target, error=event.error, canceled=event.canceled)

        if event.success and all(e.success for e in tracker.events):
            await self.run_after_deployed(target)

        if opts.on_completed:
            try:
                opts.on_completed(plugin, event)
            except Exception as e:
                self.logger.error(f"Workspace completion callback failed: {e}")

        result = DeployResult(event=event, file_results=tracker.events, start_time=start_time)
        result.complete()
        return result

    async def deploy_package(self, package: Package, target: Target,
                             opts: Optional[DeployWorkspaceOptions] = None) -> DeployResult:
        """Resolve the files of a package and deploy them"""
        files = package.resolve_files(self.context.workspace_root)
        self.logger.info(f"Package '{package.name}' resolved to {len(files)} file(s)")
        return await self.deploy_workspace(files, target, opts)

    async def run_after_deployed(self, target: Target) -> None:
        """Invoke the target's ``deployed`` operations

        Failures are reported as warnings and do not change the outcome of
        the deployment.
        """
        for operation in target.deployed:
            try:
                await self._run_operation(operation)
            except Exception as e:
                self.context.warn(f"Operation '{operation.type}' of '{target.name}' failed: {e}")

    async def _run_operation(self, operation: AfterDeployedOperation) -> None:
        if operation.type == OPERATION_TYPE_OPEN:
            if not operation.target:
                raise ValueError("'open' operation requires a 'target'")
            self.context.info(f"Opening '{operation.target}'...")
            await run_blocking(click.launch, operation.target)
        else:
            self.context.warn(f"Unknown operation type '{operation.type}'")
