"""Local filesystem transport

Deploys to a local folder or a shared folder (like SMB) inside the LAN.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from ...api.exceptions import DeployError, DirectoryError, MappingError, WriteError
from ...core.context import DeployContext
from ...core.transformer import TransformPipeline
from ...models.events import (
    BeforeDeployFileEvent,
    DeployFileOptions,
    DeployWorkspaceOptions,
    FileDeployedEvent,
    WorkspaceDeployedEvent,
)
from ...models.target import Target
from ...utils.async_utils import run_blocking
from ...utils.file_utils import (
    copy_file_async,
    empty_directory,
    ensure_directory,
    read_bytes_async,
    write_bytes_async,
)
from ..base import DeployPlugin, DeployPluginInfo


class LocalPlugin(DeployPlugin):
    """Copies files into the target's ``dir``"""

    async def deploy_file(self, file: str, target: Target,
                          opts: Optional[DeployFileOptions] = None) -> FileDeployedEvent:
        opts = opts or DeployFileOptions()
        completed = self.file_completion(file, target, opts)

        if self.context.is_cancelling():
            return completed(canceled=True)

        source = self.path_mapper.absolute(file)

        try:
            target_file = self.path_mapper.resolve(file, target, opts.base_directory)
        except MappingError as e:
            return completed(error=e)

        if _same_file(source, target_file):
            return completed(error=WriteError(str(target_file), "source and destination are the same file"))

        target_directory = target_file.parent

        try:
            await ensure_directory(target_directory)
        except OSError as e:
            return completed(error=DirectoryError(str(target_directory), str(e)))

        try:
            self.before_deploy(opts, BeforeDeployFileEvent(
                file=file,
                target=target,
                destination=str(target_directory),
            ))

            await self._write(source, target_file, target)

        except DeployError as e:
            return completed(error=e)
        except Exception as e:
            self.logger.debug(f"Copying {file} to {target_file} failed: {e}")
            return completed(error=WriteError(str(target_file), str(e)))

        return completed()

    async def _write(self, source: str, destination: Path, target: Target) -> None:
        if not target.has_transformer:
            await copy_file_async(source, destination, preserve_timestamps=True)
            return

        pipeline = TransformPipeline.load(self.context, target)
        data = await read_bytes_async(source)
        data = await pipeline.transform(data)

        try:
            await write_bytes_async(destination, data)
        except OSError as e:
            raise WriteError(str(destination), str(e)) from e

    async def deploy_workspace(self, files: List[Union[str, Path]], target: Target,
                               opts: Optional[DeployWorkspaceOptions] = None) -> WorkspaceDeployedEvent:
        opts = opts or DeployWorkspaceOptions()

        if self.context.is_cancelling():
            return self.workspace_completion(target, opts)(canceled=True)

        if target.empty:
            target_dir = self.path_mapper.get_target_root(target)
            output = self.context.output

            output.append(f"Empty LOCAL target directory '{target_dir}'... ")
            try:
                await run_blocking(empty_directory, target_dir)
            except OSError as e:
                output.append_line(f"[FAILED: {e}]")
                error = DirectoryError(target_dir, str(e))
                return self.workspace_completion(target, opts)(error=error)

            output.append_line("[OK]")

        return await super().deploy_workspace(files, target, opts)

    def info(self) -> DeployPluginInfo:
        return DeployPluginInfo(
            description="Deploys to a local folder or a shared folder (like SMB) inside your LAN",
        )


def create_plugin(context: DeployContext) -> DeployPlugin:
    """Creates a new plugin instance"""
    return LocalPlugin(context)


def _same_file(source: str, destination: Path) -> bool:
    # Writing a file onto itself truncates it before it is read
    return os.path.normcase(os.path.realpath(source)) == \
        os.path.normcase(os.path.realpath(str(destination)))
