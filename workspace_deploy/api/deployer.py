"""Deployer API for deployment operations"""

from pathlib import Path
from typing import Optional, Sequence, Union

from ..core.context import CancellationToken, DeployContext, OutputChannel
from ..core.orchestrator import WorkspaceOrchestrator
from ..core.transformer import TransformPipeline
from ..models.config import DeployConfiguration
from ..models.events import DeployFileOptions, DeployWorkspaceOptions, FileDeployedEvent
from ..models.package import Package
from ..models.result import DeployResult
from ..models.target import Target
from ..plugins.registry import PluginRegistry
from ..services.config_service import ConfigService
from ..utils.async_utils import run_async
from ..utils.file_utils import read_bytes_async, write_bytes_async
from .exceptions import ConfigurationError

PathLike = Union[str, Path]


class Deployer:
    """Deployment session: configuration, context, plugins and orchestrator"""

    def __init__(self,
                 workspace_root: PathLike = ".",
                 config: Optional[DeployConfiguration] = None,
                 config_path: Optional[PathLike] = None,
                 output: Optional[OutputChannel] = None):
        """
        Initialize deployer

        Args:
            workspace_root: Workspace root directory
            config: Configuration; loaded from the workspace when omitted
            config_path: Configuration file to load instead of the default
            output: Output channel for operator messages; by default it
                echoes only when ``open_output_on_deploy`` is set

        Raises:
            ConfigurationError: If the configuration cannot be loaded
        """
        self.workspace_root = Path(workspace_root).resolve()

        if config is None:
            config = ConfigService(self.workspace_root, config_path).load_config()

        if output is None:
            output = OutputChannel(echo=config.open_output_on_deploy)

        self.config = config
        self.cancellation = CancellationToken()
        self.context = DeployContext(config, self.workspace_root, output, self.cancellation)
        self.registry = PluginRegistry(self.context)
        self.registry.load_all()
        self.orchestrator = WorkspaceOrchestrator(self.context, self.registry)

    def cancel(self) -> None:
        """Request cooperative cancellation of running deployments"""
        self.cancellation.cancel()

    def get_target(self, name: str) -> Target:
        """
        Raises:
            ConfigurationError: If no target has that name
        """
        target = self.config.get_target(name)
        if target is None:
            raise ConfigurationError(f"Target not found: {name}")
        return target

    def get_package(self, name: str) -> Package:
        """
        Raises:
            ConfigurationError: If no package has that name
        """
        package = self.config.get_package(name)
        if package is None:
            raise ConfigurationError(f"Package not found: {name}")
        return package

    async def deploy_files_async(self, files: Sequence[PathLike], target_name: str,
                                 opts: Optional[DeployWorkspaceOptions] = None) -> DeployResult:
        target = self.get_target(target_name)
        return await self.orchestrator.deploy_workspace(
            [self._absolute(f) for f in files], target, opts,
        )

    async def deploy_file_async(self, file: PathLike, target_name: str,
                                opts: Optional[DeployFileOptions] = None) -> FileDeployedEvent:
        target = self.get_target(target_name)
        return await self.orchestrator.deploy_file(self._absolute(file), target, opts)

    async def deploy_package_async(self, package_name: str, target_name: str,
                                   opts: Optional[DeployWorkspaceOptions] = None) -> DeployResult:
        package = self.get_package(package_name)
        target = self.get_target(target_name)
        return await self.orchestrator.deploy_package(package, target, opts)

    async def restore_file_async(self, file: PathLike, target_name: str, output: PathLike) -> Path:
        """
        Read a deployed file and reverse the target's transformer

        Args:
            file: Deployed (transformed) file
            target_name: Target whose transformer produced the file
            output: Where to write the restored bytes

        Returns:
            Path of the restored file

        Raises:
            TransformError: If the transformer cannot restore the data
        """
        target = self.get_target(target_name)
        pipeline = TransformPipeline.load(self.context, target)

        data = await read_bytes_async(self._absolute(file))
        data = await pipeline.restore(data)

        output_path = Path(self._absolute(output))
        output_path.parent.mkdir(parents=True, exist_ok=True)
        await write_bytes_async(output_path, data)
        return output_path

    def deploy_files(self, files: Sequence[PathLike], target_name: str,
                     opts: Optional[DeployWorkspaceOptions] = None) -> DeployResult:
        """
        Deploy files to a target

        Args:
            files: Files (absolute or relative to the workspace root)
            target_name: Name of the target
            opts: Callbacks

        Returns:
            DeployResult: Deployment result
        """
        return run_async(self.deploy_files_async(files, target_name, opts))

    def deploy_file(self, file: PathLike, target_name: str,
                    opts: Optional[DeployFileOptions] = None) -> FileDeployedEvent:
        """Deploy a single file to a target"""
        return run_async(self.deploy_file_async(file, target_name, opts))

    def deploy_package(self, package_name: str, target_name: str,
                       opts: Optional[DeployWorkspaceOptions] = None) -> DeployResult:
        """Deploy the files of a package to a target"""
        return run_async(self.deploy_package_async(package_name, target_name, opts))

    def restore_file(self, file: PathLike, target_name: str, output: PathLike) -> Path:
        """Restore a transformed file"""
        return run_async(self.restore_file_async(file, target_name, output))

    def _absolute(self, path: PathLike) -> str:
        path = Path(path)
        if not path.is_absolute():
            path = self.workspace_root / path
        return str(path)


def deploy(files: Sequence[PathLike],
           target: str,
           workspace_root: PathLike = ".") -> DeployResult:
    """
    Convenience function for deploying files

    Args:
        files: Files to deploy
        target: Target name
        workspace_root: Workspace root containing ``.deploy.yaml``

    Returns:
        DeployResult: Deployment result
    """
    deployer = Deployer(workspace_root)
    return deployer.deploy_files(files, target)
