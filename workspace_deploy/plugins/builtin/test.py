"""Dry-run transport: resolves destinations but writes nothing"""

from typing import Optional

from ...api.exceptions import DeployError, MappingError
from ...core.context import DeployContext
from ...models.events import BeforeDeployFileEvent, DeployFileOptions, FileDeployedEvent
from ...models.target import Target
from ..base import DeployPlugin, DeployPluginInfo


class TestPlugin(DeployPlugin):
    """Simulates a deployment"""

    # Keep pytest from collecting this class
    __test__ = False

    async def deploy_file(self, file: str, target: Target,
                          opts: Optional[DeployFileOptions] = None) -> FileDeployedEvent:
        opts = opts or DeployFileOptions()
        completed = self.file_completion(file, target, opts)

        if self.context.is_cancelling():
            return completed(canceled=True)

        try:
            destination = self.path_mapper.resolve(file, target, opts.base_directory)
        except MappingError as e:
            return completed(error=e)

        try:
            self.before_deploy(opts, BeforeDeployFileEvent(
                file=file,
                target=target,
                destination=str(destination.parent),
            ))
        except DeployError as e:
            return completed(error=e)

        self.context.output.append_line(f"[TEST] '{file}' => '{destination}'")
        return completed()

    def info(self) -> DeployPluginInfo:
        return DeployPluginInfo(description="A mock deployer that only displays what would be deployed")


def create_plugin(context: DeployContext) -> DeployPlugin:
    """Creates a new plugin instance"""
    return TestPlugin(context)
