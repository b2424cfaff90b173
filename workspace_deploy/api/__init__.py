"""API layer for workspace-deploy"""

from .exceptions import (
    WorkspaceDeployError,
    ConfigurationError,
    PluginError,
    DeployError,
    MappingError,
    DirectoryError,
    WriteError,
    TransformError,
    UserCancelledError,
)
from .deployer import Deployer, deploy

__all__ = [
    # Main classes
    "Deployer",

    # Convenience functions
    "deploy",

    # Exceptions
    "WorkspaceDeployError",
    "ConfigurationError",
    "PluginError",
    "DeployError",
    "MappingError",
    "DirectoryError",
    "WriteError",
    "TransformError",
    "UserCancelledError",
]
