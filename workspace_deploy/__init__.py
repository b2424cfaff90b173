"""Workspace Deploy - push workspace files to configured targets.

Files are handed to pluggable transports (a local filesystem transport is
built in), mapped to destination paths per target and optionally
transformed on the way out.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Exceptions
from .api.exceptions import (
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

# Core API
from .api.deployer import Deployer, deploy

# Engine
from .core import (
    PathMapper,
    TransformPipeline,
    DataTransformerMode,
    DataTransformerContext,
    DeployContext,
    CancellationToken,
    OutputChannel,
    WorkspaceOrchestrator,
)
from .plugins import DeployPlugin, DeployPluginInfo, PluginRegistry

# Data models
from .models import (
    Target,
    TargetMapping,
    AfterDeployedOperation,
    Package,
    DeployConfiguration,
    BeforeDeployFileEvent,
    FileDeployedEvent,
    WorkspaceDeployedEvent,
    DeployFileOptions,
    DeployWorkspaceOptions,
    DeployResult,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Deployer",
    "deploy",

    # Engine
    "PathMapper",
    "TransformPipeline",
    "DataTransformerMode",
    "DataTransformerContext",
    "DeployContext",
    "CancellationToken",
    "OutputChannel",
    "WorkspaceOrchestrator",
    "DeployPlugin",
    "DeployPluginInfo",
    "PluginRegistry",

    # Data models
    "Target",
    "TargetMapping",
    "AfterDeployedOperation",
    "Package",
    "DeployConfiguration",
    "BeforeDeployFileEvent",
    "FileDeployedEvent",
    "WorkspaceDeployedEvent",
    "DeployFileOptions",
    "DeployWorkspaceOptions",
    "DeployResult",

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
