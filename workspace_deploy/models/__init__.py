"""Data models for workspace-deploy"""

from .target import Target, TargetMapping, AfterDeployedOperation, sort_targets
from .package import Package, sort_packages
from .config import DeployConfiguration
from .events import (
    BeforeDeployFileEvent,
    FileDeployedEvent,
    WorkspaceDeployedEvent,
    DeployFileOptions,
    DeployWorkspaceOptions,
)
from .result import DeployResult

__all__ = [
    # Target models
    "Target",
    "TargetMapping",
    "AfterDeployedOperation",
    "sort_targets",

    # Package models
    "Package",
    "sort_packages",

    # Config models
    "DeployConfiguration",

    # Events
    "BeforeDeployFileEvent",
    "FileDeployedEvent",
    "WorkspaceDeployedEvent",
    "DeployFileOptions",
    "DeployWorkspaceOptions",

    # Results
    "DeployResult",
]
