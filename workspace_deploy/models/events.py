"""Deployment event payloads and callback option bags"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .target import Target


@dataclass(frozen=True)
class BeforeDeployFileEvent:
    """Raised BEFORE a file starts to be deployed"""
    file: str
    target: Target
    destination: str


@dataclass(frozen=True)
class FileDeployedEvent:
    """Raised AFTER a file deployment has been completed"""
    file: str
    target: Target
    canceled: bool = False
    error: Optional[BaseException] = None

    @property
    def success(self) -> bool:
        return not self.canceled and self.error is None


@dataclass(frozen=True)
class WorkspaceDeployedEvent:
    """Raised AFTER a workspace deployment has been completed"""
    target: Target
    canceled: bool = False
    error: Optional[BaseException] = None

    @property
    def success(self) -> bool:
        return not self.canceled and self.error is None


# Handlers are called as handler(sender, event)
BeforeDeployFileHandler = Callable[[Any, BeforeDeployFileEvent], None]
FileDeployedHandler = Callable[[Any, FileDeployedEvent], None]
WorkspaceDeployedHandler = Callable[[Any, WorkspaceDeployedEvent], None]


@dataclass
class DeployFileOptions:
    """Callbacks and path options for a single deploy_file call"""
    on_before_deploy: Optional[BeforeDeployFileHandler] = None
    on_completed: Optional[FileDeployedHandler] = None
    # Paths are made relative to this directory (default: workspace root)
    base_directory: Optional[str] = None


@dataclass
class DeployWorkspaceOptions:
    """Callbacks and path options for a deploy_workspace call"""
    on_before_deploy_file: Optional[BeforeDeployFileHandler] = None
    on_file_completed: Optional[FileDeployedHandler] = None
    on_completed: Optional[WorkspaceDeployedHandler] = None
    base_directory: Optional[str] = None
