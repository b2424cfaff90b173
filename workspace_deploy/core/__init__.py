"""Core modules for workspace-deploy"""

from .path_mapper import PathMapper
from .transformer import (
    DataTransformerMode,
    DataTransformerContext,
    TransformPipeline,
    apply_transform,
)
from .context import CancellationToken, OutputChannel, DeployContext
from .orchestrator import WorkspaceOrchestrator, FileCompletionTracker

__all__ = [
    "PathMapper",
    "DataTransformerMode",
    "DataTransformerContext",
    "TransformPipeline",
    "apply_transform",
    "CancellationToken",
    "OutputChannel",
    "DeployContext",
    "WorkspaceOrchestrator",
    "FileCompletionTracker",
]
