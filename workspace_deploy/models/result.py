"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .events import FileDeployedEvent, WorkspaceDeployedEvent


@dataclass
class DeployResult:
    """Aggregated outcome of a workspace deployment"""

    event: WorkspaceDeployedEvent
    file_results: List[FileDeployedEvent] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def success(self) -> bool:
        """True when the workspace run and every file succeeded"""
        return self.event.success and all(r.success for r in self.file_results)

    @property
    def canceled(self) -> bool:
        return self.event.canceled

    @property
    def deployed(self) -> List[FileDeployedEvent]:
        return [r for r in self.file_results if r.success]

    @property
    def failed(self) -> List[FileDeployedEvent]:
        return [r for r in self.file_results if r.error is not None]

    @property
    def skipped(self) -> List[FileDeployedEvent]:
        return [r for r in self.file_results if r.canceled]

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def complete(self) -> None:
        self.end_time = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "target": self.event.target.name,
            "success": self.success,
            "canceled": self.canceled,
            "error": str(self.event.error) if self.event.error else None,
            "files": [
                {
                    "file": r.file,
                    "canceled": r.canceled,
                    "error": str(r.error) if r.error else None,
                }
                for r in self.file_results
            ],
            "duration": self.duration,
        }
