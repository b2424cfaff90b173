"""Package models"""

import fnmatch
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..constants import DEFAULT_SORT_ORDER


@dataclass
class Package:
    """A named group of include/exclude glob patterns"""

    name: str
    sort_order: int = DEFAULT_SORT_ORDER
    description: Optional[str] = None
    files: List[str] = field(default_factory=lambda: ["**/*"])
    exclude: List[str] = field(default_factory=list)

    def resolve_files(self, workspace_root: Union[str, Path]) -> List[Path]:
        """Resolve patterns into a concrete file list

        Args:
            workspace_root: Directory the patterns are relative to

        Returns:
            Sorted absolute paths of matching regular files
        """
        root = Path(workspace_root)
        found = set()

        for pattern in self.files:
            for path in root.glob(pattern):
                if not path.is_file():
                    continue

                relative = path.relative_to(root).as_posix()
                if self._is_excluded(relative):
                    continue

                found.add(path)

        return sorted(found)

    def _is_excluded(self, relative_path: str) -> bool:
        for pattern in self.exclude:
            if fnmatch.fnmatch(relative_path, pattern):
                return True
            # Directory patterns such as "build/" exclude everything below
            if pattern.endswith("/") and relative_path.startswith(pattern):
                return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "sort_order": self.sort_order,
            "files": self.files,
        }
        if self.description:
            data["description"] = self.description
        if self.exclude:
            data["exclude"] = self.exclude
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Package':
        return cls(
            name=str(data.get("name") or ""),
            sort_order=int(data.get("sort_order", DEFAULT_SORT_ORDER) or 0),
            description=data.get("description"),
            files=list(data.get("files") or ["**/*"]),
            exclude=list(data.get("exclude") or []),
        )


def sort_packages(packages: List[Package]) -> List[Package]:
    """Order packages by sort order, then name"""
    return sorted(packages, key=lambda p: (p.sort_order, p.name.lower()))
