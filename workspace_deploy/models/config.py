"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .package import Package, sort_packages
from .target import Target, sort_targets


@dataclass
class DeployConfiguration:
    """Complete configuration of a workspace"""

    version: str = "1.0"
    targets: List[Target] = field(default_factory=list)
    packages: List[Package] = field(default_factory=list)

    # Additional plugin modules (paths or dotted names)
    modules: List[str] = field(default_factory=list)

    open_output_on_deploy: bool = True

    def get_target(self, name: str) -> Optional[Target]:
        """Get target by name (case-insensitive)"""
        wanted = name.strip().lower()
        for target in self.targets:
            if target.name.lower() == wanted:
                return target
        return None

    def get_package(self, name: str) -> Optional[Package]:
        """Get package by name (case-insensitive)"""
        wanted = name.strip().lower()
        for package in self.packages:
            if package.name.lower() == wanted:
                return package
        return None

    def sorted_targets(self) -> List[Target]:
        return sort_targets(self.targets)

    def sorted_packages(self) -> List[Package]:
        return sort_packages(self.packages)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'DeployConfiguration':
        """Create from dictionary"""
        data = data or {}

        modules = data.get("modules") or []
        if isinstance(modules, str):
            modules = [modules]

        return cls(
            version=str(data.get("version", "1.0")),
            targets=[Target.from_dict(t) for t in data.get("targets") or [] if t],
            packages=[Package.from_dict(p) for p in data.get("packages") or [] if p],
            modules=[str(m) for m in modules if m],
            open_output_on_deploy=bool(data.get("open_output_on_deploy", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "version": self.version,
            "targets": [t.to_dict() for t in self.targets],
            "packages": [p.to_dict() for p in self.packages],
            "modules": self.modules,
            "open_output_on_deploy": self.open_output_on_deploy,
        }
