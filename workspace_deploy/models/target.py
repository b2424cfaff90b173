"""Target configuration models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..constants import DEFAULT_SORT_ORDER, DEFAULT_TARGET_DIR

# Keys consumed by Target.from_dict; everything else lands in ``options``
_KNOWN_KEYS = {
    "name", "type", "description", "sort_order", "dir", "empty",
    "mappings", "deployed", "transformer", "transformer_options",
}


@dataclass(frozen=True)
class TargetMapping:
    """A directory-prefix rewrite rule"""

    source: str
    target: str

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TargetMapping':
        return cls(
            source=str(data.get("source") or ""),
            target=str(data.get("target") or ""),
        )


@dataclass(frozen=True)
class AfterDeployedOperation:
    """An operation invoked AFTER all files of a target have been deployed"""

    type: str = ""
    target: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.type}
        if self.target is not None:
            data["target"] = self.target
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AfterDeployedOperation':
        return cls(
            type=str(data.get("type") or "").strip().lower(),
            target=data.get("target"),
        )


@dataclass(frozen=True)
class Target:
    """A configured deployment destination bound to a transport type

    Targets are built once from configuration and never mutated while a
    deployment is running.
    """

    name: str
    type: str
    sort_order: int = DEFAULT_SORT_ORDER
    description: Optional[str] = None

    # Local transport
    dir: Optional[str] = None
    empty: bool = False

    mappings: Tuple[TargetMapping, ...] = ()
    deployed: Tuple[AfterDeployedOperation, ...] = ()

    # Data transformation
    transformer: Optional[str] = None
    transformer_options: Any = None

    # Transport-specific settings
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def base_dir(self) -> str:
        """Configured root directory, ``./`` when unset"""
        directory = str(self.dir or "").strip()
        return directory or DEFAULT_TARGET_DIR

    @property
    def has_transformer(self) -> bool:
        return bool(self.transformer and str(self.transformer).strip())

    def get_display_info(self) -> str:
        """Get display information for the target"""
        if self.description:
            return f"{self.name} ({self.type}): {self.description}"
        return f"{self.name} ({self.type})"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "sort_order": self.sort_order,
        }

        if self.description:
            data["description"] = self.description
        if self.dir:
            data["dir"] = self.dir
        if self.empty:
            data["empty"] = True
        if self.mappings:
            data["mappings"] = [m.to_dict() for m in self.mappings]
        if self.deployed:
            data["deployed"] = [op.to_dict() for op in self.deployed]
        if self.transformer:
            data["transformer"] = self.transformer
        if self.transformer_options is not None:
            data["transformer_options"] = self.transformer_options

        data.update(self.options)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Target':
        """Create from a configuration record

        ``mappings`` accepts a single mapping object or a list of them.
        """
        mappings = data.get("mappings") or []
        if isinstance(mappings, dict):
            mappings = [mappings]

        deployed = data.get("deployed") or []
        if isinstance(deployed, dict):
            deployed = [deployed]

        target_type = str(data.get("type") or "").strip().lower()

        return cls(
            name=str(data.get("name") or target_type),
            type=target_type,
            sort_order=int(data.get("sort_order", DEFAULT_SORT_ORDER) or 0),
            description=data.get("description"),
            dir=data.get("dir"),
            empty=bool(data.get("empty", False)),
            mappings=tuple(TargetMapping.from_dict(m) for m in mappings if m),
            deployed=tuple(AfterDeployedOperation.from_dict(op) for op in deployed if op),
            transformer=data.get("transformer"),
            transformer_options=data.get("transformer_options"),
            options={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )


def sort_targets(targets: List[Target]) -> List[Target]:
    """Order targets by sort order, then name"""
    return sorted(targets, key=lambda t: (t.sort_order, t.name.lower()))
