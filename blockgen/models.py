"""Core data models shared across blockgen components."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

REGISTRY_BLOCK = "registry:block"

ROLE_EXAMPLE = "registry:example"
ROLE_UI = "registry:ui"
ROLE_BLOCK = "registry:block"
ROLE_HOOK = "registry:hook"
ROLE_LIB = "registry:lib"
ROLE_PAGE = "registry:page"
ROLE_THEME = "registry:theme"
ROLE_STYLE = "registry:style"
ROLE_FILE = "registry:file"
ROLE_COMPONENT = "registry:component"

FILE_ROLES: Tuple[str, ...] = (
    ROLE_EXAMPLE,
    ROLE_UI,
    ROLE_BLOCK,
    ROLE_HOOK,
    ROLE_LIB,
    ROLE_PAGE,
    ROLE_THEME,
    ROLE_STYLE,
    ROLE_FILE,
    ROLE_COMPONENT,
)

ALIAS_SLOTS: Tuple[str, ...] = ("components", "utils", "ui", "lib", "hooks")


def normalize_path(path: str) -> str:
    """Return a project-relative path using `/` separators and no leading `./`."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


@dataclass(frozen=True)
class SourceFile:
    """A project file as read from disk or from a git snapshot."""

    path: str
    content: str

    @property
    def key(self) -> str:
        return normalize_path(self.path)


@dataclass(frozen=True)
class AliasConfig:
    """Import alias settings taken from the project's components manifest."""

    components: Optional[str] = None
    utils: Optional[str] = None
    ui: Optional[str] = None
    lib: Optional[str] = None
    hooks: Optional[str] = None
    uses_source_root: bool = False
    registries: Mapping[str, Any] = field(default_factory=dict)

    def alias_slots(self) -> Iterator[Tuple[str, Optional[str]]]:
        for slot in ALIAS_SLOTS:
            yield slot, getattr(self, slot)


@dataclass
class ClassifiedFile:
    """A registry file entry with its role and optional install target."""

    path: str
    content: str
    type: str
    target: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "path": self.path,
            "content": self.content,
            "type": self.type,
        }
        if self.target is not None:
            payload["target"] = self.target
        return payload


@dataclass
class RegistryBlock:
    """Installable bundle of files plus the packages and components it needs."""

    name: str
    type: str = REGISTRY_BLOCK
    dependencies: List[str] = field(default_factory=list)
    devDependencies: List[str] = field(default_factory=list)
    registryDependencies: List[str] = field(default_factory=list)
    files: List[ClassifiedFile] = field(default_factory=list)
    tailwind: Dict[str, Any] = field(default_factory=dict)
    cssVars: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "dependencies": list(self.dependencies),
            "devDependencies": list(self.devDependencies),
            "registryDependencies": list(self.registryDependencies),
            "files": [entry.to_dict() for entry in self.files],
            "tailwind": dict(self.tailwind),
            "cssVars": dict(self.cssVars),
            "meta": dict(self.meta),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
