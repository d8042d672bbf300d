"""Selection of package manifest entries actually used by a registry block."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import AbstractSet, Any, Iterable, List, Set, Tuple

from ..logging import get_logger
from ..models import AliasConfig
from .components import DEFAULT_NAMESPACE

_LOGGER = get_logger("dependencies")

# Package name that stands for the whole UI kit rather than one component.
UI_KIT_PACKAGE = "shadcn/ui"


class ManifestError(RuntimeError):
    """Raised when the package manifest cannot be parsed."""


@dataclass(frozen=True)
class PackageManifest:
    """Dependency names declared in a package manifest, in declaration order."""

    dependencies: List[str] = field(default_factory=list)
    dev_dependencies: List[str] = field(default_factory=list)


def _names(data: dict, key: str) -> List[str]:
    section: Any = data.get(key)
    if isinstance(section, dict):
        return [str(name) for name in section]
    return []


def parse_manifest(text: str) -> PackageManifest:
    """Parse package manifest text; malformed input raises :class:`ManifestError`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse package manifest: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError("Package manifest must contain a JSON object at the root")
    return PackageManifest(
        dependencies=_names(data, "dependencies"),
        dev_dependencies=_names(data, "devDependencies"),
    )


def external_namespaces(
    registry_dependencies: Iterable[str], config: AliasConfig
) -> Set[str]:
    """Namespaces of registry dependencies that come from an external registry."""
    known = {DEFAULT_NAMESPACE}
    known.update(name for name in (config.registries or {}) if isinstance(name, str))
    namespaces: Set[str] = set()
    for reference in registry_dependencies:
        namespace = reference.split("/", 1)[0]
        if namespace in known:
            namespaces.add(namespace)
    return namespaces


def _keep(name: str, used_packages: AbstractSet[str], namespaces: AbstractSet[str]) -> bool:
    if name not in used_packages:
        return False
    if not namespaces:
        return True
    if name == UI_KIT_PACKAGE:
        return False
    for namespace in namespaces:
        if name == namespace or name == f"{namespace}/ui":
            return False
    return True


def filter_dependencies(
    manifest: PackageManifest,
    used_packages: AbstractSet[str],
    registry_dependencies: Iterable[str],
    config: AliasConfig,
) -> Tuple[List[str], List[str]]:
    """Return the runtime and dev dependency names the block really needs."""
    namespaces = external_namespaces(registry_dependencies, config)
    dependencies = [
        name for name in manifest.dependencies if _keep(name, used_packages, namespaces)
    ]
    dev_dependencies = [
        name for name in manifest.dev_dependencies if _keep(name, used_packages, namespaces)
    ]
    _LOGGER.debug(
        "Kept %d of %d manifest dependencies",
        len(dependencies) + len(dev_dependencies),
        len(manifest.dependencies) + len(manifest.dev_dependencies),
    )
    return dependencies, dev_dependencies


__all__ = [
    "ManifestError",
    "PackageManifest",
    "UI_KIT_PACKAGE",
    "external_namespaces",
    "filter_dependencies",
    "parse_manifest",
]
