"""Detection of UI kit components that install from an external registry."""

from __future__ import annotations

import posixpath
from typing import Iterable, List, Optional, Set

from ..models import AliasConfig, SourceFile, normalize_path

DEFAULT_NAMESPACE = "@shadcn"

BUILTIN_COMPONENTS = frozenset(
    {
        "accordion",
        "alert",
        "alert-dialog",
        "aspect-ratio",
        "avatar",
        "badge",
        "breadcrumb",
        "button",
        "button-group",
        "calendar",
        "card",
        "carousel",
        "chart",
        "checkbox",
        "collapsible",
        "combobox",
        "command",
        "context-menu",
        "data-table",
        "date-picker",
        "dialog",
        "drawer",
        "dropdown-menu",
        "empty",
        "field",
        "form",
        "hover-card",
        "input",
        "input-group",
        "input-otp",
        "item",
        "kbd",
        "label",
        "menubar",
        "native-select",
        "navigation-menu",
        "pagination",
        "popover",
        "progress",
        "radio-group",
        "resizable",
        "scroll-area",
        "select",
        "separator",
        "sheet",
        "sidebar",
        "skeleton",
        "slider",
        "sonner",
        "spinner",
        "switch",
        "table",
        "tabs",
        "textarea",
        "toast",
        "toggle",
        "toggle-group",
        "tooltip",
        "typography",
    }
)

_COMPONENT_EXTENSIONS = (".tsx", ".jsx")


def default_namespace(config: AliasConfig) -> Optional[str]:
    """Pick the namespace used to qualify registry dependencies."""
    namespaces = list(config.registries or {})
    if DEFAULT_NAMESPACE in namespaces:
        return DEFAULT_NAMESPACE
    return namespaces[0] if namespaces else None


def aliased_paths(config: AliasConfig) -> List[str]:
    """Return every alias slot as a project-relative directory."""
    paths: List[str] = []
    for _slot, value in config.alias_slots():
        if isinstance(value, str):
            paths.append(value.replace("@/", "", 1))
    return paths


def _ui_directory(config: AliasConfig) -> Optional[str]:
    if not isinstance(config.ui, str) or not config.ui.startswith("@/"):
        return None
    prefix = "src/" if config.uses_source_root else ""
    return prefix + config.ui[2:].strip("/")


def _component_name(path: str) -> Optional[str]:
    stem, extension = posixpath.splitext(posixpath.basename(path))
    if extension not in _COMPONENT_EXTENSIONS or stem not in BUILTIN_COMPONENTS:
        return None
    return stem


def is_builtin_component(config: AliasConfig, path: str) -> bool:
    """True when ``path`` is a stock UI kit component inside the ui directory."""
    directory = _ui_directory(config)
    normalized = normalize_path(path)
    if not directory or not normalized.startswith(f"{directory}/"):
        return False
    return _component_name(normalized) is not None


def find_registry_dependencies(
    config: AliasConfig, all_files: Iterable[SourceFile]
) -> List[str]:
    """List stock components present in the project as registry references."""
    namespace = default_namespace(config)
    seen: Set[str] = set()
    dependencies: List[str] = []
    for source in all_files:
        if not is_builtin_component(config, source.key):
            continue
        stem = posixpath.splitext(posixpath.basename(source.key))[0]
        reference = f"{namespace}/{stem}" if namespace else stem
        if reference not in seen:
            seen.add(reference)
            dependencies.append(reference)
    return dependencies


__all__ = [
    "BUILTIN_COMPONENTS",
    "DEFAULT_NAMESPACE",
    "aliased_paths",
    "default_namespace",
    "find_registry_dependencies",
    "is_builtin_component",
]
