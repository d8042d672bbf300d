"""Role and install-target assignment for registry files."""

from __future__ import annotations

import posixpath
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import (
    ROLE_BLOCK,
    ROLE_COMPONENT,
    ROLE_FILE,
    ROLE_HOOK,
    ROLE_LIB,
    ROLE_PAGE,
    ROLE_STYLE,
    ROLE_THEME,
    ROLE_UI,
    AliasConfig,
    ClassifiedFile,
    SourceFile,
    normalize_path,
)
from .components import aliased_paths

STYLE_EXTENSIONS = frozenset({".css", ".scss", ".sass", ".less", ".pcss"})
DATA_EXTENSIONS = frozenset({".json", ".yaml", ".yml", ".md", ".mdx", ".txt"})
COMPONENT_EXTENSIONS = frozenset({".tsx", ".jsx"})

_THEME_RE = re.compile(r"(?:^|/)(?:theme|.*-theme)(?:\.[a-z0-9]+)?$", re.IGNORECASE)

# Alias slots that imply the install location, in precedence order.
_ALIAS_ROLES: Sequence[Tuple[str, str]] = (
    ("ui", ROLE_UI),
    ("components", ROLE_BLOCK),
    ("hooks", ROLE_HOOK),
    ("lib", ROLE_LIB),
)


def _alias_directory(alias: Optional[str]) -> Optional[str]:
    if not isinstance(alias, str) or not alias.startswith("@/"):
        return None
    path_part = alias[2:].strip("/")
    return f"./{path_part}" if path_part else None


def _is_under(file_path: str, directory: str) -> bool:
    return file_path == directory or file_path.startswith(f"{directory}/")


def _strip_source_root(path: str) -> str:
    return path[len("src/"):] if path.startswith("src/") else path


def classify_file(
    path: str,
    content: str,
    config: AliasConfig,
    was_in_source_root: bool,
) -> ClassifiedFile:
    """Assign a role and target; the first matching rule wins."""
    normalized = normalize_path(path)
    file_path = f"./{normalized}"
    extension = posixpath.splitext(normalized)[1]
    basename = posixpath.basename(normalized)
    install_path = _strip_source_root(normalized)
    default_target = file_path if was_in_source_root else f"~/{normalized}"

    def entry(role: str, target: Optional[str]) -> ClassifiedFile:
        return ClassifiedFile(path=file_path, content=content, type=role, target=target)

    for slot, role in _ALIAS_ROLES:
        directory = _alias_directory(getattr(config, slot))
        if directory and _is_under(file_path, directory):
            return entry(role, None)

    if normalized.startswith("app/"):
        return entry(ROLE_PAGE, f"./{install_path}")
    if _THEME_RE.search(normalized):
        return entry(ROLE_THEME, None)
    if extension in STYLE_EXTENSIONS:
        return entry(ROLE_STYLE, default_target)
    if basename.startswith(".env") or extension in DATA_EXTENSIONS:
        return entry(ROLE_FILE, f"~/{install_path}")
    if extension in COMPONENT_EXTENSIONS:
        return entry(ROLE_COMPONENT, None)
    return entry(ROLE_FILE, f"./{install_path}")


def classify_files(files: Iterable[SourceFile], config: AliasConfig) -> List[ClassifiedFile]:
    """Classify a closed file set according to the project layout."""
    classified: List[ClassifiedFile] = []
    if config.uses_source_root:
        for source in files:
            key = source.key
            if key.startswith("src/"):
                classified.append(
                    classify_file(_strip_source_root(key), source.content, config, True)
                )
            else:
                classified.append(classify_file(key, source.content, config, False))
        return classified

    alias_dirs = set(aliased_paths(config))
    for source in files:
        key = source.key
        in_source_root = key in alias_dirs or key.startswith("app/")
        classified.append(classify_file(key, source.content, config, in_source_root))
    return classified


__all__ = [
    "COMPONENT_EXTENSIONS",
    "DATA_EXTENSIONS",
    "STYLE_EXTENSIONS",
    "classify_file",
    "classify_files",
]
