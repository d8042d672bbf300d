"""Alias table construction and local specifier resolution."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Sequence

from ..models import AliasConfig, normalize_path

SOURCE_EXTENSIONS: Sequence[str] = (
    ".tsx",
    ".ts",
    ".jsx",
    ".js",
    ".mts",
    ".mjs",
    ".cts",
    ".cjs",
)

INDEX_FILENAMES: Sequence[str] = ("index.tsx", "index.ts", "index.jsx", "index.js")

PROJECT_ALIAS = "@/"
_CATCH_ALL_ALIAS = "@"
_FALLBACK_SENTINELS = ("@/", "~/")


@dataclass(frozen=True)
class AliasEntry:
    """Maps an import alias prefix onto a project-relative directory."""

    alias: str
    real_prefix: str

    def substitute(self, specifier: str) -> Optional[str]:
        """Return the project path for ``specifier`` or ``None`` if it does not match."""
        if specifier == self.alias:
            return self.real_prefix
        boundary = self.alias if self.alias.endswith("/") else f"{self.alias}/"
        if not specifier.startswith(boundary):
            return None
        remainder = specifier[len(boundary):].lstrip("/")
        return _join(self.real_prefix, remainder)


def source_root(config: AliasConfig) -> str:
    return "src" if config.uses_source_root else ""


def build_alias_table(config: AliasConfig) -> List[AliasEntry]:
    """Return alias entries ordered longest alias first."""
    prefix = "src/" if config.uses_source_root else ""
    entries: List[AliasEntry] = []
    for _slot, value in config.alias_slots():
        if not isinstance(value, str) or not value.startswith(PROJECT_ALIAS):
            continue
        alias = value.rstrip("/")
        path_part = value[len(PROJECT_ALIAS):].strip("/")
        if not path_part:
            continue
        entries.append(AliasEntry(alias=alias, real_prefix=prefix + path_part))
    entries.append(AliasEntry(alias=_CATCH_ALL_ALIAS, real_prefix=source_root(config)))
    # sorted() is stable, so equal-length aliases keep slot order.
    return sorted(entries, key=lambda entry: len(entry.alias), reverse=True)


def _join(base: str, tail: str) -> str:
    joined = posixpath.join(base, tail) if base else tail
    normalized = posixpath.normpath(joined) if joined else ""
    return "" if normalized == "." else normalized


def _candidate_path(
    specifier: str,
    from_path: str,
    table: Sequence[AliasEntry],
    root: str,
) -> str:
    if specifier.startswith((".", "/")):
        from_dir = posixpath.dirname(normalize_path(from_path))
        return _join(from_dir, specifier.lstrip("/"))

    for entry in table:
        substituted = entry.substitute(specifier)
        if substituted is not None:
            return substituted

    remainder = specifier
    for sentinel in _FALLBACK_SENTINELS:
        if remainder.startswith(sentinel):
            remainder = remainder[len(sentinel):]
            break
    return _join(root, remainder)


def resolve_specifier(
    specifier: str,
    from_path: str,
    table: Sequence[AliasEntry],
    known_paths: AbstractSet[str],
    root: str = "",
) -> Optional[str]:
    """Resolve a local specifier to a known project path.

    Candidates are tried as written, then with each source extension, then as
    a directory holding an index file. Paths that climb above the project root
    never match a known path and resolve to ``None``.
    """
    candidate = _candidate_path(specifier, from_path, table, root)
    if not candidate or candidate.startswith("../"):
        return None

    if candidate in known_paths:
        return candidate
    for extension in SOURCE_EXTENSIONS:
        path = candidate if candidate.endswith(extension) else candidate + extension
        if path in known_paths:
            return path
    for filename in INDEX_FILENAMES:
        path = f"{candidate.rstrip('/')}/{filename}"
        if path in known_paths:
            return path
    return None


__all__ = [
    "AliasEntry",
    "INDEX_FILENAMES",
    "SOURCE_EXTENSIONS",
    "build_alias_table",
    "resolve_specifier",
    "source_root",
]
