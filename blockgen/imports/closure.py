"""Transitive closure of project files reachable through local imports."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List

from ..logging import get_logger
from ..models import AliasConfig, SourceFile
from .extract import extract_local_specifiers
from .resolve import build_alias_table, resolve_specifier, source_root

_LOGGER = get_logger("closure")


def expand_included_files(
    initial: Iterable[SourceFile],
    all_files: Iterable[SourceFile],
    config: AliasConfig,
) -> List[SourceFile]:
    """Grow ``initial`` until every locally imported project file is included.

    Seeds keep their order and discovered files are appended as they are found.
    Every added file comes from ``all_files``; the result never shrinks.
    """
    by_key: Dict[str, SourceFile] = {}
    for source in all_files:
        by_key.setdefault(source.key, source)
    known_paths = frozenset(by_key)
    table = build_alias_table(config)
    root = source_root(config)

    included: Dict[str, SourceFile] = {}
    for source in initial:
        included.setdefault(source.key, source)

    pending: Deque[SourceFile] = deque(included.values())
    while pending:
        current = pending.popleft()
        for specifier in extract_local_specifiers(current.content):
            resolved = resolve_specifier(specifier, current.key, table, known_paths, root)
            if resolved is None:
                _LOGGER.debug("Dropping unresolved import %r in %s", specifier, current.key)
                continue
            if resolved in included:
                continue
            discovered = by_key[resolved]
            included[resolved] = discovered
            pending.append(discovered)
            _LOGGER.debug("Including %s (imported by %s)", resolved, current.key)

    return list(included.values())


__all__ = ["expand_included_files"]
