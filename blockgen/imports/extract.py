"""Lexical extraction of import specifiers from JS/TS sources.

Specifiers are found with regular expressions rather than a parser. Recognised
forms are static ``import ... from "x"``, side-effect ``import "x"``,
``export ... from "x"``, ``require("x")`` and ``import("x")`` with a string
literal argument. Template literals, computed arguments and specifiers inside
comments are not distinguished from code; anything the patterns miss is simply
not reported.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Set

from ..models import SourceFile

# Each whitespace run in a clause belongs to exactly one token, so a failed
# match backtracks linearly instead of retrying every split of the run.

_IMPORT_RE = re.compile(
    r"""
    \bimport\s+(?:type\s+)?
        (?:[\w$]+\s*(?:,\s*)?)?
        (?:(?:\{[^}]*\}|\*\s*as\s+[\w$]+)\s*)?
        from\s*['"](?P<static>[^'"]+)['"]
    | \bimport\s*['"](?P<bare>[^'"]+)['"]
    | \bexport\s+(?:type\s+)?
        (?:\*(?:\s*as\s+[\w$]+)?|\{[^}]*\})
        \s*from\s*['"](?P<reexport>[^'"]+)['"]
    | \brequire\s*\(\s*['"](?P<require>[^'"]+)['"]\s*\)
    | \bimport\s*\(\s*['"](?P<dynamic>[^'"]+)['"]\s*\)
    """,
    re.VERBOSE,
)

_BUILTIN_PREFIX = "node:"
_ALIAS_SENTINELS = ("@/", "~/", "#")
_RELATIVE_PREFIXES = (".", "/")


def iter_specifiers(text: str) -> Iterator[str]:
    """Yield raw specifiers in source order, duplicates included."""
    for match in _IMPORT_RE.finditer(text):
        specifier = next((value for value in match.groups() if value is not None), "")
        if specifier:
            yield specifier


def _is_builtin(specifier: str) -> bool:
    return specifier == "node" or specifier.startswith(_BUILTIN_PREFIX)


def is_local_specifier(specifier: str) -> bool:
    """True when the specifier points at a project file rather than a package."""
    value = specifier.strip()
    if not value or _is_builtin(value):
        return False
    return value.startswith(_RELATIVE_PREFIXES) or value.startswith(_ALIAS_SENTINELS)


def package_root(specifier: str) -> Optional[str]:
    """Reduce a package specifier to its root name.

    ``lodash/merge`` becomes ``lodash`` and ``@scope/pkg/sub`` becomes
    ``@scope/pkg``. Builtins and local paths return ``None``.
    """
    value = specifier.strip()
    if not value or _is_builtin(value) or is_local_specifier(value):
        return None
    if value.startswith("@"):
        parts = value.split("/", 2)
        return "/".join(parts[:2])
    return value.split("/", 1)[0]


def extract_local_specifiers(text: str) -> List[str]:
    """Return local specifiers verbatim, first occurrence order."""
    seen: Set[str] = set()
    local: List[str] = []
    for specifier in iter_specifiers(text):
        if specifier in seen or not is_local_specifier(specifier):
            continue
        seen.add(specifier)
        local.append(specifier)
    return local


def extract_packages(text: str) -> Set[str]:
    """Return the root names of every package referenced in ``text``."""
    packages: Set[str] = set()
    for specifier in iter_specifiers(text):
        root = package_root(specifier)
        if root:
            packages.add(root)
    return packages


def extract_imported_packages(files: Iterable[SourceFile]) -> Set[str]:
    """Union of :func:`extract_packages` over every file's content."""
    packages: Set[str] = set()
    for source in files:
        packages.update(extract_packages(source.content))
    return packages


__all__ = [
    "extract_imported_packages",
    "extract_local_specifiers",
    "extract_packages",
    "is_local_specifier",
    "iter_specifiers",
    "package_root",
]
