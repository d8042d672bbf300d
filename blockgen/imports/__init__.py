"""Import extraction, alias resolution and file closure."""

from .closure import expand_included_files
from .extract import (
    extract_imported_packages,
    extract_local_specifiers,
    extract_packages,
    is_local_specifier,
    package_root,
)
from .resolve import AliasEntry, build_alias_table, resolve_specifier

__all__ = [
    "AliasEntry",
    "build_alias_table",
    "expand_included_files",
    "extract_imported_packages",
    "extract_local_specifiers",
    "extract_packages",
    "is_local_specifier",
    "package_root",
    "resolve_specifier",
]
