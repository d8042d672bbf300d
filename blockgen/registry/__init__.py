"""Registry block assembly: classification, components and dependencies."""

from .block import create_block
from .classify import classify_file, classify_files
from .components import find_registry_dependencies, is_builtin_component
from .dependencies import ManifestError, PackageManifest, filter_dependencies, parse_manifest

__all__ = [
    "ManifestError",
    "PackageManifest",
    "classify_file",
    "classify_files",
    "create_block",
    "filter_dependencies",
    "find_registry_dependencies",
    "is_builtin_component",
    "parse_manifest",
]
