"""Assembly of the registry block emitted for a set of changed files."""

from __future__ import annotations

from typing import Sequence

from ..imports.extract import extract_imported_packages
from ..logging import get_logger
from ..models import AliasConfig, RegistryBlock, SourceFile
from .classify import classify_files
from .components import find_registry_dependencies
from .dependencies import filter_dependencies, parse_manifest

_LOGGER = get_logger("block")


def create_block(
    name: str,
    config: AliasConfig,
    altered_files: Sequence[SourceFile],
    all_files: Sequence[SourceFile],
    manifest_text: str,
) -> RegistryBlock:
    """Build the registry block for an already closed file set.

    ``manifest_text`` is parsed before anything else so an unreadable package
    manifest aborts the run without producing a partial block.
    """
    manifest = parse_manifest(manifest_text)

    files = classify_files(altered_files, config)
    registry_dependencies = find_registry_dependencies(config, all_files)
    used_packages = extract_imported_packages(altered_files)
    dependencies, dev_dependencies = filter_dependencies(
        manifest, used_packages, registry_dependencies, config
    )
    _LOGGER.info(
        "Block %s: %d files, %d dependencies, %d registry dependencies",
        name,
        len(files),
        len(dependencies) + len(dev_dependencies),
        len(registry_dependencies),
    )

    return RegistryBlock(
        name=name,
        dependencies=dependencies,
        devDependencies=dev_dependencies,
        registryDependencies=registry_dependencies,
        files=files,
    )


__all__ = ["create_block"]
