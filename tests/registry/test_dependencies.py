"""Tests for blockgen.registry.dependencies."""

from __future__ import annotations

import pytest

from blockgen.models import AliasConfig
from blockgen.registry.dependencies import (
    ManifestError,
    PackageManifest,
    external_namespaces,
    filter_dependencies,
    parse_manifest,
)


def test_parse_manifest_preserves_declaration_order() -> None:
    manifest = parse_manifest(
        '{"dependencies": {"zod": "3", "clsx": "1"}, "devDependencies": {"typescript": "5"}}'
    )

    assert manifest.dependencies == ["zod", "clsx"]
    assert manifest.dev_dependencies == ["typescript"]


def test_parse_manifest_tolerates_missing_sections() -> None:
    assert parse_manifest('{"name": "demo"}') == PackageManifest()


@pytest.mark.parametrize("text", ["{not json", "", "[1, 2]"])
def test_parse_manifest_rejects_malformed_text(text: str) -> None:
    with pytest.raises(ManifestError):
        parse_manifest(text)


def test_only_imported_packages_are_kept() -> None:
    manifest = PackageManifest(dependencies=["clsx", "tailwind-merge"], dev_dependencies=[])

    dependencies, dev_dependencies = filter_dependencies(manifest, {"clsx"}, [], AliasConfig())

    assert dependencies == ["clsx"]
    assert dev_dependencies == []


def test_dev_dependencies_filtered_the_same_way() -> None:
    manifest = PackageManifest(
        dependencies=["react"], dev_dependencies=["@types/react", "vitest"]
    )

    dependencies, dev_dependencies = filter_dependencies(
        manifest, {"react", "vitest"}, [], AliasConfig()
    )

    assert dependencies == ["react"]
    assert dev_dependencies == ["vitest"]


def test_namespace_packages_dropped_when_registry_dependency_present() -> None:
    manifest = PackageManifest(
        dependencies=["@shadcn/ui", "shadcn/ui", "@shadcn", "lucide-react"],
        dev_dependencies=[],
    )
    used = {"@shadcn/ui", "shadcn/ui", "@shadcn", "lucide-react"}

    dependencies, _ = filter_dependencies(manifest, used, ["@shadcn/button"], AliasConfig())

    assert dependencies == ["lucide-react"]


def test_namespace_packages_kept_without_registry_dependency() -> None:
    manifest = PackageManifest(dependencies=["@shadcn/ui"], dev_dependencies=[])

    dependencies, _ = filter_dependencies(manifest, {"@shadcn/ui"}, ["button"], AliasConfig())

    assert dependencies == ["@shadcn/ui"]


def test_configured_registry_namespaces_count_as_external() -> None:
    config = AliasConfig(registries={"@acme": {"url": "https://example.com/{name}.json"}})

    assert external_namespaces(["@acme/card", "@other/card"], config) == {"@acme"}
    assert external_namespaces(["@shadcn/card"], AliasConfig()) == {"@shadcn"}


@pytest.mark.parametrize(
    "used",
    [set(), {"react"}, {"react", "left-pad", "@shadcn/ui"}, {"not-declared"}],
)
def test_output_is_subset_of_manifest(used: set[str]) -> None:
    manifest = PackageManifest(
        dependencies=["react", "@shadcn/ui"], dev_dependencies=["left-pad"]
    )

    dependencies, dev_dependencies = filter_dependencies(
        manifest, used, ["@shadcn/button"], AliasConfig()
    )

    assert set(dependencies) <= set(manifest.dependencies)
    assert set(dev_dependencies) <= set(manifest.dev_dependencies)
    assert set(dependencies) | set(dev_dependencies) <= used
