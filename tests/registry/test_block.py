"""Tests for blockgen.registry.block."""

from __future__ import annotations

import json

import pytest

from blockgen.models import AliasConfig, SourceFile
from blockgen.registry.block import create_block
from blockgen.registry.dependencies import ManifestError

MANIFEST = json.dumps(
    {
        "dependencies": {"clsx": "1.0", "tailwind-merge": "2.0", "@shadcn/ui": "0.1"},
        "devDependencies": {"typescript": "5"},
    }
)


def test_create_block_assembles_every_section(alias_config: AliasConfig) -> None:
    config = AliasConfig(
        components=alias_config.components,
        utils=alias_config.utils,
        ui=alias_config.ui,
        lib=alias_config.lib,
        hooks=alias_config.hooks,
        registries={"@shadcn": {}},
    )
    closed = [
        SourceFile("components/nav.tsx", 'import { Button } from "@shadcn/ui";\n'),
        SourceFile("lib/utils.ts", 'import { clsx } from "clsx";\n'),
    ]
    project = closed + [SourceFile("components/ui/button.tsx", "")]

    block = create_block("nav", config, closed, project, MANIFEST)

    assert block.name == "nav"
    assert block.type == "registry:block"
    assert block.dependencies == ["clsx"]
    assert block.devDependencies == []
    assert block.registryDependencies == ["@shadcn/button"]
    assert [(entry.path, entry.type) for entry in block.files] == [
        ("./components/nav.tsx", "registry:block"),
        ("./lib/utils.ts", "registry:lib"),
    ]


def test_block_json_key_order(alias_config: AliasConfig) -> None:
    files = [SourceFile("app/settings/page.tsx", "export default function Page() {}\n")]

    block = create_block("settings", alias_config, files, files, "{}")
    payload = json.loads(block.to_json())

    assert list(payload) == [
        "name",
        "type",
        "dependencies",
        "devDependencies",
        "registryDependencies",
        "files",
        "tailwind",
        "cssVars",
        "meta",
    ]
    assert payload["files"] == [
        {
            "path": "./app/settings/page.tsx",
            "content": "export default function Page() {}\n",
            "type": "registry:page",
            "target": "./app/settings/page.tsx",
        }
    ]
    assert payload["tailwind"] == {} and payload["cssVars"] == {} and payload["meta"] == {}


def test_create_block_is_deterministic(alias_config: AliasConfig) -> None:
    files = [
        SourceFile("lib/utils.ts", 'import { clsx } from "clsx";\nimport { twMerge } from "tailwind-merge";\n')
    ]

    first = create_block("utils", alias_config, files, files, MANIFEST).to_json()
    second = create_block("utils", alias_config, files, files, MANIFEST).to_json()

    assert first == second
    assert json.loads(first)["dependencies"] == ["clsx", "tailwind-merge"]


def test_malformed_manifest_aborts_assembly(alias_config: AliasConfig) -> None:
    files = [SourceFile("lib/utils.ts", "")]

    with pytest.raises(ManifestError):
        create_block("utils", alias_config, files, files, "{ nope")
