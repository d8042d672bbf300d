"""Tests for blockgen.registry.classify."""

from __future__ import annotations

import pytest

from blockgen.models import FILE_ROLES, AliasConfig, SourceFile
from blockgen.registry.classify import classify_file, classify_files


@pytest.mark.parametrize(
    ("path", "role", "target"),
    [
        ("components/ui/button.tsx", "registry:ui", None),
        ("components/nav.tsx", "registry:block", None),
        ("components/uikit.tsx", "registry:block", None),
        ("hooks/use-toggle.ts", "registry:hook", None),
        ("lib/utils.ts", "registry:lib", None),
        ("app/settings/page.tsx", "registry:page", "./app/settings/page.tsx"),
        ("app/globals.css", "registry:page", "./app/globals.css"),
        ("styles/dark-theme.css", "registry:theme", None),
        ("theme.ts", "registry:theme", None),
        ("config/Theme.json", "registry:theme", None),
        ("styles/globals.css", "registry:style", "~/styles/globals.css"),
        (".env.local", "registry:file", "~/.env.local"),
        ("content/post.mdx", "registry:file", "~/content/post.mdx"),
        ("widgets/card.tsx", "registry:component", None),
        ("scripts/seed.ts", "registry:file", "./scripts/seed.ts"),
    ],
)
def test_classify_file_precedence(
    alias_config: AliasConfig, path: str, role: str, target: str | None
) -> None:
    classified = classify_file(path, "", alias_config, False)

    assert classified.type == role
    assert classified.target == target
    assert classified.path == f"./{path}"


def test_style_target_uses_supplied_path_for_source_root(alias_config: AliasConfig) -> None:
    classified = classify_file("styles/globals.css", "body {}", alias_config, True)

    assert classified.type == "registry:style"
    assert classified.target == "./styles/globals.css"
    assert classified.content == "body {}"


def test_file_targets_strip_source_prefix(alias_config: AliasConfig) -> None:
    script = classify_file("src/scripts/seed.ts", "", alias_config, False)
    data = classify_file("src/data/site.json", "", alias_config, False)

    assert script.type == "registry:file"
    assert script.target == "./scripts/seed.ts"
    assert data.type == "registry:file"
    assert data.target == "~/data/site.json"


def test_missing_aliases_fall_through_to_extension_rules() -> None:
    classified = classify_file("components/ui/button.tsx", "", AliasConfig(), False)

    assert classified.type == "registry:component"
    assert classified.target is None


@pytest.mark.parametrize(
    "path",
    [
        "a",
        ".gitignore",
        "Makefile",
        "components",
        "deeply/nested/file.with.many.dots",
        "app",
        "-theme",
        "lib",
        "public/logo.svg",
    ],
)
def test_classification_is_total(alias_config: AliasConfig, path: str) -> None:
    classified = classify_file(path, "", alias_config, False)

    assert classified.type in FILE_ROLES


def test_classify_files_with_source_root() -> None:
    config = AliasConfig(
        components="@/components",
        ui="@/components/ui",
        lib="@/lib",
        hooks="@/hooks",
        uses_source_root=True,
    )
    files = [
        SourceFile("src/components/ui/button.tsx", ""),
        SourceFile("src/app/settings/page.tsx", ""),
        SourceFile("src/styles/globals.css", ""),
        SourceFile("tailwind.css", ""),
    ]

    classified = classify_files(files, config)

    assert [entry.path for entry in classified] == [
        "./components/ui/button.tsx",
        "./app/settings/page.tsx",
        "./styles/globals.css",
        "./tailwind.css",
    ]
    assert [entry.type for entry in classified] == [
        "registry:ui",
        "registry:page",
        "registry:style",
        "registry:style",
    ]
    assert classified[1].target == "./app/settings/page.tsx"
    assert classified[2].target == "./styles/globals.css"
    assert classified[3].target == "~/tailwind.css"


def test_classify_files_without_source_root(alias_config: AliasConfig) -> None:
    files = [
        SourceFile("lib/utils.ts", ""),
        SourceFile("hooks/use-toggle.ts", ""),
        SourceFile("styles/globals.css", ""),
    ]

    classified = classify_files(files, alias_config)

    assert [(entry.type, entry.target) for entry in classified] == [
        ("registry:lib", None),
        ("registry:hook", None),
        ("registry:style", "~/styles/globals.css"),
    ]


def test_to_dict_omits_missing_target(alias_config: AliasConfig) -> None:
    ui = classify_file("components/ui/button.tsx", "x", alias_config, False)
    page = classify_file("app/page.tsx", "y", alias_config, False)

    assert ui.to_dict() == {
        "path": "./components/ui/button.tsx",
        "content": "x",
        "type": "registry:ui",
    }
    assert list(page.to_dict()) == ["path", "content", "type", "target"]
