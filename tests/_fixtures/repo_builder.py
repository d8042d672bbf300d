"""Helper utilities for constructing temporary projects in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import List, Mapping

from blockgen.models import SourceFile
from blockgen.repo_scanner import RepoScanner

DEFAULT_ALIASES = {
    "components": "@/components",
    "utils": "@/lib/utils",
    "ui": "@/components/ui",
    "lib": "@/lib",
    "hooks": "@/hooks",
}


class RepoBuilder:
    """Utility for writing files into a throwaway project and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()
        self._scanner = RepoScanner()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_components_json(
        self,
        aliases: Mapping[str, str] | None = None,
        registries: Mapping[str, object] | None = None,
    ) -> None:
        payload: dict = {"aliases": dict(aliases or DEFAULT_ALIASES)}
        if registries is not None:
            payload["registries"] = dict(registries)
        (self.root / "components.json").write_text(json.dumps(payload), encoding="utf-8")

    def write_package_json(
        self,
        dependencies: Mapping[str, str] | None = None,
        dev_dependencies: Mapping[str, str] | None = None,
    ) -> None:
        payload = {
            "name": "demo",
            "dependencies": dict(dependencies or {}),
            "devDependencies": dict(dev_dependencies or {}),
        }
        (self.root / "package.json").write_text(json.dumps(payload), encoding="utf-8")

    def scan(self) -> List[SourceFile]:
        """Return a fresh scan of the project contents."""
        return self._scanner.scan(str(self.root))

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["DEFAULT_ALIASES", "RepoBuilder"]
