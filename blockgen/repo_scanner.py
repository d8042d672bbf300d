"""Project file discovery honouring .gitignore and blockgen excludes."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import ConfigError, load_config
from .logging import get_logger
from .models import SourceFile

_EXCLUDED_DIRS = {
    "node_modules",
    "dist",
    "fonts",
    "build",
    "public",
    "static",
    ".next",
    ".git",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "next-env.d.ts",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "package.json",
    "tailwind.config.ts",
    "tailwind.config.js",
    "components.json",
    "favicon.ico",
    ".blockgen.yml",
}

_LOGGER = get_logger("scanner")


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .blockgen.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            return fnmatchcase(rel_path, self.pattern)

        for part in rel_path.split("/"):
            if fnmatchcase(part, self.pattern):
                return True
        return False


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _parse_config_excludes(root: Path) -> List[IgnoreRule]:
    try:
        config = load_config(root)
    except ConfigError as exc:
        _LOGGER.warning("Ignoring exclude_paths: %s", exc)
        return []

    rules: List[IgnoreRule] = []
    for pattern in config.exclude_paths:
        rule = _build_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def _load_ignore_rules(root: Path) -> List[IgnoreRule]:
    rules = _parse_gitignore(root / ".gitignore")
    rules.extend(_parse_config_excludes(root))
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _iter_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[tuple[str, Path]]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        filtered_dirs = []
        for name in dirnames:
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            filtered_dirs.append(name)
        dirnames[:] = filtered_dirs

        for filename in filenames:
            if filename in _EXCLUDED_FILES:
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield rel_path, current_dir / filename


def has_src_dir(root: str | Path) -> bool:
    """True when the project keeps its sources under ``src/``."""
    return (Path(root) / "src").is_dir()


class RepoScanner:
    """Walks a project to collect every file eligible for a registry block."""

    def scan(self, root: str | Path) -> List[SourceFile]:
        """Return project files sorted by their relative path."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        rules = _load_ignore_rules(root_path)
        files: List[SourceFile] = []
        for rel_path, path in _iter_files(root_path, rules):
            try:
                content = path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                _LOGGER.debug("Skipping non-text file %s", rel_path)
                continue
            files.append(SourceFile(path=rel_path, content=content))

        files.sort(key=lambda source: source.path)
        _LOGGER.debug("Scanner discovered %d files under %s", len(files), root_path)
        return files


__all__ = ["IgnoreRule", "RepoScanner", "has_src_dir"]
