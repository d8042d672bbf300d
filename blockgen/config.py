"""Configuration loading for blockgen (components.json and .blockgen.yml)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import ALIAS_SLOTS, AliasConfig

COMPONENTS_MANIFEST = "components.json"
CONFIG_FILENAME = ".blockgen.yml"


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be found or parsed."""


@dataclass
class BlockgenConfig:
    """Represents the optional settings defined in .blockgen.yml."""

    root: Path
    name: Optional[str] = None
    output: Optional[Path] = None
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> BlockgenConfig:
    """Load tool configuration from disk, returning defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return BlockgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_str = _as_str(data.get("output"))
    return BlockgenConfig(
        root=root,
        name=_as_str(data.get("name")),
        output=root / output_str if output_str else None,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def find_components_json(start: Path) -> Optional[Path]:
    """Return the nearest components.json at or above ``start``."""
    current = start.expanduser().resolve()
    while True:
        candidate = current / COMPONENTS_MANIFEST
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def load_components_config(
    root: Path, *, uses_source_root: Optional[bool] = None
) -> AliasConfig:
    """Read alias slots and registry namespaces from components.json.

    ``uses_source_root`` defaults to whether ``root`` has a ``src`` directory.
    """
    manifest_path = find_components_json(root)
    if manifest_path is None:
        raise ConfigError(f"Components manifest ({COMPONENTS_MANIFEST}) not found")

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse {manifest_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{COMPONENTS_MANIFEST} must contain an object at the root")

    aliases = _as_dict(data.get("aliases"))
    slots: Dict[str, Optional[str]] = {
        slot: _as_alias(aliases.get(slot)) for slot in ALIAS_SLOTS
    }
    if uses_source_root is None:
        uses_source_root = (Path(root) / "src").is_dir()

    return AliasConfig(
        uses_source_root=uses_source_root,
        registries=_as_dict(data.get("registries")),
        **slots,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_alias(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
