from __future__ import annotations

from pathlib import Path

import pytest

from blockgen.models import AliasConfig
from tests._fixtures.repo_builder import DEFAULT_ALIASES, RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def alias_config() -> AliasConfig:
    """Default shadcn-style aliases for a project without a src/ root."""
    return AliasConfig(**DEFAULT_ALIASES)
