"""Git helpers for comparing a project against its initial commit."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..logging import get_logger
from ..models import SourceFile

DEFAULT_GITIGNORE = """\
/node_modules
/.pnp
.pnp.*
.yarn/*
!.yarn/patches
!.yarn/plugins
!.yarn/releases
!.yarn/versions

# testing
/coverage

# next.js
/.next/
/out/

# production
/build

# misc
.DS_Store
*.pem

# debug
npm-debug.log*
yarn-debug.log*
yarn-error.log*

# env files (can opt-in for committing if needed)
.env*

# vercel
.vercel

# typescript
*.tsbuildinfo
next-env.d.ts
"""


class GitError(RuntimeError):
    """Raised when a git command fails or the project is not a repository."""


class GitBaseline:
    """Finds files that changed since the repository's first commit."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("git")

    def initial_commit(self, repo_path: str | Path) -> str:
        """Return the id of the repository's first root commit."""
        repo = self._require_repo(repo_path)
        output = self._run(
            ["git", "rev-list", "--max-parents=0", "HEAD"], cwd=repo, capture_output=True
        )
        commits = [line.strip() for line in output.splitlines() if line.strip()]
        if not commits:
            raise GitError(f"{repo} has no commits")
        # rev-list prints newest first; the oldest root is the project template.
        return commits[-1]

    def altered_files(
        self, repo_path: str | Path, files: Iterable[SourceFile]
    ) -> List[SourceFile]:
        """Return files that are new or differ from the initial commit."""
        repo = self._require_repo(repo_path)
        commit = self.initial_commit(repo)
        # -z keeps non-ASCII names unquoted so they compare against file keys.
        listing = self._run(
            ["git", "ls-tree", "-r", "-z", "--name-only", commit], cwd=repo, capture_output=True
        )
        tracked = set(name for name in listing.split("\0") if name)

        altered: List[SourceFile] = []
        for source in files:
            key = source.key
            if key not in tracked:
                altered.append(source)
                continue
            original = self._run(["git", "show", f"{commit}:{key}"], cwd=repo, capture_output=True)
            if original != source.content:
                altered.append(source)
        self.logger.info("Found %d files changed since %s", len(altered), commit[:12])
        return altered

    def reset_history(self, repo_path: str | Path) -> None:
        """Replace the repository history with a single initial commit."""
        repo = Path(repo_path).expanduser().resolve()
        git_dir = repo / ".git"
        if git_dir.exists():
            shutil.rmtree(git_dir)
        ensure_gitignore(repo)

        env = os.environ.copy()
        env.setdefault("GIT_AUTHOR_NAME", "blockgen")
        env.setdefault("GIT_AUTHOR_EMAIL", "blockgen@example.com")
        env.setdefault("GIT_COMMITTER_NAME", env["GIT_AUTHOR_NAME"])
        env.setdefault("GIT_COMMITTER_EMAIL", env["GIT_AUTHOR_EMAIL"])

        self._run(["git", "init"], cwd=repo)
        self._run(["git", "add", "."], cwd=repo)
        self._run(["git", "commit", "-m", "Initial commit"], cwd=repo, env=env)
        self.logger.info("Initialized baseline commit in %s", repo)

    # ------------------------------------------------------------------
    # Internals

    def _require_repo(self, repo_path: str | Path) -> Path:
        repo = Path(repo_path).expanduser().resolve()
        if not (repo / ".git").exists():
            raise GitError(f"{repo_path} is not a Git repository")
        return repo

    def _run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        capture_output: bool = False,
        env: Optional[Dict[str, str]] = None,
    ) -> str:
        try:
            return self._runner(args, cwd=cwd, capture_output=capture_output, env=env)
        except subprocess.CalledProcessError as exc:
            raise GitError(f"{' '.join(args)} failed with exit code {exc.returncode}") from exc
        except FileNotFoundError as exc:
            raise GitError("git executable not found") from exc

    @staticmethod
    def _default_runner(
        args: Sequence[str],
        *,
        cwd: Path,
        capture_output: bool = False,
        env: Optional[Dict[str, str]] = None,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            encoding="utf-8",
            capture_output=capture_output,
            env=env,
        )
        return completed.stdout if capture_output else ""


def ensure_gitignore(repo: Path) -> bool:
    """Write the default .gitignore when the project has none."""
    path = repo / ".gitignore"
    if path.exists():
        return False
    path.write_text(DEFAULT_GITIGNORE, encoding="utf-8")
    return True


__all__ = ["DEFAULT_GITIGNORE", "GitBaseline", "GitError", "ensure_gitignore"]
