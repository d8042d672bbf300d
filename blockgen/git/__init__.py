"""Git collaborators for change detection and repository setup."""

from .baseline import GitBaseline, GitError, ensure_gitignore

__all__ = ["GitBaseline", "GitError", "ensure_gitignore"]
