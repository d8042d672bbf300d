"""Pipeline orchestration for building registry blocks."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .config import BlockgenConfig, load_components_config, load_config
from .git.baseline import GitBaseline
from .imports.closure import expand_included_files
from .logging import get_logger
from .models import RegistryBlock, SourceFile
from .registry.block import create_block
from .repo_scanner import RepoScanner, has_src_dir

PACKAGE_MANIFEST = "package.json"


class Orchestrator:
    """Coordinates scanning, change detection, closure and block assembly."""

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        baseline: GitBaseline | None = None,
    ) -> None:
        self.scanner = scanner or RepoScanner()
        self.baseline = baseline or GitBaseline()
        self.logger = get_logger("orchestrator")

    def build_block(
        self,
        path: str | Path = ".",
        *,
        name: Optional[str] = None,
        folder: Optional[str] = None,
        git_mode: bool = False,
    ) -> RegistryBlock:
        """Build the registry block for a project.

        In folder mode every file under ``folder`` seeds the block (``.`` means
        the whole project). In git mode the seeds are the files that changed
        since the initial commit.
        """
        project = Path(path).expanduser().resolve()
        settings = load_config(project)
        self.logger.info("Building registry block for %s", project)

        all_files = self.scanner.scan(project)
        self.logger.debug("Scanner discovered %d files", len(all_files))

        folder_path = (project / (folder or ".")).resolve()
        if git_mode:
            seeds = self.baseline.altered_files(project, all_files)
        else:
            seeds = self._files_in_folder(project, folder_path, all_files)
        # An explicit folder names the block in either mode.
        block_name = name or settings.name or folder_path.name

        manifest_text = self._read_manifest(project)
        config = load_components_config(project, uses_source_root=has_src_dir(project))

        closed = expand_included_files(seeds, all_files, config)
        self.logger.info(
            "Closure grew %d seed files to %d files", len(seeds), len(closed)
        )
        return create_block(block_name, config, closed, all_files, manifest_text)

    def init_repository(self, path: str | Path = ".") -> None:
        """Reset git history so later runs diff against the current tree."""
        self.baseline.reset_history(path)

    def output_path(self, path: str | Path = ".") -> Optional[Path]:
        """Return the configured output file, if any."""
        settings: BlockgenConfig = load_config(Path(path).expanduser().resolve())
        return settings.output

    # ------------------------------------------------------------------
    # Internals

    def _files_in_folder(
        self, project: Path, folder_path: Path, all_files: List[SourceFile]
    ) -> List[SourceFile]:
        if not folder_path.is_dir():
            raise NotADirectoryError(f"Folder path is not a directory: {folder_path}")
        try:
            prefix = folder_path.relative_to(project).as_posix()
        except ValueError as exc:
            raise NotADirectoryError(
                f"Folder path is outside the project: {folder_path}"
            ) from exc
        if prefix in ("", "."):
            return list(all_files)
        return [
            source
            for source in all_files
            if source.key == prefix or source.key.startswith(f"{prefix}/")
        ]

    def _read_manifest(self, project: Path) -> str:
        manifest_path = project / PACKAGE_MANIFEST
        if not manifest_path.is_file():
            raise FileNotFoundError(f"Package manifest not found: {manifest_path}")
        return manifest_path.read_text(encoding="utf-8")


__all__ = ["Orchestrator", "PACKAGE_MANIFEST"]
