"""CLI entrypoint for blockgen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .git.baseline import GitError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .registry.dependencies import ManifestError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockgen",
        description="Package changed project files into a registry:block JSON document.",
    )
    parser.add_argument(
        "-n",
        "--name",
        help="Block name (defaults to the folder or project directory name).",
    )
    parser.add_argument(
        "-f",
        "--folder",
        help="Folder whose files seed the block (default: current directory).",
    )
    parser.add_argument(
        "--git",
        action="store_true",
        help="Seed the block with files changed since the initial commit.",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Reset git history to a single initial commit and exit.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the block JSON to this file instead of stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for blockgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    orchestrator = Orchestrator()
    project = Path.cwd()

    if args.init:
        try:
            orchestrator.init_repository(project)
        except GitError as exc:
            parser.exit(1, f"blockgen --init failed: {exc}\n")
        return

    try:
        block = orchestrator.build_block(
            project,
            name=args.name,
            folder=args.folder,
            git_mode=bool(args.git),
        )
        output = Path(args.output) if args.output else orchestrator.output_path(project)
    except (ConfigError, ManifestError, GitError) as exc:
        parser.exit(1, f"blockgen failed: {exc}\nRun with --verbose for more details.\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    payload = block.to_json(indent=2)
    if output is None:
        print(payload)
    else:
        output.write_text(payload + "\n", encoding="utf-8")
        print(f"Registry block written to {_relativize(output)}", file=sys.stderr)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
