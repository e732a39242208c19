# topmark:header:start
#
#   project      : CommentFlow
#   file         : file_resolver.py
#   file_relpath : src/commentflow/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the files CommentFlow should process.

Positional paths are expanded (directories recursively), filtered by file
extension and by gitignore-style exclude patterns, and returned as a
deterministic, sorted list.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from commentflow.config.logging import get_logger

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.config.model import Config

logger: CommentflowLogger = get_logger(__name__)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        rel: Path = path.resolve().relative_to(base.resolve())
        return rel.as_posix()
    except ValueError:
        return path.as_posix()


def resolve_file_list(config: Config, *, workspace_root: Path | None = None) -> list[Path]:
    """Return the sorted list of files to process.

    Semantics:
      1. Each entry of ``config.files`` is either a file, kept as given, or a
         directory, walked recursively. Walked files are kept only when their
         suffix is one of ``config.extensions``.
      2. Files matching any of ``config.exclude_patterns`` (gitwildmatch, relative
         to ``workspace_root``) are removed, including explicitly named files.
      3. Duplicates are removed and the result is sorted.

    Args:
        config (Config): Configuration providing paths and filters.
        workspace_root (Path | None): Base for exclude matching; defaults to
            the current working directory.

    Returns:
        list[Path]: Files selected for processing.

    Raises:
        FileNotFoundError: If a positional path does not exist.
    """
    root: Path = workspace_root if workspace_root is not None else Path.cwd()
    extensions: frozenset[str] = frozenset(ext.lower() for ext in config.extensions)

    candidates: set[Path] = set()
    for raw in config.files:
        p = Path(raw)
        if p.is_dir():
            walked: list[Path] = [
                f for f in p.rglob("*") if f.is_file() and f.suffix.lower() in extensions
            ]
            logger.debug("Expanded directory %s into %d file(s)", p, len(walked))
            candidates.update(walked)
        elif p.is_file():
            candidates.add(p)
        else:
            raise FileNotFoundError(f"No such file or directory: {p}")

    if config.exclude_patterns:
        spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, list(config.exclude_patterns))
        excluded: set[Path] = {p for p in candidates if spec.match_file(_rel_for_match(p, root))}
        if excluded:
            logger.debug("Excluded %d file(s): %s", len(excluded), sorted(excluded))
        candidates -= excluded

    files: list[Path] = sorted(candidates)
    logger.trace("Files to process: %d -- %s", len(files), files)
    return files
