"""
File discovery and application of the import rewriter.

This module implements the functionality behind the CLI exposed in
``scaffold_codemod.cli``.  It walks a file or directory, feeds every
candidate file through :class:`~scaffold_codemod.rewriter.ImportRewriter`
and writes the result back unless running in dry-run mode.

Failures to read or write a single file are recorded on that file's
:class:`FileResult` and never stop the remaining files from being
processed.  Files are independent of each other, so they may be processed
by a small thread pool; results are always reported in discovery order.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .rewriter import ImportRewriter
from .rules import DEFAULT_CONFIG, RewriteConfig

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "IGNORED_DIRECTORIES",
    "CodemodError",
    "FileResult",
    "CodemodReport",
    "file_extension",
    "collect_files",
    "process_file",
    "run_codemod",
]

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset(
    {
        ".ts",
        ".tsx",
        ".js",
        ".jsx",
        ".mjs",
        ".cjs",
        ".mts",
        ".cts",
        ".args.mjs",
        ".md",
        ".mdx",
    }
)

IGNORED_DIRECTORIES = frozenset({"node_modules", ".git", "dist", ".next", "build", "out"})


class CodemodError(Exception):
    """Raised when the codemod cannot run against the given target."""


@dataclass
class FileResult:
    """Outcome of rewriting one file; ``error`` is set when it could not be processed."""

    path: Path
    changed: bool = False
    summary: List[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class CodemodReport:
    """Aggregated outcome of a codemod run."""

    dry_run: bool
    results: List[FileResult] = field(default_factory=list)

    @property
    def files_changed(self) -> int:
        return sum(1 for result in self.results if result.changed)

    @property
    def failures(self) -> List[FileResult]:
        return [result for result in self.results if result.error is not None]

    def summary_lines(self, relative_to: Optional[Path] = None) -> List[str]:
        """Return ``<path>: <change>`` lines for every changed file.

        Paths are shown relative to ``relative_to`` when they live under it.
        """
        lines: List[str] = []
        for result in self.results:
            if not result.changed:
                continue
            shown = _display_path(result.path, relative_to)
            lines.extend(f"{shown}: {line}" for line in result.summary)
        return lines


def _display_path(path: Path, relative_to: Optional[Path]) -> str:
    if relative_to is None:
        return str(path)
    try:
        return str(path.relative_to(relative_to))
    except ValueError:
        return str(path)


def file_extension(name: str) -> str:
    """Return the extension used to decide whether ``name`` is processed.

    ``*.args.mjs`` files are reported with their compound extension; any
    other name yields its last suffix (``""`` if it has none).
    """
    if name.endswith(".args.mjs"):
        return ".args.mjs"
    return os.path.splitext(name)[1]


def _log_walk_error(error: OSError) -> None:
    logger.warning("Cannot read directory %s: %s", error.filename, error)


def collect_files(target: Path) -> List[Path]:
    """Return the files under ``target`` that the codemod should look at.

    Parameters
    ----------
    target: Path
        A file or a directory.  A file is returned as-is, whatever its
        extension.  Directories are walked recursively in sorted order,
        skipping :data:`IGNORED_DIRECTORIES`.

    Raises
    ------
    FileNotFoundError
        If ``target`` does not exist.
    CodemodError
        If ``target`` is neither a file nor a directory.
    """
    if not target.exists():
        raise FileNotFoundError(target)
    if target.is_file():
        return [target]
    if not target.is_dir():
        raise CodemodError(f"{target} is neither a file nor a directory")

    collected: List[Path] = []
    for root, dirs, files in os.walk(target, onerror=_log_walk_error):
        # Prune in place so os.walk does not descend into ignored folders
        dirs[:] = sorted(d for d in dirs if d not in IGNORED_DIRECTORIES)
        for filename in sorted(files):
            if file_extension(filename) in SUPPORTED_EXTENSIONS:
                collected.append(Path(root) / filename)
    return collected


def process_file(path: Path, dry_run: bool, rewriter: ImportRewriter) -> FileResult:
    """Rewrite a single file, persisting the result unless ``dry_run``.

    I/O and decoding problems are captured on the returned result rather
    than raised.
    """
    try:
        original = path.read_text(encoding="utf-8")
        result = rewriter.rewrite(original)
        changed = result.updated_content != original
        if changed and not dry_run:
            path.write_text(result.updated_content, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to process %s: %s", path, exc)
        return FileResult(path=path, error=str(exc))
    if changed:
        logger.debug("%s: %d change(s)", path, len(result.change_summary))
    return FileResult(path=path, changed=changed, summary=result.change_summary if changed else [])


def run_codemod(
    target: Path,
    dry_run: bool = False,
    jobs: int = 1,
    config: RewriteConfig = DEFAULT_CONFIG,
) -> CodemodReport:
    """Run the import migration over ``target``.

    Parameters
    ----------
    target: Path
        File or directory to migrate.
    dry_run: bool
        Compute the changes without writing them.
    jobs: int
        Number of worker threads.  ``1`` processes files sequentially.
    config: RewriteConfig
        Rule tables for the rewriter.

    Returns
    -------
    CodemodReport
        One :class:`FileResult` per discovered file, in discovery order.
    """
    if jobs < 1:
        raise CodemodError("jobs must be at least 1")
    files = collect_files(target)
    rewriter = ImportRewriter(config)
    report = CodemodReport(dry_run=dry_run)
    if jobs == 1 or len(files) <= 1:
        report.results = [process_file(path, dry_run, rewriter) for path in files]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            report.results = list(pool.map(lambda p: process_file(p, dry_run, rewriter), files))
    logger.debug("Processed %d file(s), %d changed", len(files), report.files_changed)
    return report
