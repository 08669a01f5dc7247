# amalgo/core/discovery/walker.py
import os
from enum import Enum
from pathlib import Path
from typing import Iterable, List

import structlog

from amalgo.core.discovery.filters import FilterChain, PathPredicate
from amalgo.core.discovery.pattern_matching import relative_posix

log = structlog.get_logger(__name__)


class VisitAction(Enum):
    # outcome of visiting one entry during the walk.
    CONTINUE = "continue"  # accepted: descend into a directory, collect a file
    SKIP = "skip"          # rejected file
    PRUNE = "prune"        # rejected directory: its subtree is never read


class TreeWalker:
    """
    Depth-first walk of one directory tree. Holds nothing but the files
    accepted so far; build a new walker for every scan.
    """

    def __init__(self, base_dir: Path, include: PathPredicate, follow_symlinks: bool = False):
        self.base_dir = Path(base_dir)
        self.include = include
        self.follow_symlinks = follow_symlinks
        self.files: List[Path] = []

    def visit(self, path: Path, is_dir: bool) -> VisitAction:
        if self.include(path, is_dir):
            return VisitAction.CONTINUE
        log.debug("walk_entry_rejected", path=relative_posix(path, self.base_dir), is_dir=is_dir)
        return VisitAction.PRUNE if is_dir else VisitAction.SKIP

    def _on_walk_error(self, error: OSError):
        # a failing entry is dropped; the rest of the tree is still walked.
        log.warning("walk_entry_skipped", path=error.filename, error=error.strerror or str(error))

    def walk(self) -> List[Path]:
        if not self.base_dir.is_dir():
            log.warning("walk_entry_skipped", path=str(self.base_dir), error="not a directory")
            return self.files
        if self.visit(self.base_dir, True) is VisitAction.PRUNE:
            return self.files

        for root, dirs, files in os.walk(
            self.base_dir, topdown=True, onerror=self._on_walk_error, followlinks=self.follow_symlinks
        ):
            root_path = Path(root)
            # pruning: only accepted directories stay in the list os.walk descends into.
            dirs[:] = [d for d in dirs if self.visit(root_path / d, True) is VisitAction.CONTINUE]

            for file_name in files:
                file_path = root_path / file_name
                if self.visit(file_path, False) is VisitAction.CONTINUE:
                    self.files.append(file_path)

        log.debug("walk_finished", base_dir=str(self.base_dir), files_found=len(self.files))
        return self.files


def sort_scan_results(paths: Iterable[Path], base_dir: Path) -> List[Path]:
    # platform-independent order: plain string order of the slash-normalized relative path.
    return sorted(paths, key=lambda p: relative_posix(p, base_dir))


def scan_paths(base_dir: Path, chain: FilterChain, follow_symlinks: bool = False) -> List[Path]:
    """Walks base_dir with the given chain and returns accepted files in sorted order."""
    log.info("path_discovery_walker_started", base_dir=str(base_dir))
    walker = TreeWalker(base_dir, chain.should_include, follow_symlinks=follow_symlinks)
    found = sort_scan_results(walker.walk(), base_dir)
    log.info("path_discovery_walker_finished", files_found=len(found))
    return found
