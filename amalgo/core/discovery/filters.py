# amalgo/core/discovery/filters.py
"""
Inclusion predicates and the filter chain that composes them.

Every predicate is a callable `(path, is_dir) -> bool` returning True to
keep the entry. Predicates never mutate state after construction, so one
chain can be shared by any number of scans.
"""
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Set

import structlog

from amalgo.core.discovery.pattern_matching import (
    GitignoreMatcher,
    GitignorePattern,
    load_gitignore_patterns_from_file,
    parse_pattern_lines,
    path_segments,
    relative_posix,
)
from amalgo.util import file_extension

log = structlog.get_logger(__name__)

PathPredicate = Callable[[Path, bool], bool]


class HiddenPredicate:
    # rejects any entry whose own name starts with a dot.
    name = "hidden"

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def __call__(self, path: Path, is_dir: bool) -> bool:
        entry_name = relative_posix(path, self.base_dir).rsplit("/", 1)[-1]
        return not (entry_name.startswith(".") and entry_name not in (".", ".."))


class DirectoryDenylistPredicate:
    """
    Rejects a path whose first segment relative to the scan root is a
    denylisted name. Deeper same-named directories are not checked here;
    the walker never reaches them below a pruned ancestor.
    """
    name = "directory_denylist"

    def __init__(self, base_dir: Path, ignore_dirs: Iterable[str]):
        self.base_dir = base_dir
        self.ignore_dirs: frozenset = frozenset(ignore_dirs)

    def __call__(self, path: Path, is_dir: bool) -> bool:
        root_segment = path_segments(path, self.base_dir)[0]
        return root_segment not in self.ignore_dirs


class GitignorePredicate:
    name = "gitignore"

    def __init__(self, base_dir: Path, patterns: Sequence[GitignorePattern]):
        self.base_dir = base_dir
        self.matcher = GitignoreMatcher(patterns)

    @classmethod
    def from_sources(
        cls,
        base_dir: Path,
        gitignore_path: Optional[Path] = None,
        extra_patterns: Iterable[str] = (),
    ) -> "GitignorePredicate":
        # file patterns first, explicit extra patterns after them.
        patterns: List[GitignorePattern] = []
        if gitignore_path is not None:
            patterns.extend(load_gitignore_patterns_from_file(gitignore_path))
        patterns.extend(parse_pattern_lines(extra_patterns))
        log.debug("gitignore_predicate_built", pattern_count=len(patterns),
                  source=str(gitignore_path) if gitignore_path else None)
        return cls(base_dir, patterns)

    def __call__(self, path: Path, is_dir: bool) -> bool:
        if not len(self.matcher):
            return True
        segments = path_segments(path, self.base_dir)
        if segments == (".",):
            # rules never apply to the scan root itself.
            return True
        return self.matcher.is_ignored(segments, is_dir) is not True


class ExtensionPredicate:
    # directories always pass so the walker can descend into them.
    name = "extension"

    def __init__(self, extensions: Iterable[str]):
        self.extensions: frozenset = frozenset(extensions)

    def __call__(self, path: Path, is_dir: bool) -> bool:
        if is_dir:
            return True
        return file_extension(Path(path).name).lower() in self.extensions


class FilterChain:
    """AND-composition of predicates, evaluated in order, stopping at the first rejection."""

    def __init__(self, predicates: Optional[Iterable[PathPredicate]] = None):
        self.predicates: List[PathPredicate] = list(predicates or [])

    def add(self, predicate: PathPredicate) -> None:
        self.predicates.append(predicate)

    def __len__(self) -> int:
        return len(self.predicates)

    def should_include(self, path: Path, is_dir: bool) -> bool:
        for predicate in self.predicates:
            if not predicate(path, is_dir):
                return False
        return True

    __call__ = should_include


def build_filter_chain(
    base_dir: Path,
    extensions: Set[str],
    ignore_dirs: Set[str],
    include_hidden: bool = False,
    gitignore_path: Optional[Path] = None,
    ignore_patterns: Sequence[str] = (),
) -> FilterChain:
    """
    Builds the chain in its fixed order: hidden, directory denylist,
    gitignore, extension. A predicate is only added when its configuration
    is non-trivial; with no extensions every file passes.
    """
    chain = FilterChain()

    if not include_hidden:
        chain.add(HiddenPredicate(base_dir))

    if ignore_dirs:
        chain.add(DirectoryDenylistPredicate(base_dir, ignore_dirs))

    if gitignore_path is not None or ignore_patterns:
        chain.add(GitignorePredicate.from_sources(base_dir, gitignore_path, ignore_patterns))

    if extensions:
        chain.add(ExtensionPredicate(extensions))

    log.info("filter_chain_built", predicates=[getattr(p, "name", repr(p)) for p in chain.predicates])
    return chain
