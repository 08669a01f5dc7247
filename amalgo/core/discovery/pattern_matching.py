# amalgo/core/discovery/pattern_matching.py
"""
Gitignore-style pattern matching.

A GitignorePattern evaluates one rule against a path given as its
slash-separated segments relative to the base directory. A GitignoreMatcher
holds the ordered rule list and applies last-match-wins precedence.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import pathspec
import structlog

from amalgo.exceptions import DiscoveryError

log = structlog.get_logger(__name__)

GITIGNORE_FILENAME = ".gitignore"


def relative_posix(path: Path, base_dir: Path) -> str:
    # slash-normalized path relative to base_dir ("." for base_dir itself).
    try:
        return Path(path).relative_to(base_dir).as_posix()
    except ValueError:
        return Path(path).as_posix()


def path_segments(path: Path, base_dir: Path) -> Tuple[str, ...]:
    return tuple(relative_posix(path, base_dir).split("/"))


@dataclass(frozen=True)
class GitignorePattern:
    raw: str
    negated: bool
    dir_only: bool
    anchored: bool
    _compiled: pathspec.patterns.GitWildMatchPattern = field(repr=False, compare=False)

    @classmethod
    def parse(cls, line: str) -> Optional["GitignorePattern"]:
        """
        Parses one gitignore line; returns None for blank lines, comments and
        degenerate rules such as a lone "!", which git ignores as well.
        """
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        try:
            compiled = pathspec.patterns.GitWildMatchPattern(text)
        except ValueError as e:
            log.debug("gitignore_pattern_skipped", pattern=text, error=str(e))
            return None
        if compiled.include is None:
            return None

        body = text[1:] if text.startswith("!") else text
        return cls(
            raw=text,
            negated=text.startswith("!"),
            dir_only=body.endswith("/"),
            anchored="/" in body.rstrip("/"),
            _compiled=compiled,
        )

    def matches(self, segments: Sequence[str], is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        candidate = "/".join(segments)
        # pathspec expects directories with a trailing slash.
        if is_dir:
            candidate += "/"
        return self._compiled.match_file(candidate) is not None


class GitignoreMatcher:
    """Ordered gitignore rules; the last matching rule decides."""

    def __init__(self, patterns: Iterable[GitignorePattern]):
        self.patterns: Tuple[GitignorePattern, ...] = tuple(patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def is_ignored(self, segments: Sequence[str], is_dir: bool) -> Optional[bool]:
        """
        Returns True when the path is excluded, False when a negation rule
        re-includes it, and None when no rule has an opinion.
        """
        verdict: Optional[bool] = None
        for pattern in self.patterns:
            if pattern.matches(segments, is_dir):
                verdict = not pattern.negated
        return verdict


def parse_pattern_lines(lines: Iterable[str]) -> List[GitignorePattern]:
    patterns: List[GitignorePattern] = []
    for line in lines:
        pattern = GitignorePattern.parse(line)
        if pattern is not None:
            patterns.append(pattern)
    return patterns


def load_gitignore_patterns_from_file(gitignore_file_path: Path) -> List[GitignorePattern]:
    # a missing file contributes no patterns; any other read failure is fatal.
    try:
        with gitignore_file_path.open("r", encoding="utf-8", errors="replace") as f_obj:
            patterns = parse_pattern_lines(f_obj)
    except FileNotFoundError:
        log.debug("gitignore_file_not_found", path=str(gitignore_file_path))
        return []
    except OSError as e:
        raise DiscoveryError(f"loading gitignore file '{gitignore_file_path}': {e}") from e
    log.debug("gitignore_file_loaded", path=str(gitignore_file_path), pattern_count=len(patterns))
    return patterns


def auto_detect_gitignore(base_dir: Path) -> Optional[Path]:
    candidate = base_dir / GITIGNORE_FILENAME
    if candidate.is_file():
        return candidate
    return None
