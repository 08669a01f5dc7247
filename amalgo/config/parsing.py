# amalgo/config/parsing.py
"""
Normalization and validation of raw option values (extensions, directory
names) coming from the command line or configuration files.
"""
from typing import Iterable, List, Set

from amalgo.exceptions import ConfigError


def split_comma_separated(raw: str) -> List[str]:
    """Splits `a, b,,c` into `["a", "b", "c"]`, dropping empty parts."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def normalize_extension(token: str) -> str:
    # "GO" -> ".go", " .rs " -> ".rs"; blank input yields "".
    token = token.strip()
    if not token:
        return ""
    if not token.startswith("."):
        token = "." + token
    return token.lower()


def _is_well_formed_extension(ext: str) -> bool:
    body = ext[1:]
    if not body or "." in body:
        return False
    return not any(ch in body for ch in ("/", "\\")) and not any(ch.isspace() for ch in body)


def parse_extensions(raw_values: Iterable[str]) -> Set[str]:
    """
    Builds the lowercase dotted extension set from repeatable, comma-separated
    values. Raises ConfigError for a malformed token or when nothing remains.
    """
    extensions: Set[str] = set()
    for raw in raw_values:
        for token in split_comma_separated(raw):
            ext = normalize_extension(token)
            if not _is_well_formed_extension(ext):
                raise ConfigError(
                    f"invalid extension '{token}': expected a single suffix such as .rs or .py"
                )
            extensions.add(ext)
    if not extensions:
        raise ConfigError("no valid extensions provided (use --ext, e.g. --ext .py)")
    return extensions


def parse_ignore_dirs(raw_values: Iterable[str]) -> Set[str]:
    # directory names are matched exactly, so case is preserved.
    ignore_dirs: Set[str] = set()
    for raw in raw_values:
        ignore_dirs.update(split_comma_separated(raw))
    return ignore_dirs


def parse_ignore_patterns(raw_values: Iterable[str]) -> List[str]:
    # rule order matters for last-match-wins, so no set here.
    patterns: List[str] = []
    for raw in raw_values:
        patterns.extend(split_comma_separated(raw))
    return patterns
