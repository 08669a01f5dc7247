from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Set
import structlog

log = structlog.get_logger(__name__)

class OutputFormat(Enum):
    # names of the renderers shipped with amalgo.
    MARKDOWN = "markdown"
    XML = "xml"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Optional["OutputFormat"]:
        if not s:
            return None
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_output_format_string", input_string=s)
            return None

DEFAULT_IGNORE_DIRS = (".git", "node_modules", "vendor")
DEFAULT_OUTPUT_FORMAT = OutputFormat.MARKDOWN
DEFAULT_HEADING_LEVEL = 1
STDOUT_MARKER = "-"

@dataclass
class AmalgoConfig:
    # holds all configuration parameters for a single run.
    base_dir: Path = field(default_factory=Path.cwd)
    extensions: Set[str] = field(default_factory=set)
    ignore_dirs: Set[str] = field(default_factory=set)
    include_hidden: bool = False
    gitignore_path: Optional[Path] = None
    use_gitignore: bool = True
    ignore_patterns: List[str] = field(default_factory=list)
    follow_symlinks: bool = False
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT
    heading_level: int = DEFAULT_HEADING_LEVEL
    output_file: Optional[Path] = None

    def __post_init__(self):
        # every relative-path computation is made against the absolute base directory.
        self.base_dir = Path(self.base_dir).resolve()
        if self.gitignore_path is not None:
            self.gitignore_path = Path(self.gitignore_path)

    @property
    def writes_to_stdout(self) -> bool:
        return self.output_file is not None and str(self.output_file) == STDOUT_MARKER
