# amalgo/core/pipeline.py
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich.console import Console as RichConsole
import structlog
import logging as stdlib_logging

from amalgo.config.settings import AmalgoConfig
from amalgo.core.discovery.filters import build_filter_chain
from amalgo.core.discovery.pattern_matching import auto_detect_gitignore
from amalgo.core.discovery.walker import scan_paths
from amalgo.core.processing import FileInfo, load_files
from amalgo.core.templating.renderer import RendererRegistry, RenderOptions, TemplateRenderer
from amalgo.exceptions import ConfigError

log = structlog.get_logger(__name__)


@dataclass
class AmalgamationResult:
    renderer: TemplateRenderer
    files: List[FileInfo] = field(default_factory=list)
    content: str = ""
    gitignore_used: Optional[Path] = None

    @property
    def is_empty(self) -> bool:
        return not self.files


class AmalgamationPipeline:
    # orchestrates configuration checks, discovery, loading and rendering.
    def __init__(self, config: AmalgoConfig, registry: RendererRegistry):
        self.config: AmalgoConfig = config
        self.registry = registry
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")

    def _validate(self) -> TemplateRenderer:
        # configuration errors are raised before anything touches the filesystem.
        renderer = self.registry.get(self.config.output_format.value)
        if not self.config.extensions:
            raise ConfigError("no valid extensions provided (use --ext, e.g. --ext .py)")
        return renderer

    def resolve_gitignore_path(self) -> Optional[Path]:
        if self.config.gitignore_path is not None:
            return self.config.gitignore_path
        if self.config.use_gitignore:
            detected = auto_detect_gitignore(self.config.base_dir)
            if detected is not None:
                self.log.info("gitignore_auto_detected", path=str(detected))
            return detected
        return None

    def discover(self, gitignore_path: Optional[Path]) -> List[Path]:
        chain = build_filter_chain(
            base_dir=self.config.base_dir,
            extensions=self.config.extensions,
            ignore_dirs=self.config.ignore_dirs,
            include_hidden=self.config.include_hidden,
            gitignore_path=gitignore_path,
            ignore_patterns=self.config.ignore_patterns,
        )
        return scan_paths(self.config.base_dir, chain, follow_symlinks=self.config.follow_symlinks)

    def run(self) -> AmalgamationResult:
        renderer = self._validate()
        gitignore_path = self.resolve_gitignore_path()
        result = AmalgamationResult(renderer=renderer, gitignore_used=gitignore_path)

        app_log_level = stdlib_logging.getLogger("amalgo").getEffectiveLevel()
        progress_disabled = app_log_level > stdlib_logging.INFO or not sys.stderr.isatty()
        stderr_console = RichConsole(file=sys.stderr)

        with Progress(
            SpinnerColumn(), TextColumn("[bold blue]{task.description}"), BarColumn(),
            transient=True, disable=progress_disabled, console=stderr_console
        ) as progress:
            discover_task = progress.add_task("scanning files...", total=None)
            paths = self.discover(gitignore_path)
            progress.update(discover_task, completed=True, description=f"found {len(paths)} files.")

            if not paths:
                self.log.info("no_files_matched")
                return result

            load_task = progress.add_task("loading content...", total=None)
            result.files = load_files(paths, self.config.base_dir)
            progress.update(load_task, completed=True, description=f"loaded {len(result.files)} files.")

        result.content = renderer.render(result.files, RenderOptions(heading_level=self.config.heading_level))
        self.log.info("amalgamation_complete", file_count=len(result.files), renderer=renderer.name)
        return result
