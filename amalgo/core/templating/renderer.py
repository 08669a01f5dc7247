# amalgo/core/templating/renderer.py
"""
Renderers turn loaded files into the final document. Each one wraps a
compiled Handlebars template; the RendererRegistry maps format names to
renderer instances and is built once per process, then passed explicitly.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

import pybars  # type: ignore
import structlog

from amalgo.config.settings import DEFAULT_HEADING_LEVEL, OutputFormat
from amalgo.core.processing import FileInfo
from amalgo.exceptions import ConfigError, TemplateError

from .context_builder import build_template_context
from .default_templates import MARKDOWN_TEMPLATE, XML_TEMPLATE
from .helpers import BUILTIN_HELPERS

log = structlog.get_logger(__name__)


@dataclass
class RenderOptions:
    heading_level: int = DEFAULT_HEADING_LEVEL


class TemplateRenderer:
    """Compiles one Handlebars template and renders file lists through it."""

    def __init__(self, name: str, file_extension: str, template_source: str):
        self.name = name
        self.file_extension = file_extension
        self.registered_helpers: Dict[str, Callable] = dict(BUILTIN_HELPERS)
        try:
            self.compiled_template_function = pybars.Compiler().compile(template_source)
            log.debug("template_compiled_successfully", renderer=name)
        except Exception as e:
            log.error("template_compilation_failed", renderer=name, error=str(e), exc_info=True)
            raise TemplateError(f"Failed to compile template for '{name}': {e}") from e

    def render(self, files: Sequence[FileInfo], options: RenderOptions) -> str:
        context = build_template_context(files, options.heading_level)
        log.info("rendering_template_with_context", renderer=self.name, file_count=len(files))
        try:
            return str(self.compiled_template_function(context, helpers=self.registered_helpers))
        except Exception as e:
            log.error("template_rendering_error_occurred", renderer=self.name, error_message=str(e), exc_info=True)
            raise TemplateError(f"Template render failed for '{self.name}': {e}") from e


class MarkdownRenderer(TemplateRenderer):
    def __init__(self):
        super().__init__(OutputFormat.MARKDOWN.value, ".md", MARKDOWN_TEMPLATE)


class XmlRenderer(TemplateRenderer):
    def __init__(self):
        super().__init__(OutputFormat.XML.value, ".xml", XML_TEMPLATE)


class RendererRegistry:
    def __init__(self):
        self._renderers: Dict[str, TemplateRenderer] = {}

    def register(self, renderer: TemplateRenderer) -> None:
        self._renderers[renderer.name] = renderer

    def get(self, name: str) -> TemplateRenderer:
        try:
            return self._renderers[name]
        except KeyError:
            raise ConfigError(
                f"unknown output format: {name}\nAvailable formats: {', '.join(self.names())}"
            ) from None

    def names(self) -> List[str]:
        return sorted(self._renderers)


def build_renderer_registry() -> RendererRegistry:
    registry = RendererRegistry()
    registry.register(MarkdownRenderer())
    registry.register(XmlRenderer())
    return registry
