# amalgo/core/templating/__init__.py
"""
Templating module for amalgo.

Provides the Handlebars-backed renderers and the registry that maps output
format names to them.
"""
from .renderer import (
    MarkdownRenderer,
    RendererRegistry,
    RenderOptions,
    TemplateRenderer,
    XmlRenderer,
    build_renderer_registry,
)
from .context_builder import build_template_context

__all__ = [
    "MarkdownRenderer",
    "RendererRegistry",
    "RenderOptions",
    "TemplateRenderer",
    "XmlRenderer",
    "build_renderer_registry",
    "build_template_context",
]
