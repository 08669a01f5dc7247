# tests/test_templating.py
"""Tests for the Handlebars-backed renderers and the renderer registry."""

import pytest
from pathlib import Path

from amalgo.core.processing import FileInfo
from amalgo.core.templating import (
    MarkdownRenderer,
    RendererRegistry,
    RenderOptions,
    XmlRenderer,
    build_renderer_registry,
    build_template_context,
)
from amalgo.core.templating.context_builder import clamp_heading_level
from amalgo.exceptions import ConfigError


def _file(rel_path: str, content: bytes, extension: str = ".go") -> FileInfo:
    return FileInfo(path=Path("/project") / rel_path, rel_path=rel_path, content=content, extension=extension)


class TestMarkdownRenderer:
    def test_name_and_extension(self):
        renderer = MarkdownRenderer()
        assert renderer.name == "markdown"
        assert renderer.file_extension == ".md"

    def test_single_file(self):
        output = MarkdownRenderer().render([_file("main.go", b"package main\n")], RenderOptions(heading_level=1))
        assert output == "# main.go\n```go\npackage main\n```\n\n"

    def test_multiple_files_keep_order(self):
        files = [_file("main.go", b"package main"), _file("util/util.go", b"package util")]

        output = MarkdownRenderer().render(files, RenderOptions(heading_level=2))

        assert "## main.go\n" in output
        assert "## util/util.go\n" in output
        assert output.index("main.go") < output.index("util/util.go")

    def test_missing_trailing_newline_is_added(self):
        output = MarkdownRenderer().render([_file("a.go", b"package a")], RenderOptions())
        assert "package a\n```\n" in output

    def test_unknown_extension_has_bare_fence(self):
        output = MarkdownRenderer().render([_file("notes.xyz", b"hello\n", ".xyz")], RenderOptions())
        assert "```\nhello\n```" in output

    def test_content_is_not_html_escaped(self):
        output = MarkdownRenderer().render([_file("a.go", b"if a < b && c > d {}\n")], RenderOptions())
        assert "if a < b && c > d {}" in output

    def test_no_files(self):
        assert "_No files found._" in MarkdownRenderer().render([], RenderOptions())

    @pytest.mark.parametrize("level,expected", [(0, "#"), (1, "#"), (3, "###"), (6, "######"), (10, "######")])
    def test_heading_level_is_clamped(self, level, expected):
        output = MarkdownRenderer().render([_file("test.go", b"test")], RenderOptions(heading_level=level))
        assert output.startswith(expected + " test.go\n")


class TestXmlRenderer:
    def test_files_are_wrapped_and_escaped(self):
        output = XmlRenderer().render([_file("main.go", b"a < b\n")], RenderOptions())

        assert output.startswith("<files>\n")
        assert '<file path="main.go" language="go">' in output
        assert "a &lt; b" in output
        assert output.rstrip().endswith("</files>")


class TestRendererRegistry:
    def test_builtin_formats(self):
        registry = build_renderer_registry()
        assert registry.names() == ["markdown", "xml"]
        assert isinstance(registry.get("markdown"), MarkdownRenderer)

    def test_unknown_format(self):
        registry = RendererRegistry()
        registry.register(MarkdownRenderer())
        with pytest.raises(ConfigError, match="Available formats: markdown"):
            registry.get("html")


def test_template_context():
    context = build_template_context([_file("a.go", b"x")], heading_level=9)
    assert context["file_count"] == 1
    assert context["files"][0]["heading"] == "######"
    assert context["files"][0]["body"] == "x\n"
    assert clamp_heading_level(-3) == 1
