# amalgo/core/templating/context_builder.py
"""
Builds the data dictionary handed to the Handlebars templates.
"""
from typing import Any, Dict, List, Sequence

from amalgo.core.processing import FileInfo

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6


def clamp_heading_level(level: int) -> int:
    return max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, level))


def _body_with_trailing_newline(file_info: FileInfo) -> str:
    text = file_info.text
    if not text.endswith("\n"):
        text += "\n"
    return text


def build_template_context(files: Sequence[FileInfo], heading_level: int) -> Dict[str, Any]:
    heading = "#" * clamp_heading_level(heading_level)
    file_entries: List[Dict[str, Any]] = [
        {
            "heading": heading,
            "rel_path": f.rel_path,
            "extension": f.extension,
            "body": _body_with_trailing_newline(f),
        }
        for f in files
    ]
    return {"files": file_entries, "file_count": len(file_entries)}
