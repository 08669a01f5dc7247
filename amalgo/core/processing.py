# amalgo/core/processing.py
"""
Reads the selected files into FileInfo records for the renderers. A file
that cannot be read gets a visible error placeholder instead of aborting
the batch.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

import structlog

from amalgo.core.discovery.pattern_matching import relative_posix
from amalgo.util import file_extension, strip_utf8_bom

log = structlog.get_logger(__name__)

READ_ERROR_TEMPLATE = "ERROR: could not read file: {error}"


@dataclass
class FileInfo:
    path: Path
    rel_path: str
    content: bytes
    extension: str

    @property
    def text(self) -> str:
        return strip_utf8_bom(self.content).decode("utf-8", errors="replace")


def load_file(path: Path, base_dir: Path) -> FileInfo:
    rel_path = relative_posix(path, base_dir)
    try:
        content = path.read_bytes()
    except OSError as e:
        log.warning("file_read_error_in_processing", path=rel_path, error=str(e))
        content = READ_ERROR_TEMPLATE.format(error=e).encode("utf-8")
    return FileInfo(path=path, rel_path=rel_path, content=content, extension=file_extension(path.name))


def load_files(paths: Iterable[Path], base_dir: Path) -> List[FileInfo]:
    return [load_file(Path(p), base_dir) for p in paths]
