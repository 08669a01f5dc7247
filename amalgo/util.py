from typing import Optional

utf8_bom = b"\xef\xbb\xbf"

def strip_utf8_bom(data: bytes) -> bytes:
    # removes the utf-8 byte order mark from byte data if present.
    if data.startswith(utf8_bom):
        return data[len(utf8_bom):]
    return data

def file_extension(name: str) -> str:
    # everything from the last dot of the base name, so ".env" has extension ".env".
    dot = name.rfind(".")
    if dot < 0:
        return ""
    return name[dot:]

def get_language_hint(extension: Optional[str]) -> str:
    # provides a language hint for markdown code fences based on file extension.
    if not extension:
        return ""
    ext = extension.lower().lstrip(".")
    ext_map = {
        "go": "go", "rs": "rust", "py": "python", "js": "javascript",
        "ts": "typescript", "java": "java", "c": "c", "cpp": "cpp",
        "cs": "csharp", "rb": "ruby", "php": "php", "sh": "bash",
        "bash": "bash", "zsh": "bash", "html": "html", "css": "css",
        "scss": "scss", "json": "json", "yaml": "yaml", "yml": "yaml",
        "xml": "xml", "toml": "toml", "sql": "sql", "md": "markdown",
        "txt": "text",
    }
    return ext_map.get(ext, "")
