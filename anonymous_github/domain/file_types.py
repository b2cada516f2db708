from typing import Dict, FrozenSet

MARKDOWN_EXTENSIONS: FrozenSet[str] = frozenset({"md", "markdown"})

# Extension -> language class attached to served code files.
LANGUAGE_CLASSES: Dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "java": "java",
    "cpp": "cpp",
    "c": "c",
    "cs": "csharp",
    "php": "php",
    "rb": "ruby",
    "go": "go",
    "rs": "rust",
    "swift": "swift",
    "kt": "kotlin",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "sass": "sass",
    "less": "less",
    "json": "json",
    "xml": "xml",
    "yaml": "yaml",
    "yml": "yaml",
    "toml": "toml",
    "ini": "ini",
    "sh": "bash",
    "bash": "bash",
    "sql": "sql",
    "r": "r",
    "m": "matlab",
    "mm": "objc",
    "pl": "perl",
    "lua": "lua",
    "dart": "dart",
    "elm": "elm",
    "hs": "haskell",
    "fs": "fsharp",
    "clj": "clojure",
    "scala": "scala",
    "groovy": "groovy",
    "v": "verilog",
    "vhdl": "vhdl",
}

CODE_EXTENSIONS: FrozenSet[str] = frozenset(LANGUAGE_CLASSES)

DEFAULT_LANGUAGE = "text"


def get_file_extension(filename: str) -> str:
    """Lower-cased text after the last dot, or an empty string."""
    parts = filename.split(".")
    return parts[-1].lower() if len(parts) > 1 else ""


def is_markdown_file(filename: str) -> bool:
    return get_file_extension(filename) in MARKDOWN_EXTENSIONS


def is_code_file(filename: str) -> bool:
    return get_file_extension(filename) in CODE_EXTENSIONS


def get_language_class(filename: str) -> str:
    return LANGUAGE_CLASSES.get(get_file_extension(filename), DEFAULT_LANGUAGE)
