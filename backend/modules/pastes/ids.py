"""
Paste identifiers and URL references.

A paste ID is 8 lowercase hex characters drawn from 4 random bytes.
URLs may append an extension (`/api/paste/1a2b3c4d.py`) as a display
hint; it is stripped before lookup.
"""

import secrets
from typing import Optional

PASTE_ID_BYTES = 4

# Extension (or language alias) -> highlighting language
LANGUAGE_EXTENSIONS: dict[str, str] = {
    "go": "go",
    "py": "python",
    "python": "python",
    "js": "javascript",
    "javascript": "javascript",
    "ts": "typescript",
    "typescript": "typescript",
    "html": "html",
    "css": "css",
    "json": "json",
    "xml": "xml",
    "yaml": "yaml",
    "yml": "yaml",
    "md": "markdown",
    "markdown": "markdown",
    "sql": "sql",
    "sh": "bash",
    "bash": "bash",
    "c": "c",
    "cpp": "cpp",
    "h": "c",
    "hpp": "cpp",
    "java": "java",
    "rs": "rust",
    "rust": "rust",
    "rb": "ruby",
    "ruby": "ruby",
    "php": "php",
    "swift": "swift",
    "kt": "kotlin",
    "kotlin": "kotlin",
    "scala": "scala",
    "r": "r",
    "lua": "lua",
    "perl": "perl",
    "pl": "perl",
    "txt": "plaintext",
    "text": "plaintext",
}

PLAINTEXT = "plaintext"


def generate_paste_id() -> str:
    return secrets.token_hex(PASTE_ID_BYTES)


def split_paste_ref(ref: str) -> tuple[str, Optional[str]]:
    """
    Split a URL reference into (paste_id, extension).

    Only the last dot counts: "abc.tar.gz" -> ("abc.tar", "gz").
    """
    paste_id, dot, ext = ref.rpartition(".")
    if not dot:
        return ref, None
    return paste_id, ext or None


def language_from_extension(ext: str) -> str:
    return LANGUAGE_EXTENSIONS.get(ext.lower(), PLAINTEXT)


def display_language(stored: Optional[str], ext: Optional[str]) -> str:
    """
    Language to highlight with: the URL extension wins over the stored
    language, and plaintext is the fallback.
    """
    if ext:
        return language_from_extension(ext)
    return stored or PLAINTEXT


def count_lines(content: str) -> int:
    return content.count("\n") + 1
