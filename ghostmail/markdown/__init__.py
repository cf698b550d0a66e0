"""Text sanitizing, chunking and MarkdownV2 formatting."""

from ghostmail.markdown.chunk import CHUNK_MAX_LENGTH, split_into_chunks
from ghostmail.markdown.format import bold, code, to_plain_text
from ghostmail.markdown.sanitize import SANITIZE_MAX_LENGTH, escape_markdown, sanitize_html

__all__ = [
    "CHUNK_MAX_LENGTH",
    "SANITIZE_MAX_LENGTH",
    "bold",
    "code",
    "escape_markdown",
    "sanitize_html",
    "split_into_chunks",
    "to_plain_text",
]
