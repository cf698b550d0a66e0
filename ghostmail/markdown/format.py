"""MarkdownV2 formatting helpers and the plain-text degrade transform."""

from __future__ import annotations

import re

from ghostmail.markdown.sanitize import escape_markdown

# Unescaped bold / code markers.
_MARKER_RE = re.compile(r"(?<!\\)[*`]")
_UNESCAPE_RE = re.compile(r"\\([_*\[\]()~`>#+\-=|{}.!\\])")
_NON_ASCII_RE = re.compile(r"[^\x20-\x7e\n\r\t]")


def bold(text: str) -> str:
    """Bold *text*, escaping its content."""
    return f"*{escape_markdown(text)}*"


def code(text: str) -> str:
    """Inline code span. Only ``\\`` and backtick need escaping inside it."""
    return "`" + text.replace("\\", "\\\\").replace("`", "\\`") + "`"


def to_plain_text(chunk: str) -> str:
    """Degrade a MarkdownV2 chunk into plain text for a parse-free resend.

    Drops bold/code markers, reverses backslash escaping and keeps only
    printable ASCII plus newlines and tabs. Emoji and accented letters are
    lost; that is the price of a payload the channel cannot reject for markup.
    """
    if not chunk:
        return ""
    text = _MARKER_RE.sub("", chunk)
    text = _UNESCAPE_RE.sub(r"\1", text)
    text = _NON_ASCII_RE.sub("", text)
    return text.strip()
