"""HTML email body → Telegram MarkdownV2-safe plain text.

The steps run in a fixed order: each one relies on the previous output
(e.g. entities are decoded only after tags are gone, and escaping runs last
so decoded ``&lt;`` never turns back into markup).
"""

from __future__ import annotations

import re

SANITIZE_MAX_LENGTH = 3000

# Already escaped for MarkdownV2 so it can be appended after escaping.
TRUNCATION_NOTICE = "\\.\\.\\.\n\n\\[Message truncated due to length\\]"

_MARKDOWN_SPECIAL = r"_*\[\]()~`>#+\-=|{}.!"

# Group 1: an existing escape pair, kept as-is. Group 2: a bare character to escape.
_ESCAPE_RE = re.compile(r"\\([" + _MARKDOWN_SPECIAL + r"\\])|([" + _MARKDOWN_SPECIAL + r"\\])")

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&nbsp;": " ",
    "&mdash;": "—",
    "&ndash;": "–",
    "&hellip;": "...",
    "&copy;": "©",
    "&reg;": "®",
    "&trade;": "™",
}
_ENTITY_RE = re.compile("|".join(re.escape(name) for name in _ENTITIES))

# \t \n \r survive so that whitespace normalization can see line structure.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_GENERAL_PUNCT_RE = re.compile(r"[\u2000-\u206f]")
_SPECIALS_RE = re.compile(r"[\ufff0-\uffff]")
_WHITESPACE_RE = re.compile(r"\s+")


def escape_markdown(text: str) -> str:
    """Backslash-escape MarkdownV2 metacharacters.

    Idempotent: a metacharacter that is already preceded by a backslash is
    left alone, so ``escape_markdown(escape_markdown(s)) == escape_markdown(s)``.
    The price is that a literal backslash directly before a metacharacter in
    the input is read as an escape.
    """
    if not text:
        return ""
    return _ESCAPE_RE.sub(
        lambda m: m.group(0) if m.group(1) is not None else "\\" + m.group(2),
        text,
    )


def _collapse_whitespace(match: re.Match) -> str:
    newlines = match.group(0).count("\n")
    if newlines >= 2:
        return "\n\n"
    if newlines == 1:
        return "\n"
    return " "


def _truncate(text: str, limit: int) -> str:
    """Cut escaped text to *limit* characters without leaving a dangling escape.

    Escaped output is a sequence of ``\\x`` pairs and plain characters, so an
    odd run of trailing backslashes means the cut landed inside a pair; the
    dangling backslash is dropped (the kept text is then ``limit - 1`` long).
    """
    cut = text[:limit]
    trailing = len(cut) - len(cut.rstrip("\\"))
    if trailing % 2:
        cut = cut[:-1]
    return cut.rstrip() + TRUNCATION_NOTICE


def sanitize_html(html: str | None, max_length: int = SANITIZE_MAX_LENGTH) -> str:
    """Convert untrusted HTML into escaped plain text for a MarkdownV2 message."""
    if not html:
        return ""

    text = _SCRIPT_STYLE_RE.sub("", html)
    text = _TAG_RE.sub("", text)
    text = _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)

    text = _CONTROL_RE.sub("", text)
    text = _GENERAL_PUNCT_RE.sub(" ", text)
    text = _SPECIALS_RE.sub("", text)

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _WHITESPACE_RE.sub(_collapse_whitespace, text).strip()

    text = escape_markdown(text)

    if len(text) > max_length:
        text = _truncate(text, max_length)
    return text
