"""Line- and word-aware splitting of rendered text into sendable chunks."""

from __future__ import annotations

CHUNK_MAX_LENGTH = 4000


def split_into_chunks(text: str, max_length: int = CHUNK_MAX_LENGTH) -> list[str]:
    """Split text into chunks of at most *max_length* characters.

    Split priority: newline > space. Lines are packed greedily; a line that
    is longer than the limit on its own is packed word by word. A single
    word longer than the limit is emitted whole (over-length) rather than
    cut, since cutting could break an escape sequence or a URL.

    Every chunk is trimmed and non-empty; order follows the input.
    """
    if len(text) <= max_length:
        stripped = text.strip()
        return [stripped] if stripped else []

    chunks: list[str] = []
    current = ""

    def flush() -> None:
        nonlocal current
        chunk = current.strip()
        if chunk:
            chunks.append(chunk)
        current = ""

    for line in text.split("\n"):
        if len(current) + len(line) + 1 <= max_length:
            current += line + "\n"
            continue

        flush()
        if len(line) <= max_length:
            current = line + "\n"
            continue

        for word in line.split(" "):
            if len(current) + len(word) + 1 > max_length:
                flush()
            current += word + " "
        # End the split line so the next line does not run into its last word.
        current = current.rstrip(" ") + "\n"

    flush()
    return chunks
