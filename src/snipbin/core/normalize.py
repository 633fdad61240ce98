"""Content normalization: line endings, trailing newline, binary and size rejection"""

from snipbin.core.errors import ContentRejected


def normalize_content(content: str, max_size: int = 0) -> str:
    """Return content with '\\n' line endings, no leading/trailing newlines, and one final newline.

    Raises ContentRejected for content containing NUL bytes, or exceeding
    max_size UTF-8 bytes (0 = unlimited).
    """
    text = content.replace("\r\n", "\n").replace("\r", "\n").strip("\n") + "\n"
    if "\x00" in text:
        raise ContentRejected("file contains 0x00 bytes")
    if max_size and len(text.encode("utf-8")) > max_size:
        raise ContentRejected(f"file exceeds the maximum size of {max_size} bytes")
    return text
