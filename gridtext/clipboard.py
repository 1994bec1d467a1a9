"""Clipboard import: splicing multi-line pasted content into a document."""

import logging
from typing import List, Sequence

from .cells import extend_cells
from .model import CursorPosition, Document

logger = logging.getLogger(__name__)


def paste_segments(document: Document, position: CursorPosition,
                   segments: Sequence[bytes]) -> bool:
    """Splice clipboard ``segments`` into ``document`` at ``position``.

    Each segment is one source line of UTF-8 bytes. Segment 0 continues the
    line under the cursor, every later segment starts a new line, and an
    empty final segment means the clipboard ended with a newline. The text
    that followed the cursor is moved to the end of the last line touched.

    Args:
        document: Document to modify in place
        position: Insertion point
        segments: Clipboard lines as raw bytes

    Returns:
        True if the document was modified, False if the paste was rejected
    """
    if not document.contains(position):
        logger.debug(f"Paste rejected, cursor out of bounds: {position}")
        return False
    if not segments:
        return False

    y = position.line_index
    x = position.cell_index
    lines = document.lines

    # Segment 0 continues line y; reserve one new line per later segment
    lines[y + 1:y + 1] = [[] for _ in range(len(segments) - 1)]

    suffix = lines[y][x:]
    del lines[y][x:]

    for i, segment in enumerate(segments):
        if not segment and i + 1 == len(segments):
            break
        extend_cells(lines[y + i], segment.decode("utf-8", errors="replace"))

    lines[y + len(segments) - 1].extend(suffix)
    return True


def split_clipboard_text(text: str) -> List[bytes]:
    """Split clipboard text into the per-line byte segments paste expects.

    Windows and old Mac line endings are normalized first. A trailing
    newline produces the terminal empty segment.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [line.encode("utf-8") for line in text.split("\n")]


def join_segments(segments: Sequence[str]) -> str:
    """Join copied segments back into clipboard text."""
    return "\n".join(segments)
