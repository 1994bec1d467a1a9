"""The engine: one document behind one lock, answering content requests."""

import logging
import threading
from typing import Iterable, Optional

from .clipboard import paste_segments
from .collaborators import NullHighlighter, ScrollbarRenderer, SyntaxHighlighter
from .commands import CommandRegistry, Move
from .constants import EngineConstants
from .model import CursorPosition, Document, TextRange
from .protocol import ContentRequest, ContentResponse, CopyResponse, WriteResponse
from .view import Viewport, render_viewport

logger = logging.getLogger(__name__)


class Engine:
    """Owns the document and serializes every access to it.

    Each public method holds the lock for its whole duration. ``handle``
    applies a combined request atomically, so the viewport it returns always
    reflects the edits of the same request and never a concurrent one.
    """

    def __init__(self, document: Optional[Document] = None,
                 highlighter: Optional[SyntaxHighlighter] = None,
                 scrollbar: Optional[ScrollbarRenderer] = None):
        self._document = document if document is not None else Document.from_strings(EngineConstants.SEED_LINES)
        self._lock = threading.Lock()
        self._commands = CommandRegistry()
        self.highlighter = highlighter or NullHighlighter()
        self.scrollbar = scrollbar

    @classmethod
    def from_seed(cls, seed: Iterable[str], **kwargs) -> "Engine":
        return cls(Document.from_strings(seed), **kwargs)

    # --- Single operations ---

    def copy(self, text_range: TextRange) -> list[str]:
        with self._lock:
            return self._document.copy_range(text_range)

    def write(self, position: CursorPosition, key: str, insert: bool = False) -> Move:
        with self._lock:
            return self._commands.execute(self._document, position, key, insert)

    def paste(self, position: CursorPosition, segments: list[bytes]) -> bool:
        with self._lock:
            return paste_segments(self._document, position, segments)

    def render(self, viewport: Viewport) -> list[str]:
        with self._lock:
            return render_viewport(self._document, viewport)

    def snapshot(self) -> list[list[str]]:
        """Consistent copy of the cell grid for external collaborators."""
        with self._lock:
            return self._document.snapshot()

    def line_lengths(self) -> list[int]:
        with self._lock:
            return [len(line) for line in self._document.lines]

    def text(self) -> list[str]:
        with self._lock:
            return self._document.to_strings()

    # --- Combined requests ---

    def handle(self, request: ContentRequest) -> ContentResponse:
        """Apply copy, then write, then paste, then render the viewport."""
        response = ContentResponse()
        with self._lock:
            document = self._document
            if request.copy_request is not None:
                c = request.copy_request
                segments = document.copy_range(TextRange.from_xy(c.x0, c.y0, c.x1, c.y1))
                response.copy_response = CopyResponse(buffer=[s.encode("utf-8") for s in segments])

            if request.write is not None and request.paste is not None:
                logger.debug("Request carries both write and paste; applying write first")

            if request.write is not None:
                w = request.write
                move = self._commands.execute(document, CursorPosition(w.y, w.x), w.key, w.insert)
                response.write = WriteResponse(move_x=move.move_x, move_y=move.move_y)

            if request.paste is not None:
                p = request.paste
                paste_segments(document, CursorPosition(p.y, p.x), p.buffer)

            viewport = Viewport(request.xpos, request.ypos, request.width, request.height)
            response.content = render_viewport(document, viewport)
            response.fg_color = self.highlighter.highlight(document.snapshot())
        return response

    def render_scrollbar(self) -> Optional[bytes]:
        """PNG from the configured scrollbar renderer, or None without one."""
        if self.scrollbar is None:
            return None
        return self.scrollbar.render(self.snapshot())
