"""Interfaces for the external collaborators that consume the document.

Colour computation and scrollbar imaging live outside the engine. The engine
hands them a snapshot of the cell grid and forwards whatever they return.
"""

from abc import ABC, abstractmethod


class SyntaxHighlighter(ABC):
    @abstractmethod
    def highlight(self, lines: list[list[str]]) -> list[list[int]]:
        """Return foreground colour spans for the document.

        Each span is a list of five integers whose meaning belongs to the
        highlighter and the frontend; the engine passes them through.
        """


class NullHighlighter(SyntaxHighlighter):
    """Highlighter used when none is configured: no colour spans."""

    def highlight(self, lines):
        return []


class ScrollbarRenderer(ABC):
    @abstractmethod
    def render(self, lines: list[list[str]]) -> bytes:
        """Return a PNG image summarizing the whole document."""
