"""gridtext - A server-side text buffer engine."""

from .model import Document, CursorPosition, TextRange
from .commands import Move, apply_keystroke
from .clipboard import paste_segments
from .view import Viewport, render_viewport
from .engine import Engine

__all__ = [
    'Document',
    'CursorPosition',
    'TextRange',
    'Move',
    'apply_keystroke',
    'paste_segments',
    'Viewport',
    'render_viewport',
    'Engine',
]
