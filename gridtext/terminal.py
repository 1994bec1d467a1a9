"""Terminal interface using Blessed for display and input."""

import blessed
from typing import Optional

from .constants import EngineConstants


def display_cell(cell: str) -> str:
    """Text drawn for one cell; tab padding and glyphs show as blanks."""
    if not cell or cell == EngineConstants.TAB_GLYPH:
        return ' '
    return cell


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def draw_grid(self, rows: list[list[str]], cursor_y: int, cursor_x: int,
                  status: str = ""):
        """Draw a viewport of cells and position the cursor.

        Args:
            rows: Cells of the viewport, one list per screen row
            cursor_y: Cursor row relative to the viewport
            cursor_x: Cursor column relative to the viewport
            status: Text for the status line at the bottom
        """
        out = [self.term.home + self.term.clear]
        for y, row in enumerate(rows):
            out.append(self.term.move(y, 0) + ''.join(display_cell(c) for c in row))
        out.append(self.term.move(self.term.height - 1, 0)
                   + self.term.reverse + status[:self.term.width].ljust(self.term.width)
                   + self.term.normal)
        out.append(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def draw_error_message(self, message: str):
        """Draw a single centered message (e.g., terminal too small)."""
        print(self.term.home + self.term.clear, end='')
        x = max(0, (self.term.width - len(message)) // 2)
        print(self.term.move(self.term.height // 2, x) + message, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A blessed Keystroke; empty when the timeout expired
        """
        return self.term.inkey(timeout=timeout)

    def raw_mode(self):
        """Context manager delivering Ctrl-C/Ctrl-Q/Ctrl-V as keystrokes."""
        return self.term.raw()

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1  # Reserve one line for status
