"""Terminal frontend driving an engine through content requests.

The console owns the authoritative cursor. Every edit is sent as a content
request and the returned displacement is applied locally, exactly as a
remote display frontend would do.
"""

import logging
from typing import Optional

import pyperclip

from .clipboard import join_segments, split_clipboard_text
from .constants import EngineConstants
from .engine import Engine
from .keyboard import KeyboardHandler, KeyEvent, KeyType, to_engine_key
from .model import CursorPosition
from .protocol import ContentRequest, ContentResponse, CopyRequest, PasteRequest, WriteRequest
from .terminal import TerminalInterface
from .view import Viewport, split_rows

logger = logging.getLogger(__name__)


class Console:
    """Interactive terminal frontend for an in-process engine."""

    def __init__(self, engine: Engine, terminal: Optional[TerminalInterface] = None):
        self.engine = engine
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.cursor = CursorPosition()
        self.origin = CursorPosition()  # Document position of the top-left cell
        self.insert_mode = True
        self.mark: Optional[CursorPosition] = None
        self.status_message: Optional[str] = None
        self.running = False
        self.content: list[str] = []
        self._rendered_viewport: Optional[Viewport] = None

    # --- Engine requests ---

    def viewport(self) -> Viewport:
        return Viewport(self.origin.cell_index, self.origin.line_index,
                        self.terminal.width, self.terminal.height)

    def _send(self, **sub_requests) -> ContentResponse:
        viewport = self.viewport()
        request = ContentRequest(
            xpos=viewport.xpos,
            ypos=viewport.ypos,
            width=viewport.width,
            height=viewport.height,
            **sub_requests,
        )
        response = self.engine.handle(request)
        self.content = response.content
        self._rendered_viewport = viewport
        return response

    def refresh(self):
        """Scroll the cursor into view and re-render if the viewport moved."""
        self._scroll_to_cursor()
        if self._rendered_viewport != self.viewport():
            self._send()

    def _scroll_to_cursor(self):
        width = max(1, self.terminal.width)
        height = max(1, self.terminal.height)
        if self.cursor.line_index < self.origin.line_index:
            self.origin.line_index = self.cursor.line_index
        elif self.cursor.line_index >= self.origin.line_index + height:
            self.origin.line_index = self.cursor.line_index - height + 1
        if self.cursor.cell_index < self.origin.cell_index:
            self.origin.cell_index = self.cursor.cell_index
        elif self.cursor.cell_index >= self.origin.cell_index + width:
            self.origin.cell_index = self.cursor.cell_index - width + 1

    # --- Key handling ---

    def handle_key_event(self, key_event: KeyEvent) -> bool:
        """Handle one key event.

        Returns:
            True if the document may have been modified
        """
        self.status_message = None
        if key_event.key_type == KeyType.CTRL:
            return self._handle_ctrl(key_event.value)
        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'escape':
                self.mark = None
                return False
            if key_event.value == 'insert':
                self.insert_mode = not self.insert_mode
                return False
            if key_event.value in ('left', 'right', 'up', 'down', 'home', 'end'):
                self._move_cursor(key_event.value)
                self.refresh()
                return False

        key = to_engine_key(key_event)
        if key is None:
            return False
        self._write(key)
        return True

    def _handle_ctrl(self, letter: str) -> bool:
        if letter == 'q':
            self.running = False
        elif letter == 'b':
            self.mark = CursorPosition(self.cursor.line_index, self.cursor.cell_index)
            self.status_message = "Mark set"
        elif letter == 'c':
            self._copy()
        elif letter == 'v':
            return self._paste()
        return False

    def _write(self, key: str):
        response = self._send(write=WriteRequest(
            x=self.cursor.cell_index,
            y=self.cursor.line_index,
            key=key,
            insert=self.insert_mode,
        ))
        if response.write is not None:
            self.cursor.cell_index += response.write.move_x
            self.cursor.line_index += response.write.move_y
        self.refresh()

    def _copy(self):
        if self.mark is None:
            self.status_message = "No mark set"
            return
        response = self._send(copy_request=CopyRequest(
            x0=self.mark.cell_index,
            y0=self.mark.line_index,
            x1=self.cursor.cell_index,
            y1=self.cursor.line_index,
        ))
        segments = response.copy_response.buffer if response.copy_response else []
        if not segments:
            self.status_message = "Nothing to copy"
            return
        text = join_segments([s.decode("utf-8", errors="replace") for s in segments])
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard copy failed: {e}")
            self.status_message = "Clipboard unavailable"
            return
        self.status_message = "Selection copied"

    def _paste(self) -> bool:
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard paste failed: {e}")
            self.status_message = "Clipboard unavailable"
            return False
        if not text:
            self.status_message = "Clipboard empty"
            return False

        segments = split_clipboard_text(text)
        y, x = self.cursor.line_index, self.cursor.cell_index
        # Paste reports no displacement; the cursor lands before the text
        # that followed it, which keeps its length
        suffix_length = self.engine.line_lengths()[y] - x
        self._send(paste=PasteRequest(x=x, y=y, buffer=segments))
        last_line = y + len(segments) - 1
        self.cursor.line_index = last_line
        self.cursor.cell_index = self.engine.line_lengths()[last_line] - suffix_length
        self.refresh()
        return True

    def _move_cursor(self, direction: str):
        lengths = self.engine.line_lengths()
        y, x = self.cursor.line_index, self.cursor.cell_index
        if direction == 'left':
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                x = lengths[y]
        elif direction == 'right':
            if x < lengths[y]:
                x += 1
            elif y + 1 < len(lengths):
                y += 1
                x = 0
        elif direction == 'up' and y > 0:
            y -= 1
        elif direction == 'down' and y + 1 < len(lengths):
            y += 1
        elif direction == 'home':
            x = 0
        elif direction == 'end':
            x = lengths[y]
        self.cursor = CursorPosition(y, min(x, lengths[y]))

    # --- Main loop ---

    def status_line(self) -> str:
        mode = EngineConstants.STATUS_INSERT if self.insert_mode else EngineConstants.STATUS_OVERWRITE
        status = f" {mode}  Ln {self.cursor.line_index + 1}, Col {self.cursor.cell_index + 1}"
        if self.mark is not None:
            status += "  [mark]"
        if self.status_message:
            status += f"  {self.status_message}"
        return status

    def _draw(self):
        if self.terminal.width < EngineConstants.MIN_TERMINAL_WIDTH:
            self.terminal.draw_error_message("Terminal too narrow")
            return
        self.refresh()
        viewport = self._rendered_viewport or self.viewport()
        self.terminal.draw_grid(
            split_rows(self.content, viewport.width),
            self.cursor.line_index - self.origin.line_index,
            self.cursor.cell_index - self.origin.cell_index,
            status=self.status_line(),
        )

    def run(self):
        """Run the console until Ctrl-Q."""
        self.terminal.setup()
        self.running = True
        try:
            with self.terminal.raw_mode():
                self._send()
                while self.running:
                    self._draw()
                    key_event = self.keyboard.get_key_event(timeout=None)
                    if key_event:
                        self.handle_key_event(key_event)
        except KeyboardInterrupt:
            pass
        finally:
            self.terminal.cleanup()
