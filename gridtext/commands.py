"""Command pattern implementation for keystroke edits."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from .constants import EngineConstants
from .model import CursorPosition, Document
from .tabs import is_tab_stop, is_tab_terminator_column

logger = logging.getLogger(__name__)

PADDING = EngineConstants.PADDING


@dataclass
class Move:
    """Cursor displacement reported back to the caller."""
    move_x: int = 0
    move_y: int = 0


class KeystrokeCommand(ABC):
    """Base class for keystroke commands.

    Commands run only after the registry has checked that the cursor is a
    valid insertion point, so they may index the current line freely.
    """

    @abstractmethod
    def apply(self, document: Document, position: CursorPosition,
              key: str, insert: bool) -> Move:
        """Apply the keystroke.

        Args:
            document: Document to modify in place
            position: Cursor at which the key was pressed
            key: Key label as received
            insert: True for insert mode, False for overwrite

        Returns:
            Displacement of the caller's cursor
        """
        pass


class EnterCommand(KeystrokeCommand):
    def apply(self, document, position, key, insert):
        y, x = position.line_index, position.cell_index
        line = document.lines[y]
        document.lines[y + 1:y + 1] = [line[x:]]
        del line[x:]
        return Move(-x, 1)


class DeleteCommand(KeystrokeCommand):
    def apply(self, document, position, key, insert):
        y, x = position.line_index, position.cell_index
        line = document.lines[y]
        if x == len(line):
            # At end of line, join with next line
            if y + 1 < len(document.lines):
                line.extend(document.lines.pop(y + 1))
            return Move()
        # Deleting inside a tab run removes the padding and its glyph
        while x < len(line) and line[x] == PADDING:
            del line[x]
        if x < len(line):
            del line[x]
        return Move()


class BackspaceCommand(KeystrokeCommand):
    def apply(self, document, position, key, insert):
        y, x = position.line_index, position.cell_index
        if x == 0:
            if y == 0:
                return Move()
            # At start of line, join with previous line
            previous = document.lines[y - 1]
            joined_at = len(previous)
            previous.extend(document.lines.pop(y))
            return Move(joined_at, -1)

        line = document.lines[y]
        move = Move()
        while True:
            del line[x - 1]
            x -= 1
            move.move_x -= 1
            # Keep collapsing while the cell before the cursor is padding
            if x < 1 or line[x - 1] != PADDING:
                break
        return move


class TabCommand(KeystrokeCommand):
    def apply(self, document, position, key, insert):
        x = position.cell_index
        line = document.lines[position.line_index]
        move = Move()
        while True:
            if x == len(line):
                line.append(PADDING)
            elif insert:
                line.insert(x, PADDING)
            if is_tab_terminator_column(x):
                line[x] = EngineConstants.TAB_GLYPH
            else:
                line[x] = PADDING
            x += 1
            move.move_x += 1
            if is_tab_stop(x):
                break
        return move


class InsertCharCommand(KeystrokeCommand):
    def apply(self, document, position, key, insert):
        x = position.cell_index
        line = document.lines[position.line_index]
        if x == len(line):
            line.append(key)
        elif insert and line[x] != PADDING:
            line.insert(x, key)
        else:
            line[x] = key
        return Move(1, 0)


class CommandRegistry:
    """Registry for mapping key labels to commands."""

    def __init__(self):
        self._commands: Dict[str, KeystrokeCommand] = {}
        self._default = InsertCharCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default key mappings."""
        self.register(EngineConstants.KEY_ENTER, EnterCommand())
        self.register(EngineConstants.KEY_DELETE, DeleteCommand())
        self.register(EngineConstants.KEY_BACKSPACE, BackspaceCommand())
        tab = TabCommand()
        self.register(EngineConstants.KEY_TAB, tab)
        # Frontends that forward the raw character
        self.register(EngineConstants.TAB_GLYPH, tab)

    def register(self, key: str, command: KeystrokeCommand):
        """Register a command for a key label."""
        self._commands[key] = command

    def get_command(self, key: str) -> Optional[KeystrokeCommand]:
        """Get the command for a key label; printable keys have none."""
        return self._commands.get(key)

    def execute(self, document: Document, position: CursorPosition,
                key: str, insert: bool) -> Move:
        """Validate the cursor and apply one keystroke.

        Returns:
            Cursor displacement; zero when the request was rejected
        """
        if not key or not document.contains(position):
            logger.debug(f"Keystroke {key!r} rejected at {position}")
            return Move()
        command = self.get_command(key) or self._default
        return command.apply(document, position, key, insert)


_registry = CommandRegistry()


def apply_keystroke(document: Document, position: CursorPosition,
                    key: str, insert: bool = False) -> Move:
    """Apply one keystroke using the default command registry."""
    return _registry.execute(document, position, key, insert)
