"""Keyboard input handling for the console frontend."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .constants import EngineConstants


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from blessed
    is_ctrl: bool = False
    is_sequence: bool = False
    code: Optional[int] = None


# blessed key names mapped to the names used in KeyEvent.value
SPECIAL_KEY_NAMES = {
    'KEY_LEFT': 'left',
    'KEY_RIGHT': 'right',
    'KEY_UP': 'up',
    'KEY_DOWN': 'down',
    'KEY_HOME': 'home',
    'KEY_END': 'end',
    'KEY_ENTER': 'enter',
    'KEY_BACKSPACE': 'backspace',
    'KEY_DELETE': 'delete',
    'KEY_INSERT': 'insert',
    'KEY_ESCAPE': 'escape',
    'KEY_PGUP': 'page_up',
    'KEY_PGDOWN': 'page_down',
}

# Keys that edit the document, as the engine names them
ENGINE_KEYS = {
    'enter': EngineConstants.KEY_ENTER,
    'backspace': EngineConstants.KEY_BACKSPACE,
    'delete': EngineConstants.KEY_DELETE,
}


class KeyboardHandler:
    """Turns blessed keystrokes into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None if the timeout expired."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a blessed key into a KeyEvent.

        Args:
            key: blessed.keyboard.Keystroke object

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)
        name = getattr(key, 'name', None)
        code = getattr(key, 'code', None)

        # Tab arrives as a named sequence on most terminals; keep it as text
        if name == 'KEY_TAB' or key_str == '\t':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')

        if getattr(key, 'is_sequence', False) and name in SPECIAL_KEY_NAMES:
            return KeyEvent(
                key_type=KeyType.SPECIAL,
                value=SPECIAL_KEY_NAMES[name],
                raw=key_str,
                is_sequence=True,
                code=code,
            )

        if len(key_str) == 1:
            o = ord(key_str)
            # Raw mode delivers Enter and Backspace as plain control bytes
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        if getattr(key, 'is_sequence', False):
            # Unknown sequence (function keys and the like)
            return KeyEvent(key_type=KeyType.SPECIAL, value=(name or key_str).lower(),
                            raw=key_str, is_sequence=True, code=code)

        # Regular character
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)


def to_engine_key(key_event: KeyEvent) -> Optional[str]:
    """Return the key label the engine expects, or None for non-edit keys."""
    if key_event.key_type == KeyType.SPECIAL:
        return ENGINE_KEYS.get(key_event.value)
    if key_event.key_type == KeyType.REGULAR:
        if key_event.value == '\t':
            return EngineConstants.KEY_TAB
        # Filter out control characters
        if key_event.value and ord(key_event.value[0]) >= 32:
            return key_event.value
    return None
