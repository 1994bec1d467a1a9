"""Test keyboard input handling."""

import pytest
from unittest.mock import Mock
from gridtext.keyboard import KeyboardHandler, KeyEvent, KeyType, to_engine_key


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str, is_sequence=False, name=None, code=None):
        """Add a key to the queue."""
        key = Mock()
        key.__str__ = lambda self: key_str
        key.is_sequence = is_sequence
        key.name = name
        key.code = code
        self._key_queue.append(key)


@pytest.fixture
def terminal():
    return MockTerminal()


@pytest.fixture
def handler(terminal):
    return KeyboardHandler(terminal)


def test_no_key_returns_none(handler):
    assert handler.get_key_event() is None


def test_regular_character(terminal, handler):
    terminal.add_key('a')
    event = handler.get_key_event()
    assert event.key_type == KeyType.REGULAR
    assert event.value == 'a'


@pytest.mark.parametrize("name,value", [
    ('KEY_LEFT', 'left'),
    ('KEY_RIGHT', 'right'),
    ('KEY_UP', 'up'),
    ('KEY_DOWN', 'down'),
    ('KEY_HOME', 'home'),
    ('KEY_END', 'end'),
    ('KEY_DELETE', 'delete'),
    ('KEY_INSERT', 'insert'),
])
def test_named_sequences(terminal, handler, name, value):
    terminal.add_key('\x1b[X', is_sequence=True, name=name)
    event = handler.get_key_event()
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value
    assert event.is_sequence


def test_tab_sequence_is_regular_tab(terminal, handler):
    terminal.add_key('\t', is_sequence=True, name='KEY_TAB')
    event = handler.get_key_event()
    assert event.key_type == KeyType.REGULAR
    assert event.value == '\t'


@pytest.mark.parametrize("raw", ['\r', '\n'])
def test_raw_enter(terminal, handler, raw):
    terminal.add_key(raw)
    event = handler.get_key_event()
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'enter'


@pytest.mark.parametrize("raw", ['\x7f', '\x08'])
def test_raw_backspace(terminal, handler, raw):
    terminal.add_key(raw)
    event = handler.get_key_event()
    assert event.value == 'backspace'


def test_lone_escape(terminal, handler):
    terminal.add_key('\x1b')
    assert handler.get_key_event().value == 'escape'


@pytest.mark.parametrize("raw,letter", [('\x02', 'b'), ('\x03', 'c'), ('\x11', 'q'), ('\x16', 'v')])
def test_ctrl_letters(terminal, handler, raw, letter):
    terminal.add_key(raw)
    event = handler.get_key_event()
    assert event.key_type == KeyType.CTRL
    assert event.value == letter
    assert event.is_ctrl


def test_unknown_sequence_uses_lowercased_name(terminal, handler):
    terminal.add_key('\x1bOP', is_sequence=True, name='KEY_F1')
    event = handler.get_key_event()
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'key_f1'


def test_to_engine_key():
    assert to_engine_key(KeyEvent(KeyType.SPECIAL, 'enter', '\r')) == "Enter"
    assert to_engine_key(KeyEvent(KeyType.SPECIAL, 'backspace', '\x7f')) == "Backspace"
    assert to_engine_key(KeyEvent(KeyType.SPECIAL, 'delete', '')) == "Delete"
    assert to_engine_key(KeyEvent(KeyType.REGULAR, '\t', '\t')) == "Tab"
    assert to_engine_key(KeyEvent(KeyType.REGULAR, 'x', 'x')) == "x"


def test_to_engine_key_ignores_navigation_and_control():
    assert to_engine_key(KeyEvent(KeyType.SPECIAL, 'left', '')) is None
    assert to_engine_key(KeyEvent(KeyType.CTRL, 'c', '\x03')) is None
    assert to_engine_key(KeyEvent(KeyType.REGULAR, '\x00', '\x00')) is None
