"""Test Tab key functionality."""

import pytest
from gridtext.commands import Move, TabCommand, apply_keystroke
from gridtext.model import CursorPosition, Document
from gridtext.tabs import is_tab_stop

PAD = ""
TAB = "\t"


def create_test_document(lines):
    """Create a document from plain strings."""
    return Document.from_strings(lines)


def test_tab_at_column_0():
    """Tab at column 0 should fill seven padding cells and a glyph."""
    doc = create_test_document([""])
    move = apply_keystroke(doc, CursorPosition(0, 0), "Tab")

    assert doc.lines[0] == [PAD] * 7 + [TAB]
    assert move == Move(8, 0)


def test_tab_at_column_3():
    """Tab at column 3 should advance to column 8."""
    doc = create_test_document(["abc"])
    move = apply_keystroke(doc, CursorPosition(0, 3), "Tab")

    assert doc.lines[0] == ["a", "b", "c", PAD, PAD, PAD, PAD, TAB]
    assert move == Move(5, 0)


def test_tab_at_column_7_writes_only_glyph():
    doc = create_test_document(["1234567"])
    move = apply_keystroke(doc, CursorPosition(0, 7), "Tab")

    assert doc.lines[0] == list("1234567") + [TAB]
    assert move == Move(1, 0)


def test_tab_on_a_tab_stop_advances_a_full_stop():
    """Tab at column 8 should never be a zero-width move."""
    doc = create_test_document(["abcdefgh"])
    move = apply_keystroke(doc, CursorPosition(0, 8), "Tab")

    assert move == Move(8, 0)
    assert len(doc.lines[0]) == 16
    assert doc.lines[0][15] == TAB


def test_tab_insert_mode_shifts_text_right():
    doc = create_test_document(["abc"])
    move = apply_keystroke(doc, CursorPosition(0, 0), "Tab", insert=True)

    assert doc.lines[0] == [PAD] * 7 + [TAB, "a", "b", "c"]
    assert move == Move(8, 0)


def test_tab_overwrite_mode_replaces_cells():
    doc = create_test_document(["abcdefghij"])
    move = apply_keystroke(doc, CursorPosition(0, 0), "Tab", insert=False)

    assert doc.lines[0] == [PAD] * 7 + [TAB, "i", "j"]
    assert move == Move(8, 0)


def test_tab_overwrite_runs_past_end_of_line():
    """Overwrite switches to appending once the line runs out."""
    doc = create_test_document(["abc"])
    move = apply_keystroke(doc, CursorPosition(0, 1), "Tab")

    assert doc.lines[0] == ["a"] + [PAD] * 6 + [TAB]
    assert move == Move(7, 0)


def test_raw_tab_character_is_accepted():
    """Frontends may forward the tab character instead of its name."""
    doc = create_test_document([""])
    move = apply_keystroke(doc, CursorPosition(0, 0), "\t")

    assert doc.lines[0] == [PAD] * 7 + [TAB]
    assert move == Move(8, 0)


@pytest.mark.parametrize("x", range(0, 17))
@pytest.mark.parametrize("insert", [True, False])
def test_tab_glyph_lands_before_next_stop(x, insert):
    """After a Tab the cursor sits on a stop and the glyph just before it."""
    doc = create_test_document(["x" * 20])
    move = apply_keystroke(doc, CursorPosition(0, x), "Tab", insert=insert)

    new_x = x + move.move_x
    assert is_tab_stop(new_x)
    assert 1 <= move.move_x <= 8
    assert doc.lines[0][new_x - 1] == TAB
    for column in range(x, new_x - 1):
        assert doc.lines[0][column] == PAD


def test_tab_command_direct():
    """TabCommand can be applied without the registry."""
    doc = create_test_document(["ab"])
    move = TabCommand().apply(doc, CursorPosition(0, 2), "Tab", False)
    assert move == Move(6, 0)
    assert doc.lines[0][7] == TAB
