"""Test the engine's combined request handling."""

import threading

from gridtext.collaborators import ScrollbarRenderer, SyntaxHighlighter
from gridtext.engine import Engine
from gridtext.model import CursorPosition, Document, TextRange
from gridtext.protocol import ContentRequest, CopyRequest, PasteRequest, WriteRequest
from gridtext.view import Viewport


def content_request(**kwargs):
    """Build a request with a 10x3 viewport at the origin."""
    return ContentRequest(xpos=0, ypos=0, width=10, height=3, **kwargs)


def test_default_engine_holds_seed_document():
    engine = Engine()
    assert engine.text() == ["Hellocruel", "world"]


def test_render_only_request():
    engine = Engine()
    response = engine.handle(ContentRequest(xpos=0, ypos=0, width=5, height=2))
    assert response.content == list("Hello") + list("world")
    assert response.copy_response is None
    assert response.write is None
    assert response.fg_color == []


def test_write_example_through_engine():
    engine = Engine.from_seed(["Hello", "world"])
    response = engine.handle(content_request(write=WriteRequest(x=5, y=0, key="!")))
    assert response.write.move_x == 1
    assert response.write.move_y == 0

    response = engine.handle(content_request(write=WriteRequest(x=5, y=0, key="Enter")))
    assert engine.text() == ["Hello", "!", "world"]
    assert (response.write.move_x, response.write.move_y) == (-5, 1)
    assert response.content[10:20] == ["!"] + [""] * 9


def test_copy_sees_document_before_write():
    """Copy runs before the write of the same request."""
    engine = Engine.from_seed(["Hello"])
    response = engine.handle(content_request(
        copy_request=CopyRequest(x0=0, y0=0, x1=5, y1=0),
        write=WriteRequest(x=0, y=0, key="X", insert=True),
    ))
    assert response.copy_response.buffer == [b"Hello"]
    assert engine.text() == ["XHello"]


def test_render_sees_write_and_paste():
    engine = Engine.from_seed(["ab"])
    response = engine.handle(content_request(
        write=WriteRequest(x=2, y=0, key="c"),
        paste=PasteRequest(x=0, y=0, buffer=[b"12"]),
    ))
    # Write lands first, then the paste is applied at its own coordinates
    assert engine.text() == ["12abc"]
    assert response.content[:5] == list("12abc")


def test_rejected_copy_gives_empty_buffer():
    engine = Engine.from_seed(["Hello"])
    response = engine.handle(content_request(copy_request=CopyRequest(x0=0, y0=0, x1=0, y1=4)))
    assert response.copy_response is not None
    assert response.copy_response.buffer == []


def test_rejected_write_gives_zero_move():
    engine = Engine.from_seed(["Hello"])
    response = engine.handle(content_request(write=WriteRequest(x=9, y=9, key="x")))
    assert (response.write.move_x, response.write.move_y) == (0, 0)
    assert engine.text() == ["Hello"]


def test_single_operations():
    engine = Engine.from_seed(["Hello", "world"])
    assert engine.copy(TextRange.from_xy(0, 1, 3, 1)) == ["wor"]
    assert engine.write(CursorPosition(1, 5), "!").move_x == 1
    assert engine.paste(CursorPosition(0, 0), [b">"])
    assert engine.render(Viewport(0, 0, 3, 1)) == [">", "H", "e"]
    assert engine.line_lengths() == [6, 6]
    snapshot = engine.snapshot()
    snapshot[0].clear()
    assert engine.text() == [">Hello", "world!"]


def test_highlighter_output_is_returned():
    class Marker(SyntaxHighlighter):
        def highlight(self, lines):
            return [[1] * len(line) for line in lines]

    engine = Engine(Document.from_strings(["ab", "c"]), highlighter=Marker())
    response = engine.handle(content_request())
    assert response.fg_color == [[1, 1], [1]]


def test_scrollbar_renderer():
    class Fixed(ScrollbarRenderer):
        def render(self, lines):
            return b"\x89PNG" + bytes([len(lines)])

    assert Engine().render_scrollbar() is None
    assert Engine(scrollbar=Fixed()).render_scrollbar() == b"\x89PNG\x02"


def test_concurrent_writes_are_serialized():
    """Every concurrent append lands exactly once."""
    engine = Engine.from_seed([""])
    threads_count, per_thread = 8, 50

    def typist():
        for _ in range(per_thread):
            # Each paste prepends one cell
            request = content_request(paste=PasteRequest(x=0, y=0, buffer=[b"x"]))
            engine.handle(request)

    threads = [threading.Thread(target=typist) for _ in range(threads_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert engine.text() == ["x" * threads_count * per_thread]
