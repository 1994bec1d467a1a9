from dataclasses import dataclass

from .model import Document


@dataclass
class Viewport:
    """Rectangle of cells requested by a display frontend."""
    xpos: int = 0
    ypos: int = 0
    width: int = 0
    height: int = 0

    @property
    def cell_count(self) -> int:
        return max(0, self.width) * max(0, self.height)


def render_viewport(document: Document, viewport: Viewport) -> list[str]:
    """Extract the cells inside ``viewport`` in row-major order.

    Always returns ``width * height`` strings so the caller can rebuild the
    grid directly; positions outside the document render as "".
    """
    content: list[str] = []
    for y in range(viewport.ypos, viewport.ypos + viewport.height):
        for x in range(viewport.xpos, viewport.xpos + viewport.width):
            content.append(document.cell(y, x))
    return content


def split_rows(content: list[str], width: int) -> list[list[str]]:
    """Rebuild the 2-D grid from a flat viewport rendering."""
    if width <= 0:
        return []
    return [content[i:i + width] for i in range(0, len(content), width)]
