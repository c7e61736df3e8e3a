#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/parsers/_pdf_source.py
"""PyMuPDF page adapter.

PyMuPDF reports drawings and text in page space, with the origin at the top
left and ``y`` growing downwards. The page decoder works in PDF space (origin
at the bottom left), so the adapter wraps the drawings in a transform that
flips the page, and maps each text span's origin and writing direction to a
PDF text matrix.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator

from devapps.parsers._page_content import Instruction, PathOp, TextRun

if TYPE_CHECKING:
    import fitz

logger = logging.getLogger(__name__)

__all__ = ["PyMuPDFPageSource"]


def _paint_operator(drawing: dict[str, Any]) -> str:
    """Map a PyMuPDF path type to the operator that paints it."""
    path_type = drawing.get("type") or ""
    even_odd = bool(drawing.get("even_odd"))
    if path_type == "f":
        return "eoFill" if even_odd else "fill"
    if path_type == "fs":
        return "eoFillStroke" if even_odd else "fillStroke"
    if path_type == "s":
        return "stroke"
    return "endPath"


def _line_segments(items: list) -> list[PathOp]:
    segments = []
    for item in items:
        kind = item[0]
        if kind == "l":
            p1, p2 = item[1], item[2]
            segments.append(PathOp("moveTo", (p1.x, p1.y)))
            segments.append(PathOp("lineTo", (p2.x, p2.y)))
        elif kind == "c":
            p1, p2, p3, p4 = item[1:5]
            segments.append(PathOp("moveTo", (p1.x, p1.y)))
            segments.append(PathOp("curveTo", (p2.x, p2.y, p3.x, p3.y, p4.x, p4.y)))
    return segments


class PyMuPDFPageSource:
    """Expose a ``fitz.Page`` as drawing instructions and text runs.

    Parameters
    ----------
    page : fitz.Page
        An open PyMuPDF page

    """

    def __init__(self, page: "fitz.Page"):
        """Wrap a page."""
        self.page = page

    @property
    def height(self) -> float:
        """Page height in points."""
        return float(self.page.rect.height)

    def instructions(self) -> Iterator[Instruction]:
        """Yield the page's vector drawings as decoder instructions.

        Every rectangle is emitted as its own path followed by the drawing's
        paint operator, since PyMuPDF may merge consecutive rectangles with the
        same style into one drawing.
        """
        yield Instruction("save")
        yield Instruction("transform", (1.0, 0.0, 0.0, -1.0, 0.0, self.height))

        for drawing in self.page.get_drawings():
            items = drawing.get("items") or []
            paint = _paint_operator(drawing)

            for item in items:
                if item[0] != "re":
                    continue
                rect = item[1]
                yield Instruction("constructPath", (PathOp("rectangle", (rect.x0, rect.y0, rect.width, rect.height)),))
                yield Instruction(paint)

            segments = _line_segments(items)
            if segments:
                yield Instruction("constructPath", tuple(segments))
                yield Instruction(paint)

        yield Instruction("restore")

    def text_runs(self) -> Iterator[TextRun]:
        """Yield one text run per non-empty span on the page."""
        height = self.height
        blocks = self.page.get_text("dict")["blocks"]
        for block in blocks:
            if block.get("type", 0) != 0:
                continue
            for line in block.get("lines", []):
                dx, dy = line.get("dir", (1.0, 0.0))
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text.strip():
                        continue
                    size = float(span.get("size", 0.0))
                    origin_x, origin_y = span["origin"]
                    x0, _, x1, _ = span["bbox"]
                    yield TextRun(
                        text=text,
                        transform=(size * dx, -size * dy, size * dy, size * dx, origin_x, height - origin_y),
                        width=abs(x1 - x0),
                    )
