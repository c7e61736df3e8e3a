#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/parsers/_page_content.py
"""Page content decoding.

This private module turns one page's drawing instructions and text runs into
the geometry the table strategies work on: ruling lines, grid cells and text
elements, all in reading space (``y`` grows downwards).

Register tables draw their ruling lines as thin filled rectangles, so the
instruction stream is replayed with a transform stack and every filled
rectangle is kept; anything else that is drawn is ignored.

"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from devapps.constants import (
    DISCARD_PATH_OPERATORS,
    FILL_OPERATORS,
    HORIZONTAL_LINE_MAX_HEIGHT,
    HORIZONTAL_LINE_MIN_WIDTH,
    IDENTITY_TRANSFORM,
    VERTICAL_LINE_MAX_WIDTH,
    VERTICAL_LINE_MIN_HEIGHT,
)
from devapps.geometry import Cell, Element, Rectangle, invert_vertical
from devapps.parsers._grid import build_grid_cells

logger = logging.getLogger(__name__)

__all__ = [
    "DecodedPage",
    "Instruction",
    "PathOp",
    "TextRun",
    "apply_transform",
    "classify_lines",
    "decode_page",
    "decode_text_runs",
    "extract_filled_rectangles",
    "multiply_transforms",
]

Transform = tuple[float, float, float, float, float, float]


@dataclass(frozen=True)
class PathOp:
    """One segment of a path: ``moveTo``, ``lineTo``, ``curveTo``, ``rectangle`` or ``closePath``.

    A ``rectangle`` carries ``(x, y, width, height)`` in user space.
    """

    kind: str
    args: tuple[float, ...] = ()


@dataclass(frozen=True)
class Instruction:
    """A tagged drawing operation from a page's content stream.

    Recognized operators are ``save``, ``restore``, ``transform`` (args: the
    six matrix values), ``constructPath`` (args: :class:`PathOp` segments),
    the fill operators ``fill``, ``eoFill``, ``fillStroke`` and
    ``eoFillStroke``, and the non-filling path ends ``stroke`` and
    ``endPath``. Any other operator is ignored.
    """

    op: str
    args: tuple[Any, ...] = ()


@dataclass(frozen=True)
class TextRun:
    """A positioned run of text as reported by the page decoder.

    Parameters
    ----------
    text : str
        The characters shown
    transform : tuple
        Text rendering matrix ``(a, b, c, d, e, f)`` in PDF space; ``e`` and
        ``f`` locate the baseline start
    width : float
        Measured advance of the run

    """

    text: str
    transform: Transform
    width: float


@dataclass
class DecodedPage:
    """Geometry recovered from one page, ready for table reconstruction.

    ``horizontal_lines`` and ``vertical_lines`` stay in PDF space and are only
    used to choose a strategy; ``cells`` and ``elements`` are in reading space.
    """

    number: int
    horizontal_lines: list[Rectangle] = field(default_factory=list)
    vertical_lines: list[Rectangle] = field(default_factory=list)
    cells: list[Cell] = field(default_factory=list)
    elements: list[Element] = field(default_factory=list)

    @property
    def has_grid(self) -> bool:
        """Whether the page has both horizontal and vertical ruling lines."""
        return bool(self.horizontal_lines) and bool(self.vertical_lines)

    def element_summary(self) -> str:
        """Every element's text wrapped in square brackets, for skip diagnostics."""
        return "".join(f"[{element.text}]" for element in self.elements)


def multiply_transforms(m1: Sequence[float], m2: Sequence[float]) -> Transform:
    """Concatenate two PDF matrices: ``m2`` is applied first, then ``m1``."""
    return (
        m1[0] * m2[0] + m1[2] * m2[1],
        m1[1] * m2[0] + m1[3] * m2[1],
        m1[0] * m2[2] + m1[2] * m2[3],
        m1[1] * m2[2] + m1[3] * m2[3],
        m1[0] * m2[4] + m1[2] * m2[5] + m1[4],
        m1[1] * m2[4] + m1[3] * m2[5] + m1[5],
    )


def apply_transform(x: float, y: float, m: Sequence[float]) -> tuple[float, float]:
    """Map a point through a PDF matrix."""
    return x * m[0] + y * m[2] + m[4], x * m[1] + y * m[3] + m[5]


def _path_rectangle(segments: Iterable[PathOp], transform: Transform) -> Rectangle | None:
    """Return the last rectangle of a path in device space, or None."""
    rectangle = None
    for segment in segments:
        if segment.kind != "rectangle":
            continue
        x, y, width, height = segment.args[:4]
        x1, y1 = apply_transform(x, y, transform)
        x2, y2 = apply_transform(x + width, y + height, transform)
        rectangle = Rectangle(min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1))
    return rectangle


def extract_filled_rectangles(instructions: Iterable[Instruction]) -> list[Rectangle]:
    """Replay an instruction stream and collect every filled rectangle.

    Parameters
    ----------
    instructions : Iterable[Instruction]
        The page's drawing operations in content-stream order

    Returns
    -------
    list[Rectangle]
        Filled rectangles in PDF space, in drawing order

    """
    rectangles: list[Rectangle] = []
    transform: Transform = IDENTITY_TRANSFORM
    stack: list[Transform] = [transform]
    pending: Rectangle | None = None

    for instruction in instructions:
        op = instruction.op
        if op == "save":
            stack.append(transform)
        elif op == "restore":
            if stack:
                transform = stack.pop()
            else:
                logger.debug("Unbalanced restore in page content; resetting the transform")
                transform = IDENTITY_TRANSFORM
        elif op == "transform":
            transform = multiply_transforms(transform, instruction.args)
        elif op == "constructPath":
            pending = _path_rectangle(instruction.args, transform)
        elif op in FILL_OPERATORS:
            if pending is not None:
                rectangles.append(pending)
            pending = None
        elif op in DISCARD_PATH_OPERATORS:
            pending = None

    return rectangles


def classify_lines(rectangles: Iterable[Rectangle]) -> tuple[list[Rectangle], list[Rectangle]]:
    """Split filled rectangles into horizontal and vertical ruling lines.

    Short or small rectangles, such as the strokes of a logo, are neither and
    are dropped; they would otherwise add spurious rows and columns to the
    grid.

    Returns
    -------
    tuple[list[Rectangle], list[Rectangle]]
        ``(horizontal_lines, vertical_lines)``

    """
    horizontal_lines: list[Rectangle] = []
    vertical_lines: list[Rectangle] = []
    for line in rectangles:
        if line.height <= HORIZONTAL_LINE_MAX_HEIGHT and line.width >= HORIZONTAL_LINE_MIN_WIDTH:
            horizontal_lines.append(line)
        elif line.width <= VERTICAL_LINE_MAX_WIDTH and line.height >= VERTICAL_LINE_MIN_HEIGHT:
            vertical_lines.append(line)
    return horizontal_lines, vertical_lines


def decode_text_runs(text_runs: Iterable[TextRun]) -> list[Element]:
    """Convert text runs to elements in PDF space.

    The reported glyph height of a run is often exaggerated, so the height is
    taken from the length of the matrix's y basis vector instead.
    """
    elements = []
    for run in text_runs:
        transform = run.transform
        height = math.hypot(transform[2], transform[3])
        elements.append(Element(x=transform[4], y=transform[5], width=run.width, height=height, text=run.text))
    return elements


def decode_page(instructions: Iterable[Instruction], text_runs: Iterable[TextRun], page_number: int) -> DecodedPage:
    """Decode one page into ruling lines, grid cells and text elements.

    Cells and elements are flipped into reading space exactly once here,
    before any grouping logic sees them.

    Parameters
    ----------
    instructions : Iterable[Instruction]
        The page's drawing operations
    text_runs : Iterable[TextRun]
        The page's positioned text
    page_number : int
        1-based page number, for diagnostics

    Returns
    -------
    DecodedPage
        The decoded page

    """
    horizontal_lines, vertical_lines = classify_lines(extract_filled_rectangles(instructions))
    cells = build_grid_cells(horizontal_lines, vertical_lines)
    elements = decode_text_runs(text_runs)

    for rectangle in (*cells, *elements):
        invert_vertical(rectangle)

    logger.debug(
        "Page %d: %d horizontal lines, %d vertical lines, %d cells, %d elements",
        page_number,
        len(horizontal_lines),
        len(vertical_lines),
        len(cells),
        len(elements),
    )
    return DecodedPage(
        number=page_number,
        horizontal_lines=horizontal_lines,
        vertical_lines=vertical_lines,
        cells=cells,
        elements=elements,
    )
