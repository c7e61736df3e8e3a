#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/geometry.py
"""Rectangle primitives used to reconstruct register tables.

Rectangles are axis-aligned and stored as ``(x, y, width, height)``. Before any
grouping happens a page's rectangles are flipped with :func:`invert_vertical`,
after which ``y`` grows downwards (reading order) and ``y`` is the top edge.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

__all__ = [
    "Cell",
    "Element",
    "Rectangle",
    "area",
    "containment_percentage",
    "horizontal_overlap_percentage",
    "intersect",
    "invert_vertical",
]


@dataclass
class Rectangle:
    """An axis-aligned rectangle; width and height may be zero."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the edge opposite ``y``."""
        return self.y + self.height


@dataclass
class Element(Rectangle):
    """A single positioned run of text."""

    text: str = ""


@dataclass
class Cell(Rectangle):
    """A grid cell synthesized from ruling lines, with the text it owns."""

    elements: list[Element] = field(default_factory=list)

    @property
    def texts(self) -> list[str]:
        """Texts of the owned elements, in ownership order."""
        return [element.text for element in self.elements]


def intersect(rectangle1: Rectangle, rectangle2: Rectangle) -> Rectangle:
    """Return the overlap of two rectangles.

    Parameters
    ----------
    rectangle1, rectangle2 : Rectangle
        Rectangles to intersect

    Returns
    -------
    Rectangle
        The overlapping region, or ``Rectangle(0, 0, 0, 0)`` when the
        rectangles are disjoint on either axis. Rectangles that only touch
        produce a zero-area rectangle along the shared edge.

    """
    x1 = max(rectangle1.x, rectangle2.x)
    y1 = max(rectangle1.y, rectangle2.y)
    x2 = min(rectangle1.right, rectangle2.right)
    y2 = min(rectangle1.bottom, rectangle2.bottom)
    if x2 >= x1 and y2 >= y1:
        return Rectangle(x1, y1, x2 - x1, y2 - y1)
    return Rectangle(0, 0, 0, 0)


def area(rectangle: Rectangle) -> float:
    """Return ``width * height``."""
    return rectangle.width * rectangle.height


def containment_percentage(element: Rectangle, cell: Rectangle) -> float:
    """Percentage of the element's area that lies inside the cell.

    For example, if a quarter of the element lies within the cell this
    returns 25. An element with zero area is contained 0%.

    Parameters
    ----------
    element : Rectangle
        The rectangle being placed
    cell : Rectangle
        The candidate container

    Returns
    -------
    float
        Value in [0, 100]

    """
    element_area = area(element)
    if element_area == 0:
        return 0.0
    return area(intersect(cell, element)) * 100 / element_area


def horizontal_overlap_percentage(rectangle1: Optional[Rectangle], rectangle2: Optional[Rectangle]) -> float:
    """Ratio of the x-projection intersection to the x-projection union.

    The y axis is ignored entirely, so this measures whether two rectangles
    sit in the same column regardless of which row they are in.

    Parameters
    ----------
    rectangle1, rectangle2 : Rectangle or None
        Rectangles to compare. A missing rectangle (for example a heading that
        was not found on the page) overlaps nothing.

    Returns
    -------
    float
        0 when either rectangle is missing, has zero width, or the projections
        are disjoint; 100 for identical projections.

    """
    if rectangle1 is None or rectangle2 is None:
        return 0.0

    start_x1, end_x1 = rectangle1.x, rectangle1.right
    start_x2, end_x2 = rectangle2.x, rectangle2.right

    if start_x1 >= end_x2 or end_x1 <= start_x2 or rectangle1.width == 0 or rectangle2.width == 0:
        return 0.0

    intersection_width = min(end_x1, end_x2) - max(start_x1, start_x2)
    union_width = max(end_x1, end_x2) - min(start_x1, start_x2)
    return intersection_width * 100 / union_width


def invert_vertical(rectangle: Rectangle) -> None:
    """Flip a rectangle from PDF space (y up) to reading space (y down), in place."""
    rectangle.y = -(rectangle.y + rectangle.height)
