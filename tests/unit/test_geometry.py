#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_geometry.py
"""Unit tests for the rectangle primitives.

Tests cover:
- Intersection of overlapping, disjoint and touching rectangles
- Containment percentage, including the even split between two cells
- Horizontal overlap percentage bounds and missing rectangles
- Vertical inversion into reading space
- Properties of intersect and overlap over random rectangles

"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from devapps.geometry import (
    Cell,
    Element,
    Rectangle,
    area,
    containment_percentage,
    horizontal_overlap_percentage,
    intersect,
    invert_vertical,
)

coordinates = st.integers(min_value=-1000, max_value=1000)
extents = st.integers(min_value=0, max_value=500)
rectangles = st.builds(Rectangle, x=coordinates, y=coordinates, width=extents, height=extents)


@pytest.mark.unit
class TestIntersect:
    """Tests for intersect()."""

    def test_overlapping_rectangles(self):
        """Overlapping rectangles produce the shared region."""
        result = intersect(Rectangle(0, 0, 10, 10), Rectangle(5, 5, 10, 10))
        assert result == Rectangle(5, 5, 5, 5)

    def test_contained_rectangle(self):
        """A rectangle inside another intersects to itself."""
        result = intersect(Rectangle(0, 0, 100, 100), Rectangle(10, 20, 30, 40))
        assert result == Rectangle(10, 20, 30, 40)

    def test_disjoint_horizontally(self):
        """Rectangles apart on the x axis produce the empty rectangle at the origin."""
        assert intersect(Rectangle(0, 0, 10, 10), Rectangle(20, 0, 10, 10)) == Rectangle(0, 0, 0, 0)

    def test_disjoint_vertically(self):
        """Rectangles apart on the y axis produce the empty rectangle at the origin."""
        assert intersect(Rectangle(0, 0, 10, 10), Rectangle(0, 20, 10, 10)) == Rectangle(0, 0, 0, 0)

    def test_touching_edges(self):
        """Touching rectangles produce a zero-width rectangle along the shared edge."""
        result = intersect(Rectangle(0, 0, 10, 10), Rectangle(10, 0, 10, 10))
        assert result == Rectangle(10, 0, 0, 10)
        assert area(result) == 0

    @given(rectangles, rectangles)
    def test_intersect_is_commutative(self, a, b):
        """Property: intersect(a, b) == intersect(b, a)."""
        assert intersect(a, b) == intersect(b, a)

    @given(rectangles, rectangles)
    def test_intersection_fits_inside_both(self, a, b):
        """Property: the intersection area never exceeds either rectangle's area."""
        overlap = area(intersect(a, b))
        assert overlap <= area(a)
        assert overlap <= area(b)


@pytest.mark.unit
class TestContainmentPercentage:
    """Tests for containment_percentage()."""

    def test_element_fully_inside(self):
        """An element wholly inside a cell is contained 100%."""
        element = Element(10, 10, 20, 5, text="x")
        cell = Cell(0, 0, 100, 20)
        assert containment_percentage(element, cell) == 100

    def test_element_outside(self):
        """An element outside a cell is contained 0%."""
        assert containment_percentage(Element(200, 0, 20, 5), Cell(0, 0, 100, 20)) == 0

    def test_quarter_inside(self):
        """A quarter of the element's area inside gives 25."""
        element = Element(-10, -10, 20, 20)
        assert containment_percentage(element, Cell(0, 0, 100, 100)) == 25

    def test_even_split_is_not_a_majority(self):
        """An element split evenly between adjacent cells is 50% in each."""
        element = Element(90, 5, 20, 10)
        left = Cell(0, 0, 100, 20)
        right = Cell(100, 0, 100, 20)
        assert containment_percentage(element, left) == 50
        assert containment_percentage(element, right) == 50

    def test_zero_area_element(self):
        """An element with no area is never contained."""
        assert containment_percentage(Element(10, 10, 0, 10), Cell(0, 0, 100, 100)) == 0


@pytest.mark.unit
class TestHorizontalOverlapPercentage:
    """Tests for horizontal_overlap_percentage()."""

    def test_identical_projections(self):
        """Identical x projections overlap 100% whatever their y."""
        assert horizontal_overlap_percentage(Rectangle(10, 0, 50, 5), Rectangle(10, 500, 50, 80)) == 100

    def test_partial_overlap(self):
        """Overlap is the intersection over the union of the x projections."""
        assert horizontal_overlap_percentage(Rectangle(0, 0, 100, 1), Rectangle(50, 0, 100, 1)) == pytest.approx(
            100 * 50 / 150
        )

    def test_disjoint(self):
        """Disjoint projections overlap 0%."""
        assert horizontal_overlap_percentage(Rectangle(0, 0, 10, 1), Rectangle(20, 0, 10, 1)) == 0

    def test_touching(self):
        """Projections that only touch overlap 0%."""
        assert horizontal_overlap_percentage(Rectangle(0, 0, 10, 1), Rectangle(10, 0, 10, 1)) == 0

    def test_zero_width(self):
        """A zero-width rectangle overlaps nothing."""
        assert horizontal_overlap_percentage(Rectangle(5, 0, 0, 1), Rectangle(0, 0, 10, 1)) == 0

    @pytest.mark.parametrize("missing_first", [True, False])
    def test_missing_rectangle(self, missing_first):
        """A missing rectangle overlaps nothing."""
        rectangle = Rectangle(0, 0, 10, 1)
        args = (None, rectangle) if missing_first else (rectangle, None)
        assert horizontal_overlap_percentage(*args) == 0

    @given(rectangles, rectangles)
    def test_bounded(self, a, b):
        """Property: overlap lies within [0, 100]."""
        assert 0 <= horizontal_overlap_percentage(a, b) <= 100

    @given(rectangles)
    def test_self_overlap(self, a):
        """Property: a rectangle with width overlaps itself 100%."""
        expected = 100 if a.width > 0 else 0
        assert horizontal_overlap_percentage(a, a) == expected


@pytest.mark.unit
class TestInvertVertical:
    """Tests for invert_vertical()."""

    def test_inverts_in_place(self):
        """The y coordinate becomes -(y + height)."""
        element = Element(5, 700, 40, 10, text="A")
        invert_vertical(element)
        assert (element.x, element.y, element.width, element.height) == (5, -710, 40, 10)

    def test_preserves_vertical_order(self):
        """A higher element on the page ends up above a lower one in reading space."""
        upper = Rectangle(0, 700, 10, 10)
        lower = Rectangle(0, 600, 10, 10)
        invert_vertical(upper)
        invert_vertical(lower)
        assert upper.y < lower.y


@pytest.mark.unit
class TestRectangleTypes:
    """Tests for the rectangle dataclasses."""

    def test_edges(self):
        """Right and bottom edges follow from the extents."""
        rectangle = Rectangle(10, 20, 30, 40)
        assert rectangle.right == 40
        assert rectangle.bottom == 60

    def test_cell_texts(self):
        """A cell lists its elements' texts in ownership order."""
        cell = Cell(0, 0, 10, 10, elements=[Element(0, 0, 1, 1, "a"), Element(0, 0, 1, 1, "b")])
        assert cell.texts == ["a", "b"]

    def test_cells_do_not_share_elements(self):
        """Each cell gets its own element list."""
        first, second = Cell(0, 0, 1, 1), Cell(1, 0, 1, 1)
        first.elements.append(Element(0, 0, 1, 1))
        assert second.elements == []
