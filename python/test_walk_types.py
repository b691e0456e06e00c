"""Tests for walk_types module."""

from walk_types import Boundary, Heading, PathNode, Position


# =============================================================================
# Test Grid Geometry
# =============================================================================


class TestPosition:
    """Tests for integer positions."""

    def test_addition(self) -> None:
        """Positions add component-wise."""
        assert Position(1, 2) + Position(3, -4) == Position(4, -2)

    def test_manhattan(self) -> None:
        """Manhattan distance is symmetric and ignores sign."""
        assert Position(0, 0).manhattan(Position(2, 3)) == 5
        assert Position(2, 3).manhattan(Position(0, 0)) == 5
        assert Position(1, 1).manhattan(Position(1, 1)) == 0

    def test_positions_are_hashable_values(self) -> None:
        """Equal positions collapse in a set."""
        assert len({Position(1, 1), Position(1, 1), Position(0, 1)}) == 2


class TestBoundary:
    """Tests for rectangular boundaries."""

    def test_dimensions(self) -> None:
        """Width and height count cells inclusively."""
        boundary = Boundary(Position(0, 0), Position(2, 4))
        assert boundary.width == 3
        assert boundary.height == 5
        assert boundary.cell_count == 15

    def test_dimensions_with_reversed_corners(self) -> None:
        """Corner order does not change the size."""
        boundary = Boundary(Position(2, 4), Position(0, 0))
        assert boundary.width == 3
        assert boundary.height == 5

    def test_single_cell(self) -> None:
        """Identical corners give a 1x1 boundary."""
        boundary = Boundary(Position(3, 3), Position(3, 3))
        assert boundary.width == 1
        assert boundary.height == 1

    def test_contains_is_inclusive(self) -> None:
        """Both corners and the interior are contained."""
        boundary = Boundary(Position(0, 0), Position(2, 2))
        assert boundary.contains(Position(0, 0))
        assert boundary.contains(Position(2, 2))
        assert boundary.contains(Position(1, 2))
        assert not boundary.contains(Position(3, 0))
        assert not boundary.contains(Position(0, -1))

    def test_contains_with_reversed_corners(self) -> None:
        """Containment works whichever corner comes first."""
        boundary = Boundary(Position(2, 0), Position(0, 2))
        assert boundary.contains(Position(1, 1))
        assert boundary.contains(Position(0, 0))
        assert not boundary.contains(Position(-1, 1))

    def test_in_operator(self) -> None:
        """`in` delegates to contains and rejects non-positions."""
        boundary = Boundary(Position(0, 0), Position(1, 1))
        assert Position(1, 0) in boundary
        assert Position(2, 0) not in boundary
        assert (1, 0) not in boundary

    def test_cells_row_major(self) -> None:
        """cells() walks rows from the min corner."""
        boundary = Boundary(Position(1, 1), Position(0, 0))
        assert list(boundary.cells()) == [
            Position(0, 0),
            Position(1, 0),
            Position(0, 1),
            Position(1, 1),
        ]


# =============================================================================
# Test Heading Model
# =============================================================================


class TestHeading:
    """Tests for compass headings."""

    def test_turn_right_cycle(self) -> None:
        """Turning right goes East, South, West, North, East."""
        assert Heading.EAST.turn_right() == Heading.SOUTH
        assert Heading.SOUTH.turn_right() == Heading.WEST
        assert Heading.WEST.turn_right() == Heading.NORTH
        assert Heading.NORTH.turn_right() == Heading.EAST

    def test_turn_left_cycle(self) -> None:
        """Turning left runs the cycle backwards."""
        assert Heading.EAST.turn_left() == Heading.NORTH
        assert Heading.NORTH.turn_left() == Heading.WEST
        assert Heading.WEST.turn_left() == Heading.SOUTH
        assert Heading.SOUTH.turn_left() == Heading.EAST

    def test_left_undoes_right(self) -> None:
        """A left turn after a right turn restores the heading."""
        for heading in Heading:
            assert heading.turn_right().turn_left() == heading

    def test_four_turns_return_home(self) -> None:
        """Four right turns are the identity."""
        for heading in Heading:
            h = heading
            for _ in range(4):
                h = h.turn_right()
            assert h == heading

    def test_offsets(self) -> None:
        """Offsets use screen coordinates (North is negative y)."""
        assert Heading.NORTH.offset == Position(0, -1)
        assert Heading.EAST.offset == Position(1, 0)
        assert Heading.SOUTH.offset == Position(0, 1)
        assert Heading.WEST.offset == Position(-1, 0)

    def test_glyphs(self) -> None:
        """Each heading displays as an arrow."""
        assert [h.glyph for h in Heading] == ["↑", "→", "↓", "←"]
        assert str(Heading.EAST) == "→"


# =============================================================================
# Test Path Node
# =============================================================================


class TestPathNode:
    """Tests for immutable walk nodes."""

    def test_seed_node(self) -> None:
        """A node without parent is a walk of length one."""
        node = PathNode(Position(0, 0), Heading.EAST)
        assert node.parent is None
        assert node.length == 1
        assert node.path == (node,)

    def test_successor_moves(self) -> None:
        """Successors turn first, then step along the new heading."""
        node = PathNode(Position(5, 5), Heading.EAST)

        left = node.step_left()
        assert left.heading == Heading.NORTH
        assert left.position == Position(5, 4)

        straight = node.step_straight()
        assert straight.heading == Heading.EAST
        assert straight.position == Position(6, 5)

        right = node.step_right()
        assert right.heading == Heading.SOUTH
        assert right.position == Position(5, 6)

        for child in (left, straight, right):
            assert child.parent is node
            assert child.length == 2

    def test_successors_order(self) -> None:
        """successors() lists left, straight, right."""
        node = PathNode(Position(0, 0), Heading.SOUTH)
        headings = [child.heading for child in node.successors()]
        assert headings == [Heading.EAST, Heading.SOUTH, Heading.WEST]

    def test_successors_never_reverse(self) -> None:
        """No successor returns to the parent's cell."""
        node = PathNode(Position(0, 0), Heading.EAST).step_straight()
        for child in node.successors():
            assert child.position != Position(0, 0)

    def test_path_is_first_to_last(self) -> None:
        """path runs from the seed to this node."""
        n0 = PathNode(Position(0, 0), Heading.EAST)
        n1 = n0.step_straight()
        n2 = n1.step_right()
        assert n2.path == (n0, n1, n2)
        assert n2.length == 3
        assert n2.steps == (
            (Position(0, 0), Heading.EAST),
            (Position(1, 0), Heading.EAST),
            (Position(1, 1), Heading.SOUTH),
        )

    def test_path_is_cached(self) -> None:
        """path is computed once and returned as the same object."""
        node = PathNode(Position(0, 0), Heading.EAST).step_straight().step_left()
        assert node.path is node.path

    def test_intersects_itself(self) -> None:
        """Closing a square lands back on the seed's cell."""
        n0 = PathNode(Position(0, 0), Heading.EAST)
        n1 = n0.step_straight()
        n2 = n1.step_right()
        n3 = n2.step_right()
        n4 = n3.step_right()

        assert not n3.intersects_itself()
        assert n4.position == Position(0, 0)
        assert n4.intersects_itself()

    def test_siblings_are_independent(self) -> None:
        """Branches share a prefix but not each other's steps."""
        root = PathNode(Position(0, 0), Heading.EAST)
        a = root.step_left()
        b = root.step_right()
        assert a.path[0] is b.path[0]
        assert a not in b.path

    def test_identity_comparison(self) -> None:
        """Separately built nodes with the same steps are distinct objects."""
        a = PathNode(Position(0, 0), Heading.EAST)
        b = PathNode(Position(0, 0), Heading.EAST)
        assert a != b
        assert a.steps == b.steps

    def test_str_shows_headings(self) -> None:
        """str() concatenates the heading arrows of the walk."""
        node = PathNode(Position(0, 0), Heading.EAST).step_right().step_left()
        assert str(node) == "→↓→"
