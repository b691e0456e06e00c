"""
Shared type definitions for the walk generator.

Coordinates are screen-style: x grows to the East, y grows to the South.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


@dataclass(frozen=True)
class Position:
    """An integer cell coordinate."""

    x: int
    y: int

    def __add__(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def manhattan(self, other: Position) -> int:
        """Number of unit steps between two cells, ignoring obstacles."""
        return abs(self.x - other.x) + abs(self.y - other.y)


@dataclass(frozen=True)
class Boundary:
    """Axis-aligned rectangle spanned by two corner cells (inclusive)."""

    a: Position
    b: Position

    @property
    def min_x(self) -> int:
        return min(self.a.x, self.b.x)

    @property
    def max_x(self) -> int:
        return max(self.a.x, self.b.x)

    @property
    def min_y(self) -> int:
        return min(self.a.y, self.b.y)

    @property
    def max_y(self) -> int:
        return max(self.a.y, self.b.y)

    @property
    def width(self) -> int:
        return abs(self.b.x - self.a.x) + 1

    @property
    def height(self) -> int:
        return abs(self.b.y - self.a.y) + 1

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def contains(self, p: Position) -> bool:
        """True if p lies within both corner ranges, whatever the corner order."""
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def __contains__(self, p: object) -> bool:
        return isinstance(p, Position) and self.contains(p)

    def cells(self) -> Iterator[Position]:
        """Yield every cell row by row, starting at the min corner."""
        for y in range(self.min_y, self.max_y + 1):
            for x in range(self.min_x, self.max_x + 1):
                yield Position(x, y)


class Heading(Enum):
    """Compass heading of a walk. Declaration order is the right-turn cycle."""

    NORTH = "N"  # Up (decreasing y)
    EAST = "E"  # Right (increasing x)
    SOUTH = "S"  # Down (increasing y)
    WEST = "W"  # Left (decreasing x)

    @property
    def offset(self) -> Position:
        return _OFFSETS[self]

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    def turn_left(self) -> Heading:
        order = list(Heading)
        return order[(order.index(self) - 1) % len(order)]

    def turn_right(self) -> Heading:
        order = list(Heading)
        return order[(order.index(self) + 1) % len(order)]

    def __str__(self) -> str:
        return self.glyph


_OFFSETS = {
    Heading.NORTH: Position(0, -1),
    Heading.EAST: Position(1, 0),
    Heading.SOUTH: Position(0, 1),
    Heading.WEST: Position(-1, 0),
}

_GLYPHS = {
    Heading.NORTH: "↑",
    Heading.EAST: "→",
    Heading.SOUTH: "↓",
    Heading.WEST: "←",
}


Step = tuple[Position, Heading]


@dataclass(frozen=True, eq=False)
class PathNode:
    """
    One step of a walk, linked to the step before it.

    Nodes are immutable and compared by identity. The parent chain is built
    strictly by appending, so it never loops back on itself. `path` and
    `length` are derived once at construction.
    """

    position: Position
    heading: Heading
    parent: PathNode | None = field(default=None, repr=False)
    path: tuple[PathNode, ...] = field(init=False, repr=False)
    length: int = field(init=False)

    def __post_init__(self) -> None:
        path = (self,) if self.parent is None else self.parent.path + (self,)
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "length", len(path))

    @property
    def steps(self) -> tuple[Step, ...]:
        """The walk as ordered (position, heading) pairs."""
        return tuple((node.position, node.heading) for node in self.path)

    def _step(self, heading: Heading) -> PathNode:
        return PathNode(self.position + heading.offset, heading, self)

    def step_left(self) -> PathNode:
        return self._step(self.heading.turn_left())

    def step_straight(self) -> PathNode:
        return self._step(self.heading)

    def step_right(self) -> PathNode:
        return self._step(self.heading.turn_right())

    def successors(self) -> list[PathNode]:
        """The three legal moves: turn left, go straight, turn right."""
        return [self.step_left(), self.step_straight(), self.step_right()]

    def intersects_itself(self) -> bool:
        """True if this node's cell was already visited by one of its ancestors."""
        return any(node.position == self.position for node in self.path[:-1])

    def __str__(self) -> str:
        return "".join(node.heading.glyph for node in self.path)
