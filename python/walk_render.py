"""
Text preview of a walk on its board.

Each cell on the walk shows either the walk's heading glyph or one character
of a message threaded along the walk; every other cell shows noise drawn
from a fill alphabet.
"""

from __future__ import annotations

import random
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from walk_types import Boundary, PathNode, Position


def message_char(message: str, step: int) -> str:
    """Character of `message` carried by the 1-based `step`, wrapping around."""
    return message[(step - 1) % len(message)]


def _plain(s: str) -> str:
    return s


def render_walk(
    boundary: Boundary,
    node: PathNode,
    message: str = "",
    fill: str = "",
    rng: random.Random | None = None,
    color: bool = True,
) -> str:
    """
    Render a walk as a box-drawn table covering the whole boundary.

    Args:
        boundary: The board to draw
        node: Final node of the walk (its path is drawn)
        message: Text threaded one character per step; glyphs if empty
        fill: Alphabet for cells off the walk; blank if empty
        rng: Random source for the fill characters
        color: Colour walk cells with ANSI codes

    Returns:
        Multi-line string, one table row per board row
    """
    rng = rng if rng is not None else random.Random()
    on_walk: dict[Position, PathNode] = {n.position: n for n in node.path}
    start = node.path[0].position

    walk_color: Callable[[str], str] = chalk.green if color else _plain
    start_color: Callable[[str], str] = chalk.bgWhite.black if color else _plain
    noise_color: Callable[[str], str] = chalk.white if color else _plain

    cols = boundary.width
    top = "╭─" + "──┬─" * (cols - 1) + "──╮"
    separator = "├─" + "──┼─" * (cols - 1) + "──┤"
    bottom = "╰─" + "──┴─" * (cols - 1) + "──╯"

    rows: list[str] = []
    for y in range(boundary.min_y, boundary.max_y + 1):
        cells: list[str] = []
        for x in range(boundary.min_x, boundary.max_x + 1):
            p = Position(x, y)
            step = on_walk.get(p)
            if step is None:
                char = rng.choice(fill) if fill else " "
                cells.append(noise_color(char))
            else:
                char = message_char(message, step.length) if message else step.heading.glyph
                cells.append(start_color(char) if p == start else walk_color(char))
        rows.append("│ " + " │ ".join(cells) + " │")

    return "\n".join([top, ("\n" + separator + "\n").join(rows), bottom])
