"""Checks that a parsed map is closed, holds one player and only known cells."""

from __future__ import annotations

from typing import Sequence

from cubraycast.errors import MapError
from cubraycast.player import Player
from cubraycast.scene import Scene

_ERROR = "Error"

_ALLOWED = frozenset(" 10NSEW\n")
_BORDER_OK = frozenset(" 1\n")
_EDGE_OK = frozenset("1\n")
_SPACE_OK = frozenset(" 1")

_START_ANGLES = {"N": 90.0, "S": 270.0, "W": 180.0, "E": 0.0}


def _at(line: str, index: int) -> str | None:
    """Return the character at index, or None past either end of the line."""
    return line[index] if 0 <= index < len(line) else None


def check_map_line(grid: Sequence[str]) -> None:
    """Raise MapError if any map cell is not a space, wall, floor or start."""
    if any(char not in _ALLOWED for line in grid for char in line):
        raise MapError(_ERROR)


def find_player(grid: Sequence[str]) -> tuple[Player, list[str]]:
    """Locate the single start cell.

    Return the player standing in the middle of that cell, facing the way
    its letter says, and the grid with the start cell turned into floor.
    Raise MapError unless there is exactly one start cell.
    """
    starts = [
        (row, col, char)
        for row, line in enumerate(grid)
        for col, char in enumerate(line)
        if char in _START_ANGLES
    ]
    if len(starts) != 1:
        raise MapError(_ERROR)
    row, col, char = starts[0]
    player = Player(x=col + 0.5, y=row + 0.5, angle=_START_ANGLES[char])
    cleared = list(grid)
    line = cleared[row]
    cleared[row] = line[:col] + "0" + line[col + 1:]
    return player, cleared


def check_close_wall(grid: Sequence[str]) -> None:
    """Raise MapError if the outer border holds anything but walls or spaces.

    The border is the first and last rows, the first column and the last
    column before each line's terminator.
    """
    last_row = len(grid) - 1
    for row, line in enumerate(grid):
        last_col = len(line) - 2
        for col, char in enumerate(line):
            on_border = row in (0, last_row) or col in (0, last_col)
            if on_border and char not in _BORDER_OK:
                raise MapError(_ERROR)


def _row_width_mismatch(line: str, below: str) -> bool:
    """Tell whether the part by which two rows differ in width is not wall."""
    size = max(len(line) - 2, 0)
    next_size = len(below) - 1
    if size < next_size:
        return any(char not in _EDGE_OK for char in below[size:])
    if size > next_size:
        return any(char not in _EDGE_OK for char in line[next_size:size])
    return False


def _space_enclosed(grid: Sequence[str], row: int, col: int, count_line: int) -> bool:
    """Tell whether a space cell touches only spaces and walls."""
    line = grid[row]
    neighbours: list[str | None] = []
    if row != 0:
        above = grid[row - 1]
        neighbours.append(_at(above, col))
        if col != 0:
            neighbours.append(_at(above, col - 1))
        diagonal = _at(above, col + 1)
        if diagonal != "\n":
            neighbours.append(diagonal)
    if col != 0:
        neighbours.append(_at(line, col - 1))
    right = _at(line, col + 1)
    if right != "\n":
        neighbours.append(right)
    if row + 1 != count_line and row + 1 < len(grid):
        below = grid[row + 1]
        neighbours.append(_at(below, col))
        if col != 0:
            neighbours.append(_at(below, col - 1))
        neighbours.append(_at(below, col + 1))
    return all(char is None or char in _SPACE_OK for char in neighbours)


def check_close_wall_inside(grid: Sequence[str], count_line: int) -> None:
    """Raise MapError where the inside of the map is open.

    A cell with nothing or a line end below it must be a wall, the overhang
    between rows of different width must be wall, and every space must be
    surrounded by spaces and walls only.
    """
    last_row = len(grid) - 1
    for row, line in enumerate(grid):
        if row < last_row:
            below = grid[row + 1]
            for col, char in enumerate(line):
                under = _at(below, col)
                if (under is None or under == "\n") and char not in _EDGE_OK:
                    raise MapError(_ERROR)
            if _row_width_mismatch(line, below):
                raise MapError(_ERROR)
        for col, char in enumerate(line):
            if char == " " and not _space_enclosed(grid, row, col, count_line):
                raise MapError(_ERROR)


def check_count_line(grid: Sequence[str], count: int) -> None:
    """Raise MapError if the last of count rows is shorter than the one
    before it and does not end in a wall."""
    if not 1 <= count <= len(grid):
        return
    last = grid[count - 1]
    previous = grid[count - 2] if count >= 2 else ""
    if len(last) < len(previous) and last[-1] != "1":
        raise MapError(_ERROR)


def rgb_to_hex(rgb: Sequence[int]) -> int:
    """Pack a colour the way the renderer expects.

    The green and blue channels are masked with 0xFF00 and 0xFF0000 without
    shifting, so for channels within 0..255 only the red value survives,
    in the low byte.
    """
    red, green, blue = rgb
    return (red & 0xFF) + (green & 0xFF00) + (blue & 0xFF0000)


def validate_scene(scene: Scene) -> tuple[Player, int, int]:
    """Validate the scene's map and place the player.

    The start cell in scene.grid becomes floor. Return the player and the
    packed ceiling and floor colours.
    """
    check_count_line(scene.grid, scene.count_line)
    check_map_line(scene.grid)
    player, grid = find_player(scene.grid)
    check_close_wall(grid)
    check_close_wall_inside(grid, scene.count_line)
    scene.grid = grid
    return player, rgb_to_hex(scene.ceiling), rgb_to_hex(scene.floor)