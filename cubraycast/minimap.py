"""Minimap geometry: wall blocks and the player's field of view."""

from __future__ import annotations

import math
from typing import Sequence

from cubraycast.player import PI, Player

MINIMAP_SCALE = 5
WALL_COLOR = 0x4B0082
RAY_COLOR = 0x7FFFD4

_RAY_STEP = 0.095
_HALF_SPREAD = 30
_ANGLE_STEP = 0.5


def wall_cells(grid: Sequence[str], scale: int = MINIMAP_SCALE) -> list[tuple[int, int]]:
    """Return the top-left pixel (x, y) of the block drawn for each wall cell."""
    return [
        (col * scale, row * scale)
        for row, line in enumerate(grid)
        for col, char in enumerate(line)
        if char == "1"
    ]


def _open(grid: Sequence[str], a: float, b: float) -> bool:
    row, col = int(b), int(a)
    if not 0 <= row < len(grid) or not 0 <= col < len(grid[row]):
        return False
    return grid[row][col] != "1"


def view_ray_points(grid: Sequence[str], player: Player) -> list[tuple[int, int]]:
    """Return the minimap pixels lit by rays across a 60 degree view.

    Rays start every half degree from the player and advance in small steps
    until they reach a wall.
    """
    points: list[tuple[int, int]] = []
    heading = player.angle - _HALF_SPREAD
    while heading < player.angle + _HALF_SPREAD:
        radians = heading * PI / 180
        dx = _RAY_STEP * math.cos(radians)
        dy = _RAY_STEP * math.sin(radians)
        a, b = player.x, player.y
        while a > 0 and b > 0 and _open(grid, a, b):
            points.append((int(a * MINIMAP_SCALE), int(b * MINIMAP_SCALE)))
            a += dx
            b -= dy
        heading += _ANGLE_STEP
    return points