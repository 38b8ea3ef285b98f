"""The player: position, view angle and keyboard-driven movement."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

PI = 3.14159265

KEY_A = 0
KEY_S = 1
KEY_D = 2
KEY_W = 13
KEY_ENTER = 36
KEY_ESCAPE = 53
KEY_LEFT = 123
KEY_RIGHT = 124


@dataclass
class KeyState:
    """The set of key codes currently held down."""

    _down: set[int] = field(default_factory=set)

    def press(self, key: int) -> None:
        """Mark a key as held."""
        self._down.add(key)

    def release(self, key: int) -> None:
        """Mark a key as released."""
        self._down.discard(key)

    def is_down(self, key: int) -> bool:
        """Tell whether a key is held."""
        return key in self._down


def _is_floor(grid: Sequence[str], col: int, row: int) -> bool:
    if not (0 <= row < len(grid)):
        return False
    line = grid[row]
    return 0 <= col < len(line) and line[col] == "0"


@dataclass
class Player:
    """Position in map cells, view angle in degrees (0 east, 90 north)."""

    x: float
    y: float
    angle: float
    move_k: float = 0.2
    rotate_k: float = 1.5
    fov: float = 60.0

    def _turn(self, delta: float) -> None:
        self.angle += delta
        if self.angle >= 360:
            self.angle = 0
        if self.angle <= -360:
            self.angle = 0

    def _step(self, grid: Sequence[str], dx: float, dy: float) -> None:
        if _is_floor(grid, int(self.x + dx), int(self.y)):
            self.x += dx
        if _is_floor(grid, int(self.x), int(self.y + dy)):
            self.y += dy

    def move(self, grid: Sequence[str], keys: KeyState) -> bool:
        """Apply one frame of movement; return False when escape is held."""
        if keys.is_down(KEY_ESCAPE):
            return False
        radians = self.angle * PI / 180
        dx = self.move_k * math.cos(radians)
        dy = -self.move_k * math.sin(radians)
        if keys.is_down(KEY_W):
            self._step(grid, dx, dy)
        elif keys.is_down(KEY_S):
            self._step(grid, -dx, -dy)
        if keys.is_down(KEY_LEFT):
            self._turn(self.rotate_k)
        elif keys.is_down(KEY_RIGHT):
            self._turn(-self.rotate_k)
        if keys.is_down(KEY_A):
            self._turn(self.rotate_k)
        if keys.is_down(KEY_D):
            self._turn(-self.rotate_k)
        return True