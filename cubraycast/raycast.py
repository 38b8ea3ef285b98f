"""Ray casting of the textured first-person view."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from cubraycast.player import PI, Player
from cubraycast.textures import Texture

WIN_WIDTH = 1200
WIN_HEIGHT = 500

_INT_MAX = 2**31 - 1


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall.

    side is 0 when a vertical grid line (east or west face) was crossed
    last and 1 for a horizontal one. distance runs along the ray;
    perp_distance is corrected for the fish-eye effect. wall_x is the
    fractional position of the hit along the wall face.
    """

    angle: float
    cos: float
    sin: float
    map_x: int
    map_y: int
    side: int
    distance: float
    perp_distance: float
    wall_x: float


@dataclass
class Frame:
    """A rendered image: row-major 0xRRGGBB pixels."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.pixels:
            self.pixels = [0] * (self.width * self.height)

    def get(self, x: int, y: int) -> int:
        """Return the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        return self.pixels[y * self.width + x]


def _inverse(value: float) -> float:
    return math.inf if value == 0 else 1 / value


def _scaled(offset: float, delta: float) -> float:
    return math.inf if math.isinf(delta) else offset * delta


def _cell(grid: Sequence[str], col: int, row: int) -> str:
    if not 0 <= row < len(grid) or not 0 <= col < len(grid[row]):
        raise ValueError(f"ray left the map at cell ({col}, {row})")
    return grid[row][col]


def cast_ray(grid: Sequence[str], player: Player, angle: float) -> RayHit:
    """Follow a ray from the player at angle degrees until it hits a wall.

    Raise ValueError if the ray leaves the map without meeting a wall.
    """
    radians = angle * PI / 180
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    delta_x = _inverse(abs(cos_a))
    delta_y = _inverse(abs(sin_a))
    map_x = int(player.x)
    map_y = int(player.y)
    if sin_a > 0:
        step_y = -1
        side_y = _scaled(player.y - map_y, delta_y)
    else:
        step_y = 1
        side_y = _scaled(map_y + 1 - player.y, delta_y)
    if cos_a > 0:
        step_x = 1
        side_x = _scaled(map_x + 1 - player.x, delta_x)
    else:
        step_x = -1
        side_x = _scaled(player.x - map_x, delta_x)

    side = 0
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _cell(grid, map_x, map_y) == "1":
            break

    distance = side_x - delta_x if side == 0 else side_y - delta_y
    perp = distance * math.cos((player.angle - angle) * PI / 180)
    if side == 0:
        wall_x = player.y - distance * sin_a
    else:
        wall_x = player.x + distance * cos_a
    wall_x -= math.floor(wall_x)
    return RayHit(angle, cos_a, sin_a, map_x, map_y, side, distance, perp, wall_x)


def _half(value: int) -> int:
    """Halve an integer, truncating toward zero."""
    half = abs(value) // 2
    return half if value >= 0 else -half


def _line_height(perp: float, height: int, fov: float) -> int:
    if perp <= 0:
        return _INT_MAX
    value = height / perp / math.tan(fov / 2 * PI / 180)
    if not math.isfinite(value) or value > _INT_MAX:
        return _INT_MAX
    return int(value)


def _texture_index(hit: RayHit, player: Player) -> int:
    if hit.side == 1:
        return 0 if hit.map_y < player.y else 1
    return 2 if hit.map_x < player.x else 3


def _draw_column(
    frame: Frame,
    hit: RayHit,
    player: Player,
    textures: Sequence[Texture],
    x: int,
    ceiling: int,
    floor: int,
) -> None:
    width, height = frame.width, frame.height
    pixels = frame.pixels
    line_height = _line_height(hit.perp_distance, height, player.fov)
    half_screen = height // 2
    draw_start = max(-_half(line_height) + half_screen, 0)
    draw_end = min(_half(line_height) + half_screen, height - 1)

    for y in range(draw_start):
        pixels[y * width + x] = ceiling
    y = max(draw_start, 0)

    if y < draw_end:
        # Texture coordinates are scaled by the first texture's size.
        base = textures[0]
        tex_x = int(hit.wall_x * base.height)
        if (hit.side == 0 and hit.cos > 0) or (hit.side == 1 and hit.sin < 0):
            tex_x = base.width - tex_x - 1
        step = base.height / line_height
        tex_pos = (draw_start - half_screen + _half(line_height)) * step
        texture = textures[_texture_index(hit, player)]
        while y < draw_end:
            tex_y = int(tex_pos) & (base.width - 1)
            tex_pos += step
            index = tex_y * base.width + tex_x
            if not 0 <= index < len(texture.pixels):
                raise IndexError(f"texel {index} outside texture {texture.path}")
            pixels[y * width + x] = texture.pixels[index]
            y += 1

    for row in range(y, height):
        pixels[row * width + x] = floor


def render_frame(
    grid: Sequence[str],
    player: Player,
    textures: Sequence[Texture],
    ceiling: int,
    floor: int,
    width: int = WIN_WIDTH,
    height: int = WIN_HEIGHT,
) -> Frame:
    """Render the player's view: one ray per column, left to right.

    textures are in the order north, west, east, south.
    """
    if len(textures) != 4:
        raise ValueError(f"expected 4 textures, got {len(textures)}")
    frame = Frame(width, height)
    angle = player.angle + player.fov / 2
    angle_end = player.angle - player.fov / 2
    angle_step = player.fov / width
    x = 0
    while angle > angle_end and x < width:
        hit = cast_ray(grid, player, angle)
        _draw_column(frame, hit, player, textures, x, ceiling, floor)
        angle -= angle_step
        x += 1
    return frame