"""Locating and decoding the four wall textures of a scene."""

from __future__ import annotations

import os
from dataclasses import dataclass

from cubraycast.errors import TextureError
from cubraycast.scene import Scene
from cubraycast.xpm import XpmError, load_xpm

_NOT_FOUND = "Texture file not found"
_BAD_EXTENSION = "The file extension is not .xpm"
_BAD_IMAGE = "Error cub->map->tex[i].ptr"

# Texture slots in the order the renderer indexes them.
_SIDES = ("no", "we", "ea", "so")


@dataclass(frozen=True)
class Texture:
    """A decoded wall texture: row-major 0xAARRGGBB pixels."""

    path: str
    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at column x, row y of the flat pixel buffer."""
        index = y * self.width + x
        if not 0 <= index < len(self.pixels):
            raise IndexError(f"pixel ({x}, {y}) outside texture {self.path}")
        return self.pixels[index]


def check_image_file(path: str) -> bool:
    """Tell whether a path is acceptable as an XPM file name.

    Names longer than four characters must end in ".xpm"; shorter ones pass.
    """
    return len(path) <= 4 or path.endswith(".xpm")


def texture_path(raw: str) -> str:
    """Drop the last character (the line terminator) of a texture entry."""
    return raw[:-1]


def _checked_path(raw: str | None) -> str:
    if raw is None:
        raise TextureError(_NOT_FOUND)
    path = texture_path(raw)
    try:
        descriptor = os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise TextureError(_NOT_FOUND) from exc
    os.close(descriptor)
    if not check_image_file(path):
        raise TextureError(_BAD_EXTENSION)
    return path


def _decode(path: str) -> Texture:
    try:
        image = load_xpm(path)
    except XpmError as exc:
        raise TextureError(_BAD_IMAGE) from exc
    return Texture(path, image.width, image.height, image.pixels)


def load_textures(scene: Scene) -> list[Texture]:
    """Load the scene's textures in the order north, west, east, south.

    All four paths are checked before any image is decoded.
    """
    paths = [_checked_path(getattr(scene, side)) for side in _SIDES]
    return [_decode(path) for path in paths]