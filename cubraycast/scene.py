"""Reading a .cub scene description: wall textures, colours and the map."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from cubraycast.errors import MapError, is_digit_string

MAP_CHARS = frozenset("10SNWE \n")

_BAD_MAP = "Error: hey, honey, your map is bad"
_BAD_TEXTURE = "Error: Hey, baby, give me correct texture"
_BAD_COLOR = "Error: Hey, baby, give me correct color"
_NOT_DIGIT = "Error is not digit"
_CANNOT_OPEN = "Error: I can't open file"

_TEXTURE_KEYS = {"NO": "no", "SO": "so", "WE": "we", "EA": "ea"}
_LINE = re.compile(r"[^\n]*\n|[^\n]+")
_ATOI = re.compile(r"[ \t\n\r\v\f]*([+-]?)([0-9]*)")


@dataclass
class Scene:
    """A parsed scene.

    Texture paths keep what followed the key with surrounding spaces removed,
    including the line terminator. Colours are (red, green, blue). The grid
    holds the non-blank map lines as read, line terminators included.
    """

    no: str | None = None
    so: str | None = None
    we: str | None = None
    ea: str | None = None
    floor: tuple[int, int, int] = (0, 0, 0)
    ceiling: tuple[int, int, int] = (0, 0, 0)
    grid: list[str] = field(default_factory=list)
    count_line: int = 0

    def check_textures(self) -> None:
        """Raise MapError unless all four textures and both colours are set."""
        if any(path is None for path in (self.ea, self.no, self.we, self.so)):
            raise MapError(_BAD_TEXTURE)
        if not self.floor[0] or not self.ceiling[0]:
            raise MapError(_BAD_COLOR)


def c_atoi(text: str) -> int:
    """Read a leading decimal integer the way C's atoi does, wrapping to 32 bits."""
    match = _ATOI.match(text)
    digits = match.group(2)
    value = int(digits) if digits else 0
    if match.group(1) == "-":
        value = -value
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _split_lines(text: str) -> list[str]:
    return _LINE.findall(text)


def read_lines(path: str | os.PathLike[str]) -> list[str]:
    """Return the lines of a file, each keeping its trailing newline."""
    with open(path, encoding="latin-1", newline="") as handle:
        return _split_lines(handle.read())


def parse_color(line: str) -> tuple[int, int, int]:
    """Parse an "F r,g,b" or "C r,g,b" line; missing components are 0."""
    body = line[1:].strip(" ")
    parts = [part for part in body.split(",") if part]
    if len(parts) > 3:
        raise MapError(_BAD_COLOR)
    for part in parts:
        if not is_digit_string(part):
            raise MapError(_NOT_DIGIT)
    values = [c_atoi(part) for part in parts]
    values.extend([0] * (3 - len(values)))
    return (values[0], values[1], values[2])


def check_map_chars(line: str) -> None:
    """Raise MapError if the map line holds a character not allowed in a map."""
    if any(char not in MAP_CHARS for char in line):
        raise MapError(_BAD_MAP)


def _apply_header_line(scene: Scene, raw: str) -> bool:
    """Record what a line declares; return True when it is a map line."""
    line = raw.strip(" ")
    if len(line) <= 2:
        return False
    key = line[:2]
    if key in _TEXTURE_KEYS:
        setattr(scene, _TEXTURE_KEYS[key], line[2:].strip(" "))
    elif line.startswith("F"):
        scene.floor = parse_color(line)
    elif line.startswith("C"):
        scene.ceiling = parse_color(line)
    elif line.startswith(("1", "0")):
        check_map_chars(line)
        return True
    else:
        raise MapError(_BAD_MAP)
    return False


def _parse_lines(lines: list[str]) -> Scene:
    scene = Scene()
    start = sum(1 for line in lines if not _apply_header_line(scene, line))
    scene.check_textures()
    scene.grid = [line for line in lines[start:] if not line.startswith("\n")]
    scene.count_line = len(lines) - start
    return scene


def parse_scene_text(text: str) -> Scene:
    """Parse the text of a .cub file."""
    return _parse_lines(_split_lines(text))


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and parse a .cub file."""
    try:
        lines = read_lines(path)
    except OSError as exc:
        raise MapError(_CANNOT_OPEN) from exc
    return _parse_lines(lines)