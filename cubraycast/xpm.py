"""Reader for XPM images, the texture format used by the renderer."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from cubraycast.colornames import lookup_color

TRANSPARENT = 0xFF000000

_QUOTED = re.compile(r'"([^"]*)"')
_WORD_SPLIT = re.compile(r"[ \t]+")
_ATOI = re.compile(r"\s*([+-]?\d+)")
_STRTOL_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_NAME_BUFFER = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: row-major 0xAARRGGBB pixel values."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def find_unquoted(text: str, pattern: str) -> int:
    """Return the position of pattern outside double quotes, or -1."""
    inside = False
    for pos in range(len(text) - len(pattern) + 1):
        if text[pos] == '"':
            inside = not inside
        if not inside and text.startswith(pattern, pos):
            return pos
    return -1


def _blank(text: str, start: int, end: int) -> str:
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C style comments outside strings by spaces, keeping length."""
    while (begin := find_unquoted(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        end = len(text) if close == -1 else close + 2
        text = _blank(text, begin, end)
    while (begin := find_unquoted(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        end = len(text) if newline == -1 else newline + 1
        text = _blank(text, begin, end)
    return text


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def text_to_rgb(name: str, extra: str | None) -> int:
    """Turn an XPM colour spec into 0xRRGGBB; -1 means transparent.

    "#hex" is read as hexadecimal; otherwise name (joined with extra, if
    given) is looked up among the X11 colour names, unknown names giving 0.
    """
    if name.startswith("#"):
        match = _STRTOL_HEX.match(name[1:])
        digits = match.group(2) if match else ""
        if not digits:
            return 0
        value = int(digits, 16)
        if match.group(1) == "-":
            value = -value
        return _to_int32(value)
    if extra is not None:
        name = f"{name} {extra}"[:_NAME_BUFFER]
    colour = lookup_color(name)
    return 0 if colour is None else colour


def _next_line(rows: Iterator[str], what: str) -> str:
    try:
        return next(rows)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what} lines") from None


def _colour_spec(line: str, cpp: int) -> int:
    words = split_words(line[cpp:])
    try:
        position = words.index("c")
    except ValueError:
        raise XpmError(f"colour line without a 'c' entry: {line!r}") from None
    if position + 1 >= len(words):
        raise XpmError(f"colour line without a colour: {line!r}")
    extra = words[position + 2] if position + 2 < len(words) else None
    return text_to_rgb(words[position + 1], extra)


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode an image from its XPM strings: header, colours, then rows."""
    rows = iter(lines)
    header = split_words(_next_line(rows, "header"))
    if len(header) < 4:
        raise XpmError(f"incomplete XPM header: {header!r}")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {header!r}")

    # Short keys use a direct table where a later definition overrides;
    # longer keys are searched in order, so the first definition wins.
    first_wins = cpp > 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(rows, "colour")
        rgb = _colour_spec(line, cpp)
        if first_wins:
            palette.setdefault(line[:cpp], rgb)
        else:
            palette[line[:cpp]] = rgb

    pixels: list[int] = []
    for _ in range(height):
        line = _next_line(rows, "pixel")
        for start in range(0, width * cpp, cpp):
            colour = palette.get(line[start:start + cpp], 0)
            pixels.append(TRANSPARENT if colour == -1 else colour & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    cleaned = strip_comments(text)
    return parse_xpm_lines(match.group(1) for match in _QUOTED.finditer(cleaned))


def load_xpm(path: str | os.PathLike[str]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)}: {exc.strerror}") from exc
    return parse_xpm(text)