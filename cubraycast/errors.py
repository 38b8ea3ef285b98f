"""Errors raised while loading a scene and running the game."""

from __future__ import annotations

GOODBYE_MESSAGE = "GOOD BYE, MY FRIEND! I WILL MISS YOU!"


class CubError(Exception):
    """A fatal problem; the program reports the message and exits with 1."""

    exit_code = 1


class MapError(CubError):
    """The scene description or its map is invalid."""


class TextureError(CubError):
    """A wall texture is missing or cannot be used."""


def is_digit_string(text: str) -> bool:
    """Tell whether text, once surrounding whitespace is removed, is a decimal number."""
    stripped = text.strip()
    return bool(stripped) and all(char in "0123456789" for char in stripped)