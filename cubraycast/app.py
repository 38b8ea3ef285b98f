"""The game window, its main loop and the command-line entry point."""

from __future__ import annotations

import os
import sys
from array import array
from dataclasses import dataclass, field
from typing import Sequence

from cubraycast.errors import GOODBYE_MESSAGE, CubError
from cubraycast.minimap import (
    MINIMAP_SCALE,
    RAY_COLOR,
    WALL_COLOR,
    view_ray_points,
    wall_cells,
)
from cubraycast.player import (
    KEY_A,
    KEY_D,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    KeyState,
    Player,
)
from cubraycast.raycast import WIN_HEIGHT, WIN_WIDTH, Frame, render_frame
from cubraycast.scene import load_scene
from cubraycast.textures import Texture, load_textures
from cubraycast.validate import validate_scene
from cubraycast.xpm import XpmError, XpmImage, load_xpm

INVALID_ARGUMENTS = "Error : Invalid arguments\n"
WINDOW_TITLE = "cub3D"

_TITLE_IMAGES = ("./tex/begin1.xpm", "./tex/begin2.xpm")
_FRAMES_PER_SECOND = 60


@dataclass
class Game:
    """State of a running game.

    The game begins on a title screen; Enter starts play and Escape quits.
    """

    grid: list[str]
    player: Player
    textures: list[Texture]
    ceiling: int
    floor: int
    keys: KeyState = field(default_factory=KeyState)
    started: bool = False
    running: bool = True
    width: int = WIN_WIDTH
    height: int = WIN_HEIGHT

    def key_down(self, key: int) -> None:
        """Handle a key press."""
        if not self.started:
            if key == KEY_ENTER:
                self.started = True
            elif key == KEY_ESCAPE:
                self.running = False
            return
        self.keys.press(key)

    def key_up(self, key: int) -> None:
        """Handle a key release."""
        self.keys.release(key)

    def tick(self) -> Frame | None:
        """Advance one frame and return the rendered view.

        Return None while the title screen shows or once the game has ended.
        """
        if not self.running or not self.started:
            return None
        if not self.player.move(self.grid, self.keys):
            self.running = False
            return None
        return render_frame(
            self.grid,
            self.player,
            self.textures,
            self.ceiling,
            self.floor,
            self.width,
            self.height,
        )


def check_name(name: str) -> bool:
    """Tell whether name is a readable file whose name ends in ".cub"."""
    if len(name) <= 4 or not name.endswith(".cub"):
        return False
    try:
        descriptor = os.open(name, os.O_RDONLY)
    except OSError:
        return False
    os.close(descriptor)
    return True


def prepare_game(path: str | os.PathLike[str]) -> Game:
    """Load and validate a scene and its textures, ready to play."""
    scene = load_scene(path)
    player, ceiling, floor = validate_scene(scene)
    textures = load_textures(scene)
    return Game(
        grid=scene.grid,
        player=player,
        textures=textures,
        ceiling=ceiling,
        floor=floor,
    )


def _title_index(times: int) -> int | None:
    """Which title image to switch to on this frame, if any."""
    if times % 60 == 0:
        return 1
    if times % 30 == 0:
        return 0
    return None


def _key_codes(pygame) -> dict[int, int]:
    return {
        pygame.K_a: KEY_A,
        pygame.K_s: KEY_S,
        pygame.K_d: KEY_D,
        pygame.K_w: KEY_W,
        pygame.K_RETURN: KEY_ENTER,
        pygame.K_ESCAPE: KEY_ESCAPE,
        pygame.K_LEFT: KEY_LEFT,
        pygame.K_RIGHT: KEY_RIGHT,
    }


def _surface(pygame, width: int, height: int, pixels: Sequence[int]):
    surface = pygame.Surface((width, height), 0, 32, (0xFF0000, 0xFF00, 0xFF, 0))
    data = array("I", (value & 0xFFFFFFFF for value in pixels))
    surface.get_buffer().write(data.tobytes(), 0)
    return surface


def _load_title(index: int) -> XpmImage | None:
    try:
        return load_xpm(_TITLE_IMAGES[index])
    except XpmError:
        return None


def _draw_minimap(pygame, screen, game: Game) -> None:
    for x, y in wall_cells(game.grid, MINIMAP_SCALE):
        screen.fill(WALL_COLOR, (x, y, MINIMAP_SCALE, MINIMAP_SCALE))
    for x, y in view_ray_points(game.grid, game.player):
        screen.set_at((x, y), pygame.Color(RAY_COLOR << 8 | 0xFF))


def _run_window(game: Game) -> None:
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width, game.height))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        codes = _key_codes(pygame)
        title: XpmImage | None = None
        times = 0
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key in codes:
                    game.key_down(codes[event.key])
                elif event.type == pygame.KEYUP and event.key in codes:
                    game.key_up(codes[event.key])
            if not game.running:
                break
            if not game.started:
                index = _title_index(times)
                if index is not None:
                    title = _load_title(index)
                times += 1
                screen.fill((0, 0, 0))
                if title is not None:
                    screen.blit(_surface(pygame, title.width, title.height, title.pixels), (0, 0))
            else:
                frame = game.tick()
                if frame is None:
                    break
                screen.blit(_surface(pygame, frame.width, frame.height, frame.pixels), (0, 0))
                _draw_minimap(pygame, screen, game)
            pygame.display.flip()
            clock.tick(_FRAMES_PER_SECOND)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the .cub file named by the single argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1 or not check_name(args[0]):
        sys.stderr.write(INVALID_ARGUMENTS)
        return 0
    try:
        game = prepare_game(args[0])
        _run_window(game)
    except CubError as exc:
        print(exc)
        return exc.exit_code
    print(GOODBYE_MESSAGE)
    return 1


if __name__ == "__main__":
    sys.exit(main())