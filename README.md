# cubraycast

cubraycast is a first-person maze viewer that uses grid ray casting. It
reads a `.cub` scene file. The file names four wall textures, which are
XPM images, gives the floor and ceiling colours, and contains a map. The
map is built from walls (`1`), floor (`0`), spaces and a single player
start (`N`, `S`, `E` or `W`). The program shows a title screen first.
After that it draws the textured 3D view in a pygame window of 1200×500
pixels, with an overhead minimap drawn on top.

## Installation

```
pip install .
```

pygame is installed along with the package.

## Running

```
cubraycast path/to/scene.cub
```

The program takes exactly one argument. It must name a readable file
whose name is longer than four characters and ends in `.cub`. If it does
not, the program writes `Error : Invalid arguments` to standard error and
exits with status 0.

If the scene or a texture is rejected, the program prints the error
message and exits with status 1. When you quit normally, it prints
`GOOD BYE, MY FRIEND! I WILL MISS YOU!` and exits with status 1.

### Title screen

The title screen shows `./tex/begin1.xpm` and `./tex/begin2.xpm` in turn.
Both paths are relative to the current directory. If one of these images
cannot be read, the screen stays black.

### Controls

| Key            | Action                       |
|----------------|------------------------------|
| Return         | leave the title screen       |
| W / S          | move forward / backward      |
| A / D          | turn left / right            |
| Left / Right   | turn left / right            |
| Escape         | quit                         |

Closing the window also quits.

## Scene file format

```
NO ./tex/north.xpm
SO ./tex/south.xpm
WE ./tex/west.xpm
EA ./tex/east.xpm
F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

### Header lines

- `NO`, `SO`, `WE` and `EA` give the texture paths. The last character
  of each entry is dropped as the line terminator, so every texture line
  must end with a newline.
- Each texture must be a readable file. A name longer than four
  characters must end in `.xpm`.
- The textures should all be the same size, and that size should be a
  power of two. Texture coordinates are computed from the first texture,
  the north one.
- `F` (floor) and `C` (ceiling) take up to three comma-separated decimal
  numbers.
- The first number of each colour must be non-zero.
- When the colour is packed for drawing, only the first number (masked to
  a byte) is kept, and it goes into the lowest byte of the colour value.
- Any other non-blank line that does not start with `1` or `0` is
  rejected.

### Map rules

The map must:

- use only the characters `1`, `0`, `N`, `S`, `E`, `W` and spaces;
- hold exactly one player start;
- be closed by walls along its border and wherever rows differ in width;
- have only walls or spaces next to every space.

The player starts in the middle of the start cell and faces the way its
letter says.

## Using it as a library

- `cubraycast.scene.load_scene(path)` reads a `.cub` file and returns a
  `Scene`. `parse_scene_text(text)` does the same from a string.
- `cubraycast.validate.validate_scene(scene)` checks the map, turns the
  start cell into floor and returns the `Player` together with the packed
  ceiling and floor colours.
- `cubraycast.textures.load_textures(scene)` loads the four `Texture`s in
  the order north, west, east, south.
- `cubraycast.xpm.load_xpm(path)` and `parse_xpm(text)` decode XPM images
  into an `XpmImage`. `cubraycast.colornames.lookup_color(name)` resolves
  X11 colour names.
- `cubraycast.raycast.cast_ray(grid, player, angle)` traces one ray and
  returns a `RayHit`. `render_frame(grid, player, textures, ceiling,
  floor, width, height)` renders a whole `Frame` of `0xRRGGBB` pixels.
- `cubraycast.minimap.wall_cells(grid)` and `view_ray_points(grid,
  player)` give the minimap's wall blocks and lit ray pixels.
- `cubraycast.app.prepare_game(path)` runs the whole load and check and
  returns a `Game` without opening a window. `Game.key_down`,
  `Game.key_up` and `Game.tick` drive it one frame at a time.

Errors are raised as `cubraycast.errors.CubError` or one of its
subclasses: `MapError` for scene and map problems, and `TextureError`
for texture problems. XPM decoding problems raise
`cubraycast.xpm.XpmError`.

## Limits

The view contains only walls, floor and ceiling. There are no sprites,
doors, sound or mouse controls. Nothing is saved between runs.

## Running the tests

```
pip install .[test]
pytest
```