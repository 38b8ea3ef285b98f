import pytest

from cubraycast.app import Game, check_name, main, prepare_game
from cubraycast.errors import MapError
from cubraycast.player import KEY_ENTER, KEY_ESCAPE, KEY_W

COLOURS = {"n": "#FF0000", "s": "#00FF00", "w": "#0000FF", "e": "#FFFF00"}

MAP = "111111\n100001\n10N001\n100001\n111111\n"


def _xpm(colour):
    rows = "".join('"aaaa",\n' for _ in range(4))
    return (
        "/* XPM */\nstatic char *t[] = {\n"
        '"4 4 1 1",\n'
        f'"a c {colour}",\n'
        f"{rows}" "};\n"
    )


def _write_scene(tmp_path, body=MAP, name="map.cub"):
    paths = {}
    for side, colour in COLOURS.items():
        path = tmp_path / f"{side}.xpm"
        path.write_text(_xpm(colour))
        paths[side] = path
    text = (
        f"NO {paths['n']}\n"
        f"SO {paths['s']}\n"
        f"WE {paths['w']}\n"
        f"EA {paths['e']}\n"
        "F 220,100,0\n"
        "C 50,60,70\n"
        "\n" + body
    )
    scene = tmp_path / name
    scene.write_text(text)
    return scene


@pytest.fixture
def game(tmp_path):
    result = prepare_game(_write_scene(tmp_path))
    result.width = 40
    result.height = 20
    return result


def test_check_name_accepts_existing_cub(tmp_path):
    path = tmp_path / "map.cub"
    path.write_text("x")
    assert check_name(str(path)) is True


def test_check_name_rejects_missing_file(tmp_path):
    assert check_name(str(tmp_path / "absent.cub")) is False


def test_check_name_rejects_other_extension(tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("x")
    assert check_name(str(path)) is False


def test_check_name_rejects_bare_extension():
    assert check_name(".cub") is False


def test_prepare_game_places_player(game):
    assert (game.player.x, game.player.y, game.player.angle) == (2.5, 2.5, 90.0)
    assert game.grid[2][2] == "0"
    assert len(game.textures) == 4
    assert game.started is False


def test_tick_on_title_screen_returns_none(game):
    assert game.tick() is None
    assert game.running is True


def test_escape_on_title_screen_stops(game):
    game.key_down(KEY_ESCAPE)
    assert game.running is False
    assert game.tick() is None


def test_enter_starts_and_renders(game):
    game.key_down(KEY_ENTER)
    assert game.started is True
    frame = game.tick()
    assert (frame.width, frame.height) == (40, 20)
    assert frame.get(0, 19) == game.floor
    assert all(frame.get(x, 10) == 0xFF0000 for x in range(40))


def test_walking_forward_moves_north(game):
    game.key_down(KEY_ENTER)
    game.key_down(KEY_W)
    game.tick()
    assert game.player.y < 2.5
    assert game.player.x == pytest.approx(2.5)


def test_released_key_does_not_move(game):
    game.key_down(KEY_ENTER)
    game.key_down(KEY_W)
    game.key_up(KEY_W)
    game.tick()
    assert game.player.y == 2.5


def test_escape_in_game_ends_on_tick(game):
    game.key_down(KEY_ENTER)
    game.key_down(KEY_ESCAPE)
    assert game.tick() is None
    assert game.running is False


def test_prepare_game_rejects_bad_map(tmp_path):
    scene = _write_scene(tmp_path, body="1X1\n")
    with pytest.raises(MapError):
        prepare_game(scene)


def test_main_without_arguments(capsys):
    assert main([]) == 0
    assert capsys.readouterr().err == "Error : Invalid arguments\n"


def test_main_with_wrong_extension(tmp_path, capsys):
    path = tmp_path / "map.txt"
    path.write_text(MAP)
    assert main([str(path)]) == 0
    assert capsys.readouterr().err == "Error : Invalid arguments\n"


def test_main_reports_bad_map(tmp_path, capsys):
    scene = _write_scene(tmp_path, body="1X1\n")
    assert main([str(scene)]) == 1
    assert "Error: hey, honey, your map is bad" in capsys.readouterr().out


def test_main_reports_missing_texture(tmp_path, capsys):
    scene = _write_scene(tmp_path)
    (tmp_path / "n.xpm").unlink()
    assert main([str(scene)]) == 1
    assert "Texture file not found" in capsys.readouterr().out


def test_game_defaults_to_window_size(game):
    fresh = Game(
        grid=game.grid,
        player=game.player,
        textures=game.textures,
        ceiling=game.ceiling,
        floor=game.floor,
    )
    assert (fresh.width, fresh.height) == (1200, 500)
    assert fresh.running is True