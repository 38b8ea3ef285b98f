import pytest

from cubraycast.player import (
    KEY_A,
    KEY_D,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    KeyState,
    Player,
)

GRID = ["11111", "10001", "10001", "10001", "11111"]


def keys_with(*codes):
    keys = KeyState()
    for code in codes:
        keys.press(code)
    return keys


def test_key_state_press_release():
    keys = KeyState()
    keys.press(KEY_W)
    assert keys.is_down(KEY_W)
    keys.release(KEY_W)
    assert not keys.is_down(KEY_W)
    keys.release(KEY_S)
    assert not keys.is_down(KEY_S)


def test_default_constants():
    player = Player(1.5, 1.5, 0)
    assert player.move_k == 0.2
    assert player.rotate_k == 1.5
    assert player.fov == 60


def test_forward_east_increases_x():
    player = Player(2.5, 2.5, 0)
    assert player.move(GRID, keys_with(KEY_W)) is True
    assert player.x > 2.5
    assert player.y == pytest.approx(2.5)


def test_forward_then_back_returns():
    player = Player(2.5, 2.5, 30)
    player.move(GRID, keys_with(KEY_W))
    player.move(GRID, keys_with(KEY_S))
    assert player.x == pytest.approx(2.5)
    assert player.y == pytest.approx(2.5)


def test_forward_north_decreases_y():
    player = Player(2.5, 2.5, 90)
    player.move(GRID, keys_with(KEY_W))
    assert player.y < 2.5
    assert player.x == pytest.approx(2.5)


def test_wall_blocks_movement():
    player = Player(3.9, 2.5, 0)
    player.move(GRID, keys_with(KEY_W))
    assert player.x == 3.9


def test_escape_stops_without_moving():
    player = Player(2.5, 2.5, 0)
    assert player.move(GRID, keys_with(KEY_ESCAPE, KEY_W)) is False
    assert (player.x, player.y, player.angle) == (2.5, 2.5, 0)


def test_rotate_with_a():
    player = Player(2.5, 2.5, 0)
    player.move(GRID, keys_with(KEY_A))
    assert player.angle == pytest.approx(player.rotate_k)


def test_a_and_d_cancel():
    player = Player(2.5, 2.5, 10)
    player.move(GRID, keys_with(KEY_A, KEY_D))
    assert player.angle == pytest.approx(10)


def test_left_takes_precedence_over_right():
    player = Player(2.5, 2.5, 0)
    player.move(GRID, keys_with(KEY_LEFT, KEY_RIGHT))
    assert player.angle == pytest.approx(player.rotate_k)


def test_angle_wraps_to_zero():
    player = Player(2.5, 2.5, 359)
    player.move(GRID, keys_with(KEY_LEFT))
    assert player.angle == 0
    player = Player(2.5, 2.5, -359)
    player.move(GRID, keys_with(KEY_RIGHT))
    assert player.angle == 0