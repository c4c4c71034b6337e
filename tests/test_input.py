from conftest import NARROW, WIDE

from facechase.game.models import Viewport
from facechase.input.directions import Direction, HeldDirections, direction_for_key
from facechase.input.touch_pad import TouchPad


def test_key_bindings():
    assert direction_for_key("up") == Direction.UP
    assert direction_for_key("W") == Direction.UP
    assert direction_for_key("a") == Direction.LEFT
    assert direction_for_key("down") == Direction.DOWN
    assert direction_for_key("d") == Direction.RIGHT
    assert direction_for_key("space") is None


def test_held_directions_press_release():
    held = HeldDirections()
    held.press(Direction.UP)
    held.press(Direction.LEFT)
    assert held.snapshot() == frozenset({Direction.UP, Direction.LEFT})

    held.release(Direction.UP)
    assert Direction.UP not in held
    assert len(held) == 1

    held.release(Direction.DOWN)  # not held
    held.clear()
    assert len(held) == 0


def test_sources_hold_independently():
    held = HeldDirections()
    held.press(Direction.RIGHT, "keyboard")
    held.press(Direction.RIGHT, "pointer")

    held.release(Direction.RIGHT, "keyboard")
    assert Direction.RIGHT in held

    held.release_source("pointer")
    assert Direction.RIGHT not in held


def test_pad_only_visible_on_narrow_viewports():
    pad = TouchPad(HeldDirections())
    assert pad.visible(NARROW)
    assert not pad.visible(WIDE)
    assert pad.hit_test(WIDE, 640, 600) is None


def test_pad_layout():
    pad = TouchPad(HeldDirections())
    buttons = {b.direction: b for b in pad.layout(Viewport(400, 800))}

    assert (buttons[Direction.UP].x, buttons[Direction.UP].y) == (176, 640)
    assert (buttons[Direction.LEFT].x, buttons[Direction.LEFT].y) == (120, 696)
    assert (buttons[Direction.DOWN].x, buttons[Direction.DOWN].y) == (176, 696)
    assert (buttons[Direction.RIGHT].x, buttons[Direction.RIGHT].y) == (232, 696)


def test_pad_hit_test():
    pad = TouchPad(HeldDirections())
    vp = Viewport(400, 800)
    assert pad.hit_test(vp, 200, 660) == Direction.UP
    assert pad.hit_test(vp, 130, 720) == Direction.LEFT
    assert pad.hit_test(vp, 130, 660) is None  # empty corner cell
    assert pad.hit_test(vp, 10, 10) is None


def test_pointer_drives_held_directions():
    held = HeldDirections()
    pad = TouchPad(held)
    vp = Viewport(400, 800)

    assert pad.pointer_down(vp, 250, 720)
    assert Direction.RIGHT in held
    assert pad.pressed == Direction.RIGHT

    # Sliding to another button swaps the direction
    assert pad.pointer_down(vp, 130, 720)
    assert held.snapshot() == frozenset({Direction.LEFT})

    pad.pointer_up()
    assert len(held) == 0
    assert pad.pressed is None


def test_pointer_up_keeps_keyboard_hold():
    held = HeldDirections()
    pad = TouchPad(held)
    held.press(Direction.LEFT)

    pad.pointer_down(Viewport(400, 800), 130, 720)
    pad.pointer_up()
    assert Direction.LEFT in held


def test_pointer_miss_returns_false():
    held = HeldDirections()
    assert not TouchPad(held).pointer_down(Viewport(400, 800), 5, 5)
    assert len(held) == 0
