import numpy as np

from conftest import NARROW, make_snapshot

from facechase.core.state import Phase
from facechase.game.models import Point, Vec2, Viewport
from facechase.graphics.primitives import draw_rect, draw_text, glyph_mask, measure_text
from facechase.graphics.renderer import FrameRenderer, Palette
from facechase.input.directions import Direction, HeldDirections
from facechase.input.touch_pad import TouchPad

PALETTE = Palette()


def pixel(frame, x, y):
    return tuple(int(c) for c in frame[y, x])


def test_frame_matches_viewport():
    frame = FrameRenderer().render(make_snapshot())
    assert frame.shape == (720, 1280, 3)
    assert frame.dtype == np.uint8


def test_entities_are_drawn_at_their_positions():
    frame = FrameRenderer().render(make_snapshot(point=Point(Vec2(400, 400), counter=1)))

    assert pixel(frame, 125, 125) == PALETTE.player
    assert pixel(frame, 625, 325) == PALETTE.enemy
    assert pixel(frame, 415, 415) == PALETTE.point
    assert pixel(frame, 5, 5) == PALETTE.background


def test_mega_point_has_its_own_color():
    frame = FrameRenderer().render(make_snapshot(point=Point(Vec2(400, 400), counter=10, mega=True)))
    assert pixel(frame, 435, 415) == PALETTE.mega_point


def test_start_overlay_dims_playfield():
    frame = FrameRenderer().render(make_snapshot(phase=Phase.NOT_STARTED))
    assert pixel(frame, 125, 125) != PALETTE.player
    assert sum(pixel(frame, 125, 125)) < sum(PALETTE.player)


def test_caught_overlay_renders():
    frame = FrameRenderer().render(make_snapshot(phase=Phase.OVER, score=15, new_record=True))
    assert frame.any()


def test_tiny_viewport_does_not_crash():
    snapshot = make_snapshot(viewport=Viewport(20, 20), phase=Phase.OVER)
    frame = FrameRenderer().render(snapshot)
    assert frame.shape == (20, 20, 3)


def test_touch_pad_buttons_and_pressed_state():
    pad = TouchPad(HeldDirections())
    buttons = pad.layout(NARROW)
    frame = FrameRenderer().render(make_snapshot(viewport=NARROW), buttons, Direction.LEFT)

    for button in buttons:
        expected = PALETTE.pad_active if button.direction == Direction.LEFT else PALETTE.pad
        assert pixel(frame, button.x + 2, button.y + 2) == expected


def test_buffer_is_reused_until_size_changes():
    renderer = FrameRenderer()
    first = renderer.render(make_snapshot())
    assert renderer.render(make_snapshot(tick=1)) is first
    assert renderer.render(make_snapshot(viewport=NARROW)) is not first


def test_draw_rect_clips():
    buffer = np.zeros((10, 10, 3), dtype=np.uint8)
    draw_rect(buffer, -5, -5, 8, 8, (255, 0, 0))
    assert tuple(buffer[2, 2]) == (255, 0, 0)
    assert tuple(buffer[3, 3]) == (0, 0, 0)


def test_text_measure_and_fallback_glyph():
    assert measure_text("AB", scale=2) == (14, 10)
    assert (glyph_mask("~") == glyph_mask("?")).all()

    buffer = np.zeros((20, 40, 3), dtype=np.uint8)
    assert draw_text(buffer, "HI", 1, 1, (255, 255, 255)) == measure_text("HI")
    assert buffer.any()
