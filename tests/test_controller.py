import numpy as np
import pytest

from fractals.canvas import PixelBuffer
from fractals.controller import (
    HIGHLIGHT_COLOR,
    Button,
    ButtonPressed,
    ButtonReleased,
    CursorMoved,
    Done,
    Dragging,
    Position,
    Recalc,
    SurfaceInfo,
    ZoomController,
)
from fractals.generator import Mandelbrot, Point
from fractals.palette import RGBPalette

WIDTH, HEIGHT = 12, 8
MINIMUM, MAXIMUM = Point(-2.25, -1.5), Point(0.75, 1.5)
INFO = SurfaceInfo(WIDTH, HEIGHT, dpi=1.0)


@pytest.fixture
def controller():
    return ZoomController(Mandelbrot(), RGBPalette(), MINIMUM, MAXIMUM)


@pytest.fixture
def buffer():
    return PixelBuffer(WIDTH, HEIGHT)


def _done(controller, buffer):
    assert controller.render(buffer)
    assert isinstance(controller.state, Done)
    return controller.state


def test_starts_in_recalc(controller):
    assert controller.state == Recalc(MINIMUM, MAXIMUM)


def test_recalc_renders_and_caches(controller, buffer):
    state = _done(controller, buffer)
    assert (state.minimum, state.maximum) == (MINIMUM, MAXIMUM)
    assert state.cursor == Position()
    assert np.array_equal(state.image.pixels, buffer.pixels)
    assert state.image is not buffer
    assert buffer.pixels.any()


def test_done_holds_the_frame(controller, buffer):
    _done(controller, buffer)
    buffer.pixels[:] = 1
    assert not controller.render(buffer)
    assert (buffer.pixels == 1).all()


def test_cursor_moves_are_tracked_in_surface_pixels(controller, buffer):
    _done(controller, buffer)
    info = SurfaceInfo(WIDTH, HEIGHT, dpi=2.0)
    assert not controller.handle_input(info, CursorMoved(3, 2))
    assert controller.state.cursor == Position(virtual_x=3, virtual_y=2, x=6, y=12)
    assert isinstance(controller.state, Done)


def test_full_surface_drag_keeps_the_view(controller, buffer):
    _done(controller, buffer)
    controller.handle_input(INFO, CursorMoved(0, HEIGHT))
    assert not controller.handle_input(INFO, ButtonPressed(Button.PRIMARY))
    assert isinstance(controller.state, Dragging)
    controller.handle_input(INFO, CursorMoved(WIDTH, 0))
    assert controller.handle_input(INFO, ButtonReleased(Button.PRIMARY))

    state = controller.state
    assert isinstance(state, Recalc)
    for got, expected in [(state.minimum, MINIMUM), (state.maximum, MAXIMUM)]:
        assert got.real == pytest.approx(expected.real)
        assert got.imag == pytest.approx(expected.imag)


def test_drag_zooms_into_the_selected_quarter(controller, buffer):
    _done(controller, buffer)
    controller.handle_input(INFO, CursorMoved(WIDTH // 2, HEIGHT // 2))
    controller.handle_input(INFO, ButtonPressed(Button.PRIMARY))
    controller.handle_input(INFO, CursorMoved(0, HEIGHT))
    controller.handle_input(INFO, ButtonReleased(Button.PRIMARY))

    state = controller.state
    assert state.minimum.real == pytest.approx(-2.25)
    assert state.minimum.imag == pytest.approx(-1.5)
    assert state.maximum.real == pytest.approx(-0.75)
    assert state.maximum.imag == pytest.approx(0.0)


def test_dragging_overlay_leaves_cached_frame_alone(controller, buffer):
    done = _done(controller, buffer)
    cached = done.image.pixels.copy()
    controller.handle_input(INFO, CursorMoved(2, 6))
    controller.handle_input(INFO, ButtonPressed(Button.PRIMARY))
    controller.handle_input(INFO, CursorMoved(9, 1))

    dragging = controller.state
    assert dragging.image is not done.image
    assert controller.render(buffer)
    assert isinstance(controller.state, Dragging)

    green = np.all(buffer.pixels == HIGHLIGHT_COLOR, axis=-1)
    assert green[2, 2:10].all() and green[7, 2:10].all()
    assert np.array_equal(done.image.pixels, cached)
    assert np.array_equal(dragging.image.pixels, cached)


def test_click_without_drag_keeps_the_view(controller, buffer):
    _done(controller, buffer)
    controller.handle_input(INFO, CursorMoved(4, 4))
    controller.handle_input(INFO, ButtonPressed(Button.PRIMARY))
    assert controller.handle_input(INFO, ButtonReleased(Button.PRIMARY))
    state = controller.state
    assert isinstance(state, Done)
    assert (state.minimum, state.maximum) == (MINIMUM, MAXIMUM)


def test_secondary_press_resets_to_initial_view(controller, buffer):
    _done(controller, buffer)
    controller.handle_input(INFO, CursorMoved(WIDTH // 2, HEIGHT // 2))
    controller.handle_input(INFO, ButtonPressed(Button.PRIMARY))
    controller.handle_input(INFO, CursorMoved(0, HEIGHT))
    controller.handle_input(INFO, ButtonReleased(Button.PRIMARY))
    _done(controller, buffer)
    assert controller.state.maximum != MAXIMUM

    assert controller.handle_input(INFO, ButtonPressed(Button.SECONDARY))
    assert controller.state == Recalc(MINIMUM, MAXIMUM)


@pytest.mark.parametrize(
    "event",
    [
        ButtonReleased(Button.PRIMARY),
        ButtonPressed(Button.PRIMARY),
        ButtonPressed(Button.SECONDARY),
        CursorMoved(1, 1),
    ],
)
def test_events_in_recalc_are_ignored(controller, event):
    assert not controller.handle_input(INFO, event)
    assert controller.state == Recalc(MINIMUM, MAXIMUM)


def test_secondary_press_while_dragging_is_ignored(controller, buffer):
    _done(controller, buffer)
    controller.handle_input(INFO, ButtonPressed(Button.PRIMARY))
    assert not controller.handle_input(INFO, ButtonPressed(Button.SECONDARY))
    assert isinstance(controller.state, Dragging)


@pytest.mark.parametrize("start, end", [((4, 2), (4, 6)), ((1, 3), (10, 3)), ((5, 5), (5, 5))])
def test_zero_area_release_wipes_the_outline(controller, buffer, start, end):
    done = _done(controller, buffer)
    controller.handle_input(INFO, CursorMoved(*start))
    controller.handle_input(INFO, ButtonPressed(Button.PRIMARY))
    controller.handle_input(INFO, CursorMoved(*end))
    assert controller.render(buffer)
    assert np.all(buffer.pixels == HIGHLIGHT_COLOR, axis=-1).any()

    assert controller.handle_input(INFO, ButtonReleased(Button.PRIMARY))
    assert controller.render(buffer)
    assert not np.all(buffer.pixels == HIGHLIGHT_COLOR, axis=-1).any()
    assert np.array_equal(buffer.pixels, done.image.pixels)

    assert not controller.state.stale
    assert not controller.render(buffer)


def test_drag_corners_are_copies_of_the_cursor(controller, buffer):
    done = _done(controller, buffer)
    controller.handle_input(INFO, CursorMoved(3, 3))
    controller.handle_input(INFO, ButtonPressed(Button.PRIMARY))
    controller.handle_input(INFO, CursorMoved(7, 1))

    dragging = controller.state
    assert dragging.anchor == Position(virtual_x=3, virtual_y=3, x=3, y=5)
    assert dragging.current == Position(virtual_x=7, virtual_y=1, x=7, y=7)
    assert done.cursor == Position(virtual_x=3, virtual_y=3, x=3, y=5)
