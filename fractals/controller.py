"""Interactive zoom state machine driven by the window's render and input callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from .canvas import PixelBuffer
from .generator import Generator, Point
from .grid import Grid
from .palette import Palette
from .renderer import PixelRenderer
from .sampler import draw

HIGHLIGHT_COLOR = (0, 255, 0)


@dataclass
class Position:
    """Cursor location in window coordinates and in surface pixel coordinates."""

    virtual_x: int = 0
    virtual_y: int = 0
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class SurfaceInfo:
    width: int
    height: int
    dpi: float = 1.0


class Button(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class ButtonPressed:
    button: Button


@dataclass(frozen=True)
class ButtonReleased:
    button: Button


@dataclass(frozen=True)
class CursorMoved:
    x: int
    y: int


InputEvent = Union[ButtonPressed, ButtonReleased, CursorMoved]


@dataclass(frozen=True)
class Recalc:
    minimum: Point
    maximum: Point


@dataclass
class Done:
    minimum: Point
    maximum: Point
    cursor: Position
    image: PixelBuffer
    stale: bool = False


@dataclass
class Dragging:
    anchor: Position
    current: Position
    minimum: Point
    maximum: Point
    image: PixelBuffer = field(repr=False)


RenderState = Union[Recalc, Done, Dragging]


class ZoomController:
    """Decide per frame whether to recompute, overlay a selection, or hold the last frame.

    Every transition swaps ``state`` for a new value in a single assignment.
    """

    def __init__(
        self,
        generator: Generator,
        palette: Palette,
        minimum: Point,
        maximum: Point,
        *,
        device: Optional[str] = None,
    ):
        self.generator = generator
        self.palette = palette
        self.device = device
        self.initial = (minimum, maximum)
        self.state: RenderState = Recalc(minimum, maximum)

    def render(self, buffer: PixelBuffer) -> bool:
        """Update ``buffer`` for the current state; return whether it changed."""

        state = self.state
        if isinstance(state, Dragging):
            state.image.copy_onto(buffer)
            start = (state.anchor.x, state.anchor.y)
            end = (state.current.x, state.current.y)
            buffer.draw_outline(start, end, HIGHLIGHT_COLOR)
            return True

        if isinstance(state, Recalc):
            grid = Grid.new(buffer.width, buffer.height, state.minimum, state.maximum)
            draw(self.generator, self.palette, PixelRenderer(buffer), grid, device=self.device)
            self.state = Done(state.minimum, state.maximum, Position(), buffer.copy())
            return True

        if isinstance(state, Done) and state.stale:
            state.image.copy_onto(buffer)
            self.state = replace(state, stale=False)
            return True

        return False

    def handle_input(self, info: SurfaceInfo, event: InputEvent) -> bool:
        """Apply one input event; return whether a redraw should be requested."""

        state = self.state

        if isinstance(event, CursorMoved):
            if isinstance(state, Dragging):
                _track(state.current, info, event)
            elif isinstance(state, Done):
                _track(state.cursor, info, event)
            return False

        if isinstance(event, ButtonPressed) and isinstance(state, Done):
            if event.button is Button.PRIMARY:
                self.state = Dragging(
                    anchor=replace(state.cursor),
                    current=replace(state.cursor),
                    minimum=state.minimum,
                    maximum=state.maximum,
                    image=state.image.copy(),
                )
                return False
            if event.button is Button.SECONDARY:
                self.state = Recalc(*self.initial)
                return True

        if (
            isinstance(event, ButtonReleased)
            and event.button is Button.PRIMARY
            and isinstance(state, Dragging)
        ):
            minimum, maximum = zoom_box(state, info)
            if minimum.real < maximum.real and minimum.imag < maximum.imag:
                self.state = Recalc(minimum, maximum)
            else:
                # A click without a drag keeps the current view; the next render wipes the outline.
                self.state = Done(state.minimum, state.maximum, state.current, state.image, stale=True)
            return True

        return False


def _track(position: Position, info: SurfaceInfo, event: CursorMoved) -> None:
    position.virtual_x = int(event.x)
    position.virtual_y = int(event.y)
    position.x = int(event.x * info.dpi)
    # Rows count up from the bottom edge, so the top edge is row height and a
    # drag across the whole window spans exactly 0..height.
    position.y = int((info.height - event.y) * info.dpi)


def zoom_box(state: Dragging, info: SurfaceInfo) -> tuple[Point, Point]:
    """Map the dragged pixel rectangle onto the complex plane of the viewed box."""

    min_x, max_x = sorted((state.anchor.x, state.current.x))
    min_y, max_y = sorted((state.anchor.y, state.current.y))

    x_ratio = (state.maximum.real - state.minimum.real) / info.width
    y_ratio = (state.maximum.imag - state.minimum.imag) / info.height

    return (
        Point(min_x * x_ratio + state.minimum.real, min_y * y_ratio + state.minimum.imag),
        Point(max_x * x_ratio + state.minimum.real, max_y * y_ratio + state.minimum.imag),
    )
