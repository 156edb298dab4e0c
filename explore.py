import os
import sys
import time
import warnings
from dataclasses import dataclass

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

import pygame
import pygame.surfarray

from fractals import (
    Button,
    ButtonPressed,
    ButtonReleased,
    CharPalette,
    CursorMoved,
    Generator,
    Grid,
    Julia,
    Mandelbrot,
    PixelBuffer,
    Point,
    Recalc,
    RGBPalette,
    SurfaceInfo,
    TextRenderer,
    ZoomController,
    draw,
)
from fractals.palette import DEFAULT_COLORMAP, DEFAULT_RAMP_STEPS

log("TensorFlow version: %s" % tf.__version__)

# Sampling runs on the first visible GPU when TensorFlow finds one and falls
# back to the CPU otherwise.
gpus = tf.config.list_physical_devices('GPU')
if gpus:
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
        DEVICE = '/GPU:0'
        log("GPU found, using %s" % gpus[0].name)
    except RuntimeError as e:
        log(e)
        DEVICE = '/CPU:0'
else:
    DEVICE = '/CPU:0'
    log("No GPU found, using CPU")

from argparse import ArgumentParser

TERM_WIDTH = 99
TERM_HEIGHT = 37

RGB_WIDTH = 960
RGB_HEIGHT = 640

MANDELBROT_VIEW = (Point(-2.25, -1.5), Point(0.75, 1.5))
JULIA_VIEW = (Point(-1.5, -1.5), Point(1.5, 1.5))

_MOUSE_BUTTONS = {1: Button.PRIMARY, 3: Button.SECONDARY}


@dataclass
class RunConfig:
    kind: str
    generator: Generator
    mode: str
    width: int
    height: int
    minimum: Point
    maximum: Point
    colormap: str
    ramp_steps: int

    @property
    def title(self) -> str:
        return self.kind.capitalize()


def build_parser():
    parser = ArgumentParser(description='Draw Mandelbrot and Julia sets as text or in a zoomable window.')

    parser.add_argument('-m', '--mandelbrot', type=float, nargs='?', const=0.0, default=None,
                        dest='mandelbrot', help='draw the Mandelbrot set, iterating from Z+Zi (default 0.0)',
                        metavar='Z')

    output = parser.add_mutually_exclusive_group()
    output.add_argument('-t', '--text', action='store_true',
                        help='print a %dx%d character frame (default)' % (TERM_WIDTH, TERM_HEIGHT))
    output.add_argument('-i', '--image', action='store_true',
                        help='open a %dx%d window; drag to zoom, right click to reset' % (RGB_WIDTH, RGB_HEIGHT))

    parser.add_argument('--colormap', type=str,
                        dest='colormap', help='matplotlib colormap supplying the window palette ramp',
                        metavar='COLORMAP', default=DEFAULT_COLORMAP)

    parser.add_argument('--ramp-steps', type=int,
                        dest='ramp_steps', help='number of colors sampled from the colormap before mirroring',
                        metavar='STEPS', default=DEFAULT_RAMP_STEPS)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    subparsers = parser.add_subparsers(dest='fractal')
    julia = subparsers.add_parser('julia', help='draw a Julia set')
    julia.add_argument('-p', type=float, dest='p', default=0.32,
                       help='real part of the constant', metavar='P')
    julia.add_argument('-z', type=float, dest='z', default=0.043,
                       help='imaginary part of the constant', metavar='Z')

    return parser


def resolve_config(opt, parser: ArgumentParser) -> RunConfig:
    if opt.fractal == 'julia' and opt.mandelbrot is not None:
        parser.error("--mandelbrot cannot be combined with the julia subcommand.")
    if opt.ramp_steps < 1:
        parser.error("--ramp-steps must be at least 1.")

    mode = 'image' if opt.image else 'text'
    width, height = (RGB_WIDTH, RGB_HEIGHT) if mode == 'image' else (TERM_WIDTH, TERM_HEIGHT)

    if opt.fractal == 'julia':
        kind = 'julia'
        generator = Julia(Point(opt.p, opt.z))
        minimum, maximum = JULIA_VIEW
    else:
        kind = 'mandelbrot'
        z = opt.mandelbrot if opt.mandelbrot is not None else 0.0
        generator = Mandelbrot(Point(z, z))
        minimum, maximum = MANDELBROT_VIEW

    return RunConfig(
        kind=kind,
        generator=generator,
        mode=mode,
        width=width,
        height=height,
        minimum=minimum,
        maximum=maximum,
        colormap=opt.colormap,
        ramp_steps=opt.ramp_steps,
    )


def translate_event(event):
    """Map a pygame event onto a zoom controller event, or None when it is not one."""

    if event.type == pygame.MOUSEBUTTONDOWN and event.button in _MOUSE_BUTTONS:
        return ButtonPressed(_MOUSE_BUTTONS[event.button])
    if event.type == pygame.MOUSEBUTTONUP and event.button in _MOUSE_BUTTONS:
        return ButtonReleased(_MOUSE_BUTTONS[event.button])
    if event.type == pygame.MOUSEMOTION:
        x, y = event.pos
        return CursorMoved(x, y)
    return None


def run_text(config: RunConfig, sink=None) -> None:
    grid = Grid.new(config.width, config.height, config.minimum, config.maximum)
    draw(config.generator, CharPalette(), TextRenderer(sink), grid, device=DEVICE)


def run_window(config: RunConfig, palette: RGBPalette) -> None:
    controller = ZoomController(config.generator, palette, config.minimum, config.maximum, device=DEVICE)
    buffer = PixelBuffer(config.width, config.height)
    info = SurfaceInfo(config.width, config.height, dpi=1.0)

    pygame.init()
    try:
        screen = pygame.display.set_mode((config.width, config.height))
        pygame.display.set_caption(config.title)
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break
                translated = translate_event(event)
                if translated is not None:
                    controller.handle_input(info, translated)
            if not running:
                break

            state = controller.state
            started = time.perf_counter()
            if controller.render(buffer):
                if isinstance(state, Recalc):
                    log("computed [{0}, {1}] to [{2}, {3}] in {4:.3f}s".format(
                        state.minimum.real, state.minimum.imag,
                        state.maximum.real, state.maximum.imag,
                        time.perf_counter() - started,
                    ))
                pygame.surfarray.blit_array(screen, buffer.to_surface_array())
                pygame.display.flip()

            clock.tick(60)
    finally:
        pygame.quit()


def main():
    parser = build_parser()
    opt = parser.parse_args()
    config = resolve_config(opt, parser)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    if config.mode == 'text':
        run_text(config)
        return

    try:
        palette = RGBPalette(colormap=config.colormap, steps=config.ramp_steps)
    except ValueError as exc:
        parser.error(str(exc))
    run_window(config, palette)


if __name__ == '__main__':
    main()
