"""
Render the Mandelbrot set into a grayscale PNG.

Usage examples:
  python main.py out.png 1000x750 -2,-1 1,1
  python main.py out.png 1920x1080 -2.2,-1.2 1.0,1.2 --bands 16 --intensity clamp -v
"""
import argparse
import logging
import sys
from typing import List, Optional

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from fractals.validator import RenderConfigError
from rendering.core import Renderer
from rendering.engines.banded import BandedEngine
from rendering.engines.sequential import SequentialEngine
from utils.enums import BackendType, EngineMode, IntensityMode
from utils.image_io import save_grayscale_png, ImageWriteError
from utils.parsing import parse_pair, parse_complex, ParseError

logger = logging.getLogger(__name__)

USAGE = "Usage: mandelbrot <output.png> <width>x<height> <upperLeft> <lowerRight>"

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2

ENGINES = {
    EngineMode.BANDED: BandedEngine,
    EngineMode.SEQUENTIAL: SequentialEngine,
}


class UsageParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors on stdout with exit status 1."""

    def error(self, message):
        print(USAGE)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """
    Options only. The four positionals are taken from the leftover arguments,
    since coordinates like "-2,-1" look like unknown options to argparse.
    """
    p = UsageParser(prog="mandelbrot", usage=USAGE[len("Usage: "):] + " [options]",
                    description="Render the Mandelbrot set into a grayscale PNG.")
    p.add_argument("--bands", type=int, default=8,
                   help="Number of row bands rendered concurrently")
    p.add_argument("--backend", type=str, default="numba",
                   choices=[b.name.lower() for b in BackendType],
                   help="Band kernel implementation")
    p.add_argument("--engine", type=str, default="banded",
                   choices=[m.name.lower() for m in EngineMode],
                   help="Banded (parallel) or sequential rendering")
    p.add_argument("--intensity", type=str, default="wrap",
                   choices=[m.name.lower() for m in IntensityMode],
                   help="8-bit wraparound (reference) or clamped shading")
    p.add_argument("--max-iter", type=int, default=255)
    p.add_argument("--contrast", type=int, default=15)
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Repeat for more log output")
    return p


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args, positionals = parser.parse_known_args(argv)
    if len(positionals) != 4:
        print(USAGE)
        return EXIT_USAGE

    configure_logging(args.verbose)
    output, bounds_str, upper_left_str, lower_right_str = positionals

    try:
        width, height = parse_pair(bounds_str, "x")
        viewport = Viewport(parse_complex(upper_left_str), parse_complex(lower_right_str))
        settings = RenderSettings(max_iter=args.max_iter,
                                  contrast=args.contrast,
                                  bands=args.bands,
                                  intensity_mode=IntensityMode[args.intensity.upper()],
                                  backend=BackendType[args.backend.upper()])
        engine = ENGINES[EngineMode[args.engine.upper()]]()

        with Renderer(MandelbrotFractal(), settings, engine=engine) as renderer:
            pixels = renderer.render(viewport, ImageBounds(width, height))
        save_grayscale_png(pixels, output)
    except (ParseError, RenderConfigError, ImageWriteError) as e:
        logger.error("%s", e)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
