from dataclasses import dataclass

from utils.enums import BackendType, IntensityMode


@dataclass(frozen=True)
class Viewport:
    """
    Holds the region of the complex plane to render.
    Upper_left maps onto pixel (0, 0); lower_right is the corner opposite to it.
    Orientation is not checked, the mapping between the two is purely linear.
    """
    upper_left: complex
    lower_right: complex


@dataclass(frozen=True)
class ImageBounds:
    """
    Size of the resulting image in pixels.
    The pixel buffer for these bounds always has shape (height, width).
    """
    width: int
    height: int

    @property
    def shape(self) -> tuple:
        return self.height, self.width


@dataclass(frozen=True)
class RenderSettings:
    """
    Holds the rendering settings for the Mandelbrot set.
    Max_iter is the iteration cap of the escape-time loop (8-bit counter, so at most 255).
    Contrast converts the escape iteration into an intensity step.
    Bands is the number of row bands rendered concurrently.
    Intensity_mode selects 8-bit wraparound or clamping of the shade formula.
    Backend selects the band kernel implementation.
    """
    max_iter: int = 255
    contrast: int = 15
    bands: int = 8
    intensity_mode: IntensityMode = IntensityMode.WRAP
    backend: BackendType = BackendType.NUMBA
