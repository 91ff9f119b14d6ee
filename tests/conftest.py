import pytest

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from utils.enums import BackendType


@pytest.fixture
def fractal():
    return MandelbrotFractal()


@pytest.fixture
def viewport():
    # Whole set, as in the reference invocation "-2,-1 1,1"
    return Viewport(complex(-2.0, -1.0), complex(1.0, 1.0))


@pytest.fixture
def small_bounds():
    return ImageBounds(40, 30)


@pytest.fixture
def python_settings():
    return RenderSettings(backend=BackendType.PYTHON)
