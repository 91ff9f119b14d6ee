import threading
from dataclasses import replace

import numpy as np
import pytest

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.validator import RenderConfigError, MAX_BANDS, validate_render_request
from rendering.bands import Band
from rendering.core import Renderer
from rendering.engines.banded import BandedEngine
from rendering.engines.sequential import SequentialEngine
from rendering.executor import BandExecutor
from utils.enums import BackendType, IntensityMode


class RecordingExecutor(BandExecutor):
    """Records every band it is handed, and the row view it received."""

    def __init__(self):
        super().__init__()
        self.calls = []
        self._lock = threading.Lock()

    def render_band(self, fractal, rows, band, vp, bounds, settings):
        with self._lock:
            self.calls.append((band, rows.shape, threading.current_thread().name))
        super().render_band(fractal, rows, band, vp, bounds, settings)


class FailingExecutor(BandExecutor):
    def render_band(self, fractal, rows, band, vp, bounds, settings):
        if band.start == 2:
            raise RuntimeError("band failed")
        super().render_band(fractal, rows, band, vp, bounds, settings)


def reference_canvas(fractal, vp, bounds, st):
    out = np.zeros(bounds.shape, dtype=np.uint8)
    for y in range(bounds.height):
        for x in range(bounds.width):
            out[y, x] = fractal.intensity(fractal.map_pixel(x, y, bounds, vp), st)
    return out


def test_banded_matches_per_pixel_reference(fractal, viewport, small_bounds, python_settings):
    with Renderer(fractal, python_settings) as renderer:
        canvas = renderer.render(viewport, small_bounds)
    assert np.array_equal(canvas, reference_canvas(fractal, viewport, small_bounds, python_settings))


@pytest.mark.parametrize("bands", [1, 3, 8, 16, 40])
def test_banded_equals_sequential(fractal, viewport, small_bounds, python_settings, bands):
    st = replace(python_settings, bands=bands)
    banded = Renderer(fractal, st, engine=BandedEngine()).render(viewport, small_bounds)
    sequential = Renderer(fractal, st, engine=SequentialEngine()).render(viewport, small_bounds)
    assert np.array_equal(banded, sequential)


def test_numba_backend_matches_python_backend(fractal, viewport):
    bounds = ImageBounds(64, 48)
    st_py = RenderSettings(backend=BackendType.PYTHON)
    st_nb = RenderSettings(backend=BackendType.NUMBA)
    a = Renderer(fractal, st_py).render(viewport, bounds)
    b = Renderer(fractal, st_nb).render(viewport, bounds)
    assert np.array_equal(a, b)


def test_numba_backend_matches_in_clamp_mode(fractal):
    vp = Viewport(complex(-0.8, 0.05), complex(-0.7, 0.15))
    bounds = ImageBounds(32, 24)
    st = RenderSettings(intensity_mode=IntensityMode.CLAMP, bands=5)
    a = Renderer(fractal, replace(st, backend=BackendType.PYTHON)).render(vp, bounds)
    b = Renderer(fractal, replace(st, backend=BackendType.NUMBA)).render(vp, bounds)
    assert np.array_equal(a, b)


def test_canvas_shape_dtype_and_frozen(fractal, viewport, python_settings):
    bounds = ImageBounds(23, 9)
    canvas = Renderer(fractal, python_settings).render(viewport, bounds)
    assert canvas.shape == (9, 23)
    assert canvas.dtype == np.uint8
    assert not canvas.flags.writeable
    with pytest.raises(ValueError):
        canvas[0, 0] = 1


def test_reference_scenario_set_body_black_exterior_white(fractal, viewport, python_settings):
    bounds = ImageBounds(100, 100)
    canvas = Renderer(fractal, python_settings).render(viewport, bounds)
    # pixel (67, 50) maps to 0.01 + 0i, inside the main cardioid
    assert canvas[50, 67] == 0
    # pixel (0, 0) maps to -2 - 1i, which escapes on the first iteration
    assert canvas[0, 0] == 255


def test_each_band_gets_its_own_rows(fractal, viewport, python_settings):
    executor = RecordingExecutor()
    bounds = ImageBounds(10, 21)
    st = replace(python_settings, bands=4)
    Renderer(fractal, st, executor=executor).render(viewport, bounds)

    # Drop the warmup call made during compile
    calls = [c for c in executor.calls if c[1][1] == bounds.width]
    bands = sorted(c[0] for c in calls)
    assert bands == [Band(0, 5), Band(5, 10), Band(10, 15), Band(15, 21)]
    for band, shape, _ in calls:
        assert shape == (len(band), bounds.width)
    assert all(name.startswith("band") for _, _, name in calls)


def test_worker_error_propagates_after_join(fractal, viewport, python_settings):
    renderer = Renderer(fractal, replace(python_settings, bands=4), executor=FailingExecutor())
    with pytest.raises(RuntimeError, match="band failed"):
        renderer.render(viewport, ImageBounds(8, 8))


def test_clamp_differs_from_wrap_only_where_clamped_black(fractal, small_bounds, python_settings):
    # Seahorse valley: plenty of points escaping after more than 17 iterations
    vp = Viewport(complex(-0.8, 0.05), complex(-0.7, 0.15))
    wrap = Renderer(fractal, python_settings).render(vp, small_bounds)
    clamp = Renderer(fractal, replace(python_settings, intensity_mode=IntensityMode.CLAMP)).render(
        vp, small_bounds)
    differ = wrap != clamp
    assert differ.any()
    assert np.all(clamp[differ] == 0)


@pytest.mark.parametrize("bounds", [ImageBounds(0, 10), ImageBounds(10, 0), ImageBounds(-3, 4)])
def test_degenerate_bounds_rejected(fractal, viewport, python_settings, bounds):
    with pytest.raises(RenderConfigError):
        Renderer(fractal, python_settings).render(viewport, bounds)


@pytest.mark.parametrize("changes, field", [
    ({"max_iter": 0}, "max_iter"),
    ({"max_iter": 256}, "max_iter"),
    ({"contrast": -1}, "contrast"),
    ({"contrast": 300}, "contrast"),
    ({"bands": 0}, "bands"),
    ({"bands": MAX_BANDS + 1}, "bands"),
])
def test_invalid_settings_rejected(fractal, viewport, small_bounds, python_settings, changes, field):
    with pytest.raises(RenderConfigError, match=field):
        Renderer(fractal, replace(python_settings, **changes)).render(viewport, small_bounds)


def test_validation_reports_every_problem(python_settings):
    st = replace(python_settings, max_iter=1000, bands=0)
    with pytest.raises(RenderConfigError) as exc:
        validate_render_request(ImageBounds(0, 0), st)
    msg = str(exc.value)
    for field in ("width", "height", "max_iter", "bands"):
        assert field in msg


def test_executor_requires_compile(fractal, viewport, python_settings):
    executor = BandExecutor()
    with pytest.raises(RuntimeError):
        executor.render_band(fractal, np.zeros((1, 1), dtype=np.uint8), Band(0, 1),
                             viewport, ImageBounds(1, 1), python_settings)


def test_executor_rejects_mismatched_view(fractal, viewport, python_settings):
    executor = BandExecutor()
    executor.compile(fractal, python_settings)
    with pytest.raises(ValueError):
        executor.render_band(fractal, np.zeros((2, 5), dtype=np.uint8), Band(0, 3),
                             viewport, ImageBounds(5, 10), python_settings)


class CountingExecutor(BandExecutor):
    def __init__(self):
        super().__init__()
        self.compiled = 0

    def compile(self, fractal, settings):
        self.compiled += 1
        super().compile(fractal, settings)


@pytest.mark.parametrize("changes, field", [
    ({"contrast": 10 ** 20}, "contrast"),
    ({"max_iter": 10 ** 20}, "max_iter"),
    ({"bands": 10 ** 20}, "bands"),
])
def test_settings_rejected_before_kernel_warmup(fractal, changes, field):
    executor = CountingExecutor()
    st = replace(RenderSettings(), **changes)
    with pytest.raises(RenderConfigError, match=field):
        Renderer(fractal, st, executor=executor)
    assert executor.compiled == 0


def test_band_count_at_cap_renders(fractal, viewport, python_settings):
    st = replace(python_settings, bands=MAX_BANDS)
    pixels = Renderer(fractal, st).render(viewport, ImageBounds(4, 3))
    assert pixels.shape == (3, 4)
