from __future__ import annotations
import logging
import time
import numpy as np
from typing import Optional

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from fractals.validator import validate_render_request, validate_settings
from rendering.engines.banded import BandedEngine
from rendering.engines.base import BaseRenderEngine
from rendering.executor import BandExecutor

logger = logging.getLogger(__name__)


class Renderer:

    """
    Facade that binds together:
      - the fractal + render settings,
      - the render engine (strategy),
      - the band executor
    and owns the pixel buffer of each render.
    """

    def __init__(
        self,
        fractal: Optional[MandelbrotFractal] = None,
        settings: Optional[RenderSettings] = None,
        *,
        engine: Optional[BaseRenderEngine] = None,
        executor: Optional[BandExecutor] = None,
    ):
        # Core state
        self.fractal = fractal or MandelbrotFractal()
        self.settings = settings or RenderSettings()
        # The warmup below already runs the kernel with these settings
        validate_settings(self.settings)

        # Strategy
        self.engine = engine or BandedEngine()

        # Execution
        self.executor = executor or BandExecutor()

        # Precompile
        self.executor.compile(self.fractal, self.settings)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def close(self) -> None:
        self.executor.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ----------------------------
    # Render entry point
    # ----------------------------

    def render(self, vp: Viewport, bounds: ImageBounds) -> np.ndarray:
        """
        Validate, allocate the canvas and delegate to the engine.
        The returned (height, width) uint8 canvas is read-only.
        """
        validate_render_request(bounds, self.settings)
        self.executor.compile(self.fractal, self.settings)

        t0 = time.perf_counter()
        canvas = np.zeros(bounds.shape, dtype=np.uint8)
        canvas = self.engine.render(self.fractal, self.executor, self.settings,
                                    vp, bounds, canvas)
        canvas.setflags(write=False)

        elapsed = (time.perf_counter() - t0) * 1000.0
        logger.info("rendered %dx%d in %d bands on %s in %.2f ms (%s)",
                    bounds.width, bounds.height, self.settings.bands,
                    self.settings.backend.name, elapsed, type(self.engine).__name__)
        return canvas
