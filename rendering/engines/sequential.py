from __future__ import annotations

import numpy as np

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from rendering.bands import Band
from rendering.engines.base import BaseRenderEngine
from rendering.executor import BandExecutor


class SequentialEngine(BaseRenderEngine):
    """
    Single-pass rendering strategy:
      - Treats the whole image as one band on the calling thread.
      - Same kernel as the banded engine, so both produce identical canvases.
    """

    def render(
        self,
        fractal: MandelbrotFractal,
        executor: BandExecutor,
        settings: RenderSettings,
        viewport: Viewport,
        bounds: ImageBounds,
        canvas: np.ndarray,
    ) -> np.ndarray:
        executor.render_band(fractal, canvas, Band(0, bounds.height), viewport, bounds, settings)
        return canvas
