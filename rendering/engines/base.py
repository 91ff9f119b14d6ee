from __future__ import annotations

import numpy as np

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from rendering.executor import BandExecutor


class BaseRenderEngine:
    """
    Base class for render engines (sequential, banded).

    Responsibilities:
      - Decide *how* to decompose the canvas rows into work (strategy),
      - Delegate *execution* of each piece to the executor.

    The canvas is allocated by the caller; engines only write into it and
    return once every row has been written.
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
        """
        Subclasses must implement the strategy and return `canvas` fully written.
        """
        raise NotImplementedError("BaseRenderEngine.render() must be implemented by subclasses.")
