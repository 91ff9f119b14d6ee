from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from rendering.bands import Band, partition_rows
from rendering.engines.base import BaseRenderEngine
from rendering.executor import BandExecutor

logger = logging.getLogger(__name__)


class BandedEngine(BaseRenderEngine):
    """
    Fixed row-band rendering:
      - Splits the canvas rows into settings.bands contiguous bands.
      - Runs one worker thread per band; each worker only ever holds the
        canvas view of its own rows, so writes never overlap and need no lock.
      - Joins every worker before returning; the first worker error is re-raised.

    Band sizes are fixed up front regardless of per-pixel cost, so workers may
    finish at very different times.
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
        bands = partition_rows(bounds.height, settings.bands)

        def run(idx: int, band: Band, rows: np.ndarray) -> int:
            t0 = time.perf_counter()
            executor.render_band(fractal, rows, band, viewport, bounds, settings)
            logger.debug("band %d rows [%d, %d) done in %.2f ms", idx, band.start, band.stop,
                         (time.perf_counter() - t0) * 1000.0)
            return idx

        with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="band") as ex:
            futs = [ex.submit(run, i, band, canvas[band.rows]) for i, band in enumerate(bands)]
            for fut in as_completed(futs):
                fut.result()

        return canvas
