from __future__ import annotations

import logging
import time
from typing import Dict, Any, Optional

import numpy as np

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from kernel_sources import load_kernel
from rendering.bands import Band
from utils.enums import BackendType

logger = logging.getLogger(__name__)


class BandExecutor:
    """
    Execution facade for band kernels:
      - resolves the band kernel of a backend from the kernel registry,
      - warms it up once so JIT compilation never happens inside a worker,
      - runs it over one band's row view of the canvas.
    """

    op_name = "band"

    def __init__(self) -> None:
        self._meta: Optional[Dict[str, Any]] = None
        self._backend: Optional[BackendType] = None
        self._fractal: Optional[MandelbrotFractal] = None
        self._warmed_up = False

        # Warmup configuration
        self._wu_bounds = ImageBounds(1, 1)
        self._wu_viewport = Viewport(complex(-2.0, -1.0), complex(1.0, 1.0))

    # ---- Lifecycle ------------------------------------------------------

    @property
    def backend(self) -> Optional[BackendType]:
        return self._backend

    def compile(self, fractal: MandelbrotFractal, settings: RenderSettings) -> None:
        """
        Pull the band kernel of settings.backend from the registry and warm it up.
        """
        if self._meta is not None and self._backend == settings.backend and self._fractal is fractal:
            return
        self._meta = load_kernel(settings.backend.name, fractal.name, self.op_name)
        self._backend = settings.backend
        self._fractal = fractal
        self._warmed_up = False
        self._warmup(settings)

    def _warmup(self, settings: RenderSettings) -> None:
        if self._warmed_up or self._meta is None or self._fractal is None:
            return
        t0 = time.perf_counter()
        canvas = np.zeros(self._wu_bounds.shape, dtype=np.uint8)
        self.render_band(self._fractal, canvas, Band(0, 1), self._wu_viewport,
                         self._wu_bounds, settings)
        self._warmed_up = True
        logger.debug("warmed up %s band kernel in %.2f ms", self._backend.name,
                     (time.perf_counter() - t0) * 1000.0)

    def close(self) -> None:
        self._meta = None
        self._backend = None
        self._fractal = None
        self._warmed_up = False

    # ---- Single band ----------------------------------------------------

    def render_band(
        self,
        fractal: MandelbrotFractal,
        rows: np.ndarray,
        band: Band,
        vp: Viewport,
        bounds: ImageBounds,
        settings: RenderSettings,
    ) -> None:
        """
        Fills `rows`, the view of the canvas covering `band`, in place.
        """
        if self._meta is None:
            raise RuntimeError("Executor has not been compiled yet")
        if rows.shape != (len(band), bounds.width):
            raise ValueError(f"band {band} expects rows of shape {(len(band), bounds.width)}, "
                             f"got {rows.shape}")

        arg_map = fractal.build_arg_values(vp, bounds, settings)
        arg_map["row_offset"] = band.start
        arg_map["rows"] = rows
        ordered = [arg_map[name] for name in self._meta["arg_order"]]
        self._meta["func"](*ordered)
