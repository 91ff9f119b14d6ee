from dataclasses import dataclass
from typing import Dict, Any, Optional

from fractals.base import Viewport, ImageBounds, RenderSettings
from kernel_sources.cpu.mandelbrot.scalar import map_component, escape_iteration, shade
from utils.enums import IntensityMode


@dataclass
class MandelbrotFractal:
    """
    Grayscale escape-time Mandelbrot set.

    The per-pixel methods are the reference path; band kernels evaluate the
    same primitives for whole row ranges.
    """
    name: str = "mandelbrot"

    def map_pixel(self, x: int, y: int, bounds: ImageBounds, vp: Viewport) -> complex:
        """
        Maps pixel (x, y) into the viewport. x and y are not range checked.
        """
        ul, lr = vp.upper_left, vp.lower_right
        return complex(map_component(ul.real, lr.real, x, bounds.width),
                       map_component(ul.imag, lr.imag, y, bounds.height))

    def escape_iteration(self, c: complex, st: RenderSettings) -> Optional[int]:
        """
        Returns the 0-based iteration at which the orbit of c escapes,
        or None when c stays bounded for st.max_iter iterations.
        """
        n = escape_iteration(c.real, c.imag, st.max_iter)
        return None if n < 0 else n

    def intensity(self, c: complex, st: RenderSettings) -> int:
        n = escape_iteration(c.real, c.imag, st.max_iter)
        return shade(n, st.contrast, st.intensity_mode == IntensityMode.WRAP)

    def build_arg_values(self, vp: Viewport, bounds: ImageBounds,
                         st: RenderSettings) -> Dict[str, Any]:
        """
        Scalar kernel arguments shared by every band of one render.
        """
        return {
            "ul_re": float(vp.upper_left.real),
            "ul_im": float(vp.upper_left.imag),
            "lr_re": float(vp.lower_right.real),
            "lr_im": float(vp.lower_right.imag),
            "width": int(bounds.width),
            "height": int(bounds.height),
            "max_iter": int(st.max_iter),
            "contrast": int(st.contrast),
            "wrap": st.intensity_mode == IntensityMode.WRAP,
        }
