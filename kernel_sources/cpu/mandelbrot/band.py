from numba import njit

from kernel_sources.registry import register_kernel
from kernel_sources.cpu.mandelbrot.scalar import (map_component, escape_iteration, shade,
                                                  map_component_jit, escape_iteration_jit,
                                                  shade_jit)


ARG_SCALARS = [
    "row_offset",
    "ul_re", "ul_im", "lr_re", "lr_im",
    "width", "height",
    "max_iter", "contrast", "wrap",
]
ARG_BUFFERS_OUT = ["rows"]

ARG_ORDER = ARG_BUFFERS_OUT + ARG_SCALARS


def _band_python(rows, row_offset, ul_re, ul_im, lr_re, lr_im,
                 width, height, max_iter, contrast, wrap):
    # rows is the band's own view; local row r is image row row_offset + r
    for r in range(rows.shape[0]):
        ci = map_component(ul_im, lr_im, row_offset + r, height)
        for x in range(width):
            cr = map_component(ul_re, lr_re, x, width)
            rows[r, x] = shade(escape_iteration(cr, ci, max_iter), contrast, wrap)


@njit(cache=True, nogil=True)
def _band_numba(rows, row_offset, ul_re, ul_im, lr_re, lr_im,
                width, height, max_iter, contrast, wrap):
    for r in range(rows.shape[0]):
        ci = map_component_jit(ul_im, lr_im, row_offset + r, height)
        for x in range(width):
            cr = map_component_jit(ul_re, lr_re, x, width)
            rows[r, x] = shade_jit(escape_iteration_jit(cr, ci, max_iter), contrast, wrap)


register_kernel(
    fractal="mandelbrot",
    op_name="band",
    backend="PYTHON",
    func=_band_python,
    arg_order=ARG_ORDER,
)

register_kernel(
    fractal="mandelbrot",
    op_name="band",
    backend="NUMBA",
    func=_band_numba,
    arg_order=ARG_ORDER,
)
