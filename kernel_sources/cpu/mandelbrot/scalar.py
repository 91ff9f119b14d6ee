"""
Per-pixel primitives shared by every CPU band kernel.

The functions take plain floats and ints only, so the same source is
compiled with numba and also called from pure Python. Both backends therefore
run identical arithmetic and produce identical buffers.
"""
from numba import njit


def map_component(lo, hi, i, n):
    """Linear interpolation of pixel index i out of n between lo and hi."""
    return lo + (hi - lo) * i / n


def escape_iteration(cr, ci, max_iter):
    """
    Iterates v <- v*v + c from v = 0.
    Returns the 0-based step at which |v| first exceeds 2, or -1 if it never does.
    """
    zr = 0.0
    zi = 0.0
    for n in range(max_iter):
        zr, zi = zr * zr - zi * zi + cr, zr * zi + zi * zr + ci
        if zr * zr + zi * zi > 4.0:
            return n
    return -1


def shade(n, contrast, wrap):
    """Escape step -> 8-bit intensity. Points in the set (n < 0) are black."""
    if n < 0:
        return 0
    value = 255 - contrast * n
    if wrap:
        # uint8 arithmetic of the reference renderer
        return value & 0xFF
    return value if value > 0 else 0


map_component_jit = njit(cache=True)(map_component)
escape_iteration_jit = njit(cache=True)(escape_iteration)
shade_jit = njit(cache=True)(shade)
