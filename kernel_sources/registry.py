from __future__ import annotations
from typing import Dict, Any

# Nested dict: [fractal][op_name][backend] -> meta
_REGISTRY: Dict[str, Dict[str, Dict[str, Dict[str, Any]]]] = {}

def register_kernel(fractal: str, op_name: str, backend: str, **meta: Any) -> None:
    """
    Register kernel metadata for a given fractal, operation and backend.
    Example:
        register_kernel("mandelbrot", "band", "NUMBA", func=my_jit_func, arg_order=[...])
    """
    _REGISTRY.setdefault(fractal, {}).setdefault(op_name, {})[backend.upper()] = meta

def load_kernel(backend: str, fractal: str, op_name: str) -> Dict[str, Any]:
    """
    Load kernel metadata from the registry for the given parameters.
    Raises KeyError naming the backends that are registered for the operation.
    """
    be = backend.upper()
    backends = _REGISTRY.get(fractal, {}).get(op_name, {})
    if be not in backends:
        available = ", ".join(sorted(backends)) or "none"
        raise KeyError(f"Kernel not found for fractal='{fractal}', op='{op_name}', backend='{be}' "
                       f"(available: {available})")
    return backends[be]
