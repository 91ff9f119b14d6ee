from __future__ import annotations
import importlib
from typing import Dict, Any

from kernel_sources.registry import load_kernel as load_registered


KERNEL_ROOT = "kernel_sources"

def _module_name(fractal: str) -> str:
    return f"{KERNEL_ROOT}.cpu.{fractal.lower()}"

def load_kernel(backend: str, fractal: str, operation: str) -> Dict[str, Any]:
    """
    Import the fractal's kernel package by convention (which registers its
    kernels) and return the validated kernel metadata.
    """
    try:
        importlib.import_module(_module_name(fractal))
    except ModuleNotFoundError as e:
        raise KeyError(f"No kernel package for fractal='{fractal}'") from e
    meta = load_registered(backend, fractal, operation)
    _validate_meta(meta, f"registry[{fractal}.{operation}:{backend.upper()}]")
    return meta

def _validate_meta(meta: Dict[str, Any], where: str) -> None:
    if "arg_order" not in meta or not isinstance(meta["arg_order"], (list, tuple)):
        raise KeyError(f"{where} must provide an 'arg_order' list")
    if not callable(meta.get("func")):
        raise KeyError(f"{where} must provide a callable 'func'")
