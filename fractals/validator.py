from __future__ import annotations
from typing import List

from fractals.base import ImageBounds, RenderSettings

MAX_ITERATIONS = 255
MAX_CONTRAST = 255
# One worker thread per band
MAX_BANDS = 1024


class RenderConfigError(ValueError):
    """Aggregated render request validation error(s)."""


def _raise_if_any(errors: List[str]) -> None:
    if errors:
        raise RenderConfigError("Invalid render request:\n- " + "\n- ".join(errors))


def _check_int(errors: List[str], name: str, value, lo: int, hi: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        errors.append(f"{name} must be an integer, got {type(value).__name__}.")
    elif not lo <= value <= hi:
        errors.append(f"{name} must be within {lo}..{hi}, got {value}.")


def _settings_errors(settings: RenderSettings) -> List[str]:
    errors: List[str] = []

    # --- iteration loop ---
    _check_int(errors, "max_iter", settings.max_iter, 1, MAX_ITERATIONS)
    _check_int(errors, "contrast", settings.contrast, 0, MAX_CONTRAST)

    # --- scheduling ---
    _check_int(errors, "bands", settings.bands, 1, MAX_BANDS)
    return errors


def validate_settings(settings: RenderSettings) -> None:
    """
    Validates render settings before any kernel is compiled or run with them.
    Raises RenderConfigError listing every problem found.
    """
    _raise_if_any(_settings_errors(settings))


def validate_render_request(bounds: ImageBounds, settings: RenderSettings) -> None:
    """
    Validates image bounds and render settings before any buffer is allocated.
    Raises RenderConfigError listing every problem found.
    """
    errors: List[str] = []

    # --- image bounds ---
    for name in ("width", "height"):
        value = getattr(bounds, name)
        if not isinstance(value, int) or isinstance(value, bool):
            errors.append(f"{name} must be an integer, got {type(value).__name__}.")
        elif value <= 0:
            errors.append(f"{name} must be positive, got {value}.")

    errors.extend(_settings_errors(settings))
    _raise_if_any(errors)
