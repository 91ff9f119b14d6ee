from __future__ import annotations
import logging
import os

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class ImageWriteError(OSError):
    pass


def save_grayscale_png(pixels: np.ndarray, path: str) -> None:
    """
    Writes a (height, width) uint8 buffer as an 8-bit grayscale PNG.
    A partially written file is removed before the error is raised.
    """
    if pixels.ndim != 2 or pixels.dtype != np.uint8:
        raise ValueError(f"expected a 2-D uint8 buffer, got {pixels.ndim}-D {pixels.dtype}")

    image = Image.fromarray(np.ascontiguousarray(pixels))
    existed = os.path.exists(path)
    try:
        image.save(path, format="PNG")
    except OSError as e:
        if not existed and os.path.isfile(path):
            try:
                os.remove(path)
            except OSError:
                logger.exception("Failed to remove partial output %s", path)
        raise ImageWriteError(f"cannot write image to '{path}': {e}") from e
    logger.info("saved %dx%d grayscale image to %s", pixels.shape[1], pixels.shape[0], path)
