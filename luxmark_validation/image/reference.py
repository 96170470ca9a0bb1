"""Reference image loading and sample normalization."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from luxmark_validation.errors import SizeMismatchError

logger = logging.getLogger(__name__)

RAW_SUFFIXES = {".raw", ".bin"}
IMAGE_SUFFIXES = {".png", ".bmp", ".ppm", ".tga", ".tif", ".tiff"}


def normalize(samples: np.ndarray) -> np.ndarray:
    """Map 8-bit samples to float32 in [0, 1]."""
    return np.asarray(samples, dtype=np.uint8).astype(np.float32) / 255.0


def read_reference_samples(path: Path, width: int, height: int) -> np.ndarray:
    """Read the reference pixels as a ``(height, width, 3)`` uint8 array.

    Raw files must hold exactly ``width * height * 3`` bytes. Image files
    are decoded to RGB and must have the frame's dimensions.
    """
    suffix = path.suffix.lower()
    if suffix in IMAGE_SUFFIXES:
        with Image.open(path) as img:
            if img.size != (width, height):
                raise SizeMismatchError(width * height, img.size[0] * img.size[1], unit="pixels")
            return np.asarray(img.convert("RGB"), dtype=np.uint8)

    # Anything else is treated as raw RGB bytes
    data = path.read_bytes()
    expected = width * height * 3
    if len(data) != expected:
        raise SizeMismatchError(expected, len(data))
    return np.frombuffer(data, dtype=np.uint8).reshape(height, width, 3)


def load_reference_image(path: Path, width: int, height: int) -> np.ndarray:
    logger.info("Image validation file name: [%s]", path)
    return normalize(read_reference_samples(path, width, height))
