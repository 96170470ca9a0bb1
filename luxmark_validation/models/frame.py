"""Frame buffer borrowed from the benchmark run."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class FrameBuffer:
    """Rendered RGB output, 8 bits per channel, shape ``(height, width, 3)``."""

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid frame size {self.width}x{self.height}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"frame pixels must be uint8, got {self.pixels.dtype}")
        if self.pixels.shape != (self.height, self.width, 3):
            raise ValueError(
                f"frame pixels shape {self.pixels.shape} does not match {self.width}x{self.height}x3"
            )

    @property
    def sample_count(self) -> int:
        return self.width * self.height * 3

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> "FrameBuffer":
        expected = width * height * 3
        if len(data) != expected:
            raise ValueError(f"frame buffer holds {len(data)} bytes, expected {expected}")
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 3)
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "FrameBuffer":
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"expected an (h, w, 3) array, got shape {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"frame pixels must be uint8, got {pixels.dtype}")
        height, width = pixels.shape[:2]
        return cls(width=width, height=height, pixels=pixels)

    def view(self) -> np.ndarray:
        """Read-only view over the caller's pixels; never copies."""
        view = self.pixels.view()
        view.flags.writeable = False
        return view
