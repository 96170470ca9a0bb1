"""Two-pass convergence test between a baseline image and a test image."""

from __future__ import annotations

import numpy as np

from luxmark_validation.errors import ComparatorExhaustedError


class ConvergenceTest:
    """Stateful per-pixel comparator.

    The first call to :meth:`test` stores the baseline and reports every
    pixel as changed, since there was nothing to compare against. The second
    call returns the number of pixels where any channel moved by more than
    ``tolerance``. A third call needs :meth:`reset` first.
    """

    def __init__(self, width: int, height: int, tolerance: float = 0.01):
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.tolerance = tolerance
        self._baseline: np.ndarray | None = None
        self._compared = False

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def reset(self) -> None:
        self._baseline = None
        self._compared = False

    def test(self, image: np.ndarray) -> int:
        image = self._as_rgb(image)
        if self._compared:
            raise ComparatorExhaustedError("Convergence test already compared an image; call reset()")
        if self._baseline is None:
            self._baseline = image.copy()
            return self.pixel_count

        self._compared = True
        delta = np.abs(image - self._baseline)
        return int(np.count_nonzero((delta > self.tolerance).any(axis=-1)))

    def _as_rgb(self, image: np.ndarray) -> np.ndarray:
        image = np.asarray(image, dtype=np.float32)
        if image.size != self.pixel_count * 3:
            raise ValueError(
                f"image holds {image.size} samples, expected {self.pixel_count * 3} "
                f"for {self.width}x{self.height}"
            )
        return image.reshape(self.height, self.width, 3)
