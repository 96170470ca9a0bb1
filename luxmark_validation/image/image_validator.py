"""Image fidelity validation — compares the rendered frame with the reference."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from luxmark_validation.errors import UnsupportedModeError, UnsupportedSceneError, ValidationError
from luxmark_validation.image.convergence import ConvergenceTest
from luxmark_validation.image.reference import load_reference_image, normalize
from luxmark_validation.models.config import BenchmarkMode, ValidatorConfig
from luxmark_validation.models.frame import FrameBuffer
from luxmark_validation.models.status import (
    LABEL_COMPARING,
    LABEL_ERROR,
    LABEL_STARTING,
    Track,
    ValidationStatus,
)

logger = logging.getLogger(__name__)


def format_image_result(diff_count: int, error_perc: float) -> str:
    return f"OK ({diff_count} different pixels, {error_perc:.2f}%)"


class ImageFidelityValidator:
    """Runs the two-pass convergence test against the mode's reference image.

    The frame buffer is only read. Its owner must keep it alive until
    :meth:`run` returns, which the session guarantees by joining.
    """

    def __init__(
        self,
        mode: BenchmarkMode,
        scene_name: str,
        frame_buffer: FrameBuffer,
        config: ValidatorConfig,
        publish: Callable[[ValidationStatus], None],
    ):
        self.mode = mode
        self.scene_name = scene_name
        self.frame_buffer = frame_buffer
        self.config = config
        self._publish = publish

    def _emit(self, label: str, ok: bool = False) -> None:
        self._publish(ValidationStatus(Track.IMAGE, label, ok))

    def run(self) -> None:
        """Run the comparison; the magnitude of the error never fails the track."""
        self._emit(LABEL_STARTING)
        try:
            diff_count, error_perc = self._compare()
        except (OSError, ValidationError) as e:
            logger.error("IMAGE VALIDATION ERROR: %s", e)
            self._emit(LABEL_ERROR)
        except Exception as e:
            logger.exception("IMAGE VALIDATION ERROR: %s", e)
            self._emit(LABEL_ERROR)
        else:
            self._emit(format_image_result(diff_count, error_perc), True)

    def reference_path(self) -> Path:
        if not self.config.is_validated(self.scene_name):
            raise UnsupportedSceneError(f"Internal error in image validation: unknown scene '{self.scene_name}'")
        file_name = self.config.reference_file_for(self.mode)
        if file_name is None:
            raise UnsupportedModeError(f"Internal error in image validation: unknown mode {self.mode.value}")
        return self.config.scene_dir(self.scene_name) / file_name

    def _compare(self) -> tuple[int, float]:
        width, height = self.frame_buffer.width, self.frame_buffer.height
        logger.info("Image validation scene path: [%s]", self.config.scene_dir(self.scene_name))

        reference = load_reference_image(self.reference_path(), width, height)
        candidate = normalize(self.frame_buffer.view())

        conv_test = ConvergenceTest(width, height, tolerance=self.config.pixel_tolerance)
        conv_test.test(reference)

        self._emit(LABEL_COMPARING)
        diff_count = conv_test.test(candidate)

        error_perc = 100.0 * diff_count / (width * height)
        logger.info("Image validation: %d different pixels (%.2f%%)", diff_count, error_perc)
        return diff_count, error_perc
