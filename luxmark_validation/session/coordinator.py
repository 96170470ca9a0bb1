"""Validation session — runs both validation tracks for one benchmark result."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from luxmark_validation.image.image_validator import ImageFidelityValidator
from luxmark_validation.models.config import BenchmarkMode, ValidatorConfig
from luxmark_validation.models.frame import FrameBuffer
from luxmark_validation.models.status import (
    LABEL_NOT_APPLICABLE,
    SessionSummary,
    Track,
    ValidationStatus,
)
from luxmark_validation.scene.hash_validator import SceneHashValidator
from luxmark_validation.session.status_channel import StatusChannel

logger = logging.getLogger(__name__)


class ValidationSession:
    """Owns the validation of one benchmark result.

    Eligibility is decided once, here. Official scenes get one worker
    thread per track; any other scene gets an immediate "N/A" on both
    tracks. The frame buffer is borrowed: its owner may only release it
    after :meth:`close` has returned.
    """

    def __init__(
        self,
        scene_name: str,
        mode: BenchmarkMode,
        frame_buffer: FrameBuffer,
        config: ValidatorConfig | None = None,
        channel: StatusChannel | None = None,
        start: bool = True,
    ):
        self.scene_name = scene_name
        self.mode = mode
        self.frame_buffer = frame_buffer
        self.config = config or ValidatorConfig()
        self.channel = channel or StatusChannel()
        self.eligible = self.config.is_validated(scene_name)
        self._threads: list[threading.Thread] = []
        self._started = False
        self._closed = False

        if not self.eligible:
            logger.info("Scene %s is not an official benchmark, skipping validation", scene_name)
            self.channel.publish(ValidationStatus(Track.SCENE, LABEL_NOT_APPLICABLE, True))
            self.channel.publish(ValidationStatus(Track.IMAGE, LABEL_NOT_APPLICABLE, True))
        elif start:
            self.start()

    def start(self) -> None:
        """Launch the scene hash and image fidelity workers."""
        if self._started:
            raise RuntimeError("validation session already started")
        if self._closed:
            raise RuntimeError("validation session is closed")
        self._started = True
        if not self.eligible:
            return

        scene_validator = SceneHashValidator(self.scene_name, self.config, self.channel.publish)
        image_validator = ImageFidelityValidator(
            self.mode, self.scene_name, self.frame_buffer, self.config, self.channel.publish
        )
        self._threads = [
            threading.Thread(target=scene_validator.run, name="scene-hash-validator", daemon=True),
            threading.Thread(target=image_validator.run, name="image-fidelity-validator", daemon=True),
        ]
        for thread in self._threads:
            thread.start()
        logger.debug("Started validation workers for %s (%s)", self.scene_name, self.mode.value)

    @property
    def is_running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Join the workers; returns True once all of them have finished.

        ``timeout`` bounds the whole call, not each worker.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in self._threads:
            if deadline is None:
                thread.join()
            else:
                thread.join(max(0.0, deadline - time.monotonic()))
        return not self.is_running

    def close(self) -> None:
        """Block until every started worker is done. Safe to call twice."""
        if self._closed:
            return
        self.wait()
        self._closed = True
        logger.debug("Validation session for %s closed", self.scene_name)

    def __enter__(self) -> "ValidationSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def summary(self) -> SessionSummary:
        return SessionSummary(
            scene=self.channel.latest(Track.SCENE),
            image=self.channel.latest(Track.IMAGE),
        )

    @property
    def can_submit(self) -> bool:
        """Whether the result may be submitted: official scene, enabled, both tracks ok."""
        if not self.config.submission_enabled:
            return False
        if self.scene_name not in self.config.submittable_scenes:
            return False
        if self.is_running:
            return False
        return self.summary().all_ok
