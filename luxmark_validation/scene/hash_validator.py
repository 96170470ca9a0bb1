"""Scene hash validation — checks the scene assets are the official ones."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from luxmark_validation.errors import HashMismatchError, UnsupportedSceneError
from luxmark_validation.models.config import ValidatorConfig
from luxmark_validation.models.status import (
    LABEL_ERROR,
    LABEL_FAILED,
    LABEL_OK,
    LABEL_STARTING,
    Track,
    ValidationStatus,
)
from luxmark_validation.scene.collector import collect_scene_files

logger = logging.getLogger(__name__)


def compute_scene_digest(
    files: Iterable[Path],
    algorithm: str = "md5",
    chunk_size: int = 1 << 20,
    on_file: Optional[Callable[[Path], None]] = None,
) -> str:
    """Hash the concatenated contents of ``files`` in the given order."""
    digest = hashlib.new(algorithm)
    for path in files:
        if on_file is not None:
            on_file(path)
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                digest.update(chunk)
    return digest.hexdigest()


class SceneHashValidator:
    """Computes the scene digest and compares it with the configured one."""

    def __init__(
        self,
        scene_name: str,
        config: ValidatorConfig,
        publish: Callable[[ValidationStatus], None],
    ):
        self.scene_name = scene_name
        self.config = config
        self._publish = publish

    def _emit(self, label: str, ok: bool = False) -> None:
        self._publish(ValidationStatus(Track.SCENE, label, ok))

    def run(self) -> None:
        """Run the validation; always ends with exactly one terminal status."""
        self._emit(LABEL_STARTING)
        try:
            expected = self._expected_digest()
            digest = self._hash_scene()
            if digest != expected:
                raise HashMismatchError(expected, digest)
        except HashMismatchError as e:
            logger.warning("Scene validation failed: %s", e)
            self._emit(LABEL_FAILED)
        except UnsupportedSceneError as e:
            logger.error("Internal error in scene validation: %s", e)
            self._emit(LABEL_FAILED)
        except OSError as e:
            logger.error("SCENE VALIDATION ERROR: %s", e)
            self._emit(LABEL_ERROR)
        except Exception as e:
            logger.exception("SCENE VALIDATION ERROR: %s", e)
            self._emit(LABEL_ERROR)
        else:
            self._emit(LABEL_OK, True)

    def _expected_digest(self) -> str:
        if not self.config.is_validated(self.scene_name):
            # Sessions only start this validator for validated scenes
            raise UnsupportedSceneError(f"Scene '{self.scene_name}' does not require hash validation")
        expected = self.config.expected_digest_for(self.scene_name)
        if expected is None:
            raise UnsupportedSceneError(f"No expected digest configured for '{self.scene_name}'")
        return expected

    def _hash_scene(self) -> str:
        scene_path = self.config.scene_dir(self.scene_name)
        logger.info("Hash validation scene path: [%s]", scene_path)

        files = collect_scene_files(
            scene_path,
            self.config.scene_extensions,
            self.config.excluded_dirs,
            on_file=lambda p: self._emit(f"Selecting file [{p.name}]"),
        )
        logger.info("Hash validation selected %d files", len(files))
        for path in files:
            logger.debug("  [%s]", path)

        digest = compute_scene_digest(
            files,
            algorithm=self.config.hash_algorithm,
            chunk_size=self.config.hash_chunk_size,
            on_file=lambda p: self._emit(f"Validating file [{p.name}]"),
        )
        logger.info("Scene files %s: [%s]", self.config.hash_algorithm.upper(), digest)
        return digest
