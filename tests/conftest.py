"""Pytest configuration and shared fixtures."""

import hashlib
from pathlib import Path

import numpy as np
import pytest

from luxmark_validation.models.config import SCENE_LUXBALL_HDR, ValidatorConfig
from luxmark_validation.models.frame import FrameBuffer
from luxmark_validation.models.status import ValidationStatus

FRAME_WIDTH = 8
FRAME_HEIGHT = 6

# Relative path → contents; only files with scene extensions get hashed
SCENE_FILES = {
    "render-hdr.cfg": b"scene.file = scenes/luxball/scene.lxs\n",
    "scene.lxs": b'Camera "perspective"\nWorldBegin\nInclude "materials.lxm"\nWorldEnd\n',
    "materials.lxm": b'MakeNamedMaterial "ball" "string type" ["glossy"]\n',
    "mesh/ball.ply": b"ply\nformat binary_little_endian 1.0\nend_header\n\x00\x01\x02\x03",
    "textures/env.hdr": b"#?RADIANCE\nFORMAT=32-bit_rle_rgbe\n\n\x10\x20\x30\x40",
    "luxvr-scene/scene.lxs": b"alternate renderer scene\n",
    "README.txt": b"not a scene asset\n",
}

HASHED_FILES = ["materials.lxm", "mesh/ball.ply", "scene.lxs", "textures/env.hdr"]


def md5_of(parts: list[bytes]) -> str:
    digest = hashlib.md5()
    for part in parts:
        digest.update(part)
    return digest.hexdigest()


def make_frame_pixels(width: int = FRAME_WIDTH, height: int = FRAME_HEIGHT) -> np.ndarray:
    return (np.arange(width * height * 3, dtype=np.uint32) * 7 % 256).astype(np.uint8).reshape(height, width, 3)


# ============================================================================
# Scene Fixtures
# ============================================================================


@pytest.fixture
def scenes_root(tmp_path: Path) -> Path:
    """Create a luxball scene tree with a matching reference image."""
    scene_dir = tmp_path / "scenes" / "luxball"
    for rel, data in SCENE_FILES.items():
        path = scene_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    (scene_dir / "reference.raw").write_bytes(make_frame_pixels().tobytes())
    return tmp_path


@pytest.fixture
def scene_dir(scenes_root: Path) -> Path:
    return scenes_root / "scenes" / "luxball"


@pytest.fixture
def scene_digest() -> str:
    """MD5 of the hashed scene files, concatenated in canonical order."""
    return md5_of([SCENE_FILES[rel] for rel in HASHED_FILES])


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def validator_config(scenes_root: Path, scene_digest: str) -> ValidatorConfig:
    """Create a config pointing at the temporary scene tree."""
    return ValidatorConfig(
        scenes_root=str(scenes_root),
        expected_digests={SCENE_LUXBALL_HDR: scene_digest},
    )


# ============================================================================
# Frame Fixtures
# ============================================================================


@pytest.fixture
def frame_buffer() -> FrameBuffer:
    """Create a frame identical to the reference image."""
    return FrameBuffer.from_array(make_frame_pixels())


@pytest.fixture
def published() -> list[ValidationStatus]:
    """Collect statuses published by a validator."""
    return []


@pytest.fixture
def hashed_files(scene_dir: Path) -> list[Path]:
    """Scene files that take part in the digest, in canonical order."""
    return [scene_dir / rel for rel in HASHED_FILES]


@pytest.fixture
def hashed_content() -> bytes:
    return b"".join(SCENE_FILES[rel] for rel in HASHED_FILES)
