"""Configuration models for benchmark result validation."""

from __future__ import annotations

import enum
import hashlib
import json
import os
import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

SCENE_ROOM = "scenes/room/render.cfg"
SCENE_SALA = "scenes/sala/render.cfg"
SCENE_LUXBALL_HDR = "scenes/luxball/render-hdr.cfg"

_HEX_DIGEST = re.compile(r"^[0-9a-f]+$")


class BenchmarkMode(str, enum.Enum):
    BENCHMARK_OCL_GPU = "BENCHMARK_OCL_GPU"
    BENCHMARK_OCL_CPUGPU = "BENCHMARK_OCL_CPUGPU"
    BENCHMARK_OCL_CPU = "BENCHMARK_OCL_CPU"
    BENCHMARK_OCL_CUSTOM = "BENCHMARK_OCL_CUSTOM"
    BENCHMARK_HYBRID_GPU = "BENCHMARK_HYBRID_GPU"
    BENCHMARK_HYBRID_CUSTOM = "BENCHMARK_HYBRID_CUSTOM"
    BENCHMARK_NATIVE_PATH = "BENCHMARK_NATIVE_PATH"
    STRESSTEST_OCL_GPU = "STRESSTEST_OCL_GPU"
    STRESSTEST_OCL_CPUGPU = "STRESSTEST_OCL_CPUGPU"
    STRESSTEST_OCL_CPU = "STRESSTEST_OCL_CPU"
    STRESSTEST_NATIVE_PATH = "STRESSTEST_NATIVE_PATH"
    DEMO_LUXVR = "DEMO_LUXVR"
    PAUSE = "PAUSE"

    @property
    def is_benchmark(self) -> bool:
        return self.value.startswith("BENCHMARK_")


def _default_reference_files() -> dict[BenchmarkMode, str]:
    return {mode: "reference.raw" for mode in BenchmarkMode if mode.is_benchmark}


class ValidatorConfig(BaseModel):
    # Scene lookup
    scenes_root: str = "."

    # Official scenes
    validated_scenes: list[str] = Field(default_factory=lambda: [SCENE_LUXBALL_HDR])
    submittable_scenes: list[str] = Field(
        default_factory=lambda: [SCENE_ROOM, SCENE_SALA, SCENE_LUXBALL_HDR]
    )
    submission_enabled: bool = False

    # Scene hashing
    expected_digests: dict[str, str] = Field(default_factory=dict)
    hash_algorithm: str = "md5"
    hash_chunk_size: int = Field(default=1 << 20, gt=0)
    scene_extensions: list[str] = Field(
        default_factory=lambda: [".lxs", ".lxm", ".lxo", ".lxv", ".ply", ".jpg", ".png", ".hdr"]
    )
    excluded_dirs: list[str] = Field(default_factory=lambda: ["luxvr-scene"])

    # Image comparison
    reference_files: dict[BenchmarkMode, str] = Field(default_factory=_default_reference_files)
    pixel_tolerance: float = Field(default=0.01, gt=0.0, lt=1.0)

    @field_validator("expected_digests", mode="before")
    @classmethod
    def resolve_env_digests(cls, v: dict) -> dict:
        if not isinstance(v, dict):
            return v
        resolved = {}
        for scene, digest in v.items():
            if isinstance(digest, str) and digest.startswith("env:"):
                env_var = digest[4:]
                value = os.environ.get(env_var)
                if value is None:
                    raise ValueError(f"Environment variable '{env_var}' not set")
                digest = value
            if isinstance(digest, str):
                digest = digest.strip().lower()
                if not _HEX_DIGEST.match(digest):
                    raise ValueError(f"Expected digest for '{scene}' is not a hex string")
            resolved[scene] = digest
        return resolved

    @field_validator("hash_algorithm")
    @classmethod
    def check_hash_algorithm(cls, v: str) -> str:
        v = v.lower()
        if v not in hashlib.algorithms_available:
            raise ValueError(f"Unknown hash algorithm '{v}'")
        if hashlib.new(v).digest_size == 0:
            raise ValueError(f"Hash algorithm '{v}' has no fixed digest size")
        return v

    @field_validator("scene_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in v]

    def scene_dir(self, scene_name: str) -> Path:
        """Directory holding the scene's assets (parent of the scene file)."""
        scene_path = Path(scene_name)
        if not scene_path.is_absolute():
            scene_path = Path(self.scenes_root) / scene_path
        return scene_path.parent

    def is_validated(self, scene_name: str) -> bool:
        return scene_name in self.validated_scenes

    def expected_digest_for(self, scene_name: str) -> str | None:
        return self.expected_digests.get(scene_name)

    def reference_file_for(self, mode: BenchmarkMode) -> str | None:
        return self.reference_files.get(mode)

    @classmethod
    def load(cls, path: str | Path) -> "ValidatorConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)
