"""Tests for configuration models."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from luxmark_validation.models.config import (
    SCENE_LUXBALL_HDR,
    SCENE_ROOM,
    SCENE_SALA,
    BenchmarkMode,
    ValidatorConfig,
)


class TestBenchmarkMode:
    """Tests for BenchmarkMode enum."""

    def test_benchmark_modes(self):
        """Test only BENCHMARK_* modes are flagged as benchmarks."""
        assert BenchmarkMode.BENCHMARK_OCL_GPU.is_benchmark is True
        assert BenchmarkMode.BENCHMARK_NATIVE_PATH.is_benchmark is True
        assert BenchmarkMode.STRESSTEST_OCL_GPU.is_benchmark is False
        assert BenchmarkMode.PAUSE.is_benchmark is False

    def test_seven_benchmark_modes(self):
        assert len([m for m in BenchmarkMode if m.is_benchmark]) == 7


class TestValidatorConfig:
    """Tests for ValidatorConfig model."""

    def test_default_values(self):
        """Test ValidatorConfig has correct default values."""
        config = ValidatorConfig()
        assert config.scenes_root == "."
        assert config.validated_scenes == [SCENE_LUXBALL_HDR]
        assert config.submittable_scenes == [SCENE_ROOM, SCENE_SALA, SCENE_LUXBALL_HDR]
        assert config.submission_enabled is False
        assert config.expected_digests == {}
        assert config.hash_algorithm == "md5"
        assert config.excluded_dirs == ["luxvr-scene"]
        assert ".lxs" in config.scene_extensions
        assert ".ply" in config.scene_extensions
        assert config.pixel_tolerance == 0.01

    def test_default_reference_files_cover_benchmark_modes(self):
        """Test every benchmark mode maps to the raw reference file."""
        config = ValidatorConfig()
        for mode in BenchmarkMode:
            if mode.is_benchmark:
                assert config.reference_file_for(mode) == "reference.raw"
            else:
                assert config.reference_file_for(mode) is None

    def test_digest_is_normalized(self):
        """Test expected digests are stripped and lowercased."""
        config = ValidatorConfig(expected_digests={SCENE_LUXBALL_HDR: "  ABCDEF0123  "})
        assert config.expected_digest_for(SCENE_LUXBALL_HDR) == "abcdef0123"

    def test_digest_must_be_hex(self):
        with pytest.raises(ValidationError):
            ValidatorConfig(expected_digests={SCENE_LUXBALL_HDR: "not-a-digest"})

    def test_env_digest_resolution(self, monkeypatch):
        """Test env: prefix resolves from environment."""
        monkeypatch.setenv("LUXBALL_DIGEST", "0123456789abcdef")
        config = ValidatorConfig(expected_digests={SCENE_LUXBALL_HDR: "env:LUXBALL_DIGEST"})
        assert config.expected_digest_for(SCENE_LUXBALL_HDR) == "0123456789abcdef"

    def test_env_digest_missing(self, monkeypatch):
        """Test error when the env var is not set."""
        monkeypatch.delenv("NONEXISTENT_DIGEST_VAR", raising=False)
        with pytest.raises(ValidationError, match="not set"):
            ValidatorConfig(expected_digests={SCENE_LUXBALL_HDR: "env:NONEXISTENT_DIGEST_VAR"})

    def test_unknown_hash_algorithm(self):
        with pytest.raises(ValidationError):
            ValidatorConfig(hash_algorithm="not-a-hash")

    def test_hash_algorithm_lowercased(self):
        assert ValidatorConfig(hash_algorithm="SHA256").hash_algorithm == "sha256"

    @pytest.mark.parametrize("algorithm", ["shake_128", "shake_256"])
    def test_variable_length_hash_rejected(self, algorithm):
        with pytest.raises(ValidationError):
            ValidatorConfig(hash_algorithm=algorithm)

    def test_extensions_normalized(self):
        """Test extensions get a leading dot and keep their case."""
        config = ValidatorConfig(scene_extensions=["lxs", ".PLY", ".hdr"])
        assert config.scene_extensions == [".lxs", ".PLY", ".hdr"]

    def test_pixel_tolerance_bounds(self):
        with pytest.raises(ValidationError):
            ValidatorConfig(pixel_tolerance=0.0)
        with pytest.raises(ValidationError):
            ValidatorConfig(pixel_tolerance=1.5)

    def test_scene_dir_relative(self, tmp_path: Path):
        """Test relative scene names resolve against scenes_root."""
        config = ValidatorConfig(scenes_root=str(tmp_path))
        assert config.scene_dir(SCENE_LUXBALL_HDR) == tmp_path / "scenes" / "luxball"

    def test_scene_dir_absolute(self, tmp_path: Path):
        config = ValidatorConfig(scenes_root="/elsewhere")
        scene = tmp_path / "custom" / "render.cfg"
        assert config.scene_dir(str(scene)) == tmp_path / "custom"

    def test_is_validated(self):
        config = ValidatorConfig()
        assert config.is_validated(SCENE_LUXBALL_HDR) is True
        assert config.is_validated(SCENE_ROOM) is False


class TestConfigPersistence:
    """Tests for loading and saving configs."""

    def test_save_and_load(self, tmp_path: Path):
        """Test config round-trips through JSON, including mode keys."""
        config = ValidatorConfig(
            expected_digests={SCENE_LUXBALL_HDR: "d" * 32},
            reference_files={BenchmarkMode.BENCHMARK_OCL_GPU: "reference-gpu.raw"},
        )
        path = tmp_path / "config.json"
        config.save(path)

        loaded = ValidatorConfig.load(path)
        assert loaded.expected_digest_for(SCENE_LUXBALL_HDR) == "d" * 32
        assert loaded.reference_file_for(BenchmarkMode.BENCHMARK_OCL_GPU) == "reference-gpu.raw"
        assert loaded.reference_file_for(BenchmarkMode.BENCHMARK_OCL_CPU) is None

    def test_saved_file_uses_mode_names(self, tmp_path: Path):
        path = tmp_path / "config.json"
        ValidatorConfig().save(path)
        data = json.loads(path.read_text())
        assert data["reference_files"]["BENCHMARK_NATIVE_PATH"] == "reference.raw"

    def test_save_creates_parent_dirs(self, tmp_path: Path):
        path = tmp_path / "deep" / "nested" / "config.json"
        ValidatorConfig().save(path)
        assert path.exists()

    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ValidatorConfig.load(tmp_path / "missing.json")
