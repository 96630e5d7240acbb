"""Shared pytest fixtures for piccadilly tests."""

from __future__ import annotations

from pathlib import Path
import random

import pytest

from piccadilly.core.config import AnimationConfig
from tests.fakes import FakeEncoder

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def frame_files(tmp_path: Path) -> tuple[Path, Path]:
    """Two empty frame files on disk."""
    frames = (tmp_path / "a.jpg", tmp_path / "b.jpg")
    for frame in frames:
        frame.write_bytes(b"")
    return frames


@pytest.fixture
def manifest_dir(tmp_path: Path) -> Path:
    path = tmp_path / "manifests"
    path.mkdir()
    return path


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def animation_config(frame_files: tuple[Path, Path], tmp_path: Path) -> AnimationConfig:
    """Config from the two-frame scenario: 5s total, frames 1-2s."""
    return AnimationConfig(
        frames=frame_files,
        total_duration=5.0,
        max_frame_duration=2.0,
        min_frame_duration=1.0,
        output=tmp_path / "out.avif",
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic plans."""
    return random.Random(1234)


@pytest.fixture
def fake_encoder() -> FakeEncoder:
    return FakeEncoder()
