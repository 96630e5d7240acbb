"""Configuration models for Piccadilly."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_FRAMES: tuple[Path, ...] = (Path("a.jpg"), Path("b.jpg"))
DEFAULT_OUTPUT = Path("animation.avif")


class AnimationConfig(BaseModel):
    """Animation parameters for a single invocation.

    Constructed once from CLI input (or config file defaults) and never
    mutated. Frame existence is not validated here; the animator checks
    the frame store before planning.

    Attributes:
        frames: Ordered frame files, cycled in this order.
        total_duration: Target animation length in seconds.
        max_frame_duration: Upper bound for a single frame's display time.
        min_frame_duration: Lower bound for a single frame's display time.
        output: Output artifact path.
    """

    model_config = ConfigDict(frozen=True)

    frames: tuple[Path, ...] = Field(default=DEFAULT_FRAMES, min_length=1)
    total_duration: float = Field(default=15.0, gt=0.0, description="Total duration (s)")
    max_frame_duration: float = Field(default=2.0, gt=0.0, description="Max per-frame (s)")
    min_frame_duration: float = Field(default=0.1, ge=0.0, description="Min per-frame (s)")
    output: Path = DEFAULT_OUTPUT

    @model_validator(mode="after")
    def validate_frame_bounds(self) -> Self:
        """Ensure min_frame_duration <= max_frame_duration."""
        if self.min_frame_duration > self.max_frame_duration:
            raise ValueError(
                f"min_frame_duration ({self.min_frame_duration}) must be <= "
                f"max_frame_duration ({self.max_frame_duration})"
            )
        return self


class EncoderConfig(BaseModel):
    """Fixed ffmpeg encoding parameters.

    Defaults produce an infinitely looping AV1 animation using a fast,
    low-quality preset.
    """

    model_config = ConfigDict(frozen=True)

    binary: str = "ffmpeg"
    pixel_format: str = "yuv420p"
    codec: str = "libaom-av1"
    still_picture: int = Field(default=0, ge=0, le=1, description="0 = animation mode")
    loop: int = Field(default=0, ge=0, description="0 = loop forever")
    cpu_used: int = Field(default=8, ge=0, le=8, description="libaom speed preset")
    overwrite: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


class AppConfig(BaseModel):
    """Application-level configuration, loadable from JSON or YAML."""

    model_config = ConfigDict(extra="ignore")

    animation: AnimationConfig = AnimationConfig()
    encoder: EncoderConfig = EncoderConfig()
    logging: LoggingConfig = LoggingConfig()

    keep_manifest_on_failure: bool = Field(
        default=False,
        description="Keep the concat manifest when ffmpeg fails (for diagnosis)",
    )
    manifest_dir: Path | None = Field(
        default=None, description="Directory for manifests (system temp dir if None)"
    )
