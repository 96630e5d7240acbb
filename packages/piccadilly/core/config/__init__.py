"""Configuration management for Piccadilly."""

from piccadilly.core.config.loader import detect_format, load_app_config, load_config
from piccadilly.core.config.models import (
    DEFAULT_FRAMES,
    DEFAULT_OUTPUT,
    AnimationConfig,
    AppConfig,
    EncoderConfig,
    LoggingConfig,
)

__all__ = [
    "DEFAULT_FRAMES",
    "DEFAULT_OUTPUT",
    "AnimationConfig",
    "AppConfig",
    "EncoderConfig",
    "LoggingConfig",
    "detect_format",
    "load_app_config",
    "load_config",
]
