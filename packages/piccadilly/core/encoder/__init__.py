"""Encoder service: external ffmpeg process invocation."""

from piccadilly.core.encoder.ffmpeg import (
    EncodeResult,
    Encoder,
    FfmpegEncoder,
    ProgressCallback,
    build_ffmpeg_args,
    check_ffmpeg,
)

__all__ = [
    "EncodeResult",
    "Encoder",
    "FfmpegEncoder",
    "ProgressCallback",
    "build_ffmpeg_args",
    "check_ffmpeg",
]
