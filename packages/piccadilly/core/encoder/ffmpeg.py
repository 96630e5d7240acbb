"""ffmpeg encoder service.

Runs ffmpeg as a child process on a concat manifest. The orchestrator
suspends until the process exits; stderr is collected for diagnostics and
scanned for progress lines.

Notes:
    Requires the ffmpeg binary with libaom-av1 support:
    - Ubuntu/Debian: apt install ffmpeg
    - macOS: brew install ffmpeg
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
import logging
from pathlib import Path
import subprocess
from typing import Protocol

from piccadilly.core.config.models import EncoderConfig
from piccadilly.core.errors import ProcessSpawnError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[], None]

PROGRESS_MARKER = "frame="
_READ_CHUNK = 4096


@dataclass(frozen=True)
class EncodeResult:
    """Outcome of an encoder run."""

    returncode: int
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class Encoder(Protocol):
    """Protocol for encoders consuming a concat manifest."""

    async def encode(
        self,
        manifest: Path,
        output: Path,
        on_progress: ProgressCallback | None = None,
    ) -> EncodeResult:
        """Encode the frames listed in ``manifest`` into ``output``.

        Args:
            manifest: Concat manifest path
            output: Output artifact path
            on_progress: Called once per progress update

        Returns:
            EncodeResult with exit status and captured diagnostics

        Raises:
            ProcessSpawnError: If the encoder cannot be started
        """
        ...


def check_ffmpeg(binary: str = "ffmpeg") -> bool:
    """Check whether the ffmpeg binary is installed and runnable."""
    try:
        result = subprocess.run(
            [binary, "-version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return result.returncode == 0


def build_ffmpeg_args(manifest: Path, output: Path, config: EncoderConfig) -> list[str]:
    """Build the ffmpeg argument list (without the binary).

    Args:
        manifest: Concat manifest path
        output: Output artifact path
        config: Encoding parameters

    Returns:
        Argument list for ffmpeg
    """
    args = [
        "-f", "concat",
        "-safe", "0",  # manifest holds absolute paths
        "-i", str(manifest),
        "-vf", f"format={config.pixel_format}",
        "-c:v", config.codec,
        "-still-picture", str(config.still_picture),
        "-loop", str(config.loop),
        "-cpu-used", str(config.cpu_used),
    ]  # fmt: skip
    if config.overwrite:
        args.append("-y")
    args.append(str(output))
    return args


class FfmpegEncoder:
    """Encoder backed by an ffmpeg child process."""

    def __init__(self, config: EncoderConfig | None = None) -> None:
        self.config = config or EncoderConfig()

    def is_available(self) -> bool:
        return check_ffmpeg(self.config.binary)

    async def encode(
        self,
        manifest: Path,
        output: Path,
        on_progress: ProgressCallback | None = None,
    ) -> EncodeResult:
        args = build_ffmpeg_args(manifest, output, self.config)
        logger.info(f"Running {self.config.binary} {' '.join(args)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                self.config.binary,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProcessSpawnError(f"Could not start {self.config.binary}: {e}") from e

        if proc.stderr is None:
            raise ProcessSpawnError(f"{self.config.binary} started without a stderr pipe")

        stderr = bytearray()
        while True:
            data = await proc.stderr.read(_READ_CHUNK)
            if not data:
                break
            stderr.extend(data)
            if on_progress is not None and PROGRESS_MARKER.encode() in data:
                on_progress()

        returncode = await proc.wait()
        logger.info(f"{self.config.binary} exited with code {returncode}")
        return EncodeResult(
            returncode=returncode,
            stderr=stderr.decode("utf-8", errors="replace"),
        )
