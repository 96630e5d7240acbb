"""Animation orchestration.

Validates the frame store, plans the sequence, writes the concat manifest,
and hands it to the encoder.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import random

from piccadilly.core.config.models import AnimationConfig
from piccadilly.core.encoder import Encoder, ProgressCallback
from piccadilly.core.errors import EncoderFailureError, MissingInputError
from piccadilly.core.formats.ffmpeg import manifest_file
from piccadilly.core.sequencer.planning import Plan, generate_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnimationResult:
    """A successfully produced animation."""

    output: Path
    size_bytes: int
    plan: Plan


class Animator:
    """Produces an animated image from still frames with random timing.

    Args:
        config: Animation parameters
        encoder: Encoder service consuming the manifest
        rng: Random source for planning (unseeded if None)
        manifest_dir: Directory for the transient manifest (temp dir if None)
        keep_manifest_on_failure: Leave the manifest behind when encoding fails
    """

    def __init__(
        self,
        config: AnimationConfig,
        encoder: Encoder,
        rng: random.Random | None = None,
        manifest_dir: Path | None = None,
        keep_manifest_on_failure: bool = False,
    ) -> None:
        self.config = config
        self.encoder = encoder
        self.rng = rng or random.Random()
        self.manifest_dir = manifest_dir
        self.keep_manifest_on_failure = keep_manifest_on_failure

    @staticmethod
    def validate_frame(frame: Path) -> None:
        """Check a single frame exists.

        Raises:
            MissingInputError: If the frame is not a file
        """
        if not frame.is_file():
            raise MissingInputError(frame)

    def validate_frames(self) -> None:
        """Check every frame exists.

        Raises:
            MissingInputError: For the first missing frame
        """
        for frame in self.config.frames:
            self.validate_frame(frame)
        logger.debug(f"Validated {len(self.config.frames)} frames")

    def plan(self) -> Plan:
        return generate_sequence(self.config, self.rng)

    async def animate(
        self,
        plan: Plan | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> AnimationResult:
        """Run the full pipeline.

        Args:
            plan: Pre-computed plan (generated if None)
            on_progress: Forwarded to the encoder

        Returns:
            AnimationResult describing the produced artifact

        Raises:
            MissingInputError: If a frame file does not exist
            EncoderFailureError: If the encoder exits non-zero
            ProcessSpawnError: If the encoder cannot be started
            OSError: If the manifest cannot be written
        """
        self.validate_frames()
        if plan is None:
            plan = self.plan()

        output = self.config.output
        with manifest_file(
            plan,
            directory=self.manifest_dir,
            keep_on_failure=self.keep_manifest_on_failure,
        ) as manifest:
            result = await self.encoder.encode(manifest, output, on_progress=on_progress)
            if not result.success:
                logger.error(f"Encoder failed with exit code {result.returncode}")
                raise EncoderFailureError(result.returncode, result.stderr)

        size_bytes = output.stat().st_size
        logger.info(f"Created {output} ({size_bytes} bytes, {len(plan)} entries)")
        return AnimationResult(output=output, size_bytes=size_bytes, plan=plan)
