"""ffmpeg concat demuxer manifest writer.

Format (one record pair per plan entry, then the last file restated)::

    file '/abs/path/a.jpg'
    duration 1.234
    file '/abs/path/b.jpg'
    duration 0.766
    file '/abs/path/b.jpg'

The concat demuxer applies each ``duration`` to the file listed before it
and ignores the duration of the final listed file, so the last frame is
repeated without a duration to keep its timing.
"""

from __future__ import annotations

from collections.abc import Iterator
import contextlib
import logging
import os
from pathlib import Path
import tempfile

from piccadilly.core.sequencer.planning.models import Plan

logger = logging.getLogger(__name__)

MANIFEST_PREFIX = "piccadilly-"
MANIFEST_SUFFIX = ".txt"


def quote_path(path: Path | str) -> str:
    """Resolve a frame path and quote it for a concat ``file`` directive."""
    resolved = str(Path(path).resolve())
    return "'" + resolved.replace("'", "'\\''") + "'"


def render_manifest(plan: Plan) -> str:
    """Serialize a plan to concat manifest text.

    Args:
        plan: Plan to serialize

    Returns:
        Manifest text; durations formatted with millisecond precision
    """
    lines: list[str] = []
    for entry in plan:
        lines.append(f"file {quote_path(entry.frame)}")
        lines.append(f"duration {entry.duration:.3f}")

    lines.append(f"file {quote_path(plan.last.frame)}")
    return "\n".join(lines) + "\n"


def write_manifest(plan: Plan, directory: Path | str | None = None) -> Path:
    """Write a plan's manifest to a new temporary file.

    The caller owns the file and must remove it once the encoder is done
    (see ``manifest_file``).

    Args:
        plan: Plan to serialize
        directory: Target directory (system temp dir if None)

    Returns:
        Path of the written manifest

    Raises:
        OSError: If the manifest cannot be written
    """
    content = render_manifest(plan)
    fd, name = tempfile.mkstemp(prefix=MANIFEST_PREFIX, suffix=MANIFEST_SUFFIX, dir=directory)
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError:
        path.unlink(missing_ok=True)
        raise

    logger.debug(f"Wrote manifest {path} ({len(plan)} entries)")
    return path


@contextlib.contextmanager
def manifest_file(
    plan: Plan,
    directory: Path | str | None = None,
    keep_on_failure: bool = False,
) -> Iterator[Path]:
    """Scope a manifest file to a block.

    The manifest is removed when the block exits. If the block raises and
    ``keep_on_failure`` is set, the file is left in place for diagnosis.

    Example:
        >>> with manifest_file(plan) as manifest:
        ...     await encoder.encode(manifest, output)
    """
    path = write_manifest(plan, directory)
    try:
        yield path
    except BaseException:
        if keep_on_failure:
            logger.warning(f"Keeping manifest for diagnosis: {path}")
        else:
            path.unlink(missing_ok=True)
        raise
    else:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed manifest {path}")
