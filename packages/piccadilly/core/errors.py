"""Error hierarchy for Piccadilly.

Every error is fatal for the invocation; the CLI reports it and exits 1.
"""

from __future__ import annotations

from pathlib import Path

FFMPEG_INSTALL_HINT = """Piccadilly requires ffmpeg to be installed.

To install ffmpeg:
  • Ubuntu/Debian: sudo apt install ffmpeg
  • Fedora: sudo dnf install ffmpeg
  • Arch: sudo pacman -S ffmpeg
  • macOS: brew install ffmpeg

Visit https://ffmpeg.org for more information."""


class PiccadillyError(RuntimeError):
    """Base class for all Piccadilly failures."""

    pass


class MissingDependencyError(PiccadillyError):
    """External encoder binary not found."""

    def __init__(self, binary: str = "ffmpeg") -> None:
        self.binary = binary
        super().__init__(f"{binary} not found!\n\n{FFMPEG_INSTALL_HINT}")


class MissingInputError(PiccadillyError):
    """A frame file does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Frame not found: {path}")


class EncoderFailureError(PiccadillyError):
    """Encoder process exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"ffmpeg encoding failed (exit code {returncode})")


class ProcessSpawnError(PiccadillyError):
    """Encoder process could not be started."""

    pass
