"""ffmpeg input formats."""

from piccadilly.core.formats.ffmpeg.concat import (
    manifest_file,
    quote_path,
    render_manifest,
    write_manifest,
)

__all__ = [
    "manifest_file",
    "quote_path",
    "render_manifest",
    "write_manifest",
]
