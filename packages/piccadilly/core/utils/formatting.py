FRAME_EMOJIS = ("😺", "😛", "😸", "😹", "😻", "😼", "😽", "🙀", "😿", "😾")


def frame_emoji(frame_index: int) -> str:
    """Pick a cat for a frame, cycling through the set."""
    return FRAME_EMOJIS[frame_index % len(FRAME_EMOJIS)]


def format_size_kb(size_bytes: int) -> str:
    """Format a byte count as kilobytes with two decimals (``12.34 KB``)."""
    return f"{size_bytes / 1024:.2f} KB"


def format_seconds(seconds: float) -> str:
    # Millisecond precision, same as the manifest
    return f"{seconds:.3f}s"
