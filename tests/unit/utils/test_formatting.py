"""Tests for formatting helpers."""

from piccadilly.core.utils.formatting import (
    FRAME_EMOJIS,
    format_seconds,
    format_size_kb,
    frame_emoji,
)


def test_frame_emoji_cycles():
    assert frame_emoji(0) == "😺"
    assert frame_emoji(1) == "😛"
    assert frame_emoji(len(FRAME_EMOJIS)) == frame_emoji(0)


def test_format_size_kb():
    assert format_size_kb(2048) == "2.00 KB"
    assert format_size_kb(1536) == "1.50 KB"


def test_format_seconds_millisecond_precision():
    assert format_seconds(1.23456) == "1.235s"
    assert format_seconds(2) == "2.000s"
