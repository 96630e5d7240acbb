"""Tests for the ffmpeg encoder service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from piccadilly.core.config import EncoderConfig
from piccadilly.core.encoder import EncodeResult, FfmpegEncoder, build_ffmpeg_args, check_ffmpeg
from piccadilly.core.errors import ProcessSpawnError


def _fake_process(stderr: bytes, returncode: int) -> MagicMock:
    reader = asyncio.StreamReader()
    reader.feed_data(stderr)
    reader.feed_eof()
    proc = MagicMock()
    proc.stderr = reader
    proc.wait = AsyncMock(return_value=returncode)
    return proc


class TestCheckFfmpeg:
    """Test ffmpeg availability detection."""

    def test_available(self):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            assert check_ffmpeg() is True
            assert mock_run.call_args.args[0] == ["ffmpeg", "-version"]

    def test_binary_not_found(self):
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("ffmpeg not found")
            assert check_ffmpeg() is False

    def test_permission_denied(self):
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = PermissionError("denied")
            assert check_ffmpeg() is False

    def test_non_zero_exit(self):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1)
            assert check_ffmpeg("my-ffmpeg") is False
            assert mock_run.call_args.args[0] == ["my-ffmpeg", "-version"]

    def test_encoder_uses_configured_binary(self):
        encoder = FfmpegEncoder(EncoderConfig(binary="/opt/ffmpeg/bin/ffmpeg"))
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            assert encoder.is_available()
            assert mock_run.call_args.args[0][0] == "/opt/ffmpeg/bin/ffmpeg"


class TestBuildFfmpegArgs:
    def test_default_arguments(self):
        args = build_ffmpeg_args(Path("/tmp/m.txt"), Path("out.avif"), EncoderConfig())
        assert args == [
            "-f", "concat",
            "-safe", "0",
            "-i", "/tmp/m.txt",
            "-vf", "format=yuv420p",
            "-c:v", "libaom-av1",
            "-still-picture", "0",
            "-loop", "0",
            "-cpu-used", "8",
            "-y",
            "out.avif",
        ]  # fmt: skip

    def test_no_overwrite(self):
        args = build_ffmpeg_args(
            Path("m.txt"), Path("out.avif"), EncoderConfig(overwrite=False)
        )
        assert "-y" not in args
        assert args[-1] == "out.avif"

    def test_custom_codec(self):
        args = build_ffmpeg_args(
            Path("m.txt"), Path("out.avif"), EncoderConfig(codec="libsvtav1", cpu_used=4)
        )
        assert args[args.index("-c:v") + 1] == "libsvtav1"
        assert args[args.index("-cpu-used") + 1] == "4"


class TestFfmpegEncoder:
    async def test_success_collects_stderr(self):
        output = "frame=   10 fps=0.0\nframe=   20 fps=0.0\n"
        proc = _fake_process(output.encode(), 0)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as mock_exec:
            result = await FfmpegEncoder().encode(Path("m.txt"), Path("out.avif"))

        assert result == EncodeResult(returncode=0, stderr=output)
        assert result.success
        call_args = mock_exec.call_args.args
        assert call_args[0] == "ffmpeg"
        assert list(call_args[1:]) == build_ffmpeg_args(
            Path("m.txt"), Path("out.avif"), EncoderConfig()
        )

    async def test_failure_returns_result(self):
        proc = _fake_process(b"m.txt: No such file or directory\n", 1)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            result = await FfmpegEncoder().encode(Path("m.txt"), Path("out.avif"))

        assert not result.success
        assert result.returncode == 1
        assert "No such file" in result.stderr

    async def test_progress_reported_for_frame_lines(self):
        ticks: list[int] = []
        proc = _fake_process(b"frame=    1 fps=0.0 q=0.0 size=0kB\n", 0)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            await FfmpegEncoder().encode(
                Path("m.txt"), Path("out.avif"), on_progress=lambda: ticks.append(1)
            )
        assert len(ticks) >= 1

    async def test_no_progress_without_frame_lines(self):
        ticks: list[int] = []
        proc = _fake_process(b"Input #0, concat, from 'm.txt':\n", 0)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            await FfmpegEncoder().encode(
                Path("m.txt"), Path("out.avif"), on_progress=lambda: ticks.append(1)
            )
        assert ticks == []

    async def test_missing_stderr_pipe(self):
        proc = MagicMock()
        proc.stderr = None
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(ProcessSpawnError) as exc_info:
                await FfmpegEncoder().encode(Path("m.txt"), Path("out.avif"))

        assert "stderr" in str(exc_info.value)

    async def test_spawn_error(self):
        with patch(
            "asyncio.create_subprocess_exec",
            AsyncMock(side_effect=PermissionError("Permission denied")),
        ):
            with pytest.raises(ProcessSpawnError) as exc_info:
                await FfmpegEncoder().encode(Path("m.txt"), Path("out.avif"))

        assert "permission denied" in str(exc_info.value).lower()

    async def test_invalid_utf8_is_replaced(self):
        proc = _fake_process(b"bad \xff byte", 1)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            result = await FfmpegEncoder().encode(Path("m.txt"), Path("out.avif"))
        assert result.stderr == "bad � byte"
