"""Command-line interface for Piccadilly.

Creates animated AVIF files with random frame durations.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
import random
import sys
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from piccadilly.core.animator import AnimationResult, Animator
from piccadilly.core.config import AnimationConfig, AppConfig, LoggingConfig, load_app_config
from piccadilly.core.encoder import Encoder, FfmpegEncoder
from piccadilly.core.errors import EncoderFailureError, MissingDependencyError, PiccadillyError
from piccadilly.core.sequencer.planning import Plan
from piccadilly.core.utils.formatting import format_seconds, format_size_kb, frame_emoji
from piccadilly.core.utils.logging import configure_logging_from_config

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

RULE = "─" * 50

EXAMPLES = """\
Examples:
  piccadilly -o my-silly-cat.avif samples/wink*.jpg
  piccadilly --duration 30 --max 3 frame1.png frame2.png frame3.png
  piccadilly image1.jpg image2.jpg
"""


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="piccadilly",
        description="Piccadilly Animator - create animated AVIF files with random frame durations.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Input image files (default: a.jpg b.jpg)",
    )
    p.add_argument(
        "-d",
        "--duration",
        type=float,
        default=None,
        help="Total animation duration in seconds (default: 15)",
    )
    p.add_argument(
        "-m",
        "--max",
        dest="max_frame_duration",
        type=float,
        default=None,
        help="Max duration per frame in seconds (default: 2)",
    )
    p.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output filename (default: animation.avif)",
    )
    p.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to config file (.json, .yaml or .yml)",
    )
    p.add_argument(
        "--keep-manifest",
        action="store_true",
        help="Keep the ffmpeg concat manifest if encoding fails",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    p.add_argument(
        "--log-json",
        action="store_true",
        help="Emit structured JSON logs",
    )
    return p


def logging_config_from_args(args: argparse.Namespace) -> LoggingConfig:
    """Logging settings from flags alone, used until the config file is loaded."""
    return LoggingConfig(
        level=args.log_level or LoggingConfig().level,
        structured=args.log_json,
    )


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Merge the optional config file with command-line overrides.

    Raises:
        OSError: If the config file is missing or cannot be read
        ValueError: If the config file is malformed
        ValidationError: If the merged configuration is invalid
    """
    app_config = load_app_config(args.config)

    overrides: dict[str, Any] = {}
    if args.files:
        overrides["frames"] = [Path(f) for f in args.files]
    if args.duration is not None:
        overrides["total_duration"] = args.duration
    if args.max_frame_duration is not None:
        overrides["max_frame_duration"] = args.max_frame_duration
    if args.output is not None:
        overrides["output"] = Path(args.output)

    animation = AnimationConfig.model_validate(
        {**app_config.animation.model_dump(), **overrides}
    )

    update: dict[str, Any] = {"animation": animation}
    if args.keep_manifest:
        update["keep_manifest_on_failure"] = True
    logging_update: dict[str, Any] = {}
    if args.log_level:
        logging_update["level"] = args.log_level
    if args.log_json:
        logging_update["structured"] = True
    if logging_update:
        update["logging"] = app_config.logging.model_copy(update=logging_update)

    return app_config.model_copy(update=update)


def print_inputs(config: AnimationConfig) -> None:
    """List the input frames, checking each one before it is ticked.

    Raises:
        MissingInputError: For the first missing frame
    """
    console.print(f"📁 Input files ({len(config.frames)}):")
    for frame in config.frames:
        Animator.validate_frame(frame)
        console.print(f"   ✓ {escape(str(frame))}")
    console.print()


def print_plan(plan: Plan, total_duration: float) -> None:
    """Print the animation plan, one line per entry."""
    console.print(f"[bold]📊 Animation Plan ({total_duration:g}s total):[/bold]")
    console.print(RULE)
    for i, entry in enumerate(plan, start=1):
        emoji = frame_emoji(entry.frame_index)
        console.print(f"  {i}. {emoji} {entry.label:<12} {format_seconds(entry.duration)}")
    console.print(RULE)
    console.print(f"   Total frames: {len(plan)}\n")


def print_result(result: AnimationResult, total_duration: float) -> None:
    console.print("[green]✅ Animation created successfully![/green]")
    console.print(
        f"📦 Output: {escape(str(result.output))} ({format_size_kb(result.size_bytes)})"
    )
    console.print(f"⏱️  Duration: {total_duration:g}s")


async def run_async(
    app_config: AppConfig,
    encoder: Encoder,
    rng: random.Random | None = None,
) -> int:
    """Validate, plan, encode and report.

    Args:
        app_config: Resolved configuration
        encoder: Encoder service
        rng: Random source for planning

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    config = app_config.animation
    animator = Animator(
        config,
        encoder,
        rng=rng,
        manifest_dir=app_config.manifest_dir,
        keep_manifest_on_failure=app_config.keep_manifest_on_failure,
    )

    console.print("[bold]🐱 Piccadilly Animator[/bold]")
    console.print("========================\n")

    try:
        print_inputs(config)

        plan = animator.plan()
        print_plan(plan, config.total_duration)

        console.print("🎬 Starting ffmpeg encoding...\n")
        result = await animator.animate(
            plan=plan,
            on_progress=lambda: console.print(".", end=""),
        )
        console.print("\n")
    except EncoderFailureError as e:
        console.print("\n")
        err_console.print("[red]❌ ffmpeg failed:[/red]")
        err_console.print(escape(e.stderr), highlight=False)
        err_console.print(f"\n[red]💥 Error: {escape(str(e))}[/red]")
        return 1
    except (PiccadillyError, OSError) as e:
        logger.debug("Animation failed", exc_info=True)
        err_console.print(f"\n[red]💥 Error: {escape(str(e))}[/red]")
        return 1

    print_result(result, config.total_duration)
    console.print("\n🎉 All done! Your animation is ready to derp!")
    return 0


def run(args: argparse.Namespace, encoder: Encoder | None = None) -> int:
    """Run Piccadilly for parsed arguments.

    Args:
        args: Parsed command-line arguments
        encoder: Encoder service (ffmpeg when None)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    configure_logging_from_config(logging_config_from_args(args))

    try:
        app_config = resolve_config(args)
    except (OSError, ValueError, ValidationError) as e:
        err_console.print(f"[red]ERROR: Invalid configuration: {escape(str(e))}[/red]")
        return 1

    configure_logging_from_config(app_config.logging)

    if encoder is None:
        ffmpeg = FfmpegEncoder(app_config.encoder)
        if not ffmpeg.is_available():
            error = MissingDependencyError(ffmpeg.config.binary)
            err_console.print(f"[red]❌ Error: {escape(str(error))}[/red]")
            return 1
        encoder = ffmpeg

    return asyncio.run(run_async(app_config, encoder))


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
