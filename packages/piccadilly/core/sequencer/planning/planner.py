"""Sequence planner.

Builds a plan of frame display durations that sums to the configured total.
Frames are visited round-robin from a random starting frame; only the
durations are randomized.
"""

from __future__ import annotations

import logging
import random

from piccadilly.core.config.models import AnimationConfig
from piccadilly.core.sequencer.planning.models import Plan, PlanEntry

logger = logging.getLogger(__name__)


def random_duration(config: AnimationConfig, rng: random.Random) -> float:
    """Draw a duration uniformly from [min_frame_duration, max_frame_duration)."""
    span = config.max_frame_duration - config.min_frame_duration
    return config.min_frame_duration + rng.random() * span


def generate_sequence(config: AnimationConfig, rng: random.Random | None = None) -> Plan:
    """Generate a sequence of randomly timed frames totalling the target duration.

    Once the remaining time fits in a single frame (``remaining <=
    max_frame_duration``) the final entry takes exactly the remainder, so it
    may be shorter than ``min_frame_duration``.

    Args:
        config: Validated animation configuration
        rng: Random source (unseeded ``random.Random`` when None)

    Returns:
        Plan whose durations sum to ``config.total_duration``

    Example:
        >>> cfg = AnimationConfig(frames=("a.jpg",), total_duration=1.0)
        >>> plan = generate_sequence(cfg, random.Random(7))
        >>> [(e.label, e.duration) for e in plan]
        [('frame-1', 1.0)]
    """
    rng = rng or random.Random()
    frame_count = len(config.frames)
    total = config.total_duration

    entries: list[PlanEntry] = []
    current_time = 0.0
    frame_index = rng.randrange(frame_count)

    while current_time < total:
        remaining = total - current_time
        is_final = remaining <= config.max_frame_duration

        if is_final:
            duration = remaining
        else:
            duration = random_duration(config, rng)
            # Unreachable unless float rounding: remaining > max > duration
            if current_time + duration > total:
                duration = total - current_time

        entries.append(
            PlanEntry(
                frame=config.frames[frame_index],
                duration=duration,
                frame_index=frame_index,
            )
        )

        if is_final:
            # The remainder closes the plan; don't let float drift add a sliver
            break

        current_time += duration
        frame_index = (frame_index + 1) % frame_count

    plan = Plan(entries=tuple(entries))
    logger.debug(
        f"Generated plan: {len(plan)} entries, {plan.total_duration:.3f}s "
        f"starting at {plan.entries[0].label}"
    )
    return plan
