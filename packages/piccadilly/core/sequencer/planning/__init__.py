"""Planning domain - frame sequence planning.

Models and the planner that decide which frame is shown and for how long.
"""

from piccadilly.core.sequencer.planning.models import Plan, PlanEntry
from piccadilly.core.sequencer.planning.planner import generate_sequence, random_duration

__all__ = [
    "Plan",
    "PlanEntry",
    "generate_sequence",
    "random_duration",
]
