"""Plan models: the ordered (frame, duration) sequence driving the manifest."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class PlanEntry(BaseModel):
    """One displayed instance of a frame.

    Attributes:
        frame: Frame file, as given in the configuration.
        duration: Display time in seconds.
        frame_index: 0-based position of the frame in the cycle.
    """

    model_config = ConfigDict(frozen=True)

    frame: Path
    duration: float = Field(ge=0.0)
    frame_index: int = Field(ge=0)

    @property
    def label(self) -> str:
        """Human-readable label, 1-based (``frame-1``, ``frame-2``...)."""
        return f"frame-{self.frame_index + 1}"


class Plan(BaseModel):
    """Ordered sequence of plan entries in playback order."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[PlanEntry, ...] = Field(min_length=1)

    @property
    def total_duration(self) -> float:
        return sum(e.duration for e in self.entries)

    @property
    def last(self) -> PlanEntry:
        return self.entries[-1]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PlanEntry]:  # type: ignore[override]
        return iter(self.entries)
