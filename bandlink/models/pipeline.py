"""Run-level state models for the link-resolution pipeline.

Defines the run phases reported to the progress tracker and the frozen
:class:`RunSummary` returned when a run finishes.  The orchestrator builds
the summary once at the end from counters it keeps while iterating; the
summary itself is never mutated.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PipelinePhase(str, Enum):  # noqa: UP042: StrEnum requires Python 3.11+
    """Phases of a resolution run.

    LOADING → GROUPING → RESOLVING → COMPLETE
    """

    LOADING = "LOADING"        # Reading the input table
    GROUPING = "GROUPING"      # Partitioning records by artist and album
    RESOLVING = "RESOLVING"    # Querying the catalog, flushing rows per album
    COMPLETE = "COMPLETE"      # Every artist processed


class RunSummary(BaseModel):
    """Counters describing a finished run."""

    model_config = ConfigDict(frozen=True)

    artists: int = 0
    albums: int = 0
    tracks: int = 0
    rows_written: int = 0
    links_found: int = 0
    links_not_found: int = 0
    started_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    completed_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        if self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()
