"""Abstract base classes for the input record source and output record sink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from bandlink.models.tracks import OutputRow, TrackRecord


class IRecordSource(ABC):
    """Produces the track records a run resolves."""

    @abstractmethod
    def read(self) -> list[TrackRecord]:
        """Return every record in source order.

        Raises
        ------
        bandlink.utils.errors.RecordSourceError
            If the source is missing, unreadable or lacks required columns.
        """


class IRecordSink(ABC):
    """Durable, append-only destination for output rows."""

    @abstractmethod
    def append(self, rows: Sequence[OutputRow]) -> int:
        """Append *rows* and return how many were written.

        Raises
        ------
        bandlink.utils.errors.RecordSinkError
            If the rows cannot be written.
        """
