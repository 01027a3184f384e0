"""Append-only CSV sink for resolved rows.

The header is written only when the file is new or empty; an existing file
is appended to, so repeated runs accumulate rows instead of overwriting
earlier results.  Each :meth:`CsvRecordSink.append` call opens, writes and
closes the file, which makes every flushed album durable on its own.
"""

from __future__ import annotations

import csv
from collections.abc import Sequence
from pathlib import Path

from bandlink.interfaces.record_io import IRecordSink
from bandlink.models.tracks import OutputRow
from bandlink.utils.errors import RecordSinkError

OUTPUT_HEADER = (
    "Track ID",
    "Track Name",
    "Album Name",
    "Artist Name",
    "Bandcamp Link",
    "Spotify Added At",
)


class CsvRecordSink(IRecordSink):
    """Appends :class:`OutputRow` objects to a CSV file with a fixed header."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding

    def append(self, rows: Sequence[OutputRow]) -> int:
        if not rows:
            return 0
        needs_header = not self._path.exists() or self._path.stat().st_size == 0
        try:
            with self._path.open("a", newline="", encoding=self._encoding) as handle:
                writer = csv.writer(handle)
                if needs_header:
                    writer.writerow(OUTPUT_HEADER)
                writer.writerows(
                    (
                        row.track_id,
                        row.track_name,
                        row.album_name,
                        row.artist_name,
                        row.link,
                        row.added_at,
                    )
                    for row in rows
                )
        except OSError as exc:
            raise RecordSinkError(
                message=f"Could not write {self._path}: {exc}", provider_name="csv"
            ) from exc
        return len(rows)
