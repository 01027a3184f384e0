"""CSV record source for playlist exports.

Reads a delimited export (one row per track) and maps its columns to
:class:`TrackRecord`.  Exports produced by spreadsheet tools often start
with a UTF-8 byte-order mark glued to the first header and pad header
names with spaces, so every header is cleaned before columns are looked
up.
"""

from __future__ import annotations

import csv
from pathlib import Path

import structlog

from bandlink.interfaces.record_io import IRecordSource
from bandlink.models.tracks import TrackRecord
from bandlink.utils.errors import RecordSourceError
from bandlink.utils.logging import get_logger

ARTIST_COLUMN = "Artist Name(s)"
ALBUM_COLUMN = "Album Name"
TRACK_COLUMN = "Track Name"
TRACK_ID_COLUMN = "Track ID"
ADDED_AT_COLUMN = "Added At"

REQUIRED_COLUMNS = (ARTIST_COLUMN, ALBUM_COLUMN, TRACK_COLUMN, TRACK_ID_COLUMN, ADDED_AT_COLUMN)

_BOM = "\ufeff"


def clean_header(name: str) -> str:
    """Strip a leading byte-order mark and surrounding whitespace from a header."""
    return name.lstrip(_BOM).strip()


class CsvRecordSource(IRecordSource):
    """Reads track records from a CSV file with a header row."""

    def __init__(self, path: str | Path, delimiter: str = ",", encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._delimiter = delimiter
        self._encoding = encoding
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def read(self) -> list[TrackRecord]:
        if not self._path.is_file():
            raise RecordSourceError(message=f"Input file not found: {self._path}", provider_name="csv")

        try:
            with self._path.open(newline="", encoding=self._encoding) as handle:
                reader = csv.reader(handle, delimiter=self._delimiter)
                header = next(reader, None)
                if header is None:
                    raise RecordSourceError(
                        message=f"Input file is empty: {self._path}", provider_name="csv"
                    )
                columns = self._column_index([clean_header(h) for h in header])
                records = [
                    self._to_record(row, columns)
                    for row in reader
                    if any(cell.strip() for cell in row)
                ]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise RecordSourceError(
                message=f"Could not read {self._path}: {exc}", provider_name="csv"
            ) from exc

        self._logger.info("records_loaded", path=str(self._path), count=len(records))
        return records

    def _column_index(self, header: list[str]) -> dict[str, int]:
        missing = [name for name in REQUIRED_COLUMNS if name not in header]
        if missing:
            raise RecordSourceError(
                message=f"{self._path} is missing required columns: {', '.join(missing)}",
                provider_name="csv",
            )
        return {name: header.index(name) for name in REQUIRED_COLUMNS}

    @staticmethod
    def _to_record(row: list[str], columns: dict[str, int]) -> TrackRecord:
        def cell(name: str) -> str:
            idx = columns[name]
            return row[idx] if idx < len(row) else ""

        return TrackRecord(
            track_id=cell(TRACK_ID_COLUMN),
            track_name=cell(TRACK_COLUMN),
            album_name=cell(ALBUM_COLUMN),
            artist_name=cell(ARTIST_COLUMN),
            added_at=cell(ADDED_AT_COLUMN),
        )
