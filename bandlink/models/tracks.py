"""Core domain models for the link-resolution pipeline.

Defines the input track record, the catalog-side shapes scraped from
Bandcamp (search results, album links, album tracks) and the output row
written to the result table.  All models are frozen Pydantic v2 models:
records are read once and only ever projected, never mutated.

Key relationships:
    - TrackRecord  --(grouping)-->  artist -> album -> [TrackRecord]
    - AlbumLink    --(per artist)-> lower-cased title -> album URL map
    - AlbumTrack   --(per album)--> case-insensitive name match
    - TrackRecord + resolved link  -->  OutputRow
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Written in place of a link that could not be resolved.  A placeholder,
# not an error: every input track still produces exactly one output row.
NOT_FOUND_SENTINEL = "Not Found"


class ResultType(str, Enum):  # noqa: UP042: StrEnum requires Python 3.11+
    """Item types Bandcamp tags search results with.

    Only ``ARTIST`` and ``TRACK`` drive decisions in the pipeline; the rest
    are parsed so that mixed result pages can be scanned in order.
    """

    ARTIST = "artist"
    ALBUM = "album"
    TRACK = "track"
    LABEL = "label"
    FAN = "fan"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, label: str) -> ResultType:
        """Map the search page's item-type text (e.g. ``"ARTIST"``) to a member."""
        try:
            return cls(label.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class TrackRecord(BaseModel):
    """One row of the input table: a track the user wants a link for."""

    model_config = ConfigDict(frozen=True)

    track_id: str
    track_name: str
    album_name: str
    artist_name: str
    added_at: str = ""


class CatalogSearchResult(BaseModel):
    """A single entry from the first page of catalog search results."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    result_type: ResultType = ResultType.UNKNOWN


class AlbumLink(BaseModel):
    """An album listed on an artist's music page."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str


class AlbumTrack(BaseModel):
    """A track listed on an album page, with its canonical link."""

    model_config = ConfigDict(frozen=True)

    track_name: str
    track_link: str


class OutputRow(BaseModel):
    """A row of the output table.

    ``link`` always holds either a URL or :data:`NOT_FOUND_SENTINEL`; use
    :meth:`from_record` to build rows so the substitution is never skipped.
    """

    model_config = ConfigDict(frozen=True)

    track_id: str
    track_name: str
    album_name: str
    artist_name: str
    link: str = Field(default=NOT_FOUND_SENTINEL, min_length=1)
    added_at: str = ""

    @classmethod
    def from_record(cls, record: TrackRecord, link: str | None) -> OutputRow:
        return cls(
            track_id=record.track_id,
            track_name=record.track_name,
            album_name=record.album_name,
            artist_name=record.artist_name,
            link=link or NOT_FOUND_SENTINEL,
            added_at=record.added_at,
        )

    @property
    def resolved(self) -> bool:
        return self.link != NOT_FOUND_SENTINEL
