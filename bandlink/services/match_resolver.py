"""Per-album link resolution.

Two strategies, chosen once per album:

1. **Album listing** -- the album was found in the catalog and lists at
   least one track.  Each input track is matched by case-insensitive exact
   name; the first match wins.  A track missing from the listing stays
   unresolved.  The listing is trusted once present, so there is no
   free-text fallback for it.
2. **Track search** -- the album was not found, or its listing is empty.
   Every input track gets its own ``find_track_url`` lookup, one after
   another.

Unresolved tracks get ``None``; the sentinel is applied when output rows
are built.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from bandlink.models.tracks import AlbumTrack, OutputRow, TrackRecord
from bandlink.services.catalog_client import CatalogClient
from bandlink.utils.logging import get_logger


def _fold(name: str) -> str:
    return name.lower()


def match_album_track(track_name: str, album_tracks: Sequence[AlbumTrack]) -> str | None:
    """Return the link of the first album track whose name equals *track_name*, ignoring case."""
    wanted = _fold(track_name)
    for candidate in album_tracks:
        if _fold(candidate.track_name) == wanted:
            return candidate.track_link
    return None


class MatchResolver:
    """Turns one album's input tracks into output rows."""

    def __init__(self, catalog: CatalogClient) -> None:
        self._catalog = catalog
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def resolve_album(
        self,
        artist_name: str,
        tracks: Sequence[TrackRecord],
        album_tracks: Sequence[AlbumTrack],
    ) -> list[OutputRow]:
        """Resolve every track of one album group, preserving input order.

        Parameters
        ----------
        artist_name:
            The group's artist key, used for the fallback search query.
        tracks:
            Input records of the album group.
        album_tracks:
            The catalog's listing for the album; empty when the album was
            not found.

        Returns
        -------
        list[OutputRow]
            Exactly one row per input record.
        """
        rows: list[OutputRow] = []
        for record in tracks:
            if album_tracks:
                link = match_album_track(record.track_name, album_tracks)
                if link is None:
                    self._logger.info(
                        "track_not_on_album",
                        artist=artist_name,
                        album=record.album_name,
                        track=record.track_name,
                    )
            else:
                lookup = await self._catalog.find_track_url(artist_name, record.track_name)
                link = lookup.value
            rows.append(OutputRow.from_record(record, link))
        return rows
