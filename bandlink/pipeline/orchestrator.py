"""Central orchestrator for the link-resolution pipeline.

Walks the grouped input artist by artist, album by album:

    for artist in groups:                 (first-encounter order)
        albums = find_artist_albums(artist)
        url_map = {title.lower(): url}
        for album in groups[artist]:
            tracks = fetch_album_tracks(url_map[album.lower()])  or []
            rows   = MatchResolver.resolve_album(...)
            sink.append(rows)                                    (flush now)
            cooldown()                                           (one interval)

Everything runs on one task with sequential awaits; the shared
:class:`RateLimiter` spaces every catalog request and the per-album
cool-down.  Rows are flushed per album, so a crash loses at most the
album in progress and a restart from scratch can duplicate earlier rows.

Catalog failures never abort a run: lookups degrade to not-found.  Only a
sink failure stops the pipeline, raised as :class:`PipelineError`.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

import structlog

from bandlink.interfaces.record_io import IRecordSink
from bandlink.models.lookup import Failed
from bandlink.models.pipeline import PipelinePhase, RunSummary
from bandlink.models.tracks import AlbumLink, AlbumTrack, OutputRow, TrackRecord
from bandlink.pipeline.progress_tracker import ProgressTracker
from bandlink.pipeline.rate_limiter import RateLimiter
from bandlink.services.catalog_client import CatalogClient
from bandlink.services.grouping import count_albums, group_by_artist_and_album
from bandlink.services.match_resolver import MatchResolver
from bandlink.utils.errors import PipelineError, RecordSinkError
from bandlink.utils.logging import get_logger


def build_album_url_map(albums: Sequence[AlbumLink] | None) -> dict[str, str]:
    """Map lower-cased album titles to URLs; later duplicates overwrite earlier ones."""
    return {album.title.lower(): album.url for album in albums or []}


class LinkResolutionPipeline:
    """Resolves grouped track records to catalog links and streams rows to a sink.

    All collaborators are injected at construction time; the orchestrator
    never creates them.
    """

    def __init__(
        self,
        catalog: CatalogClient,
        resolver: MatchResolver,
        sink: IRecordSink,
        rate_limiter: RateLimiter,
        progress_tracker: ProgressTracker | None = None,
    ) -> None:
        self._catalog = catalog
        self._resolver = resolver
        self._sink = sink
        self._rate_limiter = rate_limiter
        self._progress = progress_tracker or ProgressTracker()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def run(self, records: Sequence[TrackRecord]) -> RunSummary:
        """Resolve every record and append one output row per record to the sink.

        Raises
        ------
        PipelineError
            If the sink rejects a batch of rows.
        """
        started_at = datetime.now(tz=timezone.utc)

        await self._progress.update(PipelinePhase.GROUPING, 0.0, "Grouping tracks...")
        groups = group_by_artist_and_album(records)
        total_artists = len(groups)
        self._logger.info(
            "run_start",
            artists=total_artists,
            albums=count_albums(groups),
            tracks=len(records),
        )

        rows_written = 0
        links_found = 0
        albums_done = 0

        for index, (artist, albums) in enumerate(groups.items(), start=1):
            await self._progress.update(
                PipelinePhase.RESOLVING,
                (index - 1) / total_artists * 100.0,
                f"[{index}/{total_artists}] Processing artist: {artist}",
            )

            artist_lookup = await self._catalog.find_artist_albums(artist)
            if isinstance(artist_lookup, Failed):
                self._logger.warning("artist_lookup_failed", artist=artist, error=artist_lookup.reason)
            album_urls = build_album_url_map(artist_lookup.value)

            for album, tracks in albums.items():
                rows = await self._resolve_album(artist, album, tracks, album_urls)
                rows_written += self._flush(artist, album, rows)
                links_found += sum(1 for row in rows if row.resolved)
                albums_done += 1
                await self._rate_limiter.cooldown()

        summary = RunSummary(
            artists=total_artists,
            albums=albums_done,
            tracks=len(records),
            rows_written=rows_written,
            links_found=links_found,
            links_not_found=rows_written - links_found,
            started_at=started_at,
            completed_at=datetime.now(tz=timezone.utc),
        )
        await self._progress.update(
            PipelinePhase.COMPLETE,
            100.0,
            f"Processing complete: {rows_written} track(s) written",
        )
        self._logger.info(
            "run_complete",
            artists=summary.artists,
            rows_written=summary.rows_written,
            links_found=summary.links_found,
            links_not_found=summary.links_not_found,
            duration_seconds=round(summary.duration_seconds, 1),
        )
        return summary

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _resolve_album(
        self,
        artist: str,
        album: str,
        tracks: list[TrackRecord],
        album_urls: dict[str, str],
    ) -> list[OutputRow]:
        self._logger.info("album_start", artist=artist, album=album, tracks=len(tracks))

        album_tracks: list[AlbumTrack] = []
        album_url = album_urls.get(album.lower())
        if album_url is not None:
            album_tracks = (await self._catalog.fetch_album_tracks(album_url)).value or []
        else:
            self._logger.info("album_not_found_fallback", artist=artist, album=album)

        return await self._resolver.resolve_album(artist, tracks, album_tracks)

    def _flush(self, artist: str, album: str, rows: list[OutputRow]) -> int:
        try:
            written = self._sink.append(rows)
        except RecordSinkError as exc:
            self._logger.error("album_flush_failed", artist=artist, album=album, error=str(exc))
            raise PipelineError(message=f"Could not save rows for {artist} / {album}: {exc}") from exc
        self._logger.info("album_rows_flushed", artist=artist, album=album, rows=written)
        return written
