"""Catalog client: the three lookups the pipeline asks of the catalog.

Each lookup wraps its round trip(s) in the :class:`BackoffExecutor` and
returns a tagged :class:`~bandlink.models.lookup.Lookup`:

- :meth:`CatalogClient.find_artist_albums` -- artist search, then the
  artist's album listing (two chained requests retried as one unit).
- :meth:`CatalogClient.fetch_album_tracks` -- album page to track list.
- :meth:`CatalogClient.find_track_url` -- ``"artist track"`` search.

A missing artist or track is a definitive ``NotFound`` and is never
retried.  Anything the provider raises is retried with backoff and ends as
``Failed`` once attempts run out.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from bandlink.config.settings import PipelineConfig
from bandlink.interfaces.catalog_provider import ICatalogProvider
from bandlink.models.lookup import Lookup
from bandlink.models.tracks import AlbumLink, AlbumTrack, CatalogSearchResult, ResultType
from bandlink.utils.backoff import BackoffExecutor
from bandlink.utils.logging import get_logger

_T = TypeVar("_T")


def first_of_type(
    results: list[CatalogSearchResult], result_type: ResultType
) -> CatalogSearchResult | None:
    """Return the first search result tagged *result_type*, in ranking order."""
    return next((r for r in results if r.result_type is result_type), None)


class CatalogClient:
    """Retrying, logging front end over an :class:`ICatalogProvider`."""

    def __init__(
        self,
        provider: ICatalogProvider,
        executor: BackoffExecutor,
        config: PipelineConfig,
    ) -> None:
        self._provider = provider
        self._executor = executor
        self._config = config
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def find_artist_albums(self, artist_name: str) -> Lookup[list[AlbumLink]]:
        """Find the artist's catalog page and list its albums.

        Returns ``NotFound`` when no search result is tagged as an artist.
        An artist page without albums is ``Found([])``.
        """
        self._logger.info("artist_albums_fetch", artist=artist_name)

        async def _operation() -> list[AlbumLink] | None:
            results = await self._provider.search(artist_name)
            artist = first_of_type(results, ResultType.ARTIST)
            if artist is None:
                self._logger.info("artist_page_not_found", artist=artist_name)
                return None
            return await self._provider.get_album_urls(artist.url)

        return await self._run(_operation)

    async def fetch_album_tracks(self, album_url: str) -> Lookup[list[AlbumTrack]]:
        self._logger.info("album_tracks_fetch", album_url=album_url)
        return await self._run(lambda: self._provider.get_album_tracks(album_url))

    async def find_track_url(self, artist_name: str, track_name: str) -> Lookup[str]:
        """Free-text search for ``"{artist} {track}"``; first ``track`` result wins."""
        self._logger.info("track_search", artist=artist_name, track=track_name)

        async def _operation() -> str | None:
            results = await self._provider.search(f"{artist_name} {track_name}")
            track = first_of_type(results, ResultType.TRACK)
            return track.url if track is not None else None

        return await self._run(_operation)

    async def _run(self, operation: Callable[[], Awaitable[_T | None]]) -> Lookup[_T]:
        return await self._executor.execute(
            operation,
            max_attempts=self._config.max_attempts,
            initial_delay=self._config.initial_delay,
            multiplier=self._config.backoff_multiplier,
        )
