"""Abstract base class for catalog service providers.

Defines the raw round trips the catalog client builds on: a free-text
search, an artist's album listing and an album's track listing.  Providers
raise :class:`~bandlink.utils.errors.CatalogError` for every failure; they
never retry, pace or swallow errors themselves beyond the throttle hook
they are handed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bandlink.models.tracks import AlbumLink, AlbumTrack, CatalogSearchResult


class ICatalogProvider(ABC):
    """Contract for catalog services that sell music by artist, album and track."""

    @abstractmethod
    async def search(self, query: str) -> list[CatalogSearchResult]:
        """Run a free-text search and return the first page of results.

        Parameters
        ----------
        query:
            Free text, e.g. an artist name or ``"artist track"``.

        Returns
        -------
        list[CatalogSearchResult]
            Results in the order the catalog ranked them.  Empty when the
            search matched nothing.

        Raises
        ------
        bandlink.utils.errors.CatalogError
            If the request fails or the page cannot be parsed.
        """

    @abstractmethod
    async def get_album_urls(self, artist_url: str) -> list[AlbumLink]:
        """List the albums published on an artist page.

        Parameters
        ----------
        artist_url:
            The artist URL from an ``artist`` search result.

        Returns
        -------
        list[AlbumLink]
            Possibly empty list of ``{title, url}`` pairs.
        """

    @abstractmethod
    async def get_album_tracks(self, album_url: str) -> list[AlbumTrack]:
        """Fetch an album page and list its tracks with their links.

        Raises
        ------
        bandlink.utils.errors.CatalogError
            If the request fails or the page carries no track data.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"bandcamp"``."""
