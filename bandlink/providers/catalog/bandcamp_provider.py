"""Bandcamp web-scraping provider implementing ICatalogProvider.

Scrapes bandcamp.com for search results, artist album grids and album
track listings.  No API key required.  Every request goes through the
shared :class:`~bandlink.pipeline.rate_limiter.RateLimiter` and carries a
proper User-Agent header.

Unlike a best-effort research scraper, this provider never hides a failed
request behind an empty result: an empty list means "the page had nothing",
while HTTP errors and unparseable pages raise :class:`CatalogError` so the
backoff executor can retry them.
"""

from __future__ import annotations

import asyncio
import json
from urllib.parse import quote_plus, urljoin

import httpx
import structlog
from bs4 import BeautifulSoup, Tag

from bandlink.interfaces.catalog_provider import ICatalogProvider
from bandlink.models.tracks import AlbumLink, AlbumTrack, CatalogSearchResult, ResultType
from bandlink.pipeline.rate_limiter import RateLimiter
from bandlink.utils.errors import CatalogError
from bandlink.utils.logging import get_logger

_DEFAULT_BASE_URL = "https://bandcamp.com"
_DEFAULT_USER_AGENT = "bandlink/0.1.0"
_PROVIDER_NAME = "bandcamp"

# Older search markup carries the item type only as a CSS class.
_CLASS_TYPES: dict[str, ResultType] = {
    "band": ResultType.ARTIST,
    "album": ResultType.ALBUM,
    "track": ResultType.TRACK,
    "label": ResultType.LABEL,
    "fan": ResultType.FAN,
}


class BandcampProvider(ICatalogProvider):
    """Catalog provider that scrapes Bandcamp HTML pages.

    The ``httpx.AsyncClient`` is injected for testability; the rate limiter
    is optional so the provider can be exercised on its own.  ``call_timeout``
    bounds each HTTP round trip; a request that exceeds it raises
    :class:`CatalogError` like any other transient failure.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        rate_limiter: RateLimiter | None = None,
        base_url: str = _DEFAULT_BASE_URL,
        user_agent: str = _DEFAULT_USER_AGENT,
        call_timeout: float | None = None,
    ) -> None:
        self._http = http_client
        self._rate_limiter = rate_limiter
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._call_timeout = call_timeout
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def _fetch_page(self, url: str) -> BeautifulSoup:
        if self._rate_limiter is not None:
            await self._rate_limiter.throttle()
        headers = {"User-Agent": self._user_agent}
        try:
            response = await self._get(url, headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._logger.warning(
                "bandcamp_http_error", url=url, status=exc.response.status_code
            )
            raise CatalogError(
                message=f"HTTP {exc.response.status_code} for {url}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            self._logger.warning("bandcamp_request_failed", url=url, error=str(exc))
            raise CatalogError(
                message=f"Request to {url} failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except asyncio.TimeoutError as exc:
            self._logger.warning("bandcamp_request_timeout", url=url, timeout=self._call_timeout)
            raise CatalogError(
                message=f"Request to {url} timed out after {self._call_timeout}s",
                provider_name=_PROVIDER_NAME,
            ) from exc
        return BeautifulSoup(response.text, "html.parser")

    async def _get(self, url: str, headers: dict[str, str]) -> httpx.Response:
        # The deadline covers the round trip only, never the throttle wait.
        request = self._http.get(url, headers=headers, follow_redirects=True)
        if self._call_timeout is None:
            return await request
        return await asyncio.wait_for(request, timeout=self._call_timeout)

    # -- ICatalogProvider implementation ---------------------------------------

    async def search(self, query: str) -> list[CatalogSearchResult]:
        url = f"{self._base_url}/search?q={quote_plus(query)}&page=1"
        soup = await self._fetch_page(url)

        results: list[CatalogSearchResult] = []
        for item in soup.select("li.searchresult"):
            result = self._parse_search_item(item)
            if result is not None:
                results.append(result)

        self._logger.debug("bandcamp_search_complete", query=query, results=len(results))
        return results

    async def get_album_urls(self, artist_url: str) -> list[AlbumLink]:
        artist_root = artist_url.split("?")[0].rstrip("/")
        soup = await self._fetch_page(f"{artist_root}/music")

        albums: list[AlbumLink] = []
        seen_urls: set[str] = set()

        for item in soup.select("#music-grid li.music-grid-item, li[data-item-id]"):
            link_el = item.select_one("a")
            title_el = item.select_one(".title")
            if link_el is None or title_el is None:
                continue
            for override in title_el.select(".artist-override"):
                override.decompose()
            self._add_album(
                albums,
                seen_urls,
                title_el.get_text(" ", strip=True),
                urljoin(f"{artist_root}/", link_el.get("href", "")),
            )

        # Large discographies only render the first items; the rest are
        # embedded as JSON on the grid element.
        grid = soup.select_one("#music-grid[data-client-items]")
        if grid is not None:
            for entry in self._load_json(grid.get("data-client-items", "[]"), artist_root):
                if isinstance(entry, dict):
                    self._add_album(
                        albums,
                        seen_urls,
                        str(entry.get("title") or ""),
                        urljoin(f"{artist_root}/", str(entry.get("page_url") or "")),
                    )

        self._logger.debug("bandcamp_albums_complete", artist_url=artist_root, count=len(albums))
        return albums

    async def get_album_tracks(self, album_url: str) -> list[AlbumTrack]:
        soup = await self._fetch_page(album_url)

        tralbum_el = soup.select_one("[data-tralbum]")
        if tralbum_el is not None:
            tralbum = self._load_json(tralbum_el.get("data-tralbum", ""), album_url)
            if not isinstance(tralbum, dict):
                raise CatalogError(
                    message=f"Unexpected album data on {album_url}",
                    provider_name=_PROVIDER_NAME,
                )
            tracks = [
                AlbumTrack(
                    track_name=str(info["title"]),
                    track_link=urljoin(album_url, str(info["title_link"])),
                )
                for info in tralbum.get("trackinfo") or []
                if isinstance(info, dict) and info.get("title") and info.get("title_link")
            ]
            self._logger.debug("bandcamp_album_tracks", album_url=album_url, count=len(tracks))
            return tracks

        table = soup.select_one("#track_table")
        if table is None:
            raise CatalogError(
                message=f"No track listing found on {album_url}",
                provider_name=_PROVIDER_NAME,
            )

        tracks = []
        for row in table.select("tr.track_row_view"):
            name_el = row.select_one(".track-title")
            link_el = row.select_one(".title a[href]")
            if name_el is None or link_el is None:
                continue
            tracks.append(
                AlbumTrack(
                    track_name=name_el.get_text(strip=True),
                    track_link=urljoin(album_url, link_el["href"]),
                )
            )
        self._logger.debug("bandcamp_album_tracks", album_url=album_url, count=len(tracks))
        return tracks

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    # -- Parsing helpers -------------------------------------------------------

    @staticmethod
    def _parse_search_item(item: Tag) -> CatalogSearchResult | None:
        heading = item.select_one(".heading a") or item.select_one(".heading")
        if heading is None:
            return None
        name = heading.get_text(" ", strip=True)

        url_el = item.select_one(".itemurl")
        url = url_el.get_text(strip=True) if url_el is not None else ""
        if not url and heading.name == "a":
            url = heading.get("href", "")
        url = url.split("?")[0]
        if not name or not url:
            return None

        type_el = item.select_one(".itemtype")
        if type_el is not None:
            result_type = ResultType.from_label(type_el.get_text(strip=True))
        else:
            classes = item.get("class") or []
            result_type = next(
                (_CLASS_TYPES[c] for c in classes if c in _CLASS_TYPES), ResultType.UNKNOWN
            )

        return CatalogSearchResult(name=name, url=url, result_type=result_type)

    @staticmethod
    def _add_album(albums: list[AlbumLink], seen_urls: set[str], title: str, url: str) -> None:
        if not title or "/album/" not in url or url in seen_urls:
            return
        seen_urls.add(url)
        albums.append(AlbumLink(title=title, url=url))

    @staticmethod
    def _load_json(raw: str, url: str) -> object:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CatalogError(
                message=f"Malformed embedded JSON on {url}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
