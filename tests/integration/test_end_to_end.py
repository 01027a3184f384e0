"""End-to-end tests: CSV in, mocked Bandcamp over HTTP, CSV out.

The catalog is served by an ``httpx.MockTransport`` so the real provider
parses real markup; no network access and no real waiting is involved
(rate limit and backoff are configured to zero).
"""

from __future__ import annotations

import csv
import json
from html import escape
from pathlib import Path

import httpx
import pytest

from bandlink.config.settings import Settings
from bandlink.main import run_pipeline
from bandlink.models.tracks import NOT_FOUND_SENTINEL
from bandlink.providers.records.csv_sink import OUTPUT_HEADER
from bandlink.utils.errors import RecordSourceError

_INPUT_HEADER = "Track ID,Track Name,Album Name,Artist Name(s),Added At\n"


def _search_item(kind: str, name: str, url: str) -> str:
    return f"""
    <li class="searchresult data-search">
      <div class="itemtype">{kind}</div>
      <div class="heading"><a href="{url}?from=search">{name}</a></div>
      <div class="itemurl"><a href="#">{url}</a></div>
    </li>"""


def _search_page(*items: str) -> str:
    return f'<ul class="result-items">{"".join(items)}</ul>'


_MUSIC_PAGE = """
<ol id="music-grid">
  <li class="music-grid-item" data-item-id="album-1">
    <a href="/album/first-album"><p class="title">First Album</p></a>
  </li>
</ol>
"""


def _album_page() -> str:
    tralbum = json.dumps(
        {
            "trackinfo": [
                {"title": "Song A", "title_link": "/track/song-a"},
                {"title": "Song B", "title_link": "/track/song-b"},
            ]
        }
    )
    return f'<script data-tralbum="{escape(tralbum)}"></script>'


def _catalog(request: httpx.Request) -> httpx.Response:
    host, path = request.url.host, request.url.path
    if host == "bandcamp.com" and path == "/search":
        query = request.url.params.get("q")
        if query == "Artist One":
            return httpx.Response(
                200,
                text=_search_page(
                    _search_item("ALBUM", "First Album", "https://artistone.bandcamp.com/album/first-album"),
                    _search_item("ARTIST", "Artist One", "https://artistone.bandcamp.com"),
                ),
            )
        if query == "Artist Two Lonely":
            return httpx.Response(
                200,
                text=_search_page(
                    _search_item("TRACK", "Lonely", "https://artisttwo.bandcamp.com/track/lonely"),
                ),
            )
        if query == "Artist Two Broken":
            return httpx.Response(503, text="busy")
        return httpx.Response(200, text=_search_page())
    if host == "artistone.bandcamp.com" and path == "/music":
        return httpx.Response(200, text=_MUSIC_PAGE)
    if host == "artistone.bandcamp.com" and path == "/album/first-album":
        return httpx.Response(200, text=_album_page())
    return httpx.Response(404, text="not here")


@pytest.fixture
def mocked_catalog(monkeypatch: pytest.MonkeyPatch) -> None:
    """Route every AsyncClient created by the app through the mock catalog."""
    real_client = httpx.AsyncClient

    def _client(*args, **kwargs) -> httpx.AsyncClient:
        kwargs["transport"] = httpx.MockTransport(_catalog)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", _client)


def _settings(tmp_path: Path) -> Settings:
    return Settings(
        input_csv=str(tmp_path / "input.csv"),
        output_csv=str(tmp_path / "output.csv"),
        rate_limit_ms=0,
        initial_backoff_ms=0,
        max_retries=2,
    )


def _write_input(tmp_path: Path, rows: list[str]) -> None:
    (tmp_path / "input.csv").write_text(_INPUT_HEADER + "".join(rows), encoding="utf-8")


def _read_output(tmp_path: Path) -> list[dict[str, str]]:
    with (tmp_path / "output.csv").open(newline="", encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_every_input_row_gets_one_output_row(
        self, tmp_path: Path, mocked_catalog: None
    ) -> None:
        _write_input(
            tmp_path,
            [
                "1,Song A,First Album,Artist One,2024-01-01T00:00:00Z\n",
                "2,Lonely,Solo,Artist Two,2024-01-02T00:00:00Z\n",
                "3,Missing,First Album,Artist One,2024-01-03T00:00:00Z\n",
                "4,Broken,Solo,Artist Two,2024-01-04T00:00:00Z\n",
            ],
        )

        summary = await run_pipeline(_settings(tmp_path))

        rows = _read_output(tmp_path)
        assert list(rows[0].keys()) == list(OUTPUT_HEADER)
        links = {row["Track ID"]: row["Bandcamp Link"] for row in rows}
        assert links == {
            "1": "https://artistone.bandcamp.com/track/song-a",
            # album found, track absent from it: no free-text fallback
            "3": NOT_FOUND_SENTINEL,
            "2": "https://artisttwo.bandcamp.com/track/lonely",
            # retries exhausted on HTTP 503
            "4": NOT_FOUND_SENTINEL,
        }
        # grouped output: artist one's album first, then artist two's
        assert [row["Track ID"] for row in rows] == ["1", "3", "2", "4"]
        assert rows[0]["Spotify Added At"] == "2024-01-01T00:00:00Z"
        assert rows[2]["Artist Name"] == "Artist Two"
        assert summary.rows_written == 4
        assert summary.links_found == 2
        assert summary.links_not_found == 2

    @pytest.mark.asyncio
    async def test_second_run_appends_without_new_header(
        self, tmp_path: Path, mocked_catalog: None
    ) -> None:
        _write_input(tmp_path, ["1,Song B,First Album,Artist One,2024-01-01T00:00:00Z\n"])
        settings = _settings(tmp_path)

        await run_pipeline(settings)
        await run_pipeline(settings)

        text = (tmp_path / "output.csv").read_text(encoding="utf-8")
        assert text.count("Bandcamp Link") == 1
        rows = _read_output(tmp_path)
        assert [row["Bandcamp Link"] for row in rows] == [
            "https://artistone.bandcamp.com/track/song-b"
        ] * 2

    @pytest.mark.asyncio
    async def test_missing_input_raises_before_any_request(
        self, tmp_path: Path, mocked_catalog: None
    ) -> None:
        with pytest.raises(RecordSourceError, match="not found"):
            await run_pipeline(_settings(tmp_path))

        assert not (tmp_path / "output.csv").exists()
