"""Shared pytest fixtures for the bandlink test suite."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from bandlink.config.settings import PipelineConfig
from bandlink.interfaces.catalog_provider import ICatalogProvider
from bandlink.interfaces.record_io import IRecordSink
from bandlink.models.tracks import (
    AlbumLink,
    AlbumTrack,
    CatalogSearchResult,
    OutputRow,
    ResultType,
    TrackRecord,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_record(
    artist: str,
    album: str,
    track: str,
    track_id: str | None = None,
    added_at: str = "2024-01-01T00:00:00Z",
) -> TrackRecord:
    return TrackRecord(
        track_id=track_id or f"{artist}-{album}-{track}",
        track_name=track,
        album_name=album,
        artist_name=artist,
        added_at=added_at,
    )


class SleepRecorder:
    """Stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class VirtualClock:
    """Monotonic clock whose ``sleep`` records the delay and advances time."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.delays: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.delays.append(seconds)
        self.now += seconds


class MemorySink(IRecordSink):
    """Record sink that keeps each appended batch in memory."""

    def __init__(self) -> None:
        self.batches: list[list[OutputRow]] = []

    @property
    def rows(self) -> list[OutputRow]:
        return [row for batch in self.batches for row in batch]

    def append(self, rows: Sequence[OutputRow]) -> int:
        self.batches.append(list(rows))
        return len(rows)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    """Defaults from the configuration table, with no real waiting involved."""
    return PipelineConfig(
        rate_limit_interval=1.0,
        max_attempts=5,
        initial_delay=1.0,
        backoff_multiplier=2.0,
    )


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def mock_catalog_provider() -> ICatalogProvider:
    """Mock ICatalogProvider with one known artist ("A") whose album "X" lists one track.

    Searches for anything else return no results.  Override the
    ``search`` / ``get_album_urls`` / ``get_album_tracks`` AsyncMocks
    for specific tests.
    """
    artist_result = CatalogSearchResult(
        name="A", url="https://a.bandcamp.com", result_type=ResultType.ARTIST
    )

    async def _search(query: str) -> list[CatalogSearchResult]:
        if query == "A":
            return [
                CatalogSearchResult(
                    name="X", url="https://a.bandcamp.com/album/x", result_type=ResultType.ALBUM
                ),
                artist_result,
            ]
        return []

    mock = MagicMock(spec=ICatalogProvider)
    mock.get_provider_name.return_value = "mock-catalog"
    mock.search = AsyncMock(side_effect=_search)
    mock.get_album_urls = AsyncMock(
        return_value=[AlbumLink(title="X", url="https://a.bandcamp.com/album/x")]
    )
    mock.get_album_tracks = AsyncMock(
        return_value=[AlbumTrack(track_name="t1", track_link="https://a.bandcamp.com/track/t1")]
    )
    return mock
