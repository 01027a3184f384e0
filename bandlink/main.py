"""bandlink application wiring.

Builds the providers, services and orchestrator for one run from
:class:`Settings`, and exposes :func:`run_pipeline` for the CLI or for
scripting.  Nothing here is created at import time; every run gets its
own HTTP client, rate limiter and configuration.
"""

from __future__ import annotations

import asyncio

import httpx
import structlog

from bandlink.config.settings import PipelineConfig, Settings
from bandlink.interfaces.record_io import IRecordSink, IRecordSource
from bandlink.models.pipeline import PipelinePhase, RunSummary
from bandlink.pipeline.orchestrator import LinkResolutionPipeline
from bandlink.pipeline.progress_tracker import ProgressTracker
from bandlink.pipeline.rate_limiter import RateLimiter
from bandlink.providers.catalog.bandcamp_provider import BandcampProvider
from bandlink.providers.records.csv_sink import CsvRecordSink
from bandlink.providers.records.csv_source import CsvRecordSource
from bandlink.services.catalog_client import CatalogClient
from bandlink.services.match_resolver import MatchResolver
from bandlink.utils.backoff import BackoffExecutor
from bandlink.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def build_pipeline(
    settings: Settings,
    http_client: httpx.AsyncClient,
    sink: IRecordSink,
    progress_tracker: ProgressTracker | None = None,
    config: PipelineConfig | None = None,
) -> LinkResolutionPipeline:
    """Wire a :class:`LinkResolutionPipeline` around an open HTTP client."""
    config = config or settings.pipeline_config()
    rate_limiter = RateLimiter(config.rate_limit_interval)
    provider = BandcampProvider(
        http_client,
        rate_limiter=rate_limiter,
        base_url=settings.catalog_base_url,
        user_agent=settings.user_agent,
        call_timeout=config.call_timeout,
    )
    catalog = CatalogClient(
        provider=provider,
        executor=BackoffExecutor(),
        config=config,
    )
    return LinkResolutionPipeline(
        catalog=catalog,
        resolver=MatchResolver(catalog),
        sink=sink,
        rate_limiter=rate_limiter,
        progress_tracker=progress_tracker,
    )


async def run_pipeline(
    settings: Settings,
    source: IRecordSource | None = None,
    sink: IRecordSink | None = None,
    progress_tracker: ProgressTracker | None = None,
) -> RunSummary:
    """Load the input records and resolve them end to end.

    Raises
    ------
    bandlink.utils.errors.RecordSourceError
        If the input table is missing or unreadable.
    bandlink.utils.errors.PipelineError
        If output rows cannot be written.
    """
    source = source or CsvRecordSource(settings.input_csv)
    sink = sink or CsvRecordSink(settings.output_csv)
    progress_tracker = progress_tracker or ProgressTracker()

    await progress_tracker.update(PipelinePhase.LOADING, 0.0, "Parsing input CSV...")
    # File reading is blocking; keep the event loop free while it runs.
    records = await asyncio.to_thread(source.read)
    _logger.info("input_loaded", records=len(records))

    timeout = httpx.Timeout(settings.request_timeout_seconds)
    async with httpx.AsyncClient(timeout=timeout) as http_client:
        pipeline = build_pipeline(settings, http_client, sink, progress_tracker)
        return await pipeline.run(records)
