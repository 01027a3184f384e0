# =============================================================================
# bandlink/cli/resolve.py: CLI Resolve Command
# =============================================================================
#
# Runs one resolution pass over the configured input CSV and appends the
# results to the configured output CSV.  There are no flags: every knob
# comes from the environment (or a .env file) through Settings:
#
#   INPUT_CSV, OUTPUT_CSV, RATE_LIMIT_MS, MAX_RETRIES, BACKOFF_FACTOR,
#   INITIAL_BACKOFF_MS, CALL_TIMEOUT_SECONDS, REQUEST_TIMEOUT_SECONDS,
#   CATALOG_BASE_URL, USER_AGENT, LOG_LEVEL, APP_ENV
#
# Typical usage:
#   INPUT_CSV=liked_songs.csv python -m bandlink.cli
#   bandlink                               # console script, same behaviour
#
# Exit codes: 0 when the run completes (unresolved tracks are not errors),
# 1 when configuration is invalid or the input/output files are unusable.
# =============================================================================

"""Standalone CLI that resolves a track export to Bandcamp links.

Usage::

    INPUT_CSV=input.csv OUTPUT_CSV=output.csv python -m bandlink.cli
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError

from bandlink.config.settings import Settings
from bandlink.models.pipeline import PipelinePhase
from bandlink.utils.errors import BandlinkError
from bandlink.utils.logging import configure_logging


def _print_progress(phase: PipelinePhase, progress: float, message: str) -> None:
    """Progress listener echoing the orchestrator's status lines to stdout."""
    print(message, flush=True)


async def _run(settings: Settings) -> int:
    """Run the pipeline and print a one-line summary.

    Returns 0 on completion, 1 on an unrecovered failure.
    """
    # Deferred import: logging must be configured before the pipeline
    # modules create their loggers.
    from bandlink.main import run_pipeline
    from bandlink.pipeline.progress_tracker import ProgressTracker

    tracker = ProgressTracker()
    tracker.register_listener(_print_progress)

    try:
        summary = await run_pipeline(settings, progress_tracker=tracker)
    except BandlinkError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(
        f"Results saved to {settings.output_csv}: "
        f"{summary.links_found} linked, {summary.links_not_found} not found "
        f"({summary.duration_seconds:.1f}s)",
        flush=True,
    )
    return 0


def _build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="python -m bandlink.cli",
        description=(
            "Resolve the tracks of a CSV export to Bandcamp links. "
            "Configured through environment variables (INPUT_CSV, OUTPUT_CSV, "
            "RATE_LIMIT_MS, MAX_RETRIES, BACKOFF_FACTOR, ...)."
        ),
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: load settings, configure logging, run, return the exit code."""
    _build_parser().parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Error: invalid configuration:\n{exc}", file=sys.stderr)
        return 1

    configure_logging(
        log_level=settings.log_level,
        json_output=(settings.app_env == "production"),
    )
    return asyncio.run(_run(settings))


if __name__ == "__main__":
    sys.exit(main())
