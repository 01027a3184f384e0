"""Utility modules for bandlink.

- **backoff** -- bounded retry with exponential delay around catalog calls,
  returning Found / NotFound / Failed lookups.
- **errors** -- exception hierarchy rooted at BandlinkError.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from bandlink.utils.backoff import BackoffExecutor
from bandlink.utils.errors import (
    BandlinkError,
    CatalogError,
    ConfigurationError,
    PipelineError,
    RecordSinkError,
    RecordSourceError,
)
from bandlink.utils.logging import configure_logging, get_logger

__all__ = [
    "BackoffExecutor",
    "BandlinkError",
    "CatalogError",
    "ConfigurationError",
    "PipelineError",
    "RecordSinkError",
    "RecordSourceError",
    "configure_logging",
    "get_logger",
]
