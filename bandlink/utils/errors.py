"""Custom exception hierarchy for bandlink.

All application exceptions inherit from :class:`BandlinkError`, which
carries an optional ``provider_name`` so error handlers can identify which
collaborator (e.g. "bandcamp", "csv") caused the failure.

The hierarchy is organized by where the failure happens:

    BandlinkError  (base -- catch-all for any bandlink error)
    +-- CatalogError        (catalog round trip failed; transient, retried)
    +-- RecordSourceError   (input table missing, unreadable or incomplete)
    +-- RecordSinkError     (output table cannot be written)
    +-- ConfigurationError  (invalid settings at startup)
    +-- PipelineError       (orchestration failure; fatal)

Only :class:`CatalogError` is raised inside the resolution core, and the
backoff executor absorbs it.  Every other subclass terminates the run.
"""


class BandlinkError(Exception):
    """Base exception for all bandlink errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  The ``__str__`` method prefixes the provider name
    in brackets for log scanning, e.g. ``[bandcamp] HTTP 503``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# External catalog errors
# ---------------------------------------------------------------------------

class CatalogError(BandlinkError):
    """Raised when a catalog request fails (network error, bad status, bad page).

    Always treated as transient: the backoff executor retries the whole
    operation and downgrades exhausted retries to a not-found result.
    """

    def __init__(
        self,
        message: str = "Catalog request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Record I/O errors
# ---------------------------------------------------------------------------

class RecordSourceError(BandlinkError):
    """Raised when the input table is missing, unreadable or lacks columns."""

    def __init__(
        self,
        message: str = "Input records could not be read",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RecordSinkError(BandlinkError):
    """Raised when output rows cannot be appended to the output table."""

    def __init__(
        self,
        message: str = "Output records could not be written",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Orchestration / configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(BandlinkError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PipelineError(BandlinkError):
    """Raised when the pipeline cannot continue (e.g. the sink stopped accepting rows)."""

    def __init__(
        self,
        message: str = "Pipeline orchestration failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
