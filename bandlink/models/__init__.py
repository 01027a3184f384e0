"""bandlink domain models: re-exports all public model classes.

The models are organized across three submodules by concern:
    - tracks.py   : input records, catalog shapes and output rows
    - lookup.py   : Found / NotFound / Failed tagged lookup results
    - pipeline.py : run phases and the end-of-run summary
"""

from __future__ import annotations

from bandlink.models.lookup import Failed, Found, Lookup, NotFound
from bandlink.models.pipeline import PipelinePhase, RunSummary
from bandlink.models.tracks import (
    NOT_FOUND_SENTINEL,
    AlbumLink,
    AlbumTrack,
    CatalogSearchResult,
    OutputRow,
    ResultType,
    TrackRecord,
)

__all__ = [
    "NOT_FOUND_SENTINEL",
    "AlbumLink",
    "AlbumTrack",
    "CatalogSearchResult",
    "Failed",
    "Found",
    "Lookup",
    "NotFound",
    "OutputRow",
    "PipelinePhase",
    "ResultType",
    "RunSummary",
    "TrackRecord",
]
