"""Public interface definitions for external collaborators.

The resolution core talks to the outside world only through these
abstract base classes; concrete adapters live in ``bandlink/providers/``
and are wired together in ``bandlink/main.py``.

    Interface          →  Concrete implementation
    ───────────────────────────────────────────────
    ICatalogProvider   →  BandcampProvider
    IRecordSource      →  CsvRecordSource
    IRecordSink        →  CsvRecordSink
"""

from bandlink.interfaces.catalog_provider import ICatalogProvider
from bandlink.interfaces.record_io import IRecordSink, IRecordSource

__all__ = ["ICatalogProvider", "IRecordSink", "IRecordSource"]
