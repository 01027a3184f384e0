"""Tabular record source and sink adapters."""

from bandlink.providers.records.csv_sink import OUTPUT_HEADER, CsvRecordSink
from bandlink.providers.records.csv_source import CsvRecordSource, clean_header

__all__ = ["OUTPUT_HEADER", "CsvRecordSink", "CsvRecordSource", "clean_header"]
