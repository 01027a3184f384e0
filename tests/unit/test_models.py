"""Unit tests for domain models and lookup results."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bandlink.models.lookup import Failed, Found, NotFound
from bandlink.models.tracks import NOT_FOUND_SENTINEL, OutputRow, ResultType
from bandlink.utils.errors import BandlinkError, CatalogError
from tests.conftest import make_record


class TestResultType:
    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("ARTIST", ResultType.ARTIST),
            (" track ", ResultType.TRACK),
            ("Album", ResultType.ALBUM),
            ("podcast", ResultType.UNKNOWN),
        ],
    )
    def test_from_label(self, label: str, expected: ResultType) -> None:
        assert ResultType.from_label(label) is expected


class TestOutputRow:
    def test_none_link_becomes_sentinel(self) -> None:
        row = OutputRow.from_record(make_record("A", "X", "T1"), None)
        assert row.link == NOT_FOUND_SENTINEL
        assert row.resolved is False

    def test_empty_link_becomes_sentinel(self) -> None:
        row = OutputRow.from_record(make_record("A", "X", "T1"), "")
        assert row.link == NOT_FOUND_SENTINEL

    def test_resolved_link_is_kept(self) -> None:
        row = OutputRow.from_record(make_record("A", "X", "T1"), "https://a.bandcamp.com/track/t1")
        assert row.resolved is True

    def test_records_are_immutable(self) -> None:
        record = make_record("A", "X", "T1")
        with pytest.raises(ValidationError):
            record.track_name = "changed"  # type: ignore[misc]


class TestLookup:
    def test_only_found_is_found(self) -> None:
        assert Found("x").found is True
        assert NotFound().found is False
        assert Failed(reason="boom", attempts=3).found is False

    def test_negative_results_have_no_value(self) -> None:
        assert NotFound().value is None
        assert Failed(reason="boom", attempts=3).value is None


class TestErrors:
    def test_provider_name_prefixes_message(self) -> None:
        exc = CatalogError("HTTP 429", provider_name="bandcamp")
        assert str(exc) == "[bandcamp] HTTP 429"
        assert exc.message == "HTTP 429"
        assert isinstance(exc, BandlinkError)

    def test_default_message(self) -> None:
        assert str(CatalogError()) == "Catalog request failed"
