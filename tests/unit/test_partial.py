"""Unit tests for PartialEvent and the merge-if-absent reducer."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from eventdraft.models.partial import MERGEABLE_FIELDS, PartialEvent, merge_if_absent


class TestPartialEvent:
    def test_defaults_are_empty(self) -> None:
        partial = PartialEvent()
        assert partial.is_empty()
        assert partial.filled_fields() == []
        assert not partial.has_venue_name

    def test_filled_fields(self) -> None:
        partial = PartialEvent(title="Show", price_min=10.0, performers=("A",))
        assert partial.filled_fields() == ["title", "price_min", "performers"]

    def test_frozen(self) -> None:
        partial = PartialEvent(title="Show")
        with pytest.raises(ValidationError):
            partial.title = "Other"  # type: ignore[misc]

    def test_provenance_not_mergeable(self) -> None:
        assert "provenance" not in MERGEABLE_FIELDS


class TestMergeIfAbsent:
    def test_fills_empty_fields_with_provenance(self) -> None:
        merged = merge_if_absent(PartialEvent(), PartialEvent(title="Show", date="2026-04-09"), "html")
        assert merged.title == "Show"
        assert merged.date == "2026-04-09"
        assert merged.provenance == {"title": "html", "date": "html"}

    def test_never_overwrites(self) -> None:
        base = merge_if_absent(PartialEvent(), PartialEvent(title="API Title"), "ticketmaster_lookup")
        merged = merge_if_absent(base, PartialEvent(title="Page Title", venue_name="Arena"), "html")
        assert merged.title == "API Title"
        assert merged.venue_name == "Arena"
        assert merged.provenance == {"title": "ticketmaster_lookup", "venue_name": "html"}

    def test_none_incoming_returns_base(self) -> None:
        base = PartialEvent(title="Show")
        assert merge_if_absent(base, None, "html") is base

    def test_nothing_new_returns_base(self) -> None:
        base = PartialEvent(title="Show")
        assert merge_if_absent(base, PartialEvent(title="Other"), "slug") is base

    def test_base_is_not_modified(self) -> None:
        base = PartialEvent()
        merge_if_absent(base, PartialEvent(title="Show"), "slug")
        assert base.title == ""
        assert base.provenance == {}

    def test_zero_price_counts_as_value(self) -> None:
        merged = merge_if_absent(PartialEvent(), PartialEvent(price_min=0.0), "html")
        assert merged.price_min == 0.0
        assert merged.provenance == {"price_min": "html"}
