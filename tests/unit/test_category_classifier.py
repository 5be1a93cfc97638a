"""Unit tests for keyword category classification."""

from __future__ import annotations

import pytest

from eventdraft.services.category_classifier import (
    category_label,
    classify_event,
    keyword_event_type,
)


class TestKeywordEventType:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Jo Koy Stand-Up Live", "comedy"),
            ("Jo Koy Stand Up Live", "comedy"),
            ("Dallas Mavericks vs Los Angeles Lakers", "sports"),
            ("Monster Jam Arlington", "sports"),
            ("Hamilton", "theater"),
            ("The Nutcracker Ballet", "theater"),
            ("Oppenheimer IMAX Screening", "movie"),
            ("Taylor Swift The Eras Tour", ""),
        ],
    )
    def test_buckets(self, name: str, expected: str) -> None:
        assert keyword_event_type(name) == expected

    def test_whole_word_only(self) -> None:
        # "laughing" is not the keyword "laugh"; "screenplay" is not "play".
        assert keyword_event_type("Laughing Out Loud") == ""
        assert keyword_event_type("Screenplay Reading") == ""

    def test_first_bucket_wins(self) -> None:
        assert keyword_event_type("Comedy Night at the Theatre") == "comedy"

    def test_case_insensitive(self) -> None:
        assert keyword_event_type("NBA FINALS") == "sports"


class TestClassifyEvent:
    def test_default_is_concert(self) -> None:
        assert classify_event("Lady Gaga the Mayhem Ball") == ("concert", "Music")

    def test_keyword_hit(self) -> None:
        assert classify_event("Laugh Riot Live") == ("comedy", "Comedy")

    def test_upstream_type_wins(self) -> None:
        assert classify_event("Comedy Night", upstream_type="sports") == ("sports", "Sports")

    def test_unknown_upstream_type_ignored(self) -> None:
        assert classify_event("Comedy Night", upstream_type="circus") == ("comedy", "Comedy")

    def test_marketplace_default(self) -> None:
        assert classify_event("Community Meetup", default="event") == ("event", "Other")


class TestCategoryLabel:
    def test_movie_is_film(self) -> None:
        assert category_label("movie") == "Film"

    def test_unknown_is_other(self) -> None:
        assert category_label("unknown") == "Other"
