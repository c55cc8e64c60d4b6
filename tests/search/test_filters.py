"""Tests for the client-side filter predicates."""

import pytest

from imdb_id.errors import MediaTypeParseError, YearParseError
from imdb_id.search.filters import matches, type_hint
from imdb_id.search.models import Candidate, FilterSet, MediaType
from imdb_id.search.year_range import YearRange


def _candidate(
    imdb_id: str,
    title: str,
    media_type: MediaType,
    year: int | None,
    genres: tuple[str, ...] = (),
) -> Candidate:
    return Candidate(
        imdb_id=imdb_id, title=title, media_type=media_type, year=year, genres=genres
    )


CANDIDATES = [
    _candidate("tt2802144", "Kingsman: The Secret Service", MediaType.MOVIE, 2014, ("Action", "Comedy")),
    _candidate("tt6856242", "The King's Man", MediaType.MOVIE, 2021, ("Action", "War")),
    _candidate("tt4649466", "Kingsman: The Golden Circle", MediaType.MOVIE, 2017, ("Action",)),
    _candidate("tt6597836", "Kingsman: Bespoke Lessons for Gentlemen Spies", MediaType.SERIES, 2015, ("Documentary",)),
    _candidate("tt1582211", "King's Man", MediaType.MOVIE, 2010, ("Drama",)),
    _candidate("tt0405676", "All the King's Men", MediaType.MOVIE, 2006, ("Drama", "Thriller")),
    _candidate("tt13332408", "The Kingsman", MediaType.EPISODE, 2020, ()),
    _candidate("tt0041113", "All the King's Men", MediaType.MOVIE, 1949, ("Drama", "Film-Noir")),
    _candidate("tt7959890", "Kingsman: Inside the Golden Circle", MediaType.OTHER, None, ()),
]


def _outcomes(filter_set: FilterSet) -> list[bool]:
    return [matches(c, filter_set) for c in CANDIDATES]


def test_empty_filter_accepts_everything() -> None:
    assert all(_outcomes(FilterSet()))
    assert all(_outcomes(FilterSet.from_input()))


def test_single_media_type() -> None:
    filter_set = FilterSet.from_input(media_types=["movie"])
    assert _outcomes(filter_set) == [True, True, True, False, True, True, False, True, False]


def test_multiple_media_types_are_or_ed() -> None:
    filter_set = FilterSet.from_input(media_types=["series", "episode"])
    assert _outcomes(filter_set) == [False, False, False, True, False, False, True, False, False]


def test_genres_are_case_insensitive_and_or_ed() -> None:
    filter_set = FilterSet.from_input(genres=["drama", "WAR"])
    assert _outcomes(filter_set) == [False, True, False, False, True, True, False, True, False]


def test_candidate_without_genres_fails_a_genre_filter() -> None:
    filter_set = FilterSet.from_input(genres=["Action"])
    assert not matches(CANDIDATES[6], filter_set)


def test_year_range_filter_keeps_undated_entries() -> None:
    filter_set = FilterSet.from_input(year="2020-")
    assert _outcomes(filter_set) == [False, True, False, False, False, False, True, False, True]


def test_checks_are_and_ed() -> None:
    filter_set = FilterSet.from_input(media_types=["movie"], genres=["drama"], year="1950-2010")
    assert _outcomes(filter_set) == [False, False, False, False, True, True, False, False, False]


@pytest.mark.parametrize(
    ("filter_set", "candidate", "expected"),
    [
        (FilterSet(media_types=frozenset({MediaType.SERIES})), CANDIDATES[0], False),
        (FilterSet(genres=frozenset({"comedy"})), CANDIDATES[0], True),
        (FilterSet(years=YearRange.single(2014)), CANDIDATES[0], True),
        (FilterSet(years=YearRange.single(2015)), CANDIDATES[0], False),
    ],
)
def test_each_dimension_independently(
    filter_set: FilterSet, candidate: Candidate, expected: bool
) -> None:
    assert matches(candidate, filter_set) is expected


def test_media_type_aliases() -> None:
    assert MediaType.parse("TV Series") is MediaType.SERIES
    assert MediaType.parse("tv") is MediaType.SERIES
    assert MediaType.parse(" Movie ") is MediaType.MOVIE
    assert MediaType.parse("tv  episode") is MediaType.EPISODE


def test_unknown_media_type_is_rejected() -> None:
    with pytest.raises(MediaTypeParseError) as excinfo:
        FilterSet.from_input(media_types=["podcast"])
    assert excinfo.value.value == "podcast"


def test_bad_year_is_rejected_at_construction() -> None:
    with pytest.raises(YearParseError):
        FilterSet.from_input(year="soon")


def test_type_hint_only_for_a_single_concrete_type() -> None:
    assert type_hint(FilterSet()) is None
    assert type_hint(FilterSet.from_input(media_types=["movie"])) is MediaType.MOVIE
    assert type_hint(FilterSet.from_input(media_types=["movie", "series"])) is None
    assert type_hint(FilterSet.from_input(media_types=["other"])) is None


def test_provider_types_map_unknown_to_other() -> None:
    assert MediaType.from_provider("series") is MediaType.SERIES
    assert MediaType.from_provider("game") is MediaType.OTHER
    assert MediaType.from_provider(None) is MediaType.OTHER
