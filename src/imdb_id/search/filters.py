"""Client-side filter predicates applied to every fetched candidate.

The metadata API only filters coarsely (at most one media type), so
the full criteria are evaluated here. All functions are pure.
"""

from imdb_id.search.models import Candidate, FilterSet, MediaType


def media_type_matches(candidate: Candidate, filter_set: FilterSet) -> bool:
    return not filter_set.media_types or candidate.media_type in filter_set.media_types


def genre_matches(candidate: Candidate, filter_set: FilterSet) -> bool:
    if not filter_set.genres:
        return True
    return any(genre.casefold() in filter_set.genres for genre in candidate.genres)


def year_matches(candidate: Candidate, filter_set: FilterSet) -> bool:
    if filter_set.years is None:
        return True
    return filter_set.years.contains(candidate.year)


def listing_matches(candidate: Candidate, filter_set: FilterSet) -> bool:
    """Return True if *candidate* passes the checks a search listing can answer.

    Search listings carry type and year but no genres, so this is the cheap
    pre-check before a detail lookup.
    """
    return media_type_matches(candidate, filter_set) and year_matches(
        candidate, filter_set
    )


def matches(candidate: Candidate, filter_set: FilterSet) -> bool:
    """Return True if *candidate* satisfies every criterion in *filter_set*."""
    return (
        media_type_matches(candidate, filter_set)
        and genre_matches(candidate, filter_set)
        and year_matches(candidate, filter_set)
    )


def type_hint(filter_set: FilterSet) -> MediaType | None:
    """Return the media type to request server-side, if exactly one is wanted.

    OMDb accepts a single ``type`` parameter and has no notion of "other", so a
    hint is only given when it cannot hide acceptable entries.
    """
    if len(filter_set.media_types) != 1:
        return None
    (only,) = filter_set.media_types
    return None if only is MediaType.OTHER else only
