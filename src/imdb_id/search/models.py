"""Data models for search results and search criteria.

- MediaType is the closed set of entry kinds the tool distinguishes.
- Candidate is a single search result as returned by a metadata provider.
  Candidates are frozen: once fetched they are only ever referenced.
- FilterSet carries the user's media type, genre and year criteria for one
  search.
- Page and SearchOutcome describe one upstream response and the final result of
  an aggregated search.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from imdb_id.errors import MediaTypeParseError
from imdb_id.search.year_range import YearRange

_MEDIA_TYPE_ALIASES = {
    "film": "movie",
    "tv": "series",
    "show": "series",
    "tv series": "series",
    "tv show": "series",
    "tv episode": "episode",
}


class MediaType(str, Enum):
    """Kinds of entries returned by the metadata search API."""

    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "MediaType":
        """Parse user input (case-insensitive, with a few aliases).

        Raises:
            MediaTypeParseError: If *value* names no known media type.
        """
        key = " ".join(value.strip().lower().split())
        key = _MEDIA_TYPE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise MediaTypeParseError(value) from None

    @classmethod
    def from_provider(cls, value: str | None) -> "MediaType":
        """Map a provider's type label, treating anything unknown as OTHER."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.OTHER

    @property
    def label(self) -> str:
        return {
            MediaType.MOVIE: "Movie",
            MediaType.SERIES: "TV series",
            MediaType.EPISODE: "TV episode",
            MediaType.OTHER: "Other",
        }[self]


class Candidate(BaseModel):
    """One search result.

    Only ``imdb_id``, ``title`` and ``media_type`` are guaranteed; the rest is
    filled in when the provider reports it and is used for filtering and display.
    """

    model_config = ConfigDict(frozen=True)

    imdb_id: str
    """Catalog identifier, e.g. ``tt2802144``."""
    title: str
    media_type: MediaType
    year: int | None = None
    """First year of release; None when the provider gives no usable year."""
    year_label: str | None = None
    """Year as reported by the provider, e.g. ``2010–2015`` for a series."""
    genres: tuple[str, ...] = ()
    poster: str | None = None
    plot: str | None = None
    rating: float | None = None
    runtime: str | None = None
    directors: tuple[str, ...] = ()
    actors: tuple[str, ...] = ()

    def __str__(self) -> str:
        year = f", {self.year_label or self.year}" if self.year is not None else ""
        return f"{self.title} ({self.media_type.label}{year})"


class FilterSet(BaseModel):
    """Acceptance criteria for one search. Empty sets accept everything."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    media_types: frozenset[MediaType] = Field(default_factory=frozenset)
    genres: frozenset[str] = Field(default_factory=frozenset)
    years: YearRange | None = None

    @classmethod
    def from_input(
        cls,
        media_types: list[str] | None = None,
        genres: list[str] | None = None,
        year: str | None = None,
    ) -> "FilterSet":
        """Build a FilterSet from raw command line values.

        Raises:
            MediaTypeParseError: For an unknown media type.
            YearParseError: For malformed year text.
        """
        return cls(
            media_types=frozenset(MediaType.parse(t) for t in media_types or []),
            genres=frozenset(g.strip().casefold() for g in genres or [] if g.strip()),
            years=YearRange.parse(year) if year else None,
        )

    @property
    def needs_genres(self) -> bool:
        return bool(self.genres)


class Page(BaseModel):
    """One batch of raw candidates from a single upstream request."""

    model_config = ConfigDict(frozen=True)

    candidates: tuple[Candidate, ...] = ()
    has_more: bool = False
    page_size: int = 10

    @property
    def is_last(self) -> bool:
        return not self.has_more or len(self.candidates) < self.page_size


class ExhaustionReason(str, Enum):
    """Why the search aggregator stopped fetching."""

    TARGET_REACHED = "target_reached"
    BUDGET_EXHAUSTED = "budget_exhausted"
    UPSTREAM_EXHAUSTED = "upstream_exhausted"


class SearchOutcome(BaseModel):
    """Frozen result of one aggregated search."""

    model_config = ConfigDict(frozen=True)

    results: tuple[Candidate, ...]
    reason: ExhaustionReason
    requests_made: int
    lookups_made: int = 0
    """Detail lookups issued to fill in genres; not drawn from the budget."""
