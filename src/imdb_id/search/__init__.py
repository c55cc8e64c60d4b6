"""Search aggregation and interactive selection core.

- search: Fetches result pages until enough filtered matches are collected or
  the request budget runs out.
- matches: Client-side media type, genre and year predicate.
- SelectionSession / apply / current_view: Pure state machine behind the
  interactive result picker.
"""

from imdb_id.search.aggregator import RequestBudget, SearchConfig, run_search, search
from imdb_id.search.filters import matches
from imdb_id.search.models import (
    Candidate,
    ExhaustionReason,
    FilterSet,
    MediaType,
    Page,
    SearchOutcome,
)
from imdb_id.search.session import (
    Command,
    SelectionSession,
    SessionMode,
    ViewModel,
    apply,
    auto_select,
    current_view,
    selected,
)
from imdb_id.search.year_range import YearRange

__all__ = [
    "Candidate",
    "Command",
    "ExhaustionReason",
    "FilterSet",
    "MediaType",
    "Page",
    "RequestBudget",
    "SearchConfig",
    "SearchOutcome",
    "SelectionSession",
    "SessionMode",
    "ViewModel",
    "YearRange",
    "apply",
    "auto_select",
    "current_view",
    "matches",
    "run_search",
    "search",
    "selected",
]
