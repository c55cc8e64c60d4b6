"""Search aggregation across result pages.

OMDb returns ten results per page and filters very little on its side, so a
strict filter can leave most of a page unused. The aggregator keeps requesting
pages, filtering each one client-side, until one of three things happens:

- enough matches were collected (``TARGET_REACHED``),
- the request budget is spent (``BUDGET_EXHAUSTED``),
- the provider has no further pages (``UPSTREAM_EXHAUSTED``).

None of these is an error, and zero matches is a valid outcome. A failed page
fetch aborts the whole search: partial results could make a title that exists
look like it does not.

Requests are issued strictly one after another. When genres are filtered on,
entries that pass the type and year checks are looked up one at a time, so
reaching the target also ends the lookups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from imdb_id.errors import EmptyQueryError
from imdb_id.search.filters import genre_matches, listing_matches, type_hint
from imdb_id.search.models import (
    Candidate,
    ExhaustionReason,
    FilterSet,
    SearchOutcome,
)

if TYPE_CHECKING:
    from imdb_id.metadata.base import PageFetcher

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 10
DEFAULT_TARGET_COUNT = 10


@dataclass
class RequestBudget:
    """Remaining number of page requests for one search."""

    remaining: int

    def __post_init__(self) -> None:
        if self.remaining < 0:
            raise ValueError("request budget must not be negative")

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    def consume(self) -> None:
        if self.exhausted:
            raise RuntimeError("request budget already exhausted")
        self.remaining -= 1


@dataclass(frozen=True)
class SearchConfig:
    """Tunable limits for a search, resolved by the caller."""

    target_count: int = DEFAULT_TARGET_COUNT
    """Matches to collect; 0 means collect everything within the budget."""
    max_requests: int = DEFAULT_MAX_REQUESTS

    def __post_init__(self) -> None:
        if self.target_count < 0:
            raise ValueError("target count must not be negative")
        if self.max_requests < 0:
            raise ValueError("max requests must not be negative")


async def search(
    fetcher: PageFetcher,
    query: str,
    filter_set: FilterSet,
    target_count: int = DEFAULT_TARGET_COUNT,
    budget: RequestBudget | int = DEFAULT_MAX_REQUESTS,
) -> SearchOutcome:
    """Collect candidates matching *filter_set* for *query*.

    Args:
        fetcher: Provider used to fetch result pages.
        query: Free-text title to search for.
        filter_set: Client-side acceptance criteria.
        target_count: Stop once this many matches are collected (0 = no limit).
        budget: Maximum number of page requests, or a RequestBudget to draw from.

    Returns:
        The matches in provider order, the reason the search stopped and the
        number of requests issued.

    Raises:
        EmptyQueryError: If *query* is blank.
        FetchError: If any page fetch fails.
    """
    query = query.strip()
    if not query:
        raise EmptyQueryError()
    if target_count < 0:
        raise ValueError("target count must not be negative")
    if isinstance(budget, int):
        budget = RequestBudget(budget)

    results: list[Candidate] = []
    hint = type_hint(filter_set)
    page_number = fetcher.first_page
    requests_made = 0
    lookups_made = 0

    def _done(reason: ExhaustionReason) -> SearchOutcome:
        logger.debug(
            "Search for %r stopped (%s): %d match(es), %d request(s), %d lookup(s)",
            query,
            reason.value,
            len(results),
            requests_made,
            lookups_made,
        )
        return SearchOutcome(
            results=tuple(results),
            reason=reason,
            requests_made=requests_made,
            lookups_made=lookups_made,
        )

    while True:
        if budget.exhausted:
            return _done(ExhaustionReason.BUDGET_EXHAUSTED)

        logger.debug("Requesting page %d for %r", page_number, query)
        budget.consume()
        requests_made += 1
        page = await fetcher.fetch_page(query, hint, page_number)

        kept = 0
        for candidate in page.candidates:
            if not listing_matches(candidate, filter_set):
                continue
            if filter_set.needs_genres and not candidate.genres:
                # Listings have no genres; look up only entries that are
                # still in the running.
                candidate = await fetcher.details(candidate.imdb_id)
                lookups_made += 1
                if not listing_matches(candidate, filter_set):
                    continue
            if not genre_matches(candidate, filter_set):
                continue
            results.append(candidate)
            kept += 1
            if target_count and len(results) >= target_count:
                return _done(ExhaustionReason.TARGET_REACHED)
        logger.debug(
            "Page %d: kept %d of %d candidate(s)",
            page_number,
            kept,
            len(page.candidates),
        )

        if page.is_last:
            return _done(ExhaustionReason.UPSTREAM_EXHAUSTED)
        page_number += 1


async def run_search(
    fetcher: PageFetcher,
    query: str,
    filter_set: FilterSet,
    config: SearchConfig,
) -> SearchOutcome:
    """Run :func:`search` with limits taken from *config*."""
    return await search(
        fetcher,
        query,
        filter_set,
        target_count=config.target_count,
        budget=RequestBudget(config.max_requests),
    )
