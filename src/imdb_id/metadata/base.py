"""Base abstraction for paged metadata search providers.

The search aggregator only talks to this interface, so tests can drive it with
an in-memory fake and the OMDb client stays a replaceable transport detail.
"""

from abc import ABC, abstractmethod

from imdb_id.search.models import Candidate, MediaType, Page


class PageFetcher(ABC):
    """Abstract base class for providers that return search results in pages."""

    first_page: int = 1

    @abstractmethod
    async def fetch_page(
        self,
        query: str,
        type_hint: MediaType | None,
        page: int,
    ) -> Page:
        """Fetch one page of search results.

        Args:
            query: Free-text title to search for.
            type_hint: Optional media type for coarse server-side filtering.
            page: Page cursor, starting at ``first_page``.

        Returns:
            The page, including whether further pages exist.

        Raises:
            FetchError: On network, authentication or upstream failures.
        """
        raise NotImplementedError

    @abstractmethod
    async def details(self, imdb_id: str) -> Candidate:
        """Fetch the full record for one identifier.

        Search listings may lack descriptor fields such as genres; the
        aggregator calls this for entries that still need them.

        Raises:
            FetchError: On network, authentication or upstream failures.
        """
        raise NotImplementedError
