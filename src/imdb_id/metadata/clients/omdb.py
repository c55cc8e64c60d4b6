"""OMDb client providing paged title search for imdb-id.

OMDb's search endpoint (``s=``) returns ten results per page together with the
total number of results. It only reports title, year, type, IMDb ID and poster
for each entry; genres and the other descriptor fields come from the title
endpoint (``i=``), which :meth:`OMDbClient.details` wraps.

OMDb signals most failures inside a JSON body with ``"Response": "False"``
rather than through the HTTP status, so both are inspected. "Not found" answers
are an empty final page, not an error.
"""

import logging
import re
from http import HTTPStatus
from typing import Any

import httpx

from imdb_id.errors import (
    AuthenticationError,
    MalformedResponseError,
    NetworkError,
    RateLimitError,
    UpstreamError,
)
from imdb_id.metadata.base import PageFetcher
from imdb_id.search.models import Candidate, MediaType, Page

logger = logging.getLogger(__name__)

OMDB_URL = "https://www.omdbapi.com/"
PAGE_SIZE = 10  # Fixed by OMDb
DEFAULT_TIMEOUT = 10.0
# The Shawshank Redemption; used to check that an API key is accepted.
KEY_CHECK_ID = "tt0111161"

_YEAR_RE = re.compile(r"([0-9]{4})")
_AUTH_ERRORS = ("invalid api key", "no api key provided")
_RATE_LIMIT_ERRORS = ("request limit reached",)


def _clean(value: Any) -> str | None:
    """Return *value* as a string, mapping OMDb's "N/A" and blanks to None."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == "N/A":
        return None
    return text


def _parse_year(value: Any) -> int | None:
    """Return the first year in labels like "2010", "2010–2015" or "2010–"."""
    text = _clean(value)
    if text is None:
        return None
    match = _YEAR_RE.match(text)
    return int(match.group(1)) if match else None


def _split_list(value: Any) -> tuple[str, ...]:
    """Split OMDb's comma separated lists ("Action, Comedy")."""
    text = _clean(value)
    if text is None:
        return ()
    return tuple(part.strip() for part in text.split(",") if part.strip())


def _parse_rating(value: Any) -> float | None:
    text = _clean(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_candidate(item: dict[str, Any]) -> Candidate:
    """Convert one OMDb record (search item or full title record) to a Candidate.

    Raises:
        MalformedResponseError: If the record lacks an ID or a title.
    """
    if not isinstance(item, dict):
        raise MalformedResponseError(f"expected an object, got {item!r}")
    imdb_id = _clean(item.get("imdbID"))
    title = _clean(item.get("Title"))
    if imdb_id is None or title is None:
        raise MalformedResponseError(f"entry without ID or title: {item!r}")
    return Candidate(
        imdb_id=imdb_id,
        title=title,
        media_type=MediaType.from_provider(item.get("Type")),
        year=_parse_year(item.get("Year")),
        year_label=_clean(item.get("Year")),
        genres=_split_list(item.get("Genre")),
        poster=_clean(item.get("Poster")),
        plot=_clean(item.get("Plot")),
        rating=_parse_rating(item.get("imdbRating")),
        runtime=_clean(item.get("Runtime")),
        directors=_split_list(item.get("Director")),
        actors=_split_list(item.get("Actors")),
    )


def _raise_for_error_message(message: str, status_code: int | None) -> None:
    lowered = message.lower()
    if any(needle in lowered for needle in _AUTH_ERRORS):
        raise AuthenticationError(message)
    if any(needle in lowered for needle in _RATE_LIMIT_ERRORS):
        raise RateLimitError(message, status_code)
    raise UpstreamError(message, status_code)


def _is_not_found(message: str) -> bool:
    return message.lower().rstrip("!. ").endswith("not found")


class OMDbClient(PageFetcher):
    """Paged OMDb search client.

    Each request opens its own ``httpx.AsyncClient``; requests are never
    issued concurrently.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = OMDB_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: OMDb API key.
            base_url: API endpoint, overridable for testing.
            timeout: Per-request timeout in seconds.
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    async def _get(self, params: dict[str, str]) -> dict[str, Any]:
        """Issue one GET request and return the decoded JSON body.

        Raises:
            NetworkError: If the request could not be completed.
            AuthenticationError: If the key was rejected.
            RateLimitError: If the key's daily limit is used up.
            UpstreamError: For any other error status.
            MalformedResponseError: If the body is not a JSON object.
        """
        query = {"apikey": self.api_key, **params}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                resp = await client.get(self.base_url, params=query)
            except httpx.HTTPError as exc:
                raise NetworkError(exc) from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.status_code != HTTPStatus.OK:
            message = data.get("Error") if isinstance(data, dict) else None
            if resp.status_code == HTTPStatus.UNAUTHORIZED:
                _raise_for_error_message(message or "Invalid API key!", resp.status_code)
            if resp.status_code == HTTPStatus.TOO_MANY_REQUESTS:
                raise RateLimitError(message or "rate limit exceeded", resp.status_code)
            raise UpstreamError(
                message or f"unexpected status {resp.status_code}", resp.status_code
            )

        if not isinstance(data, dict):
            raise MalformedResponseError("body is not a JSON object", resp.text)
        return data

    async def fetch_page(
        self,
        query: str,
        type_hint: MediaType | None,
        page: int,
    ) -> Page:
        """Fetch one page of OMDb search results.

        Args:
            query: Title to search for.
            type_hint: Optional ``type`` parameter (movie, series, episode).
            page: 1-based page number.

        Returns:
            A Page of up to ten candidates.
        """
        params = {"s": query, "page": str(page)}
        if type_hint is not None and type_hint is not MediaType.OTHER:
            params["type"] = type_hint.value
        logger.debug("OMDb search %r page %d (type=%s)", query, page, type_hint)
        data = await self._get(params)

        if data.get("Response") == "False":
            message = str(data.get("Error") or "Unknown error")
            if _is_not_found(message):
                logger.debug("OMDb: no (more) results for %r: %s", query, message)
                return Page(candidates=(), has_more=False, page_size=PAGE_SIZE)
            _raise_for_error_message(message, None)

        items = data.get("Search")
        if not isinstance(items, list):
            raise MalformedResponseError("missing 'Search' list", str(data))
        try:
            total = int(data.get("totalResults", len(items)))
        except (TypeError, ValueError):
            raise MalformedResponseError(
                f"bad totalResults {data.get('totalResults')!r}", str(data)
            ) from None

        return Page(
            candidates=tuple(parse_candidate(item) for item in items),
            has_more=page * PAGE_SIZE < total,
            page_size=PAGE_SIZE,
        )

    async def details(self, imdb_id: str) -> Candidate:
        """Fetch the full OMDb record for *imdb_id*.

        Raises:
            UpstreamError: If OMDb does not know the ID.
        """
        data = await self._get({"i": imdb_id, "plot": "short"})
        if data.get("Response") == "False":
            _raise_for_error_message(str(data.get("Error") or "Unknown error"), None)
        return parse_candidate(data)

    async def check_api_key(self) -> bool:
        """Return True if OMDb accepts the key.

        Raises:
            AuthenticationError: If the key is rejected.
            FetchError: For any other failure.
        """
        await self.details(KEY_CHECK_ID)
        return True
