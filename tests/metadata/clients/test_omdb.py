"""Tests for the OMDbClient search provider."""

import httpx
import pytest
import respx

from imdb_id.errors import (
    AuthenticationError,
    MalformedResponseError,
    NetworkError,
    RateLimitError,
    UpstreamError,
)
from imdb_id.metadata.clients.omdb import OMDB_URL, OMDbClient, parse_candidate
from imdb_id.search.models import MediaType


def _search_item(imdb_id: str, title: str, year: str = "2014", kind: str = "movie"):
    return {
        "Title": title,
        "Year": year,
        "imdbID": imdb_id,
        "Type": kind,
        "Poster": "N/A",
    }


def _search_body(items: list, total: int) -> dict:
    return {"Search": items, "totalResults": str(total), "Response": "True"}


KINGSMAN_DETAILS = {
    "Title": "Kingsman: The Secret Service",
    "Year": "2014",
    "Runtime": "129 min",
    "Genre": "Action, Adventure, Comedy",
    "Director": "Matthew Vaughn",
    "Actors": "Colin Firth, Taron Egerton, Samuel L. Jackson",
    "Plot": "A spy organisation recruits a promising street kid.",
    "Poster": "https://m.media-amazon.com/images/kingsman.jpg",
    "imdbRating": "7.7",
    "imdbID": "tt2802144",
    "Type": "movie",
    "Response": "True",
}


@pytest.mark.asyncio
async def test_fetch_page_expected_flow(respx_mock: respx.MockRouter) -> None:
    """A search page is parsed into candidates and reports further pages."""
    items = [
        _search_item(f"tt{i:07d}", f"Kingsman {i}", kind="series" if i % 2 else "movie")
        for i in range(10)
    ]
    route = respx_mock.get(OMDB_URL, params={"s": "Kingsman", "page": "1"}).mock(
        return_value=httpx.Response(200, json=_search_body(items, 24))
    )
    page = await OMDbClient("secret").fetch_page("Kingsman", None, 1)

    assert respx_mock.calls.call_count == 1
    assert route.called
    request = route.calls.last.request
    assert request.url.params["apikey"] == "secret"
    assert "type" not in request.url.params
    assert len(page.candidates) == 10
    assert page.has_more is True
    assert page.is_last is False
    first, second = page.candidates[:2]
    assert first.imdb_id == "tt0000000"
    assert first.media_type is MediaType.MOVIE
    assert first.year == 2014
    assert first.poster is None
    assert second.media_type is MediaType.SERIES


@pytest.mark.asyncio
async def test_fetch_page_last_page(respx_mock: respx.MockRouter) -> None:
    """The page covering totalResults is the last one."""
    items = [_search_item(f"tt{i:07d}", "Kingsman") for i in range(4)]
    respx_mock.get(OMDB_URL, params={"s": "Kingsman", "page": "3"}).mock(
        return_value=httpx.Response(200, json=_search_body(items, 24))
    )
    page = await OMDbClient("secret").fetch_page("Kingsman", None, 3)
    assert len(page.candidates) == 4
    assert page.has_more is False
    assert page.is_last is True


@pytest.mark.asyncio
async def test_fetch_page_sends_type_hint(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.get(OMDB_URL, params={"s": "Kingsman", "type": "series"}).mock(
        return_value=httpx.Response(200, json=_search_body([], 0))
    )
    await OMDbClient("secret").fetch_page("Kingsman", MediaType.SERIES, 1)
    assert route.called


@pytest.mark.asyncio
async def test_fetch_page_not_found_is_empty_page(respx_mock: respx.MockRouter) -> None:
    """OMDb's "Movie not found!" answer means there is nothing (more) to fetch."""
    respx_mock.get(OMDB_URL, params={"s": "zzzzqqq"}).mock(
        return_value=httpx.Response(
            200, json={"Response": "False", "Error": "Movie not found!"}
        )
    )
    page = await OMDbClient("secret").fetch_page("zzzzqqq", None, 1)
    assert page.candidates == ()
    assert page.is_last is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "message", "error"),
    [
        (401, "Invalid API key!", AuthenticationError),
        (200, "No API key provided.", AuthenticationError),
        (401, "Request limit reached!", RateLimitError),
        (200, "Too many results.", UpstreamError),
    ],
)
async def test_fetch_page_error_messages(
    respx_mock: respx.MockRouter, status: int, message: str, error: type
) -> None:
    respx_mock.get(OMDB_URL, params={"s": "Kingsman"}).mock(
        return_value=httpx.Response(status, json={"Response": "False", "Error": message})
    )
    with pytest.raises(error) as exc_info:
        await OMDbClient("secret").fetch_page("Kingsman", None, 1)
    assert message in str(exc_info.value)


@pytest.mark.asyncio
async def test_rate_limit_status(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(OMDB_URL).mock(return_value=httpx.Response(429, text="slow down"))
    with pytest.raises(RateLimitError) as exc_info:
        await OMDbClient("secret").fetch_page("Kingsman", None, 1)
    assert exc_info.value.status_code == 429


@pytest.mark.asyncio
async def test_server_error_status(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(OMDB_URL).mock(return_value=httpx.Response(503, text="down"))
    with pytest.raises(UpstreamError) as exc_info:
        await OMDbClient("secret").fetch_page("Kingsman", None, 1)
    assert exc_info.value.status_code == 503
    assert not isinstance(exc_info.value, RateLimitError)


@pytest.mark.asyncio
async def test_network_failure(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(OMDB_URL).mock(side_effect=httpx.ConnectError)
    with pytest.raises(NetworkError):
        await OMDbClient("secret").fetch_page("Kingsman", None, 1)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"Response": "True"}),
        httpx.Response(
            200, json={"Search": [], "totalResults": "lots", "Response": "True"}
        ),
        httpx.Response(
            200,
            json=_search_body([{"Title": "No ID", "Type": "movie"}], 1),
        ),
    ],
)
async def test_malformed_responses(
    respx_mock: respx.MockRouter, response: httpx.Response
) -> None:
    respx_mock.get(OMDB_URL).mock(return_value=response)
    with pytest.raises(MalformedResponseError):
        await OMDbClient("secret").fetch_page("Kingsman", None, 1)


@pytest.mark.asyncio
async def test_details_expected_flow(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.get(OMDB_URL, params={"i": "tt2802144"}).mock(
        return_value=httpx.Response(200, json=KINGSMAN_DETAILS)
    )
    candidate = await OMDbClient("secret").details("tt2802144")

    assert route.calls.last.request.url.params["plot"] == "short"
    assert candidate.title == "Kingsman: The Secret Service"
    assert candidate.genres == ("Action", "Adventure", "Comedy")
    assert candidate.directors == ("Matthew Vaughn",)
    assert candidate.actors[0] == "Colin Firth"
    assert candidate.rating == pytest.approx(7.7)
    assert candidate.runtime == "129 min"
    assert candidate.poster == "https://m.media-amazon.com/images/kingsman.jpg"


@pytest.mark.asyncio
async def test_details_unknown_id(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(OMDB_URL, params={"i": "tt0000000"}).mock(
        return_value=httpx.Response(
            200, json={"Response": "False", "Error": "Incorrect IMDb ID."}
        )
    )
    with pytest.raises(UpstreamError):
        await OMDbClient("secret").details("tt0000000")


@pytest.mark.asyncio
async def test_check_api_key(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(OMDB_URL, params={"apikey": "good"}).mock(
        return_value=httpx.Response(200, json={**KINGSMAN_DETAILS, "imdbID": "tt0111161"})
    )
    respx_mock.get(OMDB_URL, params={"apikey": "bad"}).mock(
        return_value=httpx.Response(
            401, json={"Response": "False", "Error": "Invalid API key!"}
        )
    )
    assert await OMDbClient("good").check_api_key() is True
    with pytest.raises(AuthenticationError):
        await OMDbClient("bad").check_api_key()


def test_parse_candidate_series_year_label() -> None:
    candidate = parse_candidate(
        {
            "Title": "Sherlock",
            "Year": "2010–2017",
            "imdbID": "tt1475582",
            "Type": "series",
            "Genre": "N/A",
        }
    )
    assert candidate.year == 2010
    assert candidate.year_label == "2010–2017"
    assert candidate.genres == ()
    assert str(candidate) == "Sherlock (TV series, 2010–2017)"


def test_parse_candidate_unknown_type_and_missing_year() -> None:
    candidate = parse_candidate(
        {"Title": "Kingsman", "Year": "N/A", "imdbID": "tt9999999", "Type": "game"}
    )
    assert candidate.media_type is MediaType.OTHER
    assert candidate.year is None
    assert str(candidate) == "Kingsman (Other)"
