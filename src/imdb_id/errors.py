"""Exception hierarchy for imdb-id.

Every error the CLI knows how to report derives from :class:`ImdbIdError`, and
its ``str()`` is the human-readable cause shown to the user.

- Input errors (bad year text, unknown media type or output format, empty
  query, missing API key) are raised before any network activity.
- Fetch errors (:class:`FetchError` and subclasses) abort a search in progress.
  :class:`AuthenticationError` is kept apart from the transient failures so the
  caller can ask for a new key instead of suggesting a retry.
"""

SIGN_UP_URL = "https://www.omdbapi.com/apikey.aspx"


class ImdbIdError(Exception):
    """Base class for all errors reported by imdb-id."""


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class InputError(ImdbIdError):
    """Raised when user input is rejected before any request is made."""


class YearParseError(InputError):
    """Raised when a year filter cannot be parsed."""


class InvalidYearError(YearParseError):
    """Raised when a token in a year filter is not a valid year."""

    def __init__(self, token: str) -> None:
        """Initialize the error with the offending token."""
        super().__init__(f"bad year: {token!r} is not a valid year")
        self.token = token


class InvalidRangeError(YearParseError):
    """Raised when a closed year range has its bounds the wrong way round."""

    def __init__(self, lower: int, upper: int) -> None:
        """Initialize the error with the rejected bounds."""
        super().__init__(
            f"bad year range: start ({lower}) is after end ({upper})"
        )
        self.lower = lower
        self.upper = upper


class MediaTypeParseError(InputError):
    """Raised when a media type filter is not recognised."""

    def __init__(self, value: str) -> None:
        """Initialize the error with the unrecognised value."""
        super().__init__(
            f"unrecognised media type {value!r} "
            "(expected one of: movie, series, episode, other)"
        )
        self.value = value


class OutputFormatError(InputError):
    """Raised when an output format is unknown or not installed."""


class ConfigFileError(InputError):
    """Raised when the config file cannot be read or parsed."""

    def __init__(self, path: object, detail: str) -> None:
        """Initialize the error with the file location and the parser message."""
        super().__init__(f"cannot read config file {path}: {detail}")
        self.path = path


class EmptyQueryError(InputError):
    """Raised when the search term is empty."""

    def __init__(self) -> None:
        """Initialize the error with a fixed message."""
        super().__init__("the search term must not be empty")


class MissingAPIKeyError(InputError):
    """Raised when no OMDb API key could be found."""

    def __init__(self) -> None:
        """Initialize the error with remediation steps."""
        super().__init__(
            "no OMDb API key found.\n"
            "Pass --api-key, set OMDB_API_KEY, or run `imdb-id --set-api-key`.\n"
            f"You can get a free key at {SIGN_UP_URL}"
        )


# ---------------------------------------------------------------------------
# Fetch errors
# ---------------------------------------------------------------------------


class FetchError(ImdbIdError):
    """Raised when a page of search results could not be fetched."""


class NetworkError(FetchError):
    """Raised when the request itself failed (DNS, timeout, connection)."""

    def __init__(self, cause: Exception) -> None:
        """Initialize the error from the underlying transport exception."""
        super().__init__(f"issue with request: {cause}")
        self.cause = cause


class MalformedResponseError(FetchError):
    """Raised when OMDb answered with something that could not be understood."""

    def __init__(self, detail: str, body: str = "") -> None:
        """Initialize the error with a description and the raw body."""
        message = f"unrecognised response from OMDb: {detail}"
        if body:
            message += f"\nResponse body:\n{body[:500]}"
        super().__init__(message)
        self.body = body


class AuthenticationError(FetchError):
    """Raised when OMDb rejects the API key."""

    def __init__(self, detail: str = "Invalid API key!") -> None:
        """Initialize the error with OMDb's explanation and a remediation hint."""
        super().__init__(
            f"OMDb rejected the API key ({detail}).\n"
            "Pass a valid key with --api-key, set OMDB_API_KEY, or store one "
            "with `imdb-id --set-api-key`."
        )
        self.detail = detail


class UpstreamError(FetchError):
    """Raised when OMDb reports an error for an otherwise valid request."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        """Initialize the error with OMDb's message and HTTP status."""
        super().__init__(f"OMDb gave us an error: {detail}")
        self.detail = detail
        self.status_code = status_code


class RateLimitError(UpstreamError):
    """Raised when the daily request limit of the API key is used up."""
