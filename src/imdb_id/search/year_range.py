"""Year filter value type.

Parses the compact year grammar accepted on the command line:

- ``YYYY``       a single year
- ``YYYY-YYYY``  a closed, inclusive range
- ``YYYY-``      the given year or later
- ``-YYYY``      the given year or earlier

Entries without a year always pass a year filter.
"""

import re
from dataclasses import dataclass

from imdb_id.errors import InvalidRangeError, InvalidYearError

_YEAR_TOKEN = re.compile(r"[0-9]{1,4}")


def _parse_bound(token: str) -> int:
    token = token.strip()
    if not _YEAR_TOKEN.fullmatch(token):
        raise InvalidYearError(token)
    return int(token)


@dataclass(frozen=True)
class YearRange:
    """Inclusive year bounds; a missing bound is open-ended."""

    lower: int | None = None
    upper: int | None = None

    def __post_init__(self) -> None:
        if self.lower is not None and self.upper is not None:
            if self.lower > self.upper:
                raise InvalidRangeError(self.lower, self.upper)

    @classmethod
    def single(cls, year: int) -> "YearRange":
        """Return a range matching exactly one year."""
        return cls(lower=year, upper=year)

    @classmethod
    def parse(cls, text: str) -> "YearRange":
        """Parse *text* into a YearRange.

        Raises:
            InvalidYearError: If a bound is missing where required or is not
                a number.
            InvalidRangeError: If both bounds are given and lower > upper.
        """
        text = text.strip()
        if "-" not in text:
            year = _parse_bound(text)
            return cls.single(year)

        start, _, end = text.partition("-")
        start, end = start.strip(), end.strip()
        if not start and not end:
            raise InvalidYearError(text)
        lower = _parse_bound(start) if start else None
        upper = _parse_bound(end) if end else None
        return cls(lower=lower, upper=upper)

    @property
    def is_single(self) -> bool:
        return self.lower is not None and self.lower == self.upper

    def contains(self, year: int | None) -> bool:
        """Return True if *year* lies within the range (always True for None)."""
        if year is None:
            return True
        if self.lower is not None and year < self.lower:
            return False
        if self.upper is not None and year > self.upper:
            return False
        return True

    def __str__(self) -> str:
        if self.is_single:
            return str(self.lower)
        lower = "" if self.lower is None else str(self.lower)
        upper = "" if self.upper is None else str(self.upper)
        return f"{lower}-{upper}"
