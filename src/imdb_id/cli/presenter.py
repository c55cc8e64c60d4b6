"""Result presenter.

Turns the selected candidate into the text written to stdout:

- ``id``   the bare IMDb ID (default),
- ``url``  the IMDb title page,
- ``json`` the full candidate record,
- ``yaml`` the full candidate record as YAML (needs the ``yaml`` extra).

Nothing selected is never rendered as empty output; callers get
:class:`NothingSelected` instead and report it through the exit code.
"""

import importlib.util
import json
from enum import Enum

from imdb_id.errors import OutputFormatError
from imdb_id.search.models import Candidate

URL_TEMPLATE = "https://www.imdb.com/title/{id}/"


class OutputFormat(str, Enum):
    """Output representations for the selected entry."""

    ID = "id"
    URL = "url"
    JSON = "json"
    YAML = "yaml"

    @property
    def required_module(self) -> str | None:
        return "yaml" if self is OutputFormat.YAML else None

    @property
    def is_available(self) -> bool:
        module = self.required_module
        return module is None or importlib.util.find_spec(module) is not None

    @classmethod
    def parse(cls, value: object) -> "OutputFormat":
        """Parse and capability-check an output format name.

        ``human`` is accepted as an alias of ``id``. Values from the config file
        may be of any TOML type and are rejected unless they name a format.

        Raises:
            OutputFormatError: If the format is unknown or not installed.
        """
        key = str(value).strip().lower()
        if key == "human":
            key = "id"
        try:
            fmt = cls(key)
        except ValueError:
            raise OutputFormatError(
                f"{value!r} is not a recognised output format "
                f"(expected one of: {', '.join(f.value for f in cls)})"
            ) from None
        if not fmt.is_available:
            raise OutputFormatError(
                f"the {fmt.value} format isn't installed. "
                f"Install it with `pip install 'imdb-id[{fmt.value}]'`"
            )
        return fmt


class NothingSelected(Exception):
    """Raised when there is no candidate to present."""


def candidate_record(candidate: Candidate) -> dict:
    """Return the serialisable record for *candidate*, with its URL."""
    record = candidate.model_dump(mode="json")
    record["url"] = URL_TEMPLATE.format(id=candidate.imdb_id)
    return record


def present(candidate: Candidate | None, fmt: OutputFormat) -> str:
    """Render *candidate* in *fmt*.

    Raises:
        NothingSelected: If *candidate* is None.
    """
    if candidate is None:
        raise NothingSelected()
    if fmt is OutputFormat.ID:
        return candidate.imdb_id
    if fmt is OutputFormat.URL:
        return URL_TEMPLATE.format(id=candidate.imdb_id)
    if fmt is OutputFormat.JSON:
        return json.dumps(candidate_record(candidate), indent=2, ensure_ascii=False)
    import yaml

    return yaml.safe_dump(
        candidate_record(candidate), sort_keys=False, allow_unicode=True
    ).rstrip("\n")
