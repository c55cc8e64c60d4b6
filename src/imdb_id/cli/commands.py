"""CLI command for imdb-id.

This module implements the ``imdb-id [SEARCH_TERM]`` command:
- Uses Typer for declarative CLI structure and option parsing.
- All messages go through a Rich Console on stderr; stdout only ever carries
  the selected result so the command can be used in scripts.
- Configuration follows CLI > environment > config file > default, see
  :mod:`imdb_id.utils.config`.

Design:
- Annotated is used for CLI argument/option definitions to provide type safety
  and rich help text.
- SearchCommandOptions groups the raw option values for the implementation.
- Exit codes are defined as an Enum and distinguish a selection, no selection
  (cancelled or no results) and errors.
"""

import asyncio
import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from imdb_id.__about__ import __version__
from imdb_id.cli.console import ConsoleManager
from imdb_id.cli.presenter import NothingSelected, OutputFormat, present
from imdb_id.cli.renderer import InteractiveRenderer
from imdb_id.cli.utils.prompt_utils import prompt_for_api_key, prompt_for_search_term
from imdb_id.errors import EmptyQueryError, ImdbIdError, InputError, MissingAPIKeyError
from imdb_id.metadata.clients.omdb import OMDbClient
from imdb_id.metadata.settings import Settings
from imdb_id.search.aggregator import (
    DEFAULT_MAX_REQUESTS,
    DEFAULT_TARGET_COUNT,
    SearchConfig,
    run_search,
)
from imdb_id.search.models import Candidate, FilterSet, SearchOutcome
from imdb_id.search.session import SelectionSession, auto_select, selected
from imdb_id.utils.config import resolve_setting, save_api_key
from imdb_id.utils.debug import setup_logger

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="imdb-id",
    help="Look up IMDb IDs using a command line search tool.",
    add_completion=False,
)


class ExitCode(int, Enum):
    """Exit codes for the CLI."""

    SUCCESS = 0
    ERROR = 1
    NO_SELECTION = 2


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"imdb-id {__version__}")
        raise typer.Exit(ExitCode.SUCCESS)


SEARCH_TERM = Annotated[
    Optional[str],
    typer.Argument(
        help="The title of the movie/show you're looking for. "
        "Prompted for when omitted in interactive mode.",
        show_default=False,
    ),
]

NON_INTERACTIVE = Annotated[
    bool,
    typer.Option(
        "--non-interactive",
        "-n",
        help="Disables interactive features (always picks the first match). "
        "Implied when stdin or stdout is not a terminal.",
    ),
]

RESULTS = Annotated[
    Optional[int],
    typer.Option(
        "--results",
        "-r",
        min=0,
        help="Number of matches to collect for the picker (0 = as many as the "
        f"request budget allows) [default: {DEFAULT_TARGET_COUNT}]",
        show_default=False,
    ),
]

MAX_REQUESTS = Annotated[
    Optional[int],
    typer.Option(
        "--max-requests",
        "-m",
        min=0,
        help="Maximum number of search requests sent to OMDb "
        f"[default: {DEFAULT_MAX_REQUESTS}]",
        show_default=False,
    ),
]

MEDIA_TYPE = Annotated[
    Optional[List[str]],
    typer.Option(
        "--type",
        "-t",
        help="Only show entries of this type (movie, series, episode, other). "
        "Repeat to allow several.",
        show_default=False,
    ),
]

GENRE = Annotated[
    Optional[List[str]],
    typer.Option(
        "--genre",
        "-g",
        help="Only show entries with this genre (case-insensitive). "
        "Repeat to allow several.",
        show_default=False,
    ),
]

YEAR = Annotated[
    Optional[str],
    typer.Option(
        "--year",
        "-y",
        help="Year or year range: 2021, 1990-2000, 2000- or -2000.",
        show_default=False,
    ),
]

OUTPUT_FORMAT = Annotated[
    Optional[str],
    typer.Option(
        "--format",
        "-f",
        help="Output format: id, url, json or yaml [default: id]",
        show_default=False,
    ),
]

API_KEY = Annotated[
    Optional[str],
    typer.Option(
        "--api-key",
        help="OMDb API key (otherwise OMDB_API_KEY or the stored key is used).",
        show_default=False,
    ),
]

SET_API_KEY = Annotated[
    bool,
    typer.Option(
        "--set-api-key",
        help="Prompt for an OMDb API key, check it and store it.",
    ),
]

NO_COLOR = Annotated[
    bool,
    typer.Option(
        "--no-color",
        help="Disable colored output",
    ),
]

VERSION = Annotated[
    Optional[bool],
    typer.Option(
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
]


@dataclass
class SearchCommandOptions:
    """Options for the search command."""

    search_term: Optional[str] = None
    non_interactive: bool = False
    results: Optional[int] = None
    max_requests: Optional[int] = None
    media_type: List[str] = field(default_factory=list)
    genre: List[str] = field(default_factory=list)
    year: Optional[str] = None
    output_format: Optional[str] = None
    api_key: Optional[str] = None
    set_api_key: bool = False
    no_color: bool = False


def _stdio_is_tty() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


@app.command()
def search(  # noqa: PLR0913
    search_term: SEARCH_TERM = None,
    non_interactive: NON_INTERACTIVE = False,
    results: RESULTS = None,
    max_requests: MAX_REQUESTS = None,
    media_type: MEDIA_TYPE = None,
    genre: GENRE = None,
    year: YEAR = None,
    output_format: OUTPUT_FORMAT = None,
    api_key: API_KEY = None,
    set_api_key: SET_API_KEY = False,
    no_color: NO_COLOR = False,
    version: VERSION = None,
) -> None:
    """Search OMDb for a movie or show and print its IMDb ID."""
    options = SearchCommandOptions(
        search_term=search_term,
        non_interactive=non_interactive,
        results=results,
        max_requests=max_requests,
        media_type=list(media_type or []),
        genre=list(genre or []),
        year=year,
        output_format=output_format,
        api_key=api_key,
        set_api_key=set_api_key,
        no_color=no_color,
    )
    raise typer.Exit(_search_impl(options))


def _check_key(api_key: str) -> bool:
    return asyncio.run(OMDbClient(api_key).check_api_key())


def _store_new_api_key(console: Console) -> str:
    api_key = prompt_for_api_key(console, _check_key)
    path = save_api_key(api_key)
    console.print(f"[green]API key saved to {escape(str(path))}[/green]")
    return api_key


def _search_config(options: SearchCommandOptions, interactive: bool) -> SearchConfig:
    target = resolve_setting(
        "search.results", default=DEFAULT_TARGET_COUNT, cli_value=options.results
    )
    budget = resolve_setting(
        "search.max_requests",
        default=DEFAULT_MAX_REQUESTS,
        cli_value=options.max_requests,
    )
    if not interactive:
        # Only the first match is used.
        target = 1
    try:
        return SearchConfig(target_count=target, max_requests=budget)
    except ValueError as exc:
        raise InputError(str(exc)) from exc


def _choose(
    console: Console,
    client: OMDbClient,
    outcome: SearchOutcome,
    term: str,
    interactive: bool,
) -> SelectionSession:
    if not interactive:
        return auto_select(outcome.results)
    if len(outcome.results) == 1:
        console.print(f"Only one result; {escape(str(outcome.results[0]))}")
        return auto_select(outcome.results)

    def _details(candidate: Candidate) -> Candidate:
        return asyncio.run(client.details(candidate.imdb_id))

    renderer = InteractiveRenderer(
        console, details=_details, title=f"Search results for {term!r}"
    )
    return renderer.run(outcome.results)


def _search_impl(options: SearchCommandOptions) -> int:
    """Implementation of the search command."""
    setup_logger()
    force_use = False if options.no_color else None
    with ConsoleManager(force_use=force_use) as console:
        try:
            interactive = not options.non_interactive and _stdio_is_tty()

            # Validate all input before any network activity.
            fmt = OutputFormat.parse(
                resolve_setting(
                    "output.format", default="id", cli_value=options.output_format
                )
            )
            filter_set = FilterSet.from_input(
                media_types=options.media_type,
                genres=options.genre,
                year=options.year,
            )
            config = _search_config(options, interactive)

            if options.set_api_key:
                api_key = _store_new_api_key(console)
                if options.search_term is None:
                    return ExitCode.SUCCESS
            else:
                try:
                    api_key = Settings().resolve_api_key(options.api_key)
                except MissingAPIKeyError:
                    if not interactive:
                        raise
                    api_key = _store_new_api_key(console)

            term = options.search_term
            if term is None:
                if not interactive:
                    raise EmptyQueryError()
                term = prompt_for_search_term(console)
            if not term.strip():
                raise EmptyQueryError()

            client = OMDbClient(api_key)
            with console.status("Searching OMDb...", spinner="dots"):
                outcome = asyncio.run(run_search(client, term, filter_set, config))
            logger.debug(
                "Search finished: %s, %d result(s), %d request(s)",
                outcome.reason.value,
                len(outcome.results),
                outcome.requests_made,
            )

            if not outcome.results:
                console.print("[yellow]No search results :([/yellow]")
                return ExitCode.NO_SELECTION

            session = _choose(console, client, outcome, term, interactive)
            try:
                text = present(selected(session), fmt)
            except NothingSelected:
                console.print("[yellow]Nothing selected.[/yellow]")
                return ExitCode.NO_SELECTION
            sys.stdout.write(text + "\n")
            sys.stdout.flush()
            return ExitCode.SUCCESS
        except ImdbIdError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            return ExitCode.ERROR
        except KeyboardInterrupt:
            console.print("[yellow]Aborted.[/yellow]")
            return ExitCode.NO_SELECTION


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
