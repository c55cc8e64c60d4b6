"""Interactive prompts used by the CLI before a search starts."""

from typing import Callable

import click
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from imdb_id.errors import (
    SIGN_UP_URL,
    AuthenticationError,
    EmptyQueryError,
    FetchError,
    MissingAPIKeyError,
)


def prompt_for_search_term(console: Console) -> str:
    """Ask for the title to search for.

    Raises:
        EmptyQueryError: If the answer is blank.
    """
    term = Prompt.ask(
        "Please enter the name of the movie/show you're looking for",
        console=console,
    )
    if not term or not term.strip():
        raise EmptyQueryError()
    return term.strip()


def prompt_for_api_key(
    console: Console,
    validate: Callable[[str], bool],
    *,
    max_attempts: int = 3,
) -> str:
    """Ask for an OMDb API key until *validate* accepts one.

    Users without a key are sent to the OMDb sign-up page first.

    Raises:
        FetchError: The last failure (rejected key, network or OMDb error) if no
            key was accepted within *max_attempts*.
        MissingAPIKeyError: If only blank answers were given.
    """
    has_key = Confirm.ask("Do you have an OMDb API key?", default=False, console=console)
    if not has_key:
        console.print(f"Get a free key at [link={SIGN_UP_URL}]{SIGN_UP_URL}[/link]")
        click.launch(SIGN_UP_URL)

    last_error: FetchError | None = None
    for _ in range(max_attempts):
        api_key = Prompt.ask("Please enter your API key", console=console).strip()
        if not api_key:
            continue
        try:
            if validate(api_key):
                return api_key
        except AuthenticationError as exc:
            last_error = exc
            console.print("[red]That key was rejected by OMDb, please try again.[/red]")
        except FetchError as exc:
            last_error = exc
            console.print(f"[red]Could not check the key: {escape(str(exc))}[/red]")
    if last_error is not None:
        raise last_error
    raise MissingAPIKeyError()
