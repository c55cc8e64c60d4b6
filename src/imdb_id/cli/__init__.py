"""Command-line interface for imdb-id.

- app: The Typer application object behind the ``imdb-id`` entry point.
- presenter: Formats the selected entry for stdout.
- renderer: The interactive Rich result picker.

All user-facing messages use a Rich Console on stderr; stdout is reserved for
the result so the tool composes with shell pipelines.
"""

from imdb_id.cli.commands import ExitCode, app, main

__all__ = ["ExitCode", "app", "main"]
