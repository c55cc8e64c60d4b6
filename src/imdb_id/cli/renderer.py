"""Interactive result picker.

Draws a :class:`~imdb_id.search.session.SelectionSession` with Rich and turns
key presses into session commands. All selection logic lives in the session;
this module only renders, waits for keys, and looks up details on demand.

Keys:

- Up / k, Down / j          move the cursor
- PgUp / b, PgDn / f / Space  move by one screen
- Right / l / i / Tab       show details for the highlighted entry
- Left / h / Backspace      back to the list
- Enter                     select
- Esc / q / Ctrl-C          quit without selecting
"""

import logging
from typing import Callable

import click
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from imdb_id.errors import FetchError
from imdb_id.search.models import Candidate
from imdb_id.search.session import (
    Command,
    SelectionSession,
    SessionMode,
    ViewModel,
    apply,
    current_view,
    with_page_size,
)

logger = logging.getLogger(__name__)

# Rows used by the title, table header, borders and footer.
_CHROME_ROWS = 8
MIN_PAGE_SIZE = 3

KEY_BINDINGS: dict[str, Command] = {}
for _command, _keys in {
    Command.UP: ("\x1b[A", "\x1bOA", "\xe0H", "\x00H", "k"),
    Command.DOWN: ("\x1b[B", "\x1bOB", "\xe0P", "\x00P", "j"),
    Command.PAGE_UP: ("\x1b[5~", "\xe0I", "\x00I", "b"),
    Command.PAGE_DOWN: ("\x1b[6~", "\xe0Q", "\x00Q", "f", " "),
    Command.DETAIL: ("\x1b[C", "\x1bOC", "\xe0M", "\x00M", "l", "i", "\t"),
    Command.BACK: ("\x1b[D", "\x1bOD", "\xe0K", "\x00K", "h", "\x7f", "\x08"),
    Command.CONFIRM: ("\r", "\n"),
    Command.CANCEL: ("\x1b", "q", "Q", "\x03"),
}.items():
    for _key in _keys:
        KEY_BINDINGS[_key] = _command

HELP_TEXT = {
    SessionMode.BROWSING: "↑/↓ move  PgUp/PgDn page  → details  Enter select  q quit",
    SessionMode.DETAIL: "← back  Enter select  q quit",
}


def command_for_key(key: str) -> Command | None:
    """Return the command bound to *key*, or None for unbound keys."""
    return KEY_BINDINGS.get(key)


def _read_key() -> str:
    return click.getchar()


class InteractiveRenderer:
    """Runs the render / read key / apply loop until a terminal state.

    Args:
        console: Console to draw on. Defaults to a stderr console so that
            stdout stays free for the result.
        read_key: Blocking function returning one key press.
        details: Optional lookup returning a fuller record for the detail view.
        page_size: Entries per screen; derived from the terminal height when
            omitted.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        read_key: Callable[[], str] = _read_key,
        details: Callable[[Candidate], Candidate] | None = None,
        page_size: int | None = None,
        title: str = "Search results",
    ) -> None:
        self.console = console or Console(stderr=True)
        self.read_key = read_key
        self.details = details
        self.page_size = page_size
        self.title = title
        self._detail_cache: dict[str, Candidate | str] = {}

    def _page_size(self) -> int:
        if self.page_size is not None:
            return self.page_size
        return max(MIN_PAGE_SIZE, self.console.size.height - _CHROME_ROWS)

    def read_command(self) -> Command | None:
        """Wait for one key press and translate it. Ctrl-C and EOF cancel."""
        try:
            key = self.read_key()
        except (KeyboardInterrupt, EOFError):
            return Command.CANCEL
        return command_for_key(key)

    def run(self, candidates: tuple[Candidate, ...]) -> SelectionSession:
        """Let the user pick one of *candidates*; returns the final session."""
        session = SelectionSession.start(candidates, page_size=self._page_size())
        if session.mode.is_terminal:
            return session

        with Live(
            self.render(session),
            console=self.console,
            auto_refresh=False,
            transient=True,
        ) as live:
            while not session.mode.is_terminal:
                command = self.read_command()
                if command is None:
                    continue
                page_size = self._page_size()
                if page_size != session.page_size:
                    session = with_page_size(session, page_size)
                session = apply(session, command)
                if not session.mode.is_terminal:
                    live.update(self.render(session), refresh=True)
        return session

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def render(self, session: SelectionSession) -> RenderableType:
        view = current_view(session)
        if view.mode is SessionMode.DETAIL and view.detail is not None:
            body = self._render_detail(view.detail)
        else:
            body = self._render_table(view)
        footer = Text(
            f"{view.cursor + 1}/{view.total}  page {view.page}/{view.page_count}"
            f"   {HELP_TEXT.get(view.mode, '')}",
            style="dim",
        )
        return Group(body, footer)

    def _render_table(self, view: ViewModel) -> Table:
        table = Table(title=self.title, expand=True)
        table.add_column("#", justify="right", style="dim", no_wrap=True)
        table.add_column("Title", style="bold")
        table.add_column("Year", style="green", no_wrap=True)
        table.add_column("Type", style="yellow", no_wrap=True)
        table.add_column("IMDb ID", style="cyan", no_wrap=True)
        for offset, candidate in enumerate(view.window):
            index = view.offset + offset
            table.add_row(
                str(index + 1),
                candidate.title,
                candidate.year_label or (str(candidate.year) if candidate.year else ""),
                candidate.media_type.label,
                candidate.imdb_id,
                style="reverse" if offset == view.cursor_in_window else None,
            )
        return table

    def _lookup(self, candidate: Candidate) -> Candidate | str:
        if self.details is None:
            return candidate
        if candidate.imdb_id not in self._detail_cache:
            try:
                self._detail_cache[candidate.imdb_id] = self.details(candidate)
            except FetchError as exc:
                logger.debug("Detail lookup for %s failed: %s", candidate.imdb_id, exc)
                self._detail_cache[candidate.imdb_id] = str(exc)
        return self._detail_cache[candidate.imdb_id]

    def _render_detail(self, candidate: Candidate) -> Panel:
        found = self._lookup(candidate)
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold cyan", no_wrap=True)
        grid.add_column()
        record = found if isinstance(found, Candidate) else candidate
        rows = [
            ("Title", record.title),
            ("Type", record.media_type.label),
            ("Year", record.year_label or (str(record.year) if record.year else None)),
            ("IMDb ID", record.imdb_id),
            ("Genres", ", ".join(record.genres) or None),
            ("Rating", f"{record.rating:.1f}" if record.rating is not None else None),
            ("Runtime", record.runtime),
            ("Directors", ", ".join(record.directors) or None),
            ("Actors", ", ".join(record.actors) or None),
            ("Plot", record.plot),
            ("Poster", record.poster),
        ]
        for label, value in rows:
            if value:
                grid.add_row(label, value)
        if isinstance(found, str):
            grid.add_row("Error", Text(found, style="red"))
        return Panel(grid, title="Information", expand=True)
