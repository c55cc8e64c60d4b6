"""Selection session state machine.

A session is an immutable snapshot of the browsing state over a frozen list of
candidates. :func:`apply` maps a session and a command to the next session; it
does no I/O, so the terminal renderer only has to draw :func:`current_view`
and feed key presses back in.

States::

    BROWSING --detail--> DETAIL --back--> BROWSING
    BROWSING/DETAIL --confirm--> CONFIRMED   (terminal)
    BROWSING/DETAIL --cancel-->  CANCELLED   (terminal)

Commands sent to a terminal session are ignored.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

from imdb_id.search.models import Candidate

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class SessionMode(str, Enum):
    """Modes of a selection session."""

    BROWSING = "browsing"
    DETAIL = "detail"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionMode.CONFIRMED, SessionMode.CANCELLED)


class Command(str, Enum):
    """User commands understood by a selection session."""

    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    DETAIL = "detail"
    BACK = "back"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class SelectionSession:
    """Browsing state over a frozen candidate list."""

    candidates: tuple[Candidate, ...]
    cursor: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    mode: SessionMode = SessionMode.BROWSING

    @classmethod
    def start(
        cls, candidates: Sequence[Candidate], page_size: int = DEFAULT_PAGE_SIZE
    ) -> "SelectionSession":
        """Open a session; an empty candidate list is cancelled straight away."""
        if page_size < 1:
            raise ValueError("page size must be at least 1")
        mode = SessionMode.BROWSING if candidates else SessionMode.CANCELLED
        return cls(candidates=tuple(candidates), page_size=page_size, mode=mode)

    @property
    def index(self) -> int | None:
        """Index of the entry being viewed or confirmed, if any."""
        if self.mode in (SessionMode.DETAIL, SessionMode.CONFIRMED):
            return self.cursor
        return None


@dataclass(frozen=True)
class ViewModel:
    """What the renderer needs to draw one frame."""

    mode: SessionMode
    window: tuple[Candidate, ...]
    offset: int
    """Index of ``window[0]`` in the full candidate list."""
    cursor: int
    total: int
    page: int
    page_count: int
    detail: Candidate | None = None

    @property
    def cursor_in_window(self) -> int:
        return self.cursor - self.offset


def move_cursor(session: SelectionSession, delta: int) -> SelectionSession:
    """Move the cursor by *delta*, clamped to the candidate list."""
    if session.mode is not SessionMode.BROWSING:
        return session
    last = len(session.candidates) - 1
    cursor = max(0, min(session.cursor + delta, last))
    return replace(session, cursor=cursor)


def apply(session: SelectionSession, command: Command) -> SelectionSession:
    """Return the session that results from applying *command*."""
    if session.mode.is_terminal:
        return session

    if session.mode is SessionMode.DETAIL:
        if command is Command.BACK:
            new = replace(session, mode=SessionMode.BROWSING)
        elif command is Command.CONFIRM:
            new = replace(session, mode=SessionMode.CONFIRMED)
        elif command is Command.CANCEL:
            new = replace(session, mode=SessionMode.CANCELLED)
        else:
            new = session
    elif command is Command.UP:
        new = move_cursor(session, -1)
    elif command is Command.DOWN:
        new = move_cursor(session, 1)
    elif command is Command.PAGE_UP:
        new = move_cursor(session, -session.page_size)
    elif command is Command.PAGE_DOWN:
        new = move_cursor(session, session.page_size)
    elif command is Command.DETAIL:
        new = replace(session, mode=SessionMode.DETAIL)
    elif command is Command.CONFIRM:
        new = replace(session, mode=SessionMode.CONFIRMED)
    elif command is Command.CANCEL:
        new = replace(session, mode=SessionMode.CANCELLED)
    else:
        new = session

    if new is not session:
        logger.debug(
            "Session %s: %s@%d -> %s@%d",
            command.value,
            session.mode.value,
            session.cursor,
            new.mode.value,
            new.cursor,
        )
    return new


def current_view(session: SelectionSession) -> ViewModel:
    """Return the visible page of candidates around the cursor."""
    total = len(session.candidates)
    page_count = max(1, -(-total // session.page_size))
    page = session.cursor // session.page_size
    offset = page * session.page_size
    window = session.candidates[offset : offset + session.page_size]
    detail = None
    if session.mode is SessionMode.DETAIL:
        detail = session.candidates[session.index]
    return ViewModel(
        mode=session.mode,
        window=window,
        offset=offset,
        cursor=session.cursor,
        total=total,
        page=page + 1,
        page_count=page_count,
        detail=detail,
    )


def selected(session: SelectionSession) -> Candidate | None:
    """Return the confirmed candidate, or None if nothing was confirmed."""
    if session.mode is SessionMode.CONFIRMED:
        return session.candidates[session.index]
    return None


def auto_select(candidates: Sequence[Candidate]) -> SelectionSession:
    """Non-interactive selection: confirm the first candidate, if there is one."""
    session = SelectionSession.start(candidates)
    if session.mode is SessionMode.CANCELLED:
        return session
    return replace(session, cursor=0, mode=SessionMode.CONFIRMED)


def with_page_size(session: SelectionSession, page_size: int) -> SelectionSession:
    """Return *session* with a new page size (e.g. after a terminal resize)."""
    if page_size < 1:
        raise ValueError("page size must be at least 1")
    return replace(session, page_size=page_size)
