"""Console utilities & context manager for CLI commands.

This module centralises Rich configuration for the CLI:

* A ``ConsoleManager`` context manager yielding a pre-configured
  :class:`rich.console.Console` bound to **stderr**, so stdout only ever carries
  the selected result.
* Opt-out of colour via ``--no-color`` or the ``NO_COLOR`` /
  ``IMDB_ID_NO_RICH`` environment variables.
* Pretty tracebacks (with locals) when ``IMDB_ID_DEBUG`` is set.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Dict

from rich.console import Console
from rich.traceback import install as install_rich_traceback

from imdb_id.utils.debug import debug_enabled

__all__ = ["ConsoleManager", "rich_enabled"]

_ENV_DISABLE_RICH = "IMDB_ID_NO_RICH"


def rich_enabled() -> bool:
    """Return False when colour output was disabled through the environment."""
    if os.getenv("NO_COLOR"):
        return False
    return os.getenv(_ENV_DISABLE_RICH, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Context manager that yields a configured Rich :class:`Console`.

    Parameters
    ----------
    record:
        Forwarded to :class:`rich.console.Console`. When *True*, Rich records
        all output so it can be retrieved later via ``console.export_text``.
    force_use:
        When *True* / *False* this overrides autodetection and forces colour
        enabled/disabled. When *None*, autodetect via the environment.
    console_kwargs:
        Additional keyword arguments forwarded verbatim to the Console.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self._record = record
        self._force_use = force_use
        self._console_kwargs: Dict[str, Any] = {"stderr": True, **console_kwargs}
        self.console: Console | None = None

    def __enter__(self) -> Console:
        use_rich = self._force_use if self._force_use is not None else rich_enabled()

        if use_rich:
            self.console = Console(record=self._record, **self._console_kwargs)
        else:
            # Disable colour, otherwise output may contain escape codes.
            self.console = Console(
                record=self._record,
                color_system=None,
                **self._console_kwargs,
            )

        if debug_enabled():
            install_rich_traceback(show_locals=True, console=self.console)

        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            self.console.file.flush()  # type: ignore[attr-defined]
        # Propagate exceptions – we do *not* swallow them.
        return False
