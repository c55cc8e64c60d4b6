"""Config utility for persistent imdb-id settings.

Settings live in ``$XDG_CONFIG_HOME/imdb-id/config.toml`` (``~/.config`` when
the variable is unset). Uses tomli/tomli-w for TOML parsing and writing.

Besides the generic :func:`resolve_setting`, this module stores the OMDb API
key so users only have to enter it once.
"""

from pathlib import Path
from typing import TypeVar, Any, cast
import os
import contextlib

import tomli
import tomli_w

from imdb_id.errors import ConfigFileError

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "imdb-id"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "IMDB_ID_"


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict.

    Raises:
        ConfigFileError: If the file is not valid TOML or cannot be read.
    """

    if not CONFIG_FILE.exists():
        return {}
    try:
        with CONFIG_FILE.open("rb") as f:
            return tomli.load(f)
    except tomli.TOMLDecodeError as exc:
        raise ConfigFileError(CONFIG_FILE, str(exc)) from exc
    except OSError as exc:
        raise ConfigFileError(CONFIG_FILE, exc.strerror or str(exc)) from exc


def _write_config_file(data: dict[str, Any]) -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def load_api_key() -> str | None:
    """Return the OMDb API key stored in config.toml, if any."""
    key = _lookup_nested(_read_config_file(), "omdb.api_key")
    return key if isinstance(key, str) and key else None


def save_api_key(api_key: str) -> Path:
    """Store the OMDb API key in config.toml, keeping other settings.

    Returns:
        Path of the written config file.
    """
    data = _read_config_file()
    data.setdefault("omdb", {})["api_key"] = api_key
    _write_config_file(data)
    # The file holds a credential.
    with contextlib.suppress(OSError):
        CONFIG_FILE.chmod(0o600)
    return CONFIG_FILE


# ---------------------------------------------------------------------------
# Generic configuration resolution
# ---------------------------------------------------------------------------

T = TypeVar("T")


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="search.max_requests" will attempt
    ``data["search"]["max_requests"]`` returning None if any level is missing.
    """

    keys = dotted_key.split(".")
    current: Any = data
    for part in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "search.max_requests" -> "IMDB_ID_SEARCH_MAX_REQUESTS".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Coerce an env/config *value* to the type of *default*, else *default*."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in {"1", "true", "yes", "on"})
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(value))
        return default
    if isinstance(default, float):
        if isinstance(value, (int, float)):
            return cast(T, float(value))
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, float(value))
        return default
    if default is None and isinstance(value, str) and value.isdigit():
        return cast(T, int(value))
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"search.max_requests"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    # 4. Default
    return default
