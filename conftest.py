"""Configure pytest for imdb-id."""

import importlib
import os
import sys
from pathlib import Path

import pytest

root_dir = Path(__file__).parent

# Make the src layout importable without an install.
src_path = str(root_dir / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config file at a temporary directory and clear imdb-id env vars.

    ``imdb_id.utils.config`` computes its paths at import time, so it is
    reloaded after XDG_CONFIG_HOME is patched. The working directory is moved
    as well so that no stray ``.env`` file is picked up.
    """
    from imdb_id.utils import config as cfg

    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for name in list(os.environ):
        if name.startswith("IMDB_ID_") or name in {"OMDB_API_KEY", "NO_COLOR"}:
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    importlib.reload(cfg)
    return config_home / "imdb-id"
