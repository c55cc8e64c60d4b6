"""Utility modules for imdb-id."""

from imdb_id.utils.config import load_api_key, resolve_setting, save_api_key

__all__ = ["load_api_key", "resolve_setting", "save_api_key"]
