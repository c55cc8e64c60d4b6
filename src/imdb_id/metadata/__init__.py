"""Metadata provider clients and settings.

Provides the paged search interface used by the search aggregator and the OMDb
implementation of it.
"""

from imdb_id.metadata.base import PageFetcher
from imdb_id.metadata.clients.omdb import OMDbClient

__all__ = ["OMDbClient", "PageFetcher"]
