"""Client implementations for metadata providers."""

from imdb_id.metadata.clients.omdb import OMDbClient

__all__ = ["OMDbClient"]
