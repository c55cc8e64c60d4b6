# WARNING: Keep your .env file out of version control.
# Never commit your .env file or share your API keys.

"""Settings loader for the OMDb API key.

Reads ``OMDB_API_KEY`` from the environment or a local ``.env`` file, falling
back to the key stored in the imdb-id config file by ``--set-api-key``.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from imdb_id.errors import MissingAPIKeyError
from imdb_id.utils.config import load_api_key


class Settings(BaseSettings):
    """Credentials for the metadata provider."""

    OMDB_API_KEY: str | None = None

    model_config = SettingsConfigDict(extra="ignore", env_file=".env")

    def resolve_api_key(self, cli_value: str | None = None) -> str:
        """Return the API key using precedence CLI > env/.env > config file.

        Raises:
            MissingAPIKeyError: If no key is configured anywhere.
        """
        for candidate in (cli_value, self.OMDB_API_KEY, load_api_key()):
            if candidate and candidate.strip():
                return candidate.strip()
        raise MissingAPIKeyError()
