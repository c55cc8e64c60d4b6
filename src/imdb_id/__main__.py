"""Allow ``python -m imdb_id``."""

from imdb_id.cli.commands import main

if __name__ == "__main__":
    main()
