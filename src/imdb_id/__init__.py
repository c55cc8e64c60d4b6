# SPDX-FileCopyrightText: 2025-present imdb-id contributors
#
# SPDX-License-Identifier: GPL-3.0-only

"""imdb-id - look up IMDb IDs from the command line."""

from imdb_id.__about__ import __version__

__all__ = ["__version__"]
