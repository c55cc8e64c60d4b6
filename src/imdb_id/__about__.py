# SPDX-FileCopyrightText: 2025-present imdb-id contributors
#
# SPDX-License-Identifier: GPL-3.0-only

__version__ = "3.1.0"
