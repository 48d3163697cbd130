# SPDX-License-Identifier: GPL-3.0-or-later
#
# Copyright (C) 2025 Wingmen Solutions ApS
# This file is part of mediumpy, distributed under the terms of the GNU GPLv3.
# See the LICENSE, NOTICE, and AUTHORS files for more information.

from importlib import metadata

from mediumpy.base import ApiError, RestApiBaseClass
from mediumpy.logger import log_to_file, set_logging_level
from mediumpy.parsing import extract_article_id
from mediumpy.rapidapi import Medium

__version__ = metadata.version("mediumpy")

__all__ = [
    "ApiError",
    "Medium",
    "RestApiBaseClass",
    "extract_article_id",
    "set_logging_level",
    "log_to_file",
]
