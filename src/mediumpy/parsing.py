# SPDX-License-Identifier: GPL-3.0-or-later
#
# Copyright (C) 2025 Wingmen Solutions ApS
# This file is part of mediumpy, distributed under the terms of the GNU GPLv3.
# See the LICENSE, NOTICE, and AUTHORS files for more information.

import re
from urllib.parse import urlparse

from mediumpy.logger import logger

URL_PATTERN = re.compile(r"https?://[^\s\"'<>]+", re.IGNORECASE)
"""Matches the first http(s) URL embedded in arbitrary text."""

TRAILING_PUNCTUATION = ".,;:!?)]}"


def extract_article_id(article_url: str) -> str | None:
    """
    Extract the article ID from a Medium article URL.

    Medium article URLs end with a slug followed by the article ID,
    separated by a `-`. URLs of the form `/p/<id>` carry the ID alone.

    Parameters
    ----------
    article_url : str
        Any string containing an article URL, ie. a shared link with
        surrounding text.

    Returns
    -------
    str | None
        The alphanumeric article ID, or `None` if the string holds no URL
        or the last path segment does not end with an alphanumeric ID.

    Examples
    --------
    ```python
    >>> extract_article_id("https://medium.com/some-pub/my-title-6e2475a6e38a")
    '6e2475a6e38a'
    >>> extract_article_id("not a url") is None
    True
    ```
    """
    match = URL_PATTERN.search(article_url)
    if match is None:
        logger.debug(f"No URL found in '{article_url}'")
        return None

    # Punctuation ending a sentence is not part of the URL
    url = match.group(0).rstrip(TRAILING_PUNCTUATION)

    segments = [segment for segment in urlparse(url).path.split("/") if segment]
    if not segments:
        return None

    article_id = segments[-1].rsplit("-", 1)[-1]

    if article_id.isascii() and article_id.isalnum():
        return article_id

    logger.debug(f"No article ID found in '{article_url}'")
    return None
