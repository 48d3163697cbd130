# SPDX-License-Identifier: GPL-3.0-or-later
#
# Copyright (C) 2025 Wingmen Solutions ApS
# This file is part of mediumpy, distributed under the terms of the GNU GPLv3.
# See the LICENSE, NOTICE, and AUTHORS files for more information.

import sys as _sys
from typing import Literal

from loguru._logger import Core as _Core
from loguru._logger import Logger as _Logger

SEVERITIES = (
    "TRACE",
    "DEBUG",
    "INFO",
    "SUCCESS",
    "WARNING",
    "ERROR",
    "CRITICAL",
)

logger = _Logger(
    core=_Core(),
    exception=None,
    depth=0,
    record=False,
    lazy=False,
    colors=False,
    raw=False,
    capture=True,
    patchers=[],
    extra={},
)
logger.add(_sys.stderr, level="WARNING")


def set_logging_level(level: str, sink=_sys.stderr):
    """
    Replace all mediumpy log sinks with a single sink at the given level.

    Parameters
    ----------
    level : str
        Minimum severity to emit, ie. `"DEBUG"` or `"TRACE"`.

        `TRACE` includes request and response headers and bodies.
        The RapidAPI key is always redacted.

    sink : default=sys.stderr
        Any sink accepted by `loguru`, ie. a stream, a path or a callable.
    """
    logger.remove()
    logger.add(sink, level=level)


def log_to_file(level: str, filename: str):
    sink = open(file=filename, mode="a")
    set_logging_level(level, sink=sink)


def log_exception(
    exception: Exception,
    severity: Literal[
        "TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"
    ] = "ERROR",
) -> None:
    """
    Log the exception message using the mediumpy logger.

    Parameters
    ----------
    severity : str, optional
        The severity level to log the message at. Default is 'ERROR'.
    """
    if severity.upper() not in SEVERITIES:
        logger.error(
            f"Invalid severity level '{severity}' provided. Defaulting to 'ERROR'"
        )
        severity = "ERROR"

    logger.log(
        severity.upper(), exception.__class__.__name__ + ": " + exception.__str__()
    )
