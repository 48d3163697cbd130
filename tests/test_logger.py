import sys

import pytest

from mediumpy.logger import log_exception, log_to_file, logger, set_logging_level


def test_default_level_hides_debug(capsys):
    set_logging_level("WARNING", sink=sys.stderr)
    try:
        logger.debug("hidden message")
        logger.warning("visible message")
    finally:
        set_logging_level("WARNING")

    captured = capsys.readouterr()
    assert "hidden message" not in captured.err
    assert "visible message" in captured.err


def test_log_exception(log_messages):
    log_exception(ValueError("bad value"), severity="WARNING")

    assert len(log_messages) == 1
    assert "WARNING" in log_messages[0]
    assert "ValueError: bad value" in log_messages[0]


def test_log_exception_invalid_severity(log_messages):
    log_exception(ValueError("bad value"), severity="LOUD")  # type: ignore[arg-type]

    assert "Invalid severity level 'LOUD'" in log_messages[0]
    assert "ERROR" in log_messages[1]


def test_log_to_file(tmp_path):
    log_file = tmp_path / "mediumpy.log"
    try:
        log_to_file("DEBUG", str(log_file))
        logger.debug("written to file")
    finally:
        set_logging_level("WARNING")

    assert "written to file" in log_file.read_text()


@pytest.mark.parametrize("level", ["TRACE", "DEBUG", "INFO"])
def test_set_logging_level(level):
    messages: list[str] = []
    set_logging_level(level, sink=messages.append)
    try:
        logger.info("info message")
    finally:
        set_logging_level("WARNING")

    assert len(messages) == 1
