from __future__ import annotations

import io
import logging
from typing import Generator
from unittest.mock import patch

import pytest

import depflat.utils.logger as logger_module
from depflat.utils.logger import (
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)


@pytest.fixture(autouse=True)
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the depflat logger before and after each test."""
    root_logger = logging.getLogger("depflat")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    logger_module._logging_configured = False

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False


def _record(level: int = logging.WARNING) -> logging.LogRecord:
    return logging.LogRecord("depflat.test", level, __file__, 1, "hello", None, None)


@pytest.mark.unit
class TestColoredFormatter:
    def test_plain_output_without_color(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record()) == "WARNING: hello"

    def test_color_applied_on_tty(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            output = formatter.format(_record())

        assert output.startswith(ColoredFormatter.COLORS["WARNING"])
        assert ColoredFormatter.RESET in output

    def test_color_does_not_leak_into_record(self) -> None:
        formatter = ColoredFormatter("%(levelname)s")
        record = _record()

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            formatter.format(record)

        assert record.levelname == "WARNING"

    @pytest.mark.parametrize("var", ["NO_COLOR", "CI"])
    def test_env_disables_color(self, monkeypatch: pytest.MonkeyPatch, var: str) -> None:
        monkeypatch.setenv(var, "1")

        assert ColoredFormatter._should_use_color() is False


@pytest.mark.unit
class TestSetupLogging:
    def test_messages_reach_stream(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)

        get_logger("core").debug("parsed %d", 3)

        assert "parsed 3" in stream.getvalue()
        assert is_logging_configured() is True

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.WARNING, stream=stream)

        get_logger("core").info("hidden")

        assert stream.getvalue() == ""

    def test_repeated_setup_keeps_single_handler(self) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())

        assert len(logging.getLogger("depflat").handlers) == 1

    def test_disable_logging(self) -> None:
        setup_logging(stream=io.StringIO())
        disable_logging()

        assert is_logging_configured() is False
        handlers = logging.getLogger("depflat").handlers
        assert all(isinstance(h, logging.NullHandler) for h in handlers)


@pytest.mark.unit
class TestGetLogger:
    @pytest.mark.parametrize(
        "name,expected",
        [
            (None, "depflat"),
            ("depflat", "depflat"),
            ("depflat.core", "depflat.core"),
            ("listing", "depflat.listing"),
        ],
    )
    def test_namespacing(self, name, expected: str) -> None:
        assert get_logger(name).name == expected
