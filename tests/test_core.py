from __future__ import annotations

import logging

from graph_api_binding.core.logging import ContextAdapter, StructuredLogFormatter, configure_logging, get_logger, redact


class _ListHandler(logging.Handler):
    def __init__(self, formatter: logging.Formatter):
        super().__init__()
        self.records: list[logging.LogRecord] = []
        self.setFormatter(formatter)

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - trivial
        self.records.append(record)


def _record(message: str = "Graph request") -> logging.LogRecord:
    return logging.LogRecord(
        name="graph_api_binding.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=12,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_structured_formatter_orders_focus_keys_first():
    formatter = StructuredLogFormatter(use_color=False)
    record = _record()
    record.zeta = "last"
    record.status_code = 200
    record.method = "GET"
    record.connection = ("likes",)

    formatted = formatter.format(record)

    assert "Graph request" in formatted
    extras = formatted.split(" | ")[-1]
    assert extras == "method=GET status_code=200 connection=[likes] zeta=last"


def test_structured_formatter_masks_credentials():
    formatter = StructuredLogFormatter(use_color=False)
    record = _record()
    record.access_token = "someAccessToken"
    record.params = {"fields": "id", "access_token": "pageAccessToken"}

    formatted = formatter.format(record)

    assert "someAccessToken" not in formatted
    assert "pageAccessToken" not in formatted
    assert "access_token=***" in formatted
    assert '"fields": "id"' in formatted


def test_structured_formatter_colours_level_when_enabled():
    formatter = StructuredLogFormatter(use_color=True)

    formatted = formatter.format(_record())

    assert "\033[32mINFO\033[0m" in formatted


def test_configure_logging_installs_structured_formatter(monkeypatch):
    monkeypatch.setenv("GRAPH_API_LOG_LEVEL", "debug")
    root = logging.getLogger()
    existing_handlers = list(root.handlers)
    existing_level = root.level
    try:
        configure_logging(force=True)
        assert isinstance(root.handlers[0].formatter, StructuredLogFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers = existing_handlers
        root.setLevel(existing_level)


def test_get_logger_merges_bound_and_call_extras():
    logger = get_logger("graph_api_binding.tests.merge", extra={"base_url": "https://graph.facebook.com/v2.2/"})
    handler = _ListHandler(StructuredLogFormatter())
    logger.logger.addHandler(handler)
    logger.logger.setLevel(logging.INFO)
    try:
        logger.info("Published page post", extra={"object_id": "987654321", "connection": "feed"})
    finally:
        logger.logger.removeHandler(handler)

    record = handler.records[0]
    assert record.base_url == "https://graph.facebook.com/v2.2/"
    assert record.object_id == "987654321"
    assert record.connection == "feed"


def test_redact_masks_nested_credentials():
    assert redact("Authorization", "OAuth someAccessToken") == "***"
    assert redact("params", {"q": "climbing", "access_token": "t"}) == {"q": "climbing", "access_token": "***"}
    assert redact("token", "") == ""
    assert redact("url", "https://graph.facebook.com/v2.2/me") == "https://graph.facebook.com/v2.2/me"


def test_configure_logging_is_installed_once():
    root = logging.getLogger()
    existing_handlers = list(root.handlers)
    existing_level = root.level
    try:
        installed = configure_logging(force=True)
        assert configure_logging() is installed
        assert configure_logging(force=True) is not installed
    finally:
        root.handlers = existing_handlers
        root.setLevel(existing_level)


def test_get_logger_drops_empty_bound_extras():
    logger = get_logger("graph_api_binding.tests.empty", extra={"object_id": None, "connection": "feed"})

    assert isinstance(logger, ContextAdapter)
    assert logger.extra == {"connection": "feed"}
