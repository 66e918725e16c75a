import json
import logging

import structlog


def _json_formatter() -> logging.Formatter:
    for handler in logging.getLogger().handlers:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            return handler.formatter
    raise AssertionError("console handler with JSON formatter not configured")


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="modules.orders.services",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=None,
        exc_info=None,
    )


class TestJsonLogging:
    def test_stdlib_records_rendered_as_json(self):
        output = _json_formatter().format(_record("order.created"))
        data = json.loads(output)
        assert data["event"] == "order.created"
        assert data["level"] == "info"
        assert data["logger"] == "modules.orders.services"
        assert "timestamp" in data

    def test_phone_masked_in_rendered_output(self):
        output = _json_formatter().format(_record("Cliente (11) 98765-4321 ligou"))
        assert "98765-4321" not in output
        assert "***MASKED***" in output

    def test_context_vars_merged(self):
        structlog.contextvars.bind_contextvars(correlation_id="ctx-123")
        try:
            output = _json_formatter().format(_record("request_started"))
        finally:
            structlog.contextvars.clear_contextvars()
        assert json.loads(output)["correlation_id"] == "ctx-123"
