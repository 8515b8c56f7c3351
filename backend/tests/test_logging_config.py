import json
import logging

from jsend.core.logging_config import JsonFormatter, configure_logging


def test_json_formatter_includes_envelope_fields() -> None:
    record = logging.LogRecord("jsend.envelope", logging.WARNING, __file__, 1, "envelope.render_degraded", None, None)
    record.policy = "strict"
    record.json_error = "RECURSION"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["logger"] == "jsend.envelope"
    assert payload["level"] == "WARNING"
    assert payload["message"] == "envelope.render_degraded"
    assert payload["policy"] == "strict"
    assert payload["json_error"] == "RECURSION"
    assert "status_code" not in payload


def test_configure_logging_selects_formatter_by_environment() -> None:
    root = logging.getLogger()
    previous_handlers, previous_level = list(root.handlers), root.level
    try:
        configure_logging(log_level="debug", app_env="production")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        configure_logging(log_level="bogus", app_env="local")
        assert root.level == logging.INFO
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
