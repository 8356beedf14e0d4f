import json
import logging

from app.core.logging_setup import JsonFormatter
from app.core.request_context import clear_request_context, set_request_context


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.coupons",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_request_context_and_extra_fields():
    set_request_context(request_id="req-42")
    try:
        line = JsonFormatter("%(message)s").format(_record("Coupon has been created.", coupon_id=5))
    finally:
        clear_request_context()

    payload = json.loads(line)
    assert payload["request_id"] == "req-42"
    assert payload["module"] == "app.coupons"
    assert payload["level"] == "INFO"
    assert payload["message"] == "Coupon has been created."
    assert payload["coupon_id"] == 5
    assert "endpoint" not in payload


def test_json_formatter_masks_secrets():
    line = JsonFormatter("%(message)s").format(_record("connect password=hunter2 token=abc"))

    payload = json.loads(line)
    assert "hunter2" not in payload["message"]
    assert "abc" not in payload["message"]
    assert payload["message"] == "connect password=*** token=***"
