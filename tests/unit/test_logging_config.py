import json
import logging
import sys

from readlist_api.context import request_id_var
from readlist_api.logging_config import JsonFormatter, configure_logging


def make_record(msg: str = "hello", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="readlist_api.main",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_expected_fields() -> None:
    formatter = JsonFormatter(service_name="readlist-api")

    payload = json.loads(formatter.format(make_record()))

    assert payload["service"] == "readlist-api"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "readlist_api.main"
    assert payload["message"] == "hello"
    assert "timestamp" in payload
    assert "request_id" not in payload
    assert "lineno" not in payload


def test_json_formatter_emits_request_id_and_extras() -> None:
    formatter = JsonFormatter(service_name="readlist-api")
    token = request_id_var.set("req-456")

    try:
        payload = json.loads(formatter.format(make_record(book_key="/works/OL1W", read=True)))
    finally:
        request_id_var.reset(token)

    assert payload["request_id"] == "req-456"
    assert payload["book_key"] == "/works/OL1W"
    assert payload["read"] is True


def test_json_formatter_includes_exception_text() -> None:
    formatter = JsonFormatter(service_name="readlist-api")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record()
        record.exc_info = sys.exc_info()

    payload = json.loads(formatter.format(record))

    assert "RuntimeError: boom" in payload["exception"]


def test_configure_logging_plain_text_format() -> None:
    configure_logging(level="DEBUG", output_format="plain", service_name="readlist-api")

    root_logger = logging.getLogger()

    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert not isinstance(root_logger.handlers[0].formatter, JsonFormatter)


def test_configure_logging_json_format() -> None:
    configure_logging(level="info", output_format="json", service_name="readlist-api")

    root_logger = logging.getLogger()

    assert root_logger.level == logging.INFO
    assert isinstance(root_logger.handlers[0].formatter, JsonFormatter)
