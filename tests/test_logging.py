import json
import logging
import sys

from shared.logging.logger import JSONFormatter, get_logger, setup_logging


def _record(msg="hello %s", args=("world",), exc_info=None, **attrs):
    record = logging.LogRecord(
        name="services.tutor_service.orchestrator",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


def test_basic_fields():
    entry = json.loads(JSONFormatter("tutor_service").format(_record()))
    assert entry["level"] == "WARNING"
    assert entry["service"] == "tutor_service"
    assert entry["logger"] == "services.tutor_service.orchestrator"
    assert entry["message"] == "hello world"
    assert "timestamp" in entry
    assert "context" not in entry


def test_context_and_extra():
    record = _record(context="OpenAIProvider", _extra={"tokens": 42})
    entry = json.loads(JSONFormatter("tutor_service").format(record))
    assert entry["context"] == "OpenAIProvider"
    assert entry["extra"] == {"tokens": 42}


def test_exception_trace():
    try:
        raise ValueError("bad input")
    except ValueError:
        record = _record(exc_info=sys.exc_info())
    entry = json.loads(JSONFormatter("tutor_service").format(record))
    assert "ValueError: bad input" in entry["exception"]


def test_setup_logging_installs_json_handler():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        logger = setup_logging("tutor_service", "debug")
        assert logger.name == "tutor_service"
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("openai").level == logging.WARNING
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_component_logger_tags_records(caplog):
    log = get_logger("tests.component", "TemplateStore")
    with caplog.at_level(logging.INFO, logger="tests.component"):
        log.info("registered", extra={"_extra": {"count": 6}})
    record = caplog.records[-1]
    assert record.context == "TemplateStore"
    assert record._extra == {"count": 6}


def test_plain_logger_without_context():
    assert get_logger("tests.plain") is logging.getLogger("tests.plain")
