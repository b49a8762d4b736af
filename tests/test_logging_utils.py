"""
tests for hl7_parse_tool.logging_utils
"""

import io
import logging

import pytest

from hl7_parse_tool.logging_utils import configure_logging
from hl7_parse_tool.message import Message


@pytest.fixture(autouse=True)
def _restore_loggers():
    names = [None, "hl7_parse_tool"]
    saved = {n: (logging.getLogger(n).handlers[:], logging.getLogger(n).level) for n in names}
    try:
        yield
    finally:
        for n, (handlers, level) in saved.items():
            logging.getLogger(n).handlers = handlers
            logging.getLogger(n).setLevel(level)


def test_configure_logging_rejects_non_int_verbosity():
    with pytest.raises(TypeError, match=r"^verbosity must be int"):
        configure_logging("load")


def test_configure_logging_rejects_bool_verbosity():
    with pytest.raises(TypeError, match=r"^verbosity must be int"):
        configure_logging(True)


def test_configure_logging_rejects_negative_verbosity():
    with pytest.raises(ValueError, match=r"^verbosity must be non-negative"):
        configure_logging(-1)


def test_configure_logging_sets_info_level():
    buf = io.StringIO()
    logger = configure_logging(verbosity=0, stream=buf)
    logger.info("hello info")
    logger.debug("hidden debug")

    out = buf.getvalue()
    assert "hello info" in out
    assert "hidden debug" not in out


def test_configure_logging_sets_debug_level():
    buf = io.StringIO()
    logger = configure_logging(verbosity=2, stream=buf)
    logger.debug("visible debug")
    assert "visible debug" in buf.getvalue()


def test_configure_logging_defaults_to_stderr(capsys):
    logger = configure_logging(verbosity=0)
    logger.info("to stderr")
    _, err = capsys.readouterr()
    assert "to stderr" in err


def test_configure_logging_scoped_logger_shows_parse_steps():
    buf = io.StringIO()
    logger = configure_logging(verbosity=1, stream=buf, logger_name="hl7_parse_tool")
    assert logger.name == "hl7_parse_tool"

    Message.from_text("MSH|^~\\&|HLAB\rPID|1")
    out = buf.getvalue()
    assert "Resolved separators" in out
    assert "Classified message as lab" in out


def test_configure_logging_replaces_stream_handlers_only(tmp_path):
    name = "hl7_parse_tool"
    file_handler = logging.FileHandler(tmp_path / "log.txt")
    logging.getLogger(name).addHandler(file_handler)
    try:
        configure_logging(0, stream=io.StringIO(), logger_name=name)
        configure_logging(0, stream=io.StringIO(), logger_name=name)
        handlers = logging.getLogger(name).handlers
        assert file_handler in handlers
        plain = [h for h in handlers if type(h) is logging.StreamHandler]
        assert len(plain) == 1
    finally:
        file_handler.close()


def test_configure_logging_rejects_bad_stream():
    class NotAStream:
        pass

    with pytest.raises(
        TypeError, match=r"^stream must be file-like \(support .write\(...\)\)"
    ):
        configure_logging(0, stream=NotAStream())
