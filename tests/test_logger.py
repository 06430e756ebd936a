import io

import pytest

from konf import logger


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.init_logger()


def test_info_writes_prefixed_line():
    info_stream, warn_stream = io.StringIO(), io.StringIO()
    logger.init_logger(info_stream, warn_stream)
    logger.info("hello %s", "world")
    assert info_stream.getvalue() == "INFO: hello world\n"
    assert warn_stream.getvalue() == ""


def test_warn_goes_to_warn_stream():
    info_stream, warn_stream = io.StringIO(), io.StringIO()
    logger.init_logger(info_stream, warn_stream)
    logger.warn("careful")
    assert warn_stream.getvalue() == "WARN: careful\n"
    assert info_stream.getvalue() == ""


def test_existing_newline_is_not_doubled():
    stream = io.StringIO()
    logger.init_logger(stream, stream)
    logger.info("line\n")
    assert stream.getvalue().count("\n") == 1


def test_default_is_stderr(capsys):
    logger.init_logger()
    logger.warn("to stderr")
    captured = capsys.readouterr()
    assert captured.err.startswith("WARN: ")
    assert "to stderr" in captured.err
    assert captured.out == ""


def test_discard_silences(capsys):
    logger.init_logger(logger.DISCARD, logger.DISCARD)
    logger.info("quiet")
    logger.warn("quiet too")
    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out == ""