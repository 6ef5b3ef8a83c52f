import re

import pytest

from txtlogparser.logger import LogLevel, Logger, get_logger

LINE_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} \[(\w+)\] (.*)$")


def test_each_level_method_reports_its_level():
    received = []
    logger = Logger()
    logger.set_log_callback(lambda level, msg: received.append(level))
    logger.debug("a")
    logger.info("b")
    logger.warning("c")
    logger.error("d")
    logger.critical("e")
    assert received == [
        LogLevel.DEBUG,
        LogLevel.INFO,
        LogLevel.WARNING,
        LogLevel.ERROR,
        LogLevel.CRITICAL,
    ]
    assert sorted(received, reverse=True) == list(reversed(received))


def test_file_output_format(tmp_path):
    path = tmp_path / "app.log"
    logger = Logger()
    logger.set_log_file(path)
    logger.error("boom")
    logger.close_log_file()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    match = LINE_RE.match(lines[0])
    assert match is not None
    assert match.group(1) == "ERROR"
    assert match.group(2) == "boom"


def test_file_is_appended(tmp_path):
    path = tmp_path / "app.log"
    path.write_text("existing\n", encoding="utf-8")
    logger = Logger()
    logger.set_log_file(path)
    logger.info("first")
    logger.warning("second")
    logger.close_log_file()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "existing"
    assert [LINE_RE.match(line).group(1) for line in lines[1:]] == ["INFO", "WARNING"]


def test_closed_file_receives_nothing(tmp_path):
    path = tmp_path / "app.log"
    logger = Logger()
    logger.set_log_file(path)
    logger.close_log_file()
    logger.info("after close")
    assert path.read_text(encoding="utf-8") == ""


def test_console_output(capsys):
    logger = Logger()
    logger.critical("fatal thing")
    out = capsys.readouterr().out.strip()
    match = LINE_RE.match(out)
    assert match.group(1) == "CRITICAL"
    assert match.group(2) == "fatal thing"


def test_callback_receives_level_and_raw_message():
    received = []
    logger = Logger()
    logger.set_log_callback(lambda level, msg: received.append((level, msg)))
    logger.debug("d")
    logger.warning("w")
    assert received == [(LogLevel.DEBUG, "d"), (LogLevel.WARNING, "w")]


def test_callback_can_be_cleared():
    received = []
    logger = Logger()
    logger.set_log_callback(lambda level, msg: received.append(msg))
    logger.set_log_callback(None)
    logger.info("ignored")
    assert received == []


def test_log_with_explicit_level():
    received = []
    logger = Logger()
    logger.set_log_callback(lambda level, msg: received.append(level))
    logger.log(LogLevel.INFO, "x")
    assert received == [LogLevel.INFO]


def test_unopenable_file_raises(tmp_path):
    logger = Logger()
    with pytest.raises(OSError):
        logger.set_log_file(tmp_path / "missing" / "dir" / "app.log")


def test_switching_log_file(tmp_path):
    first = tmp_path / "a.log"
    second = tmp_path / "b.log"
    logger = Logger()
    logger.set_log_file(first)
    logger.info("one")
    logger.set_log_file(second)
    logger.info("two")
    logger.close_log_file()
    assert LINE_RE.match(first.read_text(encoding="utf-8").strip()).group(2) == "one"
    assert LINE_RE.match(second.read_text(encoding="utf-8").strip()).group(2) == "two"


def test_get_logger_is_shared():
    received = []
    get_logger().set_log_callback(lambda level, msg: received.append((level, msg)))
    try:
        get_logger().warning("shared")
    finally:
        get_logger().set_log_callback(None)
    assert received == [(LogLevel.WARNING, "shared")]