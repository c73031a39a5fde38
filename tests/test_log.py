"""
Tests for mirror.log: the severity tagged console output.
"""

import logging
from datetime import datetime

import pytest

from mirror.log import Formatter, level_tag, setup_logging


def _record(level: int, msg: str) -> logging.LogRecord:
    record = logging.LogRecord("mirror.test", level, __file__, 1, msg, None, None)
    record.created = datetime(2026, 10, 19, 14, 30, 15, 125000).timestamp()
    return record


@pytest.mark.parametrize("level, tag", [
    (logging.DEBUG, "INFO"),
    (logging.INFO, "INFO"),
    (logging.WARNING, "WARN"),
    (logging.ERROR, "FAIL"),
    (logging.CRITICAL, "FAIL"),
])
def test_level_tag(level, tag):
    assert level_tag(level) == tag


class TestFormatter:

    def test_plain(self):
        line = Formatter().format(_record(logging.INFO, "hello"))
        assert line == "14301512 [INFO] hello"

    def test_dry_run_tag(self):
        line = Formatter(dry_run=True).format(_record(logging.WARNING, "careful"))
        assert line == "14301512 [DRYRUN|WARN] careful"

    def test_color(self):
        line = Formatter(color=True).format(_record(logging.CRITICAL, "boom"))
        assert line == "\033[37m14301512 \033[31m[FAIL] boom\033[0m"


class TestSetupLogging:

    def test_info_to_stdout_warnings_to_stderr(self, capsys):
        setup_logging(level="INFO")
        log = logging.getLogger("mirror.test")

        log.debug("hidden")
        log.info("pulling")
        log.warning("failed")
        log.critical("fatal")

        out, err = capsys.readouterr()
        assert "[INFO] pulling" in out
        assert "failed" not in out
        assert "[WARN] failed" in err
        assert "[FAIL] fatal" in err
        assert "pulling" not in err
        assert "hidden" not in out + err

    def test_level_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        setup_logging()

        logging.getLogger("mirror.test").debug("git output")

        out, _ = capsys.readouterr()
        assert "[INFO] git output" in out

    def test_unknown_level_falls_back_to_info(self, capsys):
        setup_logging(level="BASIC_FORMAT")

        assert logging.getLogger().level == logging.INFO

    def test_dry_run(self, capsys):
        setup_logging(level="INFO", dry_run=True)

        logging.getLogger("mirror.test").info("would clone")

        out, _ = capsys.readouterr()
        assert "[DRYRUN|INFO] would clone" in out
