# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os
import sys
from datetime import datetime
from typing import IO, Optional

# Info is green, Warn is yellow, Fail is red
_WHITE = '\033[37m'
_COLORS = {
    'INFO': '\033[32m',
    'WARN': '\033[33m',
    'FAIL': '\033[31m',
}
_RESET = '\033[0m'


def level_tag(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return 'FAIL'
    if levelno >= logging.WARNING:
        return 'WARN'
    return 'INFO'


class Formatter(logging.Formatter):
    """
    Single line, severity tagged log messages:

        14301512 [INFO] Pulling any updates from repo: https://...

    The timestamp is HHMMSS followed by hundredths of a second.
    """

    def __init__(self, color: bool = False, dry_run: bool = False) -> None:
        super().__init__()
        self.color = color
        self.dry_run = dry_run

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        t = datetime.fromtimestamp(record.created)
        return t.strftime('%H%M%S') + f'{t.microsecond // 10000:02d}'

    def format(self, record: logging.LogRecord) -> str:
        tag = level_tag(record.levelno)
        label = f"[DRYRUN|{tag}]" if self.dry_run else f"[{tag}]"
        msg = record.getMessage()
        if record.exc_info:
            msg += '\n' + self.formatException(record.exc_info)

        timestamp = self.formatTime(record)
        if not self.color:
            return f"{timestamp} {label} {msg}"
        return f"{_WHITE}{timestamp} {_COLORS[tag]}{label} {msg}{_RESET}"


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


def _handler(stream: IO[str], dry_run: bool) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(Formatter(color=stream.isatty(), dry_run=dry_run))
    return handler


def setup_logging(level: Optional[str] = None, dry_run: bool = False) -> None:
    """
    Configure the root logger once at startup.

    INFO (and DEBUG) lines go to stdout, WARN and FAIL lines to stderr.
    The level defaults to the LOG_LEVEL environment variable or INFO.
    """
    log_level = (level or os.environ.get('LOG_LEVEL', 'INFO')).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    out = _handler(sys.stdout, dry_run)
    out.addFilter(_MaxLevelFilter(logging.INFO))
    err = _handler(sys.stderr, dry_run)
    err.setLevel(logging.WARNING)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(out)
    root.addHandler(err)

    logging.getLogger('urllib3').setLevel(logging.WARNING)
