# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import atexit
import datetime
import logging
import os
import sys
import traceback
from enum import Enum, IntEnum, unique
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import Any, TextIO


@unique
class ColorMode(Enum):
    """ColorMode is used as an argument to :func:`setup_logging`."""

    #: Colors are always turned on.
    ALWAYS = "always"
    #: Colors are turned off if the target
    #: stream (e.g. stderr) is not a tty.
    AUTO = "auto"
    #: No colors are used. In other words,
    #: no ANSI escape codes are included.
    NEVER = "never"


def resolve_color_mode(mode: ColorMode, stream: TextIO = sys.stderr) -> bool:
    """Decides whether the console log handler emits colors.

    :param mode: The available options are described in :class:`ColorMode`.
    :param stream: Used as a reference for :attr:`ColorMode.AUTO`.
    """
    if sys.platform == "win32":
        return False

    match mode:
        case ColorMode.ALWAYS:
            return True
        case ColorMode.AUTO:
            if os.getenv("NO_COLOR") is not None:
                return False
            else:
                return stream.isatty()
        case ColorMode.NEVER:
            return False


_TRACE = 5
_NOTICE = 25


def _register_level(level_name: str, level_num: int) -> None:
    if logging.getLevelName(level_num) != level_name:
        logging.addLevelName(level_num, level_name)


_register_level("TRACE", _TRACE)
_register_level("NOTICE", _NOTICE)


@unique
class Loglevel(IntEnum):
    """A wrapper around the constants exposed by python's
    ``logging`` module, including the additional ``NOTICE``
    and ``TRACE`` levels. Matched options are logged with
    ``TRACE``, parse results with ``DEBUG``.
    """

    CRITICAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    NOTICE = _NOTICE
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = _TRACE

    @classmethod
    def from_str(cls, string: str) -> Loglevel:
        """Converts a string to a Loglevel. ``string`` is either
        a numeric python loglevel or a case insensitive level name
        (e.g. ``debug``).
        """
        if string.isnumeric():
            return cls(int(string))

        try:
            return cls[string.upper()]
        except KeyError:
            raise ValueError(f"{string} not a valid loglevel") from None


def setup_logging(
    level: Loglevel | None = None,
    color_mode: ColorMode = ColorMode.AUTO,
    logger_name: str = "progopts",
) -> None:
    """Enable and configure the logging of progopts.
    The library itself never installs handlers; applications
    call this once, as early as possible, to get the debug and
    trace messages of the parser on stderr.

    :param level: The loglevel to enable for the console handler.
                  If this argument is None, the env variable
                  ``PROGOPTS_LOGLEVEL`` is read.
    :param color_mode: The color mode to use for the console.
    :param logger_name: The logger the handler is attached to.
    """
    if level is None:
        if (raw := os.getenv("PROGOPTS_LOGLEVEL")) is not None:
            level = Loglevel.from_str(raw)
        else:
            level = Loglevel.NOTICE

    logger = logging.getLogger(logger_name)
    # LogLevel cannot be 0 (NOTSET), because only the root logger sends it to its handlers then
    logger.setLevel(1)

    # Clean up potentially existing handlers and create a new async QueueHandler for stderr output
    while len(logger.handlers) > 0:
        logger.handlers[0].close()
        logger.removeHandler(logger.handlers[0])
    colored = resolve_color_mode(color_mode)
    add_stderr_log_handler(logger_name, level, colored)


def add_stderr_log_handler(
    logger_name: str,
    level: Loglevel,
    colored: bool,
) -> None:
    queue: Queue[Any] = Queue()
    logger = logging.getLogger(logger_name)
    logger.addHandler(QueueHandler(queue))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    console_formatter = _ConsoleFormatter()
    console_formatter.colored = colored
    stderr_handler.setFormatter(console_formatter)

    queue_listener = QueueListener(
        queue,
        *[stderr_handler],
        respect_handler_level=True,
    )
    queue_listener.start()
    atexit.register(queue_listener.stop)


@unique
class _Color(Enum):
    NOP = ""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    GRAY = "\033[0;38;5;245m"


def _colorize_msg(data: str, levelno: int) -> str:
    match levelno:
        case Loglevel.TRACE | Loglevel.DEBUG:
            style = _Color.GRAY.value
        case Loglevel.NOTICE:
            style = _Color.BOLD.value
        case Loglevel.WARNING:
            style = _Color.YELLOW.value
        case Loglevel.ERROR:
            style = _Color.RED.value
        case Loglevel.CRITICAL:
            style = _Color.RED.value + _Color.BOLD.value
        case _:
            style = _Color.NOP.value

    return style + data + _Color.RESET.value


def _format_record(
    dt: datetime.datetime,
    name: str,
    data: str,
    levelno: int,
    stacktrace: str | None,
    colored: bool = False,
) -> str:
    msg = dt.strftime("%b %d %H:%M:%S.%f")[:-3]
    msg += " "
    msg += name
    msg += ": "
    msg += _colorize_msg(data, levelno) if colored else data

    if stacktrace is not None:
        msg += "\n"
        msg += stacktrace

    return msg


class _ConsoleFormatter(logging.Formatter):
    colored: bool = False

    def format(
        self,
        record: logging.LogRecord,
    ) -> str:
        stacktrace = None

        if record.exc_info:
            exc_type, exc_value, exc_traceback = record.exc_info
            assert exc_type
            assert exc_value

            stacktrace = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))

        return _format_record(
            dt=datetime.datetime.fromtimestamp(record.created),
            name=record.name,
            data=record.getMessage(),
            levelno=record.levelno,
            stacktrace=stacktrace,
            colored=self.colored,
        )


class Logger(logging.LoggerAdapter[logging.Logger]):
    """Adds :meth:`trace` to a stdlib logger without replacing
    the process wide logger class."""

    def trace(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(Loglevel.TRACE, msg, *args, **kwargs)


def get_logger(name: str) -> Logger:
    return Logger(logging.getLogger(name), {})
