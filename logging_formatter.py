# -*- coding: utf-8 -*-

"""logging_formatter.py:
Log formatter shared by the build script and the preview server.
Colours the level name when the output stream is a terminal.
"""

# std libs
import logging
import sys

RESET = "\x1b[0m"
LEVEL_COLOURS = {
    logging.DEBUG: "\x1b[38;5;244m",
    logging.INFO: "\x1b[38;5;39m",
    logging.WARNING: "\x1b[33;1m",
    logging.ERROR: "\x1b[31;1m",
    logging.CRITICAL: "\x1b[41;1m",
}


class BlogLogFormatter(logging.Formatter):
    def __init__(self, use_colour: bool = False) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S")
        self.use_colour = use_colour

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if not self.use_colour:
            return line
        colour = LEVEL_COLOURS.get(record.levelno)
        if colour is None:
            return line
        return colour + line + RESET


class BlogStreamHandler(logging.StreamHandler):
    pass


def setup_logging(level: str = "INFO", stream=None) -> logging.Logger:
    """
    Configure the root logger to output all logs to the given stream (stderr by default).
    Calling it again only updates the level, handlers are installed once.
    """
    stream = stream if stream is not None else sys.stderr
    lg = logging.getLogger()
    lg.setLevel(level.upper())
    if not any(isinstance(h, BlogStreamHandler) for h in lg.handlers):
        ch = BlogStreamHandler(stream)
        ch.setFormatter(BlogLogFormatter(use_colour=stream.isatty()))
        lg.addHandler(ch)
    return lg
