"""Application logging to the console and a log file."""

import logging
import sys

_LOGGER_NAME = "SerialCommLogger"
_logger: logging.Logger | None = None


class _Formatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = record.levelname.lower()
        return super().format(record)


def init(filename: str) -> None:
    """Send log output to stdout and to ``filename``, truncating the file."""
    global _logger
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = _Formatter(
        "[%(asctime)s.%(msecs)03d] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in (
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(filename, mode="w", encoding="utf-8"),
    ):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    _logger = logger


def info(msg: str) -> None:
    if _logger is not None:
        _logger.info(msg)


def debug(msg: str) -> None:
    if _logger is not None:
        _logger.debug(msg)


def error(msg: str) -> None:
    if _logger is not None:
        _logger.error(msg)