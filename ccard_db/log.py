"""Logging setup shared by the example scripts."""
import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def configure_logging(level: int = logging.INFO, orm_level: int | None = None) -> None:
    """Configure the root logger once.

    Args:
        level: Root logger level.
        orm_level: Level for the ``sqlalchemy.engine`` logger, if given.
    """
    global _initialized
    if not _initialized:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        logging.getLogger().addHandler(handler)
        _initialized = True

    logging.getLogger().setLevel(level)
    if orm_level is not None:
        logging.getLogger("sqlalchemy.engine").setLevel(orm_level)
