"""Structured (JSON) logging for the client registry."""

import logging

from pythonjsonlogger import jsonlogger


def setup_logger(level: int = logging.INFO) -> None:
    """Attach a JSON handler to the root logger, once."""
    logger = logging.getLogger()
    logger.setLevel(level)
    for handler in logger.handlers:
        if isinstance(handler.formatter, jsonlogger.JsonFormatter):
            return
    log_handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(levelname)s %(name)s %(message)s',
        rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
    )
    log_handler.setFormatter(formatter)
    logger.addHandler(log_handler)
