"""JSON log output for services using the Shibboleth extension."""

import logging
from pythonjsonlogger.json import JsonFormatter


def setup_logger(level: int = logging.DEBUG) -> logging.Logger:
    logger = logging.getLogger()
    if any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers):
        return logger
    logHandler = logging.StreamHandler()
    formatter = JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s',
                              rename_fields={'levelname': 'level', 'asctime': 'timestamp'})
    logHandler.setFormatter(formatter)
    logger.addHandler(logHandler)
    logger.setLevel(level)
    return logger
