import logging

import config


def configure_logging(level=None) -> logging.Logger:
    if level is None:
        level = getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
    )
    return logging.getLogger("feedpolicy")
