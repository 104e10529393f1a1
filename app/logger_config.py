import logging
import sys

from app.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str = "seo_report") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:      # avoid duplicate handlers on reload
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(LOG_LEVEL)
    return logger


logger = setup_logger()
