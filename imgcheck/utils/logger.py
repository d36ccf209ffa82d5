"""
Logging for imgcheck runs.

Everything goes to stdout so CI job logs show the stage trail, the image
diagnostics and any error hints in order. The CLI calls setup_logging() once,
after any --env-file has been loaded, so LOG_LEVEL may come from that file.
Stages log under "stage.<name>", other modules under their import path.
"""

import logging
import sys
import os
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None):
    """Configure the root logger; level falls back to LOG_LEVEL, then INFO."""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers = [handler]

    # Browser driver and event loop chatter drowns out the check output
    logging.getLogger("playwright").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
