"""Logging configuration."""

import logging
import sys

from ai_proxy.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    - Console output: every record goes to stdout
    - Level: settings.log_level
    - Format: timestamp, logger name, level, message
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # The Google client libraries are chatty at INFO
    logging.getLogger("google").setLevel(logging.WARNING)
