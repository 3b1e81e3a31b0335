"""
Logging setup for the SIRAS demo application.

Library modules only create module-level loggers; handlers are attached here,
by the application entry point.
"""

import logging

from config import LOGGING_PARAMS


def setup_logging(level=None):
    """
    Configures a console handler on the root logger.

    Args:
        level (str or int, optional): Log level. Defaults to LOGGING_PARAMS["level"].
    """
    if level is None:
        level = LOGGING_PARAMS["level"]
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOGGING_PARAMS["format"],
        datefmt=LOGGING_PARAMS["datefmt"],
        force=True,
    )
