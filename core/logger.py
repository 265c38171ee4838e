from __future__ import annotations
import sys

from loguru import logger
from .config import config

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <7}</level> | "
    "<cyan>{extra[component]}</cyan> | {message}"
)

# Streamlit re-executes the app script on every interaction, but this module
# is imported once per process, so sinks are only added once.
logger.remove()
logger.configure(extra={"component": "statementlens"})
logger.add(
    sys.stdout,
    level=config.log_level,
    enqueue=True,
    backtrace=False,
    diagnose=False,
    colorize=True,
    format=CONSOLE_FORMAT,
)
logger.add(
    config.log_file,
    rotation="20 MB",
    retention="14 days",
    compression="zip",
    level=config.log_level,
    enqueue=True,
    serialize=True,  # JSON lines, one record per log call
)


def get_logger(name: str = "statementlens"):
    """Logger tagged with a component name, e.g. "ingestion/batch"."""
    return logger.bind(component=name)
