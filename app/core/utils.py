"""Shared utility functions for the Finance Visualizer project."""

import logging
from datetime import UTC, datetime

import colorlog

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def get_logger(name: str) -> logging.Logger:
    """Get a logger with a colorized format for the project.

    Handlers live on the top-level project logger; dotted child loggers propagate to it.
    """
    logger = logging.getLogger(name)
    project_logger = logging.getLogger(name.split(".")[0])
    if not project_logger.handlers:
        handler = logging.StreamHandler()
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        handler.setFormatter(formatter)
        project_logger.addHandler(handler)
        project_logger.setLevel(logging.INFO)
    project_logger.propagate = False
    return logger


def utcnow() -> datetime:
    """Get the current UTC time as an aware datetime."""
    return datetime.now(UTC)


def month_label(year: int, month: int) -> str:
    """Format a (year, month) key for chart axes, e.g. ``Jan 2024``."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"
