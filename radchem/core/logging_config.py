"""
Logging configuration for radchem.

Provides standardized logging setup for the library.
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO", format_string: Optional[str] = None, stream: Optional[object] = None
) -> None:
    """
    Configure logging for radchem.

    Parameters
    ----------
    level : str
        Logging level: 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'
    format_string : str, optional
        Custom format string. If None, uses ``DEFAULT_FORMAT``.
    stream : file-like object, optional
        Stream to write logs to. If None, uses sys.stderr.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string or DEFAULT_FORMAT,
        stream=stream or sys.stderr,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Parameters
    ----------
    name : str
        Dotted module path below the package (e.g. ``"chemistry.network"``)

    Returns
    -------
    logging.Logger
        Logger named ``radchem.<name>``
    """
    return logging.getLogger(f"radchem.{name}")


def log_fatal(logger: logging.Logger, error: Exception) -> None:
    """
    Log a fatal error with its structured diagnostic when it has one.

    Parameters
    ----------
    logger : logging.Logger
        Destination logger
    error : Exception
        Error about to terminate the run
    """
    diagnostic = getattr(error, "diagnostic", None)
    if callable(diagnostic):
        logger.error(diagnostic())
    else:
        logger.error(f"### FATAL ERROR\n    {error}")
