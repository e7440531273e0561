"""
Logger configuration for the pipeline CLI.

Every line the CI runner shows comes through the root logger, so a
failing step is readable straight from the job log.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every HTTP round trip at INFO/DEBUG
NOISY_LOGGERS = ("urllib3", "botocore", "boto3", "s3transfer")


def configure_logging(level: str = "INFO") -> None:
    """
    Route all pipeline logging to stdout.

    Replaces handlers installed earlier, so calling it twice does not
    duplicate lines.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ...)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
