"""
Logging Configuration
Sets up the package logger for the analyser.
"""
import logging
import sys


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Send 'cgpa_analyser' records to stdout at the given level."""
    logger = logging.getLogger("cgpa_analyser")
    logger.setLevel(level)

    # Streamlit reruns the script on every edit; never stack handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    logger.addHandler(handler)
    return logger
