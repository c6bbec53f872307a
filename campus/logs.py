"""Logging setup shared by the API server, the client and the CLI."""
import logging


def setup_logging(level: str = 'INFO') -> logging.Logger:
    """Configure the root ``metaverse`` logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Unknown names fall back to INFO.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.INFO)
    logger = logging.getLogger('metaverse')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger
