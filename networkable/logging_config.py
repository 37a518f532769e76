"""
Logging configuration for networkable

All modules log through children of the "networkable" package logger.
The library itself only emits records; applications decide where they go.
"""

import logging

PACKAGE_LOGGER_NAME = "networkable"

# No output unless the application configures handlers
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get logger for a specific module

    Args:
        module_name: Name of the module (e.g., 'request_builder', 'multipart')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{module_name}")
