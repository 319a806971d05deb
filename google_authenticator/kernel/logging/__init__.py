from .logging_config import (
    PACKAGE_LOGGER_NAME,
    StructuredLogger,
    configure_logging,
    structured_logger,
)

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "StructuredLogger",
    "configure_logging",
    "structured_logger",
]
