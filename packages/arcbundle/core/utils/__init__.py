"""Shared utilities for arcbundle."""

from arcbundle.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
    log_performance,
)

__all__ = [
    "StructuredJSONFormatter",
    "configure_logging",
    "get_logger",
    "log_performance",
]
