"""Signature extractor utility modules."""

from .logging_utils import (
    setup_logging,
    get_logger,
    log_processing_stats,
    ProcessingProgress,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'log_processing_stats',
    'ProcessingProgress',
]
