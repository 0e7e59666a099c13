"""Whole-operation retry for database conflicts."""

import logging
import time
from typing import Callable, TypeVar

from tabkeeper.domain.errors import TransactionConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_retry(func: Callable[[], T], *, attempts: int = 3, backoff_base: float = 0.1) -> T:
    """Run an operation, retrying it from scratch on TransactionConflictError.

    Each attempt re-reads current state, so retrying a failed unit of work
    is safe. Domain failures such as InsufficientStockError are not retried.

    Args:
        func: Zero-argument callable performing one complete operation
        attempts: Maximum number of attempts
        backoff_base: Initial sleep in seconds, doubled after each failure
    """
    for attempt in range(attempts):
        try:
            return func()
        except TransactionConflictError as exc:
            if attempt >= attempts - 1:
                raise
            delay = backoff_base * (2 ** attempt)
            logger.warning("Attempt %s failed (%s), retrying in %.2fs", attempt + 1, exc, delay)
            time.sleep(delay)
    raise ValueError("attempts must be at least 1")
