"""Utility functions for tabkeeper."""

from tabkeeper.utils.timestamp_parser import parse_timestamp
from tabkeeper.utils.price_parser import parse_price
from tabkeeper.utils.user_resolver import resolve_user
from tabkeeper.utils.retry import run_with_retry

__all__ = ["parse_timestamp", "parse_price", "resolve_user", "run_with_retry"]
