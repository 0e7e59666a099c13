"""CLI helpers for parsing option values."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import click
from tabkeeper.domain.user import UserService
from tabkeeper.utils.price_parser import parse_price
from tabkeeper.utils.timestamp_parser import parse_timestamp
from tabkeeper.utils.user_resolver import resolve_user


def resolve_user_or_exit(ctx: click.Context, user_service: UserService, user: str | int) -> int:
    """Resolve username or ID, or exit with a CLI error."""
    try:
        return resolve_user(user_service, user)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def parse_timestamp_or_exit(ctx: click.Context, value: str | None) -> datetime | None:
    """Parse an optional --at style value, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid timestamp: {exc}", err=True)
        ctx.exit(1)


def parse_price_or_exit(ctx: click.Context, value: str | None) -> Decimal | None:
    """Parse an optional price value, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_price(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid price: {exc}", err=True)
        ctx.exit(1)


def format_timestamp(value: datetime | None) -> str:
    """Render a UTC timestamp column, '-' when unset."""
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")
