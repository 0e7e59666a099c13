"""Domain model entities for tabkeeper.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these, never ORM rows.

All timestamps are naive datetimes in UTC.
"""

from dataclasses import dataclass
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


@dataclass(frozen=True)
class User:
    """Staff member who opens tables and tickets."""

    id: int
    username: str
    name: str
    enabled: bool
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Product category domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Product:
    """Catalog product with its authoritative price and stock counter."""

    id: int
    name: str
    price: Decimal
    stock: int
    category_id: Optional[int]


@dataclass(frozen=True)
class Account:
    """Table (tab) domain entity. Open while checkout is None."""

    id: int
    user_id: int
    name: Optional[str]
    checkin: Optional[datetime]
    checkout: Optional[datetime]

    @property
    def is_open(self) -> bool:
        return self.checkout is None


@dataclass(frozen=True)
class Note:
    """Order ticket domain entity. Open while checkout is None."""

    id: int
    user_id: int
    account_id: int
    number_note: int
    status: str
    checkin: Optional[datetime]
    checkout: Optional[datetime]

    @property
    def is_open(self) -> bool:
        return self.checkout is None


@dataclass(frozen=True)
class NoteProduct:
    """Line item on a ticket.

    total is a snapshot of amount * price taken when the row was written.
    note and product are only populated when the row is returned for display.
    """

    id: int
    note_id: int
    product_id: int
    amount: int
    total: Decimal
    note: Optional[Note] = None
    product: Optional[Product] = None
