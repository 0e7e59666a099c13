"""Stock ledger domain service.

Every operation here keeps product stock consistent with the line items it
creates or destroys. Each one runs inside a single ``Database.atomic()``
unit, so a failed stock primitive leaves nothing behind. Concurrent callers
are serialized only by the database: the conditional decrement is the one
guard against overselling, and no in-process lock is taken.
"""

import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from tabkeeper.database.base import Database
from tabkeeper.domain.entities import NoteProduct, utcnow
from tabkeeper.domain.errors import (
    InsufficientStockError,
    NoteNotFoundError,
    ProductNotFoundError,
    ValidationError,
    invalid_amount,
    note_not_found,
    product_not_found,
)

logger = logging.getLogger(__name__)

CLOSED_STATUS = "closed"


def aggregate_amounts(line_items: Iterable[NoteProduct]) -> dict[int, int]:
    """Sum line item amounts per product.

    Duplicate rows for the same (note, product) pair are legal, so any
    quantity lookup has to go through this.

    Args:
        line_items: Line items, possibly with several rows per product

    Returns:
        Mapping of product ID to total amount
    """
    totals: dict[int, int] = defaultdict(int)
    for item in line_items:
        totals[item.product_id] += item.amount
    return dict(totals)


class StockLedgerService:
    """Service that reserves, adjusts, releases and consumes product stock."""

    def __init__(self, db: Database):
        """Initialize stock ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    @staticmethod
    def _validate_amount(amount: int) -> None:
        if amount < 1:
            raise ValidationError(invalid_amount(amount))

    def add_line_item(self, note_id: int, product_id: int, amount: int) -> NoteProduct:
        """Add a line item to a note, reserving its stock.

        The total is always computed from the product's current price.

        Args:
            note_id: Note ID
            product_id: Product ID
            amount: Quantity to reserve (at least 1)

        Returns:
            The created line item, joined with its note and product

        Raises:
            ValidationError: If amount is below 1
            NoteNotFoundError: If the note doesn't exist
            ProductNotFoundError: If the product doesn't exist
            InsufficientStockError: If stock cannot cover amount
        """
        self._validate_amount(amount)

        with self.db.atomic():
            if self.db.get_note(note_id) is None:
                raise NoteNotFoundError(note_not_found(note_id))

            product = self.db.get_product(product_id)
            if product is None:
                raise ProductNotFoundError(product_not_found(product_id))

            if not self.db.decrement_stock_if_available(product_id, amount):
                raise InsufficientStockError(product_id, amount)

            line_item_id = self.db.create_line_item(
                note_id=note_id,
                product_id=product_id,
                amount=amount,
                total=product.price * amount,
            )
            line_item = self.db.get_line_item(line_item_id)

        logger.info("Reserved %s of product %s on note %s", amount, product_id, note_id)
        return line_item

    def update_line_item(self, note_id: int, product_id: int, amount: int) -> NoteProduct:
        """Replace the quantity of a product on a note.

        All existing rows for the pair are summed, stock is moved by the
        difference, and the rows are replaced by a single row priced at the
        product's current price.

        Args:
            note_id: Note ID
            product_id: Product ID
            amount: New quantity (at least 1)

        Returns:
            The replacement line item, joined with its note and product

        Raises:
            ValidationError: If amount is below 1
            NoteNotFoundError: If the note doesn't exist
            ProductNotFoundError: If the product doesn't exist
            InsufficientStockError: If stock cannot cover an increase
        """
        self._validate_amount(amount)

        with self.db.atomic():
            if self.db.get_note(note_id) is None:
                raise NoteNotFoundError(note_not_found(note_id))

            # Row lock serializes concurrent updates of the same product
            product = self.db.get_product(product_id, for_update=True)
            if product is None:
                raise ProductNotFoundError(product_not_found(product_id))

            existing = self.reserved_amount(note_id, product_id)
            difference = amount - existing

            if difference > 0:
                if not self.db.decrement_stock_if_available(product_id, difference):
                    raise InsufficientStockError(product_id, difference)
            elif difference < 0:
                self.db.increment_stock(product_id, -difference)

            self.db.delete_line_items(note_id, product_id)
            line_item_id = self.db.create_line_item(
                note_id=note_id,
                product_id=product_id,
                amount=amount,
                total=product.price * amount,
            )
            line_item = self.db.get_line_item(line_item_id)

        logger.info(
            "Updated product %s on note %s from %s to %s", product_id, note_id, existing, amount
        )
        return line_item

    def remove_line_item(self, note_id: int, product_id: int) -> int:
        """Remove a product from a note, releasing all of its reserved stock.

        Removing a product that is not on the note is a no-op.

        Returns:
            Amount of stock returned to the product
        """
        with self.db.atomic():
            amount_to_restore = self.reserved_amount(note_id, product_id)
            if amount_to_restore == 0:
                return 0
            self.db.delete_line_items(note_id, product_id)
            self.db.increment_stock(product_id, amount_to_restore)

        logger.info("Released %s of product %s from note %s", amount_to_restore, product_id, note_id)
        return amount_to_restore

    def remove_all_line_items(self, note_id: int) -> int:
        """Delete every line item on a note.

        Unlike remove_line_item, this does not return reserved stock to the
        products. It is the note hard-delete path.

        Returns:
            Number of rows deleted
        """
        with self.db.atomic():
            deleted = self.db.delete_line_items(note_id)
        return deleted

    def close_account(self, account_id: int, checkout: Optional[datetime] = None) -> int:
        """Close every open note on an account and consume its stock.

        For each open note the line items are aggregated per product and
        the stock is reduced again by that amount (clamped at zero), on top
        of the reservation taken when the items were added. Line items are
        kept and the account's own checkout is left to the caller.

        Args:
            account_id: Account ID
            checkout: Checkout timestamp applied to every closed note

        Returns:
            Number of notes closed
        """
        if checkout is None:
            checkout = utcnow()

        with self.db.atomic():
            open_notes = self.db.list_open_notes(account_id)
            if not open_notes:
                return 0

            closed = 0
            for note in open_notes:
                # Skip notes a concurrent caller already closed
                if not self.db.close_notes([note.id], checkout, CLOSED_STATUS):
                    continue
                closed += 1
                consumed = aggregate_amounts(self.db.list_line_items(note.id))
                for product_id, amount in consumed.items():
                    self.db.consume_stock(product_id, amount)

        logger.info("Closed %s open note(s) on account %s", closed, account_id)
        return closed

    def reserved_amount(self, note_id: int, product_id: int) -> int:
        """Total amount of a product currently on a note, across duplicate rows."""
        items = self.db.list_line_items(note_id, product_id)
        return aggregate_amounts(items).get(product_id, 0)

    def note_total(self, note_id: int) -> Decimal:
        """Sum of the snapshot totals of a note's line items."""
        return sum((item.total for item in self.db.list_line_items(note_id)), Decimal("0"))
