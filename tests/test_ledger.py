"""Tests for the stock ledger line item operations."""

import pytest
from decimal import Decimal

from tabkeeper.domain import entities
from tabkeeper.domain.errors import (
    InsufficientStockError,
    NoteNotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from tabkeeper.domain.ledger import aggregate_amounts


class TestAddLineItem:
    """Tests for reserving stock when adding a line item."""

    def test_add_reserves_stock_and_prices_line(self, ledger, sample_note, sample_product, stock_of):
        """Adding decrements stock and snapshots amount * price."""
        line = ledger.add_line_item(sample_note.id, sample_product.id, 4)

        assert isinstance(line, entities.NoteProduct)
        assert line.amount == 4
        assert line.total == Decimal("8.00")
        assert stock_of(sample_product.id) == 6

    def test_add_returns_joined_note_and_product(self, ledger, sample_note, sample_product):
        """The created line item carries its note and the current product."""
        line = ledger.add_line_item(sample_note.id, sample_product.id, 3)

        assert line.note is not None
        assert line.note.id == sample_note.id
        assert line.product is not None
        assert line.product.id == sample_product.id
        assert line.product.stock == 7

    def test_add_insufficient_stock_has_no_effect(
        self, ledger, temp_db, sample_note, product_service, stock_of
    ):
        """A failed reservation leaves stock and line items untouched."""
        product_id = product_service.create_product(name="Pie", price=Decimal("4.50"), stock=2)

        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.add_line_item(sample_note.id, product_id, 5)

        assert exc_info.value.product_id == product_id
        assert exc_info.value.requested == 5
        assert stock_of(product_id) == 2
        assert temp_db.list_line_items(sample_note.id) == []

    def test_add_exactly_remaining_stock(self, ledger, sample_note, sample_product, stock_of):
        """Stock may be reserved down to zero but never below."""
        ledger.add_line_item(sample_note.id, sample_product.id, 10)
        assert stock_of(sample_product.id) == 0

        with pytest.raises(InsufficientStockError):
            ledger.add_line_item(sample_note.id, sample_product.id, 1)
        assert stock_of(sample_product.id) == 0

    def test_add_unknown_product(self, ledger, sample_note):
        """Adding a missing product fails with ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError):
            ledger.add_line_item(sample_note.id, 999, 1)

    def test_add_unknown_note(self, ledger, temp_db, sample_product, stock_of):
        """Adding to a missing note fails without touching stock."""
        with pytest.raises(NoteNotFoundError):
            ledger.add_line_item(999, sample_product.id, 1)
        assert stock_of(sample_product.id) == 10

    @pytest.mark.parametrize("amount", [0, -3])
    def test_add_rejects_amount_below_one(self, ledger, sample_note, sample_product, amount):
        """Amounts below one are rejected before any stock movement."""
        with pytest.raises(ValidationError):
            ledger.add_line_item(sample_note.id, sample_product.id, amount)

    def test_add_uses_price_at_add_time(
        self, ledger, temp_db, product_service, sample_note, sample_product
    ):
        """A later price change does not reprice earlier rows."""
        ledger.add_line_item(sample_note.id, sample_product.id, 2)
        product_service.update_product(sample_product.id, price=Decimal("3.00"))

        (line,) = temp_db.list_line_items(sample_note.id)
        assert line.total == Decimal("4.00")

    def test_repeated_add_creates_duplicate_rows(self, ledger, temp_db, sample_note, sample_product):
        """Independent adds of the same product are separate rows."""
        ledger.add_line_item(sample_note.id, sample_product.id, 2)
        ledger.add_line_item(sample_note.id, sample_product.id, 2)

        rows = temp_db.list_line_items(sample_note.id, sample_product.id)
        assert len(rows) == 2
        assert ledger.reserved_amount(sample_note.id, sample_product.id) == 4


class TestUpdateLineItem:
    """Tests for adjusting a reservation."""

    def test_update_same_amount_leaves_stock(self, ledger, sample_note, sample_product, stock_of):
        """Updating to the current amount moves no stock."""
        ledger.add_line_item(sample_note.id, sample_product.id, 5)
        after_add = stock_of(sample_product.id)

        line = ledger.update_line_item(sample_note.id, sample_product.id, 5)

        assert line.amount == 5
        assert stock_of(sample_product.id) == after_add

    def test_update_increase_and_decrease(self, ledger, sample_note, sample_product, stock_of):
        """Net reserved stock always equals the latest amount."""
        ledger.add_line_item(sample_note.id, sample_product.id, 3)
        assert stock_of(sample_product.id) == 7

        ledger.update_line_item(sample_note.id, sample_product.id, 7)
        assert stock_of(sample_product.id) == 3

        ledger.update_line_item(sample_note.id, sample_product.id, 2)
        assert stock_of(sample_product.id) == 8

    def test_update_increase_beyond_stock_fails_cleanly(
        self, ledger, temp_db, sample_note, sample_product, stock_of
    ):
        """An increase that stock cannot cover leaves the old rows in place."""
        ledger.add_line_item(sample_note.id, sample_product.id, 3)

        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.update_line_item(sample_note.id, sample_product.id, 11)

        assert exc_info.value.requested == 8
        assert stock_of(sample_product.id) == 7
        rows = temp_db.list_line_items(sample_note.id, sample_product.id)
        assert [row.amount for row in rows] == [3]

    def test_update_aggregates_duplicate_rows(
        self, ledger, temp_db, sample_note, sample_product, stock_of
    ):
        """Two rows of 2 count as 4; updating to 1 returns 3 units."""
        ledger.add_line_item(sample_note.id, sample_product.id, 2)
        ledger.add_line_item(sample_note.id, sample_product.id, 2)
        assert stock_of(sample_product.id) == 6

        line = ledger.update_line_item(sample_note.id, sample_product.id, 1)

        assert stock_of(sample_product.id) == 9
        assert line.amount == 1
        rows = temp_db.list_line_items(sample_note.id, sample_product.id)
        assert len(rows) == 1
        assert rows[0].amount == 1

    def test_update_reprices_at_current_price(
        self, ledger, product_service, sample_note, sample_product
    ):
        """Unlike add, update uses the price at update time."""
        ledger.add_line_item(sample_note.id, sample_product.id, 2)
        product_service.update_product(sample_product.id, price=Decimal("2.50"))

        line = ledger.update_line_item(sample_note.id, sample_product.id, 2)

        assert line.total == Decimal("5.00")

    def test_update_without_existing_rows_reserves_full_amount(
        self, ledger, sample_note, sample_product, stock_of
    ):
        """Updating a product not yet on the note behaves like an add."""
        line = ledger.update_line_item(sample_note.id, sample_product.id, 3)

        assert line.amount == 3
        assert stock_of(sample_product.id) == 7

    def test_update_unknown_product_changes_nothing(
        self, ledger, temp_db, sample_note, sample_product, stock_of
    ):
        """A missing product is reported before any mutation."""
        ledger.add_line_item(sample_note.id, sample_product.id, 3)

        with pytest.raises(ProductNotFoundError):
            ledger.update_line_item(sample_note.id, 999, 1)

        assert stock_of(sample_product.id) == 7
        assert len(temp_db.list_line_items(sample_note.id)) == 1

    def test_update_unknown_note(self, ledger, temp_db, sample_product, stock_of):
        """Updating on a missing note fails before any stock moves."""
        with pytest.raises(NoteNotFoundError):
            ledger.update_line_item(9999, sample_product.id, 3)

        assert stock_of(sample_product.id) == 10
        assert temp_db.list_line_items(9999) == []

    def test_update_rejects_amount_below_one(self, ledger, sample_note, sample_product):
        with pytest.raises(ValidationError):
            ledger.update_line_item(sample_note.id, sample_product.id, 0)


class TestRemoveLineItem:
    """Tests for releasing a reservation."""

    def test_remove_restores_stock(self, ledger, temp_db, sample_note, sample_product, stock_of):
        """Removing a line item returns its full amount to stock."""
        ledger.add_line_item(sample_note.id, sample_product.id, 4)

        restored = ledger.remove_line_item(sample_note.id, sample_product.id)

        assert restored == 4
        assert stock_of(sample_product.id) == 10
        assert temp_db.list_line_items(sample_note.id) == []

    def test_remove_restores_all_duplicate_rows(self, ledger, sample_note, sample_product, stock_of):
        """Every duplicate row contributes to the restored amount."""
        ledger.add_line_item(sample_note.id, sample_product.id, 1)
        ledger.add_line_item(sample_note.id, sample_product.id, 2)

        assert ledger.remove_line_item(sample_note.id, sample_product.id) == 3
        assert stock_of(sample_product.id) == 10

    def test_remove_missing_is_noop(self, ledger, sample_note, sample_product, stock_of):
        """Removing a product that is not on the note changes nothing."""
        assert ledger.remove_line_item(sample_note.id, sample_product.id) == 0
        assert stock_of(sample_product.id) == 10

    def test_remove_twice_same_as_once(self, ledger, sample_note, sample_product, stock_of):
        """Release is idempotent."""
        ledger.add_line_item(sample_note.id, sample_product.id, 4)

        ledger.remove_line_item(sample_note.id, sample_product.id)
        after_first = stock_of(sample_product.id)
        ledger.remove_line_item(sample_note.id, sample_product.id)

        assert stock_of(sample_product.id) == after_first == 10

    def test_remove_only_touches_one_product(
        self, ledger, temp_db, product_service, sample_note, sample_product, stock_of
    ):
        """Other products on the same note keep their reservation."""
        other_id = product_service.create_product(name="Tea", price=Decimal("1.50"), stock=5)
        ledger.add_line_item(sample_note.id, sample_product.id, 2)
        ledger.add_line_item(sample_note.id, other_id, 2)

        ledger.remove_line_item(sample_note.id, sample_product.id)

        assert stock_of(other_id) == 3
        assert [row.product_id for row in temp_db.list_line_items(sample_note.id)] == [other_id]


class TestRemoveAllLineItems:
    """Tests for the note hard-delete path."""

    def test_remove_all_does_not_restore_stock(
        self, ledger, temp_db, sample_note, sample_product, stock_of
    ):
        """Unlike remove_line_item, clearing a note keeps stock reserved."""
        ledger.add_line_item(sample_note.id, sample_product.id, 4)

        deleted = ledger.remove_all_line_items(sample_note.id)

        assert deleted == 1
        assert temp_db.list_line_items(sample_note.id) == []
        assert stock_of(sample_product.id) == 6

    def test_remove_all_on_empty_note(self, ledger, sample_note):
        assert ledger.remove_all_line_items(sample_note.id) == 0


def test_scenario_add_update_remove(ledger, temp_db, product_service, sample_note, stock_of):
    """Stock 10 at 2.00: add 4, update to 2, remove."""
    product_id = product_service.create_product(name="Soda", price=Decimal("2.00"), stock=10)

    line = ledger.add_line_item(sample_note.id, product_id, 4)
    assert stock_of(product_id) == 6
    assert (line.amount, line.total) == (4, Decimal("8.00"))

    line = ledger.update_line_item(sample_note.id, product_id, 2)
    assert stock_of(product_id) == 8
    assert (line.amount, line.total) == (2, Decimal("4.00"))

    ledger.remove_line_item(sample_note.id, product_id)
    assert stock_of(product_id) == 10
    assert temp_db.list_line_items(sample_note.id) == []


def test_note_total_sums_snapshots(ledger, product_service, sample_note, sample_product):
    """The note total is the sum of line totals."""
    other_id = product_service.create_product(name="Tea", price=Decimal("1.50"), stock=5)
    ledger.add_line_item(sample_note.id, sample_product.id, 2)
    ledger.add_line_item(sample_note.id, other_id, 3)

    assert ledger.note_total(sample_note.id) == Decimal("8.50")


def test_aggregate_amounts():
    """Amounts are summed per product."""
    items = [
        entities.NoteProduct(id=1, note_id=1, product_id=5, amount=2, total=Decimal("4")),
        entities.NoteProduct(id=2, note_id=1, product_id=6, amount=1, total=Decimal("3")),
        entities.NoteProduct(id=3, note_id=1, product_id=5, amount=3, total=Decimal("6")),
    ]

    assert aggregate_amounts(items) == {5: 5, 6: 1}
    assert aggregate_amounts([]) == {}
