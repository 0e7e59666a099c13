"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from tabkeeper.domain.entities import (
    User,
    Category,
    Product,
    Account,
    Note,
    NoteProduct,
)


class Database(ABC):
    """Abstract database interface for tabkeeper."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group the enclosed operations into one all-or-nothing unit.

        Commits when the block exits normally and rolls back on any exception.
        Nested blocks join the outermost unit.
        """
        pass

    # User operations
    @abstractmethod
    def create_user(self, username: str, name: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    @abstractmethod
    def update_category_name(self, category_id: int, name: str) -> None:
        """Rename a category."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def get_category_product_count(self, category_id: int) -> int:
        """Get count of products in a category."""
        pass

    # Product operations
    @abstractmethod
    def create_product(
        self, name: str, price: Decimal, stock: int, category_id: Optional[int] = None
    ) -> int:
        """Create a product. Returns product ID."""
        pass

    @abstractmethod
    def get_product(self, product_id: int, for_update: bool = False) -> Optional[Product]:
        """Get product by ID.

        Args:
            product_id: Product ID
            for_update: If True, lock the row for the rest of the current unit
                of work (SELECT ... FOR UPDATE where the backend supports it)
        """
        pass

    @abstractmethod
    def list_products(self, category_id: Optional[int] = None) -> list[Product]:
        """List products, optionally filtered by category."""
        pass

    @abstractmethod
    def update_product(
        self,
        product_id: int,
        name: Optional[str] = None,
        price: Optional[Decimal] = None,
        category_id: Optional[int] = None,
    ) -> None:
        """Update product catalog fields (not stock)."""
        pass

    @abstractmethod
    def set_product_stock(self, product_id: int, stock: int) -> None:
        """Overwrite stock directly. Administrative edit that bypasses the ledger."""
        pass

    @abstractmethod
    def delete_product(self, product_id: int) -> None:
        """Delete a product."""
        pass

    @abstractmethod
    def get_product_line_item_count(self, product_id: int) -> int:
        """Get count of line items referencing a product."""
        pass

    # Stock primitives
    @abstractmethod
    def decrement_stock_if_available(self, product_id: int, amount: int) -> bool:
        """Atomically decrement stock by amount only if stock >= amount.

        Returns:
            True if the row was updated, False if stock was insufficient or the
            product does not exist
        """
        pass

    @abstractmethod
    def increment_stock(self, product_id: int, amount: int) -> None:
        """Atomically increment stock by amount."""
        pass

    @abstractmethod
    def consume_stock(self, product_id: int, amount: int) -> Optional[int]:
        """Subtract amount from stock, clamping at zero.

        Returns:
            The new stock level, or None if the product does not exist
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, user_id: int, name: Optional[str], checkin: datetime) -> int:
        """Create an open account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: Optional[int] = None, open_only: bool = False) -> list[Account]:
        """List accounts with optional filters."""
        pass

    @abstractmethod
    def update_account_name(self, account_id: int, name: Optional[str]) -> None:
        """Rename an account."""
        pass

    @abstractmethod
    def checkout_account_if_open(self, account_id: int, checkout: datetime) -> bool:
        """Set checkout if the account is still open. Returns True if it was."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account row."""
        pass

    # Note operations
    @abstractmethod
    def create_note(
        self,
        user_id: int,
        account_id: int,
        number_note: int,
        status: str,
        checkin: Optional[datetime],
        checkout: Optional[datetime] = None,
    ) -> int:
        """Create a note. Returns note ID."""
        pass

    @abstractmethod
    def get_note(self, note_id: int) -> Optional[Note]:
        """Get note by ID."""
        pass

    @abstractmethod
    def count_notes(self, account_id: int) -> int:
        """Count all notes (open or closed) on an account."""
        pass

    @abstractmethod
    def list_notes(self, account_id: Optional[int] = None, open_only: bool = False) -> list[Note]:
        """List notes with optional filters."""
        pass

    @abstractmethod
    def list_open_notes(self, account_id: int) -> list[Note]:
        """List notes on an account whose checkout is not set."""
        pass

    @abstractmethod
    def update_note_status(self, note_id: int, status: str) -> None:
        """Update note status."""
        pass

    @abstractmethod
    def close_notes(self, note_ids: list[int], checkout: datetime, status: str = "closed") -> int:
        """Bulk set checkout and status on notes that are still open. Returns rows updated."""
        pass

    @abstractmethod
    def delete_note(self, note_id: int) -> None:
        """Delete a note row."""
        pass

    # Line item operations
    @abstractmethod
    def create_line_item(self, note_id: int, product_id: int, amount: int, total: Decimal) -> int:
        """Insert a line item row. Returns line item ID."""
        pass

    @abstractmethod
    def get_line_item(self, line_item_id: int) -> Optional[NoteProduct]:
        """Get a line item joined with its note and product."""
        pass

    @abstractmethod
    def list_line_items(self, note_id: int, product_id: Optional[int] = None) -> list[NoteProduct]:
        """List line items of a note, optionally only those for one product."""
        pass

    @abstractmethod
    def delete_line_items(self, note_id: int, product_id: Optional[int] = None) -> int:
        """Delete line items of a note, optionally only those for one product.

        Returns:
            Number of rows deleted
        """
        pass
