"""Account (table) domain service."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from tabkeeper.database.base import Database
from tabkeeper.domain.entities import Account as AccountEntity, utcnow
from tabkeeper.domain.errors import (
    AccountClosedError,
    AccountNotFoundError,
    NotFoundError,
    account_closed,
    account_not_found,
    user_not_found,
)
from tabkeeper.domain.ledger import StockLedgerService


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = StockLedgerService(db)

    def open_account(self, user_id: int, name: Optional[str] = None) -> int:
        """Open a new account for a user.

        Args:
            user_id: Owner user ID
            name: Optional display name (e.g. "Table 4")

        Returns:
            Account ID

        Raises:
            NotFoundError: If user doesn't exist
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        return self.db.create_account(user_id=user_id, name=name, checkin=utcnow())

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, user_id: Optional[int] = None, open_only: bool = False) -> list[AccountEntity]:
        """List accounts.

        Args:
            user_id: Optional owner to filter by
            open_only: If True, only accounts without a checkout

        Returns:
            List of account entities
        """
        return self.db.list_accounts(user_id=user_id, open_only=open_only)

    def rename_account(self, account_id: int, name: Optional[str]) -> None:
        """Rename an account.

        Raises:
            AccountNotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise AccountNotFoundError(account_not_found(account_id))
        self.db.update_account_name(account_id, name)

    def close_account(self, account_id: int, checkout: Optional[datetime] = None) -> int:
        """Check out an account and every open note on it.

        The account checkout is the first write of the unit of work and only
        succeeds while the account is open, so of two concurrent closes
        exactly one runs the note cascade. The checkout and the cascade commit
        together.

        Args:
            account_id: Account ID
            checkout: Checkout timestamp, defaults to now

        Returns:
            Number of notes closed by the cascade

        Raises:
            AccountNotFoundError: If account doesn't exist
            AccountClosedError: If account is already closed
        """
        if checkout is None:
            checkout = utcnow()

        with self.db.atomic():
            if not self.db.checkout_account_if_open(account_id, checkout):
                if self.db.get_account(account_id) is None:
                    raise AccountNotFoundError(account_not_found(account_id))
                raise AccountClosedError(account_closed(account_id))
            closed = self.ledger.close_account(account_id, checkout)
        return closed

    def delete_account(self, account_id: int) -> None:
        """Delete an account together with its notes and their line items.

        Line items removed this way do not return stock.

        Raises:
            AccountNotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise AccountNotFoundError(account_not_found(account_id))

        with self.db.atomic():
            for note in self.db.list_notes(account_id=account_id):
                self.ledger.remove_all_line_items(note.id)
                self.db.delete_note(note.id)
            self.db.delete_account(account_id)

    def account_total(self, account_id: int) -> Decimal:
        """Sum of the totals of every note on the account.

        Raises:
            AccountNotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise AccountNotFoundError(account_not_found(account_id))
        notes = self.db.list_notes(account_id=account_id)
        return sum((self.ledger.note_total(note.id) for note in notes), Decimal("0"))
