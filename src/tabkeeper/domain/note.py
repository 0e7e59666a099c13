"""Note (ticket) domain service."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from tabkeeper.database.base import Database
from tabkeeper.domain.entities import Note as NoteEntity, utcnow
from tabkeeper.domain.errors import (
    AccountClosedError,
    AccountNotFoundError,
    NoteClosedError,
    NoteNotFoundError,
    ValidationError,
    account_closed,
    account_not_found,
    note_closed,
    note_not_found,
)
from tabkeeper.domain.ledger import CLOSED_STATUS, StockLedgerService

DEFAULT_STATUS = "open"


class NoteService:
    """Service for managing notes (order tickets)."""

    def __init__(self, db: Database):
        """Initialize note service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = StockLedgerService(db)

    def create_note(
        self,
        account_id: int,
        user_id: int,
        status: Optional[str] = None,
        checkout: Optional[datetime] = None,
    ) -> int:
        """Open a new note on an account.

        The note number is one more than the number of notes already on the
        account. It is a best-effort sequence: two concurrent creations can
        be given the same number.

        Args:
            account_id: Account ID
            user_id: ID of the user opening the note
            status: Optional status, defaults to "open"
            checkout: Optional checkout timestamp

        Returns:
            Note ID

        Raises:
            AccountNotFoundError: If account doesn't exist
            AccountClosedError: If account is already checked out
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        if not account.is_open:
            raise AccountClosedError(account_closed(account_id))

        number_note = self.db.count_notes(account_id) + 1
        return self.db.create_note(
            user_id=user_id,
            account_id=account_id,
            number_note=number_note,
            status=status or DEFAULT_STATUS,
            checkin=utcnow(),
            checkout=checkout,
        )

    def get_note(self, note_id: int) -> Optional[NoteEntity]:
        """Get note by ID.

        Args:
            note_id: Note ID

        Returns:
            Note entity or None if not found
        """
        return self.db.get_note(note_id)

    def get_note_for_user(self, note_id: int, user_id: int) -> NoteEntity:
        """Get a note, checking that its account belongs to the user.

        A note owned by someone else is reported as missing.

        Raises:
            NoteNotFoundError: If note doesn't exist or isn't the user's
        """
        note = self.db.get_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_not_found(note_id))
        account = self.db.get_account(note.account_id)
        if account is None or account.user_id != user_id:
            raise NoteNotFoundError(note_not_found(note_id))
        return note

    def list_notes(self, account_id: Optional[int] = None, open_only: bool = False) -> list[NoteEntity]:
        """List notes.

        Args:
            account_id: Optional account ID to filter by
            open_only: If True, only notes without a checkout

        Returns:
            List of note entities
        """
        return self.db.list_notes(account_id=account_id, open_only=open_only)

    def require_open_note(self, note_id: int) -> NoteEntity:
        """Return a note that can still be edited.

        Raises:
            NoteNotFoundError: If note doesn't exist
            NoteClosedError: If note or its account is closed
        """
        note = self.db.get_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_not_found(note_id))
        account = self.db.get_account(note.account_id)
        if not note.is_open or account is None or not account.is_open:
            raise NoteClosedError(note_closed(note_id))
        return note

    def update_status(self, note_id: int, status: str) -> None:
        """Change the free-form status of an open note.

        Raises:
            ValidationError: If status is empty
            NoteNotFoundError: If note doesn't exist
            NoteClosedError: If note or its account is closed
        """
        if not status or not status.strip():
            raise ValidationError("Status must not be empty")
        self.require_open_note(note_id)
        self.db.update_note_status(note_id, status.strip())

    def close_note(self, note_id: int, checkout: Optional[datetime] = None) -> None:
        """Close a single note.

        Only the account close-out consumes stock; closing one note directly
        just stamps it.

        Raises:
            NoteNotFoundError: If note doesn't exist
            NoteClosedError: If note or its account is already closed
        """
        self.require_open_note(note_id)
        if checkout is None:
            checkout = utcnow()
        if not self.db.close_notes([note_id], checkout, CLOSED_STATUS):
            raise NoteClosedError(note_closed(note_id))

    def delete_note(self, note_id: int) -> None:
        """Delete a note and its line items.

        Reserved stock is not returned to the products.

        Raises:
            NoteNotFoundError: If note doesn't exist
        """
        note = self.db.get_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_not_found(note_id))

        with self.db.atomic():
            self.ledger.remove_all_line_items(note_id)
            self.db.delete_note(note_id)

    def note_total(self, note_id: int) -> Decimal:
        """Get the billed total of a note.

        Raises:
            NoteNotFoundError: If note doesn't exist
        """
        if self.db.get_note(note_id) is None:
            raise NoteNotFoundError(note_not_found(note_id))
        return self.ledger.note_total(note_id)
