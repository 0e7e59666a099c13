"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ProductNotFoundError(NotFoundError):
    """Referenced product does not exist."""


class NoteNotFoundError(NotFoundError):
    """Referenced note does not exist or is not visible to the caller."""


class AccountNotFoundError(NotFoundError):
    """Referenced account does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InsufficientStockError(ConflictError):
    """Requested reservation exceeds the product's available stock."""

    def __init__(self, product_id: int, requested: int):
        super().__init__(insufficient_stock(product_id, requested))
        self.product_id = product_id
        self.requested = requested


class AccountClosedError(ConflictError):
    """Operation requires an open account."""


class NoteClosedError(ConflictError):
    """Operation requires an open note."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class TransactionConflictError(DomainError):
    """The store rejected the unit of work; retry the whole operation."""


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def product_not_found(product_id: int) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def note_not_found(note_id: int) -> str:
    """Return message for missing note."""
    return f"Note {note_id} not found"


def account_closed(account_id: int) -> str:
    """Return message for an account that has already been checked out."""
    return f"Account {account_id} is closed"


def note_closed(note_id: int) -> str:
    """Return message for a note that has already been checked out."""
    return f"Note {note_id} is closed"


def insufficient_stock(product_id: int, requested: int) -> str:
    """Return message when stock cannot cover a reservation."""
    return f"Insufficient stock for product {product_id}: requested {requested}"


def invalid_amount(amount: int) -> str:
    """Return message for a line item amount below one."""
    return f"Amount must be at least 1, got {amount}"


def dependency_blocked(kind: str, entity_id: int, count: int, dependent: str) -> str:
    """Return message when an entity still has dependent rows."""
    return (
        f"Cannot delete {kind} {entity_id}: it has {count} "
        f"{dependent}{'s' if count != 1 else ''}. Please remove them first."
    )
