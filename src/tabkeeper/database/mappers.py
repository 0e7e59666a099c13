"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so ORM rows never leak out of the
database package.
"""

from tabkeeper.domain import entities as domain
from tabkeeper.database.models import (
    User as ORMUser,
    Category as ORMCategory,
    Product as ORMProduct,
    Account as ORMAccount,
    Note as ORMNote,
    NoteProduct as ORMNoteProduct,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        name=orm_user.name,
        enabled=orm_user.enabled,
        created_at=orm_user.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        created_at=orm_category.created_at,
    )


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product entity."""
    return domain.Product(
        id=orm_product.id,
        name=orm_product.name,
        price=orm_product.price,
        stock=orm_product.stock,
        category_id=orm_product.category_id,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        checkin=orm_account.checkin,
        checkout=orm_account.checkout,
    )


def note_to_domain(orm_note: ORMNote) -> domain.Note:
    """Convert SQLAlchemy Note model to domain Note entity."""
    return domain.Note(
        id=orm_note.id,
        user_id=orm_note.user_id,
        account_id=orm_note.account_id,
        number_note=orm_note.number_note,
        status=orm_note.status,
        checkin=orm_note.checkin,
        checkout=orm_note.checkout,
    )


def note_product_to_domain(orm_item: ORMNoteProduct, include_related: bool = False) -> domain.NoteProduct:
    """Convert SQLAlchemy NoteProduct model to domain NoteProduct entity.

    Args:
        orm_item: ORM line item row
        include_related: If True, also map the owning note and the product
    """
    return domain.NoteProduct(
        id=orm_item.id,
        note_id=orm_item.note_id,
        product_id=orm_item.product_id,
        amount=orm_item.amount,
        total=orm_item.total,
        note=note_to_domain(orm_item.note) if include_related else None,
        product=product_to_domain(orm_item.product) if include_related else None,
    )
