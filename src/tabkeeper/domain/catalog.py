"""Category and product domain services."""

from decimal import Decimal
from typing import Optional
from tabkeeper.database.base import Database
from tabkeeper.domain.entities import Category as CategoryEntity, Product as ProductEntity
from tabkeeper.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ProductNotFoundError,
    ValidationError,
    category_not_found,
    dependency_blocked,
    product_not_found,
)


class CategoryService:
    """Service for managing product categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str) -> int:
        """Create a category.

        Raises:
            ValidationError: If name is empty
            ConflictError: If a category with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name must not be empty")
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(f"Category with name '{name}' already exists")
        return self.db.create_category(name=name)

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[CategoryEntity]:
        """Get category by name."""
        return self.db.get_category_by_name(name)

    def list_categories(self) -> list[CategoryEntity]:
        """List all categories."""
        return self.db.list_categories()

    def rename_category(self, category_id: int, name: str) -> None:
        """Rename a category.

        Raises:
            NotFoundError: If category doesn't exist
            ConflictError: If another category already uses the name
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        existing = self.db.get_category_by_name(name)
        if existing is not None and existing.id != category_id:
            raise ConflictError(f"Category with name '{name}' already exists")
        self.db.update_category_name(category_id, name)

    def delete_category(self, category_id: int) -> None:
        """Delete a category that no product uses.

        Raises:
            NotFoundError: If category doesn't exist
            DependencyError: If products still reference it
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        count = self.db.get_category_product_count(category_id)
        if count > 0:
            raise DependencyError(dependency_blocked("category", category_id, count, "product"))
        self.db.delete_category(category_id)


class ProductService:
    """Service for managing the product catalog.

    Stock is only read here, apart from the administrative set_stock edit.
    Reservations go through StockLedgerService.
    """

    def __init__(self, db: Database):
        """Initialize product service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_category(self, category_id: Optional[int]) -> None:
        if category_id is not None and self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    @staticmethod
    def _check_price(price: Decimal) -> None:
        if price < 0:
            raise ValidationError(f"Price must not be negative, got {price}")

    @staticmethod
    def _check_stock(stock: int) -> None:
        if stock < 0:
            raise ValidationError(f"Stock must not be negative, got {stock}")

    def create_product(
        self, name: str, price: Decimal, stock: int = 0, category_id: Optional[int] = None
    ) -> int:
        """Create a product.

        Args:
            name: Product name
            price: Unit price
            stock: Initial stock
            category_id: Optional category ID

        Returns:
            Product ID

        Raises:
            ValidationError: If price or stock is negative
            NotFoundError: If category doesn't exist
        """
        self._check_price(price)
        self._check_stock(stock)
        self._check_category(category_id)
        return self.db.create_product(name=name, price=price, stock=stock, category_id=category_id)

    def get_product(self, product_id: int) -> Optional[ProductEntity]:
        """Get product by ID."""
        return self.db.get_product(product_id)

    def list_products(self, category_id: Optional[int] = None) -> list[ProductEntity]:
        """List products, optionally only those in one category."""
        return self.db.list_products(category_id=category_id)

    def update_product(
        self,
        product_id: int,
        name: Optional[str] = None,
        price: Optional[Decimal] = None,
        category_id: Optional[int] = None,
    ) -> None:
        """Update catalog fields of a product.

        A price change does not touch the totals of existing line items.

        Raises:
            ProductNotFoundError: If product doesn't exist
            ValidationError: If price is negative
            NotFoundError: If category doesn't exist
        """
        if self.db.get_product(product_id) is None:
            raise ProductNotFoundError(product_not_found(product_id))
        if price is not None:
            self._check_price(price)
        self._check_category(category_id)
        self.db.update_product(product_id, name=name, price=price, category_id=category_id)

    def set_stock(self, product_id: int, stock: int) -> None:
        """Overwrite a product's stock (restock or inventory count).

        Raises:
            ProductNotFoundError: If product doesn't exist
            ValidationError: If stock is negative
        """
        if self.db.get_product(product_id) is None:
            raise ProductNotFoundError(product_not_found(product_id))
        self._check_stock(stock)
        self.db.set_product_stock(product_id, stock)

    def delete_product(self, product_id: int) -> None:
        """Delete a product that is not on any note.

        Raises:
            ProductNotFoundError: If product doesn't exist
            DependencyError: If line items still reference it
        """
        if self.db.get_product(product_id) is None:
            raise ProductNotFoundError(product_not_found(product_id))
        count = self.db.get_product_line_item_count(product_id)
        if count > 0:
            raise DependencyError(dependency_blocked("product", product_id, count, "line item"))
        self.db.delete_product(product_id)
