"""SQLAlchemy models for tabkeeper database."""

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    CheckConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from tabkeeper.domain.entities import utcnow

Base = declarative_base()


class User(Base):
    """Staff user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="user")


class Category(Base):
    """Product category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    products = relationship("Product", back_populates="category")


class Product(Base):
    """Catalog product model. stock is the single authoritative counter."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),)

    # Relationships
    category = relationship("Category", back_populates="products")
    note_products = relationship("NoteProduct", back_populates="product")


class Account(Base):
    """Table (tab) model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String, nullable=True)
    checkin = Column(DateTime, nullable=True)
    checkout = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="accounts")
    notes = relationship("Note", back_populates="account", cascade="all, delete-orphan")


class Note(Base):
    """Order ticket model."""

    __tablename__ = "notes"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    number_note = Column(Integer, nullable=False)
    status = Column(String, default="open", nullable=False)
    checkin = Column(DateTime, nullable=True)
    checkout = Column(DateTime, nullable=True)

    # Relationships
    account = relationship("Account", back_populates="notes")
    note_products = relationship("NoteProduct", back_populates="note", cascade="all, delete-orphan")


class NoteProduct(Base):
    """Line item model. No uniqueness on (note_id, product_id)."""

    __tablename__ = "note_products"

    id = Column(Integer, primary_key=True)
    note_id = Column(Integer, ForeignKey("notes.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (CheckConstraint("amount >= 1", name="ck_note_product_amount_positive"),)

    # Relationships
    note = relationship("Note", back_populates="note_products")
    product = relationship("Product", back_populates="note_products")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
