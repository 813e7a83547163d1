"""SQLAlchemy models for moneybook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class User(Base):
    """User model holding login and credential hashes."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    login = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    token_hash = Column(String, unique=True, nullable=True)
    token_expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="user")
    tiers = relationship("Tiers", back_populates="user")


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(String, nullable=False)
    bank_name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Holds under both account scopes; the stricter description-only scope is
    # checked by the service
    __table_args__ = (
        UniqueConstraint("user_id", "description", "bank_name", name="uq_accounts_user_description_bank"),
    )

    # Relationships
    user = relationship("User", back_populates="accounts")
    movements = relationship("Movement", back_populates="account")


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    sub_categories = relationship("SubCategory", back_populates="category")


class SubCategory(Base):
    """Sub-category model; the parent category is mandatory."""

    __tablename__ = "sub_categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("category_id", "name", name="uq_sub_categories_category_name"),)

    # Relationships
    category = relationship("Category", back_populates="sub_categories")


class Tiers(Base):
    """Counterparty model."""

    __tablename__ = "tiers"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_tiers_user_name"),)

    # Relationships
    user = relationship("User", back_populates="tiers")


class Transfer(Base):
    """Transfer model: one record per transfer, no movement legs."""

    __tablename__ = "transfers"

    id = Column(Integer, primary_key=True)
    debit_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    credit_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)
    tiers_id = Column(Integer, ForeignKey("tiers.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Movement(Base):
    """Movement model."""

    __tablename__ = "movements"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    tiers_id = Column(Integer, ForeignKey("tiers.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    sub_category_id = Column(Integer, ForeignKey("sub_categories.id"), nullable=True)
    transfer_id = Column(Integer, ForeignKey("transfers.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String(1), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="movements")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """Create a SQLAlchemy engine for the given URL."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Handlers run in a threadpool; sessions are per call, never shared.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=False, connect_args=connect_args)
