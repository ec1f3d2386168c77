"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Boolean,
    Integer,
    Text,
    ForeignKey,
    Numeric,
    Index,
    UniqueConstraint,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from finledger.core.timezone import now_local
from finledger.repositories.sqlalchemy.database import Base
from finledger.domain.models.enums import (
    AccountType,
    BudgetPeriod,
    CategoryType,
    TransactionType,
)

MONEY = Numeric(precision=18, scale=2, asdecimal=True)


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    account_type = Column(SqlEnum(AccountType), nullable=False, default=AccountType.BANK_ACCOUNT)
    balance = Column(MONEY, nullable=False, default=Decimal("0"))
    opening_balance = Column(MONEY, nullable=False, default=Decimal("0"))
    currency = Column(String(3), nullable=False, default="USD")
    is_active = Column(Boolean, nullable=False, default=True)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=now_local)


class CategoryORM(Base):
    """SQLAlchemy model for Category."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", "category_type", name="uq_category_owner_name_type"),
    )

    category_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    category_type = Column(SqlEnum(CategoryType), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    color = Column(String(16), nullable=True)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_owner_date", "owner_id", "txn_date"),
        Index("ix_transactions_category_date", "category_id", "txn_date"),
    )

    txn_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    amount = Column(MONEY, nullable=False)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False, index=True)
    to_account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=True, index=True)
    category_id = Column(String(36), ForeignKey("categories.category_id"), nullable=True)
    txn_date = Column(Date, nullable=False)
    description = Column(String(200), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_local)
    updated_at = Column(DateTime, nullable=True, onupdate=now_local)

    account = relationship("AccountORM", foreign_keys=[account_id])
    to_account = relationship("AccountORM", foreign_keys=[to_account_id])
    category = relationship("CategoryORM")


class BudgetORM(Base):
    """SQLAlchemy model for Budget."""

    __tablename__ = "budgets"

    budget_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.category_id"), nullable=False)
    amount = Column(MONEY, nullable=False)
    period = Column(SqlEnum(BudgetPeriod), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_local)


class SavingsGoalORM(Base):
    """SQLAlchemy model for SavingsGoal."""

    __tablename__ = "savings_goals"

    goal_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    target_amount = Column(MONEY, nullable=False)
    current_amount = Column(MONEY, nullable=False, default=Decimal("0"))
    is_completed = Column(Boolean, nullable=False, default=False)
    deadline = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=now_local)
