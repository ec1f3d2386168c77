"""SQLAlchemy implementation of TransactionRepository."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, Query

from finledger.core.exceptions import NotFoundError, ValidationError
from finledger.core.timezone import now_local
from finledger.domain.models import Transaction
from finledger.repositories.protocols.transaction_repo import TransactionFilter
from finledger.repositories.sqlalchemy.orm_models import TransactionORM

_SORT_COLUMNS = {
    "date": TransactionORM.txn_date,
    "amount": TransactionORM.amount,
    "description": TransactionORM.description,
}


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def get(self, owner_id: str, txn_id: str) -> Optional[Transaction]:
        """Retrieve a transaction owned by owner_id."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id,
            TransactionORM.owner_id == owner_id,
        ).populate_existing().first()
        return self._to_domain(orm_txn) if orm_txn else None

    def update(self, transaction: Transaction) -> Transaction:
        """Overwrite every field of an existing transaction."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == transaction.txn_id
        ).first()
        if not orm_txn:
            raise NotFoundError("Transaction", transaction.txn_id)

        orm_txn.txn_type = transaction.txn_type
        orm_txn.amount = transaction.amount
        orm_txn.account_id = transaction.account_id
        orm_txn.to_account_id = transaction.to_account_id
        orm_txn.category_id = transaction.category_id
        orm_txn.txn_date = transaction.txn_date
        orm_txn.description = transaction.description
        orm_txn.notes = transaction.notes
        orm_txn.updated_at = transaction.updated_at or now_local()

        self._db.flush()
        return self._to_domain(orm_txn)

    def delete(self, txn_id: str) -> None:
        """Remove a transaction row."""
        self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).delete(synchronize_session="fetch")

    def query(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter] = None,
        sort_by: str = "date",
        descending: bool = True,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """Query transactions with filters."""
        query = self._filtered(owner_id, filters)

        column = _SORT_COLUMNS.get(sort_by)
        if column is None:
            raise ValidationError(f"Unsupported sort field: {sort_by}")
        if descending:
            query = query.order_by(column.desc(), TransactionORM.created_at.desc(), TransactionORM.txn_id)
        else:
            query = query.order_by(column.asc(), TransactionORM.created_at.asc(), TransactionORM.txn_id)

        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    def count(self, owner_id: str, filters: Optional[TransactionFilter] = None) -> int:
        """Count transactions matching filters."""
        return self._filtered(owner_id, filters).with_entities(
            func.count(TransactionORM.txn_id)
        ).scalar() or 0

    def list_touching_account(
        self,
        account_id: str,
        after: Optional[date] = None,
    ) -> list[Transaction]:
        """Transactions whose source or destination is account_id, optionally dated after a day."""
        query = self._db.query(TransactionORM).filter(
            or_(
                TransactionORM.account_id == account_id,
                TransactionORM.to_account_id == account_id,
            )
        )
        if after is not None:
            query = query.filter(TransactionORM.txn_date > after)
        query = query.order_by(TransactionORM.txn_date, TransactionORM.created_at)
        return [self._to_domain(t) for t in query.all()]

    def count_touching_account(self, account_id: str) -> int:
        """Number of transactions referencing account_id on either leg."""
        return self._db.query(func.count(TransactionORM.txn_id)).filter(
            or_(
                TransactionORM.account_id == account_id,
                TransactionORM.to_account_id == account_id,
            )
        ).scalar() or 0

    def _filtered(self, owner_id: str, filters: Optional[TransactionFilter]) -> Query:
        query = self._db.query(TransactionORM).filter(TransactionORM.owner_id == owner_id)
        if filters is None:
            return query

        if filters.txn_types:
            query = query.filter(TransactionORM.txn_type.in_(filters.txn_types))
        if filters.account_id:
            query = query.filter(
                or_(
                    TransactionORM.account_id == filters.account_id,
                    TransactionORM.to_account_id == filters.account_id,
                )
            )
        if filters.category_ids:
            query = query.filter(TransactionORM.category_id.in_(filters.category_ids))
        if filters.start_date:
            query = query.filter(TransactionORM.txn_date >= filters.start_date)
        if filters.end_date:
            query = query.filter(TransactionORM.txn_date <= filters.end_date)
        if filters.min_amount is not None:
            query = query.filter(TransactionORM.amount >= filters.min_amount)
        if filters.max_amount is not None:
            query = query.filter(TransactionORM.amount <= filters.max_amount)
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.filter(
                or_(
                    TransactionORM.description.ilike(pattern),
                    TransactionORM.notes.ilike(pattern),
                )
            )
        return query

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            txn_id=txn.txn_id,
            owner_id=txn.owner_id,
            txn_type=txn.txn_type,
            amount=txn.amount,
            account_id=txn.account_id,
            to_account_id=txn.to_account_id,
            category_id=txn.category_id,
            txn_date=txn.txn_date,
            description=txn.description,
            notes=txn.notes,
            created_at=txn.created_at,
            updated_at=txn.updated_at,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            owner_id=orm.owner_id,
            txn_type=orm.txn_type,
            amount=Decimal(orm.amount),
            account_id=orm.account_id,
            txn_date=orm.txn_date,
            description=orm.description,
            to_account_id=orm.to_account_id,
            category_id=orm.category_id,
            notes=orm.notes,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
