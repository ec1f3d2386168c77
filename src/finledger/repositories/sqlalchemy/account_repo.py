"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from finledger.core.exceptions import ConflictError
from finledger.domain.models import Account
from finledger.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository. Never commits; the unit of work does."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            account_id=account.account_id,
            owner_id=account.owner_id,
            name=account.name,
            account_type=account.account_type,
            balance=account.balance,
            opening_balance=account.opening_balance,
            currency=account.currency,
            is_active=account.is_active,
            version=account.version,
            created_at=account.created_at,
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get(self, owner_id: str, account_id: str) -> Optional[Account]:
        """Retrieve an account owned by owner_id."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id,
            AccountORM.owner_id == owner_id,
        ).populate_existing().first()
        return self._to_domain(orm_account) if orm_account else None

    def list_by_owner(self, owner_id: str, active_only: bool = False) -> list[Account]:
        """List accounts of an owner ordered by name."""
        query = self._db.query(AccountORM).filter(AccountORM.owner_id == owner_id)
        if active_only:
            query = query.filter(AccountORM.is_active == True)  # noqa: E712
        query = query.order_by(AccountORM.name, AccountORM.account_id)
        return [self._to_domain(a) for a in query.populate_existing().all()]

    def lock(self, account_ids: list[str]) -> dict[str, Account]:
        """
        Lock accounts for update, one row at a time in ascending id order.

        Missing ids are simply absent from the result.
        """
        locked: dict[str, Account] = {}
        for account_id in sorted(set(account_ids)):
            orm_account = self._db.query(AccountORM).filter(
                AccountORM.account_id == account_id
            ).with_for_update().populate_existing().first()
            if orm_account is not None:
                locked[account_id] = self._to_domain(orm_account)
        return locked

    def set_balance(self, account_id: str, balance: Decimal, expected_version: int) -> int:
        """Write a new balance if the row is still at expected_version; return the new version."""
        result = self._db.execute(
            update(AccountORM)
            .where(
                AccountORM.account_id == account_id,
                AccountORM.version == expected_version,
            )
            .values(balance=balance, version=expected_version + 1)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount != 1:
            raise ConflictError(f"Account {account_id} was modified concurrently")
        return expected_version + 1

    def set_active(self, account_id: str, is_active: bool) -> None:
        """Activate or deactivate an account."""
        self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).update({AccountORM.is_active: is_active}, synchronize_session="fetch")

    def delete(self, account_id: str) -> None:
        """Delete an account (hard delete)."""
        self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).delete(synchronize_session="fetch")

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            owner_id=orm.owner_id,
            name=orm.name,
            account_type=orm.account_type,
            balance=Decimal(orm.balance),
            opening_balance=Decimal(orm.opening_balance),
            currency=orm.currency,
            is_active=orm.is_active,
            version=orm.version,
            created_at=orm.created_at,
        )
