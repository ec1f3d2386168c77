"""Ledger service: create, edit and delete transactions while keeping balances exact."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import ClassVar, Optional, Union

from finledger.core.exceptions import InsufficientFundsError, NotFoundError, ValidationError
from finledger.core.money import require_positive
from finledger.core.timezone import now_local, today_local
from finledger.domain.models import Account, Transaction, TransactionType
from finledger.repositories.protocols import TransactionFilter, UnitOfWork, UnitOfWorkFactory
from finledger.services.posting import lock_accounts, post_effects, run_atomic, run_read

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 200
SORT_FIELDS = ("date", "amount", "description")


@dataclass
class IncomeCreate:
    """Money coming into one account."""

    account_id: str
    amount: Decimal
    category_id: str
    description: str
    txn_date: Optional[date] = None
    notes: Optional[str] = None

    txn_type: ClassVar[TransactionType] = TransactionType.INCOME


@dataclass
class ExpenseCreate:
    """Money leaving one account."""

    account_id: str
    amount: Decimal
    category_id: str
    description: str
    txn_date: Optional[date] = None
    notes: Optional[str] = None

    txn_type: ClassVar[TransactionType] = TransactionType.EXPENSE


@dataclass
class TransferCreate:
    """Money moving from account_id to to_account_id."""

    account_id: str
    to_account_id: str
    amount: Decimal
    description: str
    txn_date: Optional[date] = None
    notes: Optional[str] = None

    txn_type: ClassVar[TransactionType] = TransactionType.TRANSFER


TransactionInput = Union[IncomeCreate, ExpenseCreate, TransferCreate]


@dataclass
class TransactionPatch:
    """Partial edit; None leaves the stored value in place."""

    txn_type: Optional[TransactionType] = None
    amount: Optional[Decimal] = None
    account_id: Optional[str] = None
    to_account_id: Optional[str] = None
    category_id: Optional[str] = None
    txn_date: Optional[date] = None
    description: Optional[str] = None
    notes: Optional[str] = None

    def merge(self, current: Transaction) -> TransactionInput:
        """
        Overlay this patch on a stored transaction and return the full variant.

        Switching to TRANSFER drops the category; switching away from
        TRANSFER drops the destination account, so a category must be given.
        """
        txn_type = TransactionType(self.txn_type) if self.txn_type else current.txn_type
        type_changed = txn_type != current.txn_type
        common = dict(
            account_id=self.account_id or current.account_id,
            amount=self.amount if self.amount is not None else current.amount,
            description=self.description if self.description is not None else current.description,
            txn_date=self.txn_date or current.txn_date,
            notes=self.notes if self.notes is not None else current.notes,
        )

        if txn_type == TransactionType.TRANSFER:
            to_account_id = self.to_account_id or (None if type_changed else current.to_account_id)
            if self.category_id:
                raise ValidationError("Transfers cannot have a category")
            if not to_account_id:
                raise ValidationError("Transfers require a destination account")
            return TransferCreate(to_account_id=to_account_id, **common)

        if self.to_account_id:
            raise ValidationError("Only transfers have a destination account")
        category_id = self.category_id or (None if type_changed else current.category_id)
        if not category_id:
            raise ValidationError(f"{txn_type.value.title()} transactions require a category")
        variant = IncomeCreate if txn_type == TransactionType.INCOME else ExpenseCreate
        return variant(category_id=category_id, **common)


class LedgerService:
    """
    Service for managing the transaction ledger.

    Every mutation runs in a single unit of work: the transaction row and
    the balance change(s) it causes commit together or not at all.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_transaction(self, owner_id: str, data: TransactionInput) -> Transaction:
        """
        Record a new transaction and apply its effect on the account balance(s).

        Raises:
            NotFoundError: account or category missing or owned by someone else
            ValidationError: inactive account, bad amount, wrong category type
        """
        created = run_atomic(self._uow_factory, lambda uow: self.create_in(uow, owner_id, data))
        logger.info(
            "Created %s transaction %s of %s for owner %s",
            created.txn_type.value, created.txn_id, created.amount, owner_id,
        )
        return created

    def create_in(
        self,
        uow: UnitOfWork,
        owner_id: str,
        data: TransactionInput,
        require_funds: bool = False,
    ) -> Transaction:
        """Create inside an already open unit of work (the caller commits)."""
        amount = require_positive(data.amount)
        self._validate_shape(data)

        locked = lock_accounts(uow, self._account_ids(data))
        self._validate_accounts(owner_id, data, locked)
        self._validate_category(uow, owner_id, data)

        if require_funds:
            source = locked[data.account_id]
            if source.balance < amount:
                raise InsufficientFundsError(data.account_id, source.balance, amount)

        now = now_local()
        transaction = Transaction(
            txn_id=str(uuid.uuid4()),
            owner_id=owner_id,
            txn_type=data.txn_type,
            amount=amount,
            account_id=data.account_id,
            txn_date=data.txn_date or today_local(),
            description=data.description.strip(),
            to_account_id=getattr(data, "to_account_id", None),
            category_id=getattr(data, "category_id", None),
            notes=data.notes,
            created_at=now,
        )
        created = uow.transactions.add(transaction)
        post_effects(uow, created.effects(), locked=locked)
        return created

    def update_transaction(
        self,
        owner_id: str,
        txn_id: str,
        data: Union[TransactionPatch, TransactionInput],
    ) -> Transaction:
        """
        Edit a transaction: revert the old effect, validate, write, apply the new effect.

        The revert/apply pair always runs, even when only the description
        changes, so the balance invariant never depends on which fields moved.
        """

        def work(uow: UnitOfWork) -> Transaction:
            current = uow.transactions.get(owner_id, txn_id)
            if current is None:
                raise NotFoundError("Transaction", txn_id)

            new_data = data.merge(current) if isinstance(data, TransactionPatch) else data
            amount = require_positive(new_data.amount)
            self._validate_shape(new_data)

            # Old and new accounts are locked together so the order stays ascending.
            locked = lock_accounts(uow, set(current.account_ids) | set(self._account_ids(new_data)))

            post_effects(uow, current.reverse_effects(), locked=locked)

            self._validate_accounts(owner_id, new_data, locked)
            self._validate_category(uow, owner_id, new_data)

            updated = Transaction(
                txn_id=current.txn_id,
                owner_id=owner_id,
                txn_type=new_data.txn_type,
                amount=amount,
                account_id=new_data.account_id,
                txn_date=new_data.txn_date or current.txn_date,
                description=new_data.description.strip(),
                to_account_id=getattr(new_data, "to_account_id", None),
                category_id=getattr(new_data, "category_id", None),
                notes=new_data.notes,
                created_at=current.created_at,
                updated_at=now_local(),
            )
            updated = uow.transactions.update(updated)
            post_effects(uow, updated.effects(), locked=locked)
            return updated

        updated = run_atomic(self._uow_factory, work)
        logger.info("Updated transaction %s for owner %s", txn_id, owner_id)
        return updated

    def delete_transaction(self, owner_id: str, txn_id: str) -> None:
        """Revert a transaction's effect, then remove it."""

        def work(uow: UnitOfWork) -> None:
            current = uow.transactions.get(owner_id, txn_id)
            if current is None:
                raise NotFoundError("Transaction", txn_id)
            post_effects(uow, current.reverse_effects())
            uow.transactions.delete(txn_id)

        run_atomic(self._uow_factory, work)
        logger.info("Deleted transaction %s for owner %s", txn_id, owner_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_transaction(self, owner_id: str, txn_id: str) -> Transaction:
        txn = run_read(self._uow_factory, lambda uow: uow.transactions.get(owner_id, txn_id))
        if txn is None:
            raise NotFoundError("Transaction", txn_id)
        return txn

    def list_transactions(
        self,
        owner_id: str,
        filters: Optional[TransactionFilter] = None,
        sort_by: str = "date",
        descending: bool = True,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> tuple[list[Transaction], int]:
        """Return one page of matching transactions and the total match count."""
        if sort_by not in SORT_FIELDS:
            raise ValidationError(f"Cannot sort by '{sort_by}'; use one of {', '.join(SORT_FIELDS)}")
        if limit is not None and limit < 1:
            raise ValidationError("limit must be at least 1")
        if offset < 0:
            raise ValidationError("offset cannot be negative")

        def work(uow: UnitOfWork) -> tuple[list[Transaction], int]:
            items = uow.transactions.query(
                owner_id,
                filters=filters,
                sort_by=sort_by,
                descending=descending,
                limit=limit,
                offset=offset,
            )
            return items, uow.transactions.count(owner_id, filters)

        return run_read(self._uow_factory, work)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _account_ids(data: TransactionInput) -> list[str]:
        ids = [data.account_id]
        if isinstance(data, TransferCreate):
            ids.append(data.to_account_id)
        return ids

    @staticmethod
    def _validate_shape(data: TransactionInput) -> None:
        """Checks that need no database access."""
        description = (data.description or "").strip()
        if not description:
            raise ValidationError("Description is required")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters")
        if isinstance(data, TransferCreate):
            if not data.to_account_id:
                raise ValidationError("Transfers require a destination account")
            if data.to_account_id == data.account_id:
                raise ValidationError("Cannot transfer to the same account")
        elif not data.category_id:
            raise ValidationError(f"{data.txn_type.value.title()} transactions require a category")

    @staticmethod
    def _validate_accounts(
        owner_id: str,
        data: TransactionInput,
        locked: dict[str, Account],
    ) -> None:
        for account_id in LedgerService._account_ids(data):
            account = locked.get(account_id)
            if account is None or account.owner_id != owner_id:
                raise NotFoundError("Account", account_id)
            if not account.is_active:
                raise ValidationError(f"Account '{account.name}' is inactive")

    @staticmethod
    def _validate_category(uow: UnitOfWork, owner_id: str, data: TransactionInput) -> None:
        category_id = getattr(data, "category_id", None)
        if category_id is None:
            return
        category = uow.categories.get(owner_id, category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        if category.category_type.value != data.txn_type.value:
            raise ValidationError(
                f"Category '{category.name}' is a {category.category_type.value} category "
                f"and cannot be used for {data.txn_type.value} transactions"
            )
