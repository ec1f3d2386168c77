"""Account management: creation, deactivation, guarded deletion and reconciliation."""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from finledger.config.settings import get_settings
from finledger.core.exceptions import NotFoundError, ValidationError
from finledger.core.money import CENT, ZERO, to_decimal
from finledger.core.timezone import now_local
from finledger.domain.models import Account, AccountType
from finledger.domain.views import AccountTypeTotal, AccountsSummary, Reconciliation
from finledger.repositories.protocols import UnitOfWork, UnitOfWorkFactory
from finledger.services.posting import lock_accounts, run_atomic, run_read

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100


class AccountService:
    """
    Service for financial accounts.

    Balances are never edited here: the opening balance is fixed at
    creation and every later change comes from ledger postings.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    def create_account(
        self,
        owner_id: str,
        name: str,
        account_type: AccountType = AccountType.BANK_ACCOUNT,
        opening_balance: Decimal = Decimal("0"),
        currency: Optional[str] = None,
    ) -> Account:
        """
        Create an account; opening_balance may be negative (e.g. a credit card).
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"Account name cannot exceed {MAX_NAME_LENGTH} characters")
        balance = to_decimal(opening_balance, "opening_balance")
        if balance != balance.quantize(CENT):
            raise ValidationError("opening_balance cannot have more than 2 decimal places")
        currency = (currency or get_settings().default_currency).upper()
        if len(currency) != 3:
            raise ValidationError(f"Invalid currency code: {currency}")

        account = Account(
            account_id=str(uuid.uuid4()),
            owner_id=owner_id,
            name=name,
            account_type=AccountType(account_type),
            balance=balance,
            opening_balance=balance,
            currency=currency,
            created_at=now_local(),
        )
        created = run_atomic(self._uow_factory, lambda uow: uow.accounts.add(account))
        logger.info("Created account %s (%s) for owner %s", created.account_id, created.name, owner_id)
        return created

    def get_account(self, owner_id: str, account_id: str) -> Account:
        account = run_read(self._uow_factory, lambda uow: uow.accounts.get(owner_id, account_id))
        if account is None:
            raise NotFoundError("Account", account_id)
        return account

    def list_accounts(self, owner_id: str, active_only: bool = False) -> list[Account]:
        return run_read(
            self._uow_factory,
            lambda uow: uow.accounts.list_by_owner(owner_id, active_only=active_only),
        )

    def deactivate_account(self, owner_id: str, account_id: str) -> Account:
        """Hide an account from new postings; its history and balance stay intact."""

        def work(uow: UnitOfWork) -> Account:
            account = self._owned(uow, owner_id, account_id)
            uow.accounts.set_active(account_id, False)
            account.is_active = False
            return account

        account = run_atomic(self._uow_factory, work)
        logger.info("Deactivated account %s for owner %s", account_id, owner_id)
        return account

    def delete_account(self, owner_id: str, account_id: str) -> None:
        """Hard-delete an account that no transaction references."""

        def work(uow: UnitOfWork) -> None:
            self._owned(uow, owner_id, account_id)
            lock_accounts(uow, [account_id])
            referencing = uow.transactions.count_touching_account(account_id)
            if referencing:
                raise ValidationError(
                    f"Cannot delete an account with {referencing} transaction(s); deactivate it instead",
                    code="ACCOUNT_IN_USE",
                )
            uow.accounts.delete(account_id)

        run_atomic(self._uow_factory, work)
        logger.info("Deleted account %s for owner %s", account_id, owner_id)

    def reconcile(self, owner_id: str, account_id: str) -> Reconciliation:
        """Compare the stored balance with opening balance plus every posted effect."""

        def work(uow: UnitOfWork) -> Reconciliation:
            account = self._owned(uow, owner_id, account_id)
            computed = account.opening_balance
            for txn in uow.transactions.list_touching_account(account_id):
                for effect in txn.effects():
                    if effect.account_id == account_id:
                        computed += effect.delta
            return Reconciliation(
                account_id=account_id,
                stored_balance=account.balance,
                computed_balance=computed,
            )

        result = run_read(self._uow_factory, work)
        if not result.is_consistent:
            logger.error(
                "Account %s balance drift: stored %s, computed %s",
                account_id, result.stored_balance, result.computed_balance,
            )
        return result

    def summary(self, owner_id: str) -> AccountsSummary:
        """Totals over active accounts, grouped by type and by currency."""
        accounts = self.list_accounts(owner_id, active_only=True)

        by_type: dict[str, AccountTypeTotal] = {}
        by_currency: dict[str, Decimal] = {}
        total = ZERO
        for account in accounts:
            total += account.balance
            key = account.account_type.value
            entry = by_type.setdefault(key, AccountTypeTotal(account_type=key, count=0, total_balance=ZERO))
            entry.count += 1
            entry.total_balance += account.balance
            by_currency[account.currency] = by_currency.get(account.currency, ZERO) + account.balance

        return AccountsSummary(
            total_accounts=len(accounts),
            total_balance=total,
            by_type=sorted(by_type.values(), key=lambda entry: entry.account_type),
            by_currency=by_currency,
            richest_account=max(accounts, key=lambda a: a.balance) if accounts else None,
            poorest_account=min(accounts, key=lambda a: a.balance) if accounts else None,
        )

    @staticmethod
    def _owned(uow: UnitOfWork, owner_id: str, account_id: str) -> Account:
        account = uow.accounts.get(owner_id, account_id)
        if account is None:
            raise NotFoundError("Account", account_id)
        return account
