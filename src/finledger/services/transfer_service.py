"""Transfer coordinator: two-account moves guarded by a funds check."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from finledger.domain.models import Transaction
from finledger.repositories.protocols import UnitOfWorkFactory
from finledger.services.ledger_service import LedgerService, TransferCreate
from finledger.services.posting import run_atomic

logger = logging.getLogger(__name__)


class TransferService:
    """
    Moves money between two accounts of the same owner.

    The balance check happens after both accounts are locked and inside
    the unit of work that posts the legs, so two concurrent transfers can
    never overdraw the source between check and write. Edits and deletes
    of the resulting TRANSFER row go through LedgerService.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, ledger: Optional[LedgerService] = None):
        self._uow_factory = uow_factory
        self._ledger = ledger or LedgerService(uow_factory)

    def transfer(
        self,
        owner_id: str,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        txn_date: Optional[date] = None,
        description: str = "Transfer",
        notes: Optional[str] = None,
    ) -> Transaction:
        """
        Create one TRANSFER transaction and post both legs.

        Raises:
            ValidationError: same account on both sides, bad amount, inactive account
            InsufficientFundsError: source balance below amount
            NotFoundError: either account missing or not owned by owner_id
        """
        data = TransferCreate(
            account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            description=description,
            txn_date=txn_date,
            notes=notes,
        )
        created = run_atomic(
            self._uow_factory,
            lambda uow: self._ledger.create_in(uow, owner_id, data, require_funds=True),
        )
        logger.info(
            "Transferred %s from %s to %s for owner %s",
            created.amount, from_account_id, to_account_id, owner_id,
        )
        return created
