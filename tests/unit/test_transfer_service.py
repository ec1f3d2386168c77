"""
Unit tests for TransferService.

Tests cover:
- Both legs posted in one unit of work
- Insufficient funds leaving balances untouched
- Ownership and distinct-account checks
- Edits of transfer rows through LedgerService
"""

from datetime import date
from decimal import Decimal

import pytest

from finledger.core.exceptions import InsufficientFundsError, NotFoundError, ValidationError
from finledger.domain.models import TransactionType
from finledger.services import TransactionPatch, TransferService

from tests.conftest import OTHER_OWNER, OWNER, balance_of


class TestTransfer:
    """Tests for transfers between two accounts of the same owner."""

    def test_transfer_posts_both_legs(
        self,
        transfer_service: TransferService,
        account_service,
        checking,
        savings,
    ):
        """
        GIVEN checking 1000.00 and savings 500.00
        WHEN I transfer 300.00 from checking to savings
        THEN one TRANSFER row exists and balances are 700.00 / 800.00
        """
        txn = transfer_service.transfer(
            OWNER,
            checking.account_id,
            savings.account_id,
            Decimal("300.00"),
            txn_date=date(2024, 6, 3),
        )

        assert txn.txn_type == TransactionType.TRANSFER
        assert txn.description == "Transfer"
        assert txn.txn_date == date(2024, 6, 3)
        assert balance_of(account_service, checking) == Decimal("700.00")
        assert balance_of(account_service, savings) == Decimal("800.00")

    def test_exact_balance_allowed(
        self,
        transfer_service: TransferService,
        account_service,
        checking,
        savings,
    ):
        """
        GIVEN checking holds exactly 1000.00
        WHEN I transfer 1000.00
        THEN checking ends at zero
        """
        transfer_service.transfer(OWNER, checking.account_id, savings.account_id, Decimal("1000.00"))

        assert balance_of(account_service, checking) == Decimal("0.00")

    def test_insufficient_funds(
        self,
        transfer_service: TransferService,
        ledger_service,
        account_service,
        checking,
        savings,
    ):
        """
        GIVEN checking holds 1000.00
        WHEN I transfer 1000.01
        THEN InsufficientFundsError is raised, no row is written and balances are unchanged
        """
        with pytest.raises(InsufficientFundsError) as exc_info:
            transfer_service.transfer(OWNER, checking.account_id, savings.account_id, Decimal("1000.01"))

        assert exc_info.value.code == "INSUFFICIENT_FUNDS"
        assert exc_info.value.available == Decimal("1000.00")
        assert balance_of(account_service, checking) == Decimal("1000.00")
        assert balance_of(account_service, savings) == Decimal("500.00")
        assert ledger_service.list_transactions(OWNER)[1] == 0

    def test_same_account_rejected(self, transfer_service: TransferService, checking):
        with pytest.raises(ValidationError):
            transfer_service.transfer(OWNER, checking.account_id, checking.account_id, Decimal("1"))

    def test_missing_destination(self, transfer_service: TransferService, account_service, checking):
        """
        GIVEN the destination account does not exist
        WHEN I transfer
        THEN NotFoundError is raised and the source is not debited
        """
        with pytest.raises(NotFoundError):
            transfer_service.transfer(OWNER, checking.account_id, "nowhere", Decimal("10"))

        assert balance_of(account_service, checking) == Decimal("1000.00")

    def test_foreign_destination(
        self,
        transfer_service: TransferService,
        account_factory,
        checking,
    ):
        theirs = account_factory(name="Theirs", owner_id=OTHER_OWNER)

        with pytest.raises(NotFoundError):
            transfer_service.transfer(OWNER, checking.account_id, theirs.account_id, Decimal("10"))

    def test_transfer_edited_through_ledger(
        self,
        transfer_service: TransferService,
        ledger_service,
        account_service,
        checking,
        savings,
    ):
        """
        GIVEN a transfer of 300.00
        WHEN I edit its amount to 100.00 through the ledger
        THEN both legs are re-posted
        """
        txn = transfer_service.transfer(OWNER, checking.account_id, savings.account_id, Decimal("300.00"))

        ledger_service.update_transaction(OWNER, txn.txn_id, TransactionPatch(amount=Decimal("100.00")))

        assert balance_of(account_service, checking) == Decimal("900.00")
        assert balance_of(account_service, savings) == Decimal("600.00")
