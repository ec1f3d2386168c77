"""
Unit tests for AccountService and CategoryService.

Tests cover:
- Account creation with opening balances
- Deactivation and guarded deletion
- Reconciliation of stored vs recomputed balances
- Summary totals by type
- Category creation, uniqueness and listing
"""

from decimal import Decimal

import pytest

from finledger.core.exceptions import NotFoundError, ValidationError
from finledger.domain.models import AccountType, CategoryType
from finledger.services import AccountService, CategoryService

from tests.conftest import OTHER_OWNER, OWNER


# =============================================================================
# ACCOUNT TESTS
# =============================================================================


class TestCreateAccount:
    """Tests for account creation."""

    def test_opening_balance_sets_both_fields(self, account_service: AccountService):
        """
        GIVEN no accounts exist
        WHEN I create an account opened with 1234.56
        THEN balance and opening_balance are both 1234.56
        """
        account = account_service.create_account(OWNER, "Checking", opening_balance=Decimal("1234.56"))

        assert account.balance == Decimal("1234.56")
        assert account.opening_balance == Decimal("1234.56")
        assert account.currency == "USD"
        assert account.is_active

    def test_negative_opening_balance_allowed(self, account_service: AccountService):
        account = account_service.create_account(
            OWNER, "Visa", account_type=AccountType.CREDIT_CARD, opening_balance=Decimal("-420.00")
        )

        assert account.balance == Decimal("-420.00")

    def test_sub_cent_opening_balance_rejected(self, account_service: AccountService):
        with pytest.raises(ValidationError):
            account_service.create_account(OWNER, "Odd", opening_balance=Decimal("1.005"))

    def test_blank_name_rejected(self, account_service: AccountService):
        with pytest.raises(ValidationError):
            account_service.create_account(OWNER, "  ")

    def test_accounts_are_scoped_to_owner(self, account_service: AccountService, account_factory):
        mine = account_factory(name="Mine")
        account_factory(name="Theirs", owner_id=OTHER_OWNER)

        assert [a.account_id for a in account_service.list_accounts(OWNER)] == [mine.account_id]
        with pytest.raises(NotFoundError):
            account_service.get_account(OTHER_OWNER, mine.account_id)


class TestAccountLifecycle:
    """Tests for deactivation and deletion."""

    def test_deactivate_hides_from_active_listing(self, account_service: AccountService, checking, savings):
        account_service.deactivate_account(OWNER, savings.account_id)

        active = account_service.list_accounts(OWNER, active_only=True)

        assert [a.account_id for a in active] == [checking.account_id]
        assert account_service.get_account(OWNER, savings.account_id).balance == Decimal("500.00")

    def test_delete_unused_account(self, account_service: AccountService, checking):
        account_service.delete_account(OWNER, checking.account_id)

        with pytest.raises(NotFoundError):
            account_service.get_account(OWNER, checking.account_id)

    def test_delete_referenced_account_rejected(
        self,
        account_service: AccountService,
        transfer_service,
        checking,
        savings,
    ):
        """
        GIVEN savings is the destination of a transfer
        WHEN I delete savings
        THEN a ValidationError with ACCOUNT_IN_USE is raised
        """
        transfer_service.transfer(OWNER, checking.account_id, savings.account_id, Decimal("10"))

        with pytest.raises(ValidationError) as exc_info:
            account_service.delete_account(OWNER, savings.account_id)

        assert exc_info.value.code == "ACCOUNT_IN_USE"
        assert account_service.get_account(OWNER, savings.account_id) is not None


class TestReconcileAndSummary:
    """Tests for reconciliation and summaries."""

    def test_reconcile_after_activity(
        self,
        account_service: AccountService,
        ledger_service,
        checking,
        groceries,
        salary,
        income_factory,
        expense_factory,
    ):
        """
        GIVEN income, expenses and a deletion on checking
        WHEN I reconcile
        THEN the stored balance equals opening balance plus every posted effect
        """
        income_factory(checking, salary, "300.00")
        gone = expense_factory(checking, groceries, "80.00")
        expense_factory(checking, groceries, "19.99")
        ledger_service.delete_transaction(OWNER, gone.txn_id)

        result = account_service.reconcile(OWNER, checking.account_id)

        assert result.stored_balance == Decimal("1280.01")
        assert result.computed_balance == Decimal("1280.01")
        assert result.is_consistent

    def test_summary_groups_by_type(self, account_service: AccountService, checking, savings, account_factory):
        account_factory(name="Card", opening_balance="-100.00", account_type=AccountType.CREDIT_CARD)

        summary = account_service.summary(OWNER)

        assert summary.total_accounts == 3
        assert summary.total_balance == Decimal("1400.00")
        assert {t.account_type: t.total_balance for t in summary.by_type} == {
            "BANK_ACCOUNT": Decimal("1000.00"),
            "CREDIT_CARD": Decimal("-100.00"),
            "SAVINGS_ACCOUNT": Decimal("500.00"),
        }
        assert summary.by_currency == {"USD": Decimal("1400.00")}
        assert summary.richest_account.name == "Checking"
        assert summary.poorest_account.name == "Card"

    def test_summary_with_no_accounts(self, account_service: AccountService):
        summary = account_service.summary(OWNER)

        assert summary.total_accounts == 0
        assert summary.richest_account is None


# =============================================================================
# CATEGORY TESTS
# =============================================================================


class TestCategories:
    """Tests for CategoryService."""

    def test_duplicate_name_same_type_rejected(self, category_service: CategoryService):
        category_service.create_category(OWNER, "Gifts", CategoryType.EXPENSE)

        with pytest.raises(ValidationError) as exc_info:
            category_service.create_category(OWNER, "Gifts", CategoryType.EXPENSE)

        assert "already exists" in exc_info.value.message

    def test_same_name_other_type_allowed(self, category_service: CategoryService):
        category_service.create_category(OWNER, "Gifts", CategoryType.EXPENSE)
        income = category_service.create_category(OWNER, "Gifts", CategoryType.INCOME)

        assert income.category_type == CategoryType.INCOME

    def test_list_by_type(self, category_service: CategoryService, groceries, rent, salary):
        expenses = category_service.list_categories(OWNER, CategoryType.EXPENSE)

        assert [c.name for c in expenses] == ["Groceries", "Rent"]
        assert len(category_service.list_categories(OWNER)) == 3

    def test_name_too_long(self, category_service: CategoryService):
        with pytest.raises(ValidationError):
            category_service.create_category(OWNER, "x" * 51, CategoryType.EXPENSE)
