"""Account endpoints."""

from fastapi import APIRouter, Depends, Query, Response

from finledger.api.deps import get_account_service, get_owner_id
from finledger.api.schemas import (
    AccountCreateRequest,
    AccountListResponse,
    AccountResponse,
    AccountsSummaryResponse,
    ReconciliationResponse,
)
from finledger.services import AccountService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreateRequest,
    owner_id: str = Depends(get_owner_id),
    accounts: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create a new account with an opening balance."""
    account = accounts.create_account(
        owner_id,
        name=request.name,
        account_type=request.account_type,
        opening_balance=request.opening_balance,
        currency=request.currency,
    )
    return AccountResponse.model_validate(account)


@router.get("", response_model=AccountListResponse)
def list_accounts(
    active_only: bool = Query(False),
    owner_id: str = Depends(get_owner_id),
    accounts: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    items = accounts.list_accounts(owner_id, active_only=active_only)
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in items],
        count=len(items),
    )


@router.get("/summary", response_model=AccountsSummaryResponse)
def accounts_summary(
    owner_id: str = Depends(get_owner_id),
    accounts: AccountService = Depends(get_account_service),
) -> AccountsSummaryResponse:
    """Totals of active accounts by type and currency."""
    return AccountsSummaryResponse.model_validate(accounts.summary(owner_id))


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    owner_id: str = Depends(get_owner_id),
    accounts: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return AccountResponse.model_validate(accounts.get_account(owner_id, account_id))


@router.post("/{account_id}/deactivate", response_model=AccountResponse)
def deactivate_account(
    account_id: str,
    owner_id: str = Depends(get_owner_id),
    accounts: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return AccountResponse.model_validate(accounts.deactivate_account(owner_id, account_id))


@router.get("/{account_id}/reconcile", response_model=ReconciliationResponse)
def reconcile_account(
    account_id: str,
    owner_id: str = Depends(get_owner_id),
    accounts: AccountService = Depends(get_account_service),
) -> ReconciliationResponse:
    """Compare the stored balance with the balance recomputed from the ledger."""
    return ReconciliationResponse.model_validate(accounts.reconcile(owner_id, account_id))


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: str,
    owner_id: str = Depends(get_owner_id),
    accounts: AccountService = Depends(get_account_service),
) -> Response:
    """Delete an account. Fails while any transaction references it."""
    accounts.delete_account(owner_id, account_id)
    return Response(status_code=204)
