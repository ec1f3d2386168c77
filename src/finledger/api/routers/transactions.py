"""Transaction ledger endpoints."""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from finledger.api.deps import get_ledger_service, get_owner_id, get_transfer_service
from finledger.api.schemas import (
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdateRequest,
    TransferRequest,
)
from finledger.domain.models import TransactionType
from finledger.repositories.protocols import TransactionFilter
from finledger.services import LedgerService, TransferService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request: Annotated[TransactionCreateRequest, Body(discriminator="type")],
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Record an INCOME, EXPENSE or TRANSFER and update the account balance(s)."""
    txn = ledger.create_transaction(owner_id, request.to_input())
    return TransactionResponse.model_validate(txn)


@router.post("/transfer", response_model=TransactionResponse, status_code=201)
def transfer(
    request: TransferRequest,
    owner_id: str = Depends(get_owner_id),
    transfers: TransferService = Depends(get_transfer_service),
) -> TransactionResponse:
    """Move money between two accounts; fails with INSUFFICIENT_FUNDS when the source is short."""
    txn = transfers.transfer(
        owner_id,
        from_account_id=request.from_account_id,
        to_account_id=request.to_account_id,
        amount=request.amount,
        txn_date=request.txn_date,
        description=request.description,
        notes=request.notes,
    )
    return TransactionResponse.model_validate(txn)


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    txn_type: Optional[list[TransactionType]] = Query(None, alias="type"),
    account_id: Optional[str] = Query(None),
    category_id: Optional[list[str]] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    min_amount: Optional[Decimal] = Query(None, ge=0),
    max_amount: Optional[Decimal] = Query(None, ge=0),
    search: Optional[str] = Query(None, max_length=100),
    sort_by: Literal["date", "amount", "description"] = Query("date"),
    order: Literal["asc", "desc"] = Query("desc"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """List transactions with filters, sorting and pagination."""
    filters = TransactionFilter(
        txn_types=txn_type,
        account_id=account_id,
        category_ids=category_id,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        max_amount=max_amount,
        search=search,
    )
    items, total = ledger.list_transactions(
        owner_id,
        filters=filters,
        sort_by=sort_by,
        descending=order == "desc",
        limit=limit,
        offset=offset,
    )
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in items],
        count=len(items),
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{txn_id}", response_model=TransactionResponse)
def get_transaction(
    txn_id: str,
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    return TransactionResponse.model_validate(ledger.get_transaction(owner_id, txn_id))


@router.patch("/{txn_id}", response_model=TransactionResponse)
def update_transaction(
    txn_id: str,
    request: TransactionUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Edit a transaction; the old effect is reverted and the new one applied atomically."""
    txn = ledger.update_transaction(owner_id, txn_id, request.to_patch())
    return TransactionResponse.model_validate(txn)


@router.delete("/{txn_id}", status_code=204)
def delete_transaction(
    txn_id: str,
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
) -> Response:
    """Delete a transaction after reverting its balance effect."""
    ledger.delete_transaction(owner_id, txn_id)
    return Response(status_code=204)
