"""Admin Transaction Routes — derived payment records and pending submissions."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_ledger, request_body, require_admin
from storefront.core.repository_protocols import PaymentLedger
from storefront.core.transactions import parse_date_filter
from storefront.core.validate_fields import clamp_limit
from storefront.infrastructure.database import get_db
from storefront.schemas.transaction import TransactionCreate
from storefront.services.transactions import TransactionsService

router = APIRouter(
    prefix="/api/admin/transactions", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def list_transactions(
    limit: int | None = None,
    tx_type: str = Query("all", alias="type"),
    status_filter: str = Query("all", alias="status"),
    from_date: str | None = Query(None, alias="fromDate"),
    to_date: str | None = Query(None, alias="toDate"),
    db: AsyncSession = Depends(get_db),
    ledger: PaymentLedger = Depends(get_ledger),
):
    return await TransactionsService(db, ledger).list_transactions(
        limit=clamp_limit(limit, 50),
        tx_type=tx_type,
        status=status_filter,
        from_date=parse_date_filter(from_date, "fromDate"),
        to_date=parse_date_filter(to_date, "toDate"),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    data: TransactionCreate = request_body(TransactionCreate),
    db: AsyncSession = Depends(get_db),
    ledger: PaymentLedger = Depends(get_ledger),
):
    return TransactionsService(db, ledger).create_transaction(
        data.order_id, data.amount, data.tx_type.value, data.description,
    )
