"""Transactions Service — payment records derived from orders through the ledger.

Invariants:
    - Reads at most ORDER_SCAN_LIMIT orders per request
    - summary covers the whole filtered set; transactions is the first `limit`
    - hasMore is true when the filtered set is longer than `limit`
    - Any failure surfaces as ServiceFailureError with TRANSACTIONS_FETCH_ERROR
      (listing) or TRANSACTION_CREATE_ERROR (creation)
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import ServiceFailureError
from storefront.core.repository_protocols import PaymentLedger
from storefront.core.transactions import filter_transactions, summarize_transactions
from storefront.schemas.order import OrderResponse
from storefront.services.orders import OrdersService

logger = logging.getLogger(__name__)

ORDER_SCAN_LIMIT = 1000


class TransactionsService:

    def __init__(self, db: AsyncSession, ledger: PaymentLedger):
        self.orders = OrdersService(db)
        self.ledger = ledger

    async def list_transactions(
        self,
        limit: int = 50,
        tx_type: str = "all",
        status: str = "all",
        from_date: datetime | None = None,
        to_date: datetime | None = None,
    ) -> dict:
        try:
            orders, _ = await self.orders.get_all(limit=ORDER_SCAN_LIMIT)
            transactions = self.ledger.transactions_for_orders(
                [OrderResponse.serialize(order) for order in orders]
            )
            selected = filter_transactions(
                transactions, tx_type, status, from_date, to_date,
            )
        except Exception as e:
            logger.error(f"Transaction listing failed: {e}", exc_info=True)
            raise ServiceFailureError(
                "Failed to fetch transactions", "TRANSACTIONS_FETCH_ERROR",
            ) from e

        return {
            "transactions": selected[:limit],
            "summary": summarize_transactions(selected),
            "hasMore": len(selected) > limit,
        }

    def create_transaction(
        self, order_id: str, amount: float, tx_type: str, description: str | None,
    ) -> dict:
        try:
            transaction = self.ledger.create_transaction(
                order_id, amount, tx_type, description,
            )
        except Exception as e:
            logger.error(f"Transaction creation failed: {e}", exc_info=True)
            raise ServiceFailureError(
                "Failed to create transaction", "TRANSACTION_CREATE_ERROR",
            ) from e
        logger.info(
            f"Pending {tx_type} transaction recorded",
            extra={"order_id": order_id, "resource": "transaction"},
        )
        return transaction
