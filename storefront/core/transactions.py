"""Derived Transactions — pure synthesis, filtering and summary of payment records.

Invariants:
    - Transactions are derived from orders at read time; nothing here persists
    - One payment per order; a cancelled order MAY also get a refund
    - fees = round(amount * 0.029 + 0.30, 2); netAmount = round(amount - fee, 2)
    - Randomness comes only from the injected random.Random (seedable in tests)
    - Payment status: shipped/delivered -> completed, cancelled -> failed, else pending

Design Decisions:
    - This is a simulation standing in for a payment-ledger integration;
      it is only reached through SimulatedPaymentLedger (infrastructure/ledger.py)
"""

import random
from datetime import datetime, timedelta

from storefront.core.domain_types import OrderStatus, TransactionStatus, TransactionType
from storefront.core.errors import InvalidInputError
from storefront.core.timestamps import parse_timestamp

PROCESSING_FEE_RATE = 0.029
PROCESSING_FEE_FIXED = 0.30
PAYPAL_THRESHOLD = 0.7      # draw above threshold -> PayPal
REFUND_THRESHOLD = 0.7      # draw above threshold -> cancelled order gets a refund
CURRENCY = "USD"
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def parse_date_filter(value: str | None, field: str) -> datetime | None:
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        raise InvalidInputError(
            f"Invalid date for {field}", "INVALID_DATE", field=field,
        )


def processing_fee(amount: float) -> float:
    return round(amount * PROCESSING_FEE_RATE + PROCESSING_FEE_FIXED, 2)


def payment_status_for(order_status: str) -> TransactionStatus:
    if order_status in (OrderStatus.DELIVERED.value, OrderStatus.SHIPPED.value):
        return TransactionStatus.COMPLETED
    if order_status == OrderStatus.CANCELLED.value:
        return TransactionStatus.FAILED
    return TransactionStatus.PENDING


def gateway_transaction_id(rng: random.Random) -> str:
    return "gw_" + "".join(rng.choice(_BASE36) for _ in range(9))


def derive_order_transactions(order: dict, rng: random.Random) -> list[dict]:
    """Payment (and possibly refund) records for one serialized order."""
    amount = float(order["totalAmount"])
    use_paypal = rng.random() > PAYPAL_THRESHOLD
    payment = {
        "id": f"tx_{order['id']}",
        "orderId": order["id"],
        "customerId": order.get("userId"),
        "customerName": order.get("customerName"),
        "customerEmail": order.get("customerEmail"),
        "amount": amount,
        "currency": CURRENCY,
        "type": TransactionType.PAYMENT.value,
        "status": payment_status_for(order["status"]).value,
        "paymentMethod": "PayPal" if use_paypal else "Credit Card",
        "gateway": "paypal" if use_paypal else "stripe",
        "gatewayTransactionId": gateway_transaction_id(rng),
        "createdAt": order["createdAt"],
        "description": f"Payment for order #{order['id']}",
        "fees": processing_fee(amount),
        "netAmount": round(amount - (amount * PROCESSING_FEE_RATE + PROCESSING_FEE_FIXED), 2),
    }
    records = [payment]

    if order["status"] == OrderStatus.CANCELLED.value and rng.random() > REFUND_THRESHOLD:
        refunded_at = parse_timestamp(order["createdAt"]) + timedelta(days=1)
        records.append({
            **payment,
            "id": f"tx_refund_{order['id']}",
            "type": TransactionType.REFUND.value,
            "amount": -amount,
            "status": TransactionStatus.COMPLETED.value,
            "description": f"Refund for order #{order['id']}",
            "createdAt": refunded_at.isoformat(),
            "fees": 0.0,
            "netAmount": -amount,
        })
    return records


def filter_transactions(
    transactions: list[dict],
    tx_type: str = "all",
    status: str = "all",
    from_date: datetime | None = None,
    to_date: datetime | None = None,
) -> list[dict]:
    """Apply filters, then sort newest first."""
    selected = [
        tx for tx in transactions
        if (tx_type == "all" or tx["type"] == tx_type)
        and (status == "all" or tx["status"] == status)
        and (from_date is None or parse_timestamp(tx["createdAt"]) >= from_date)
        and (to_date is None or parse_timestamp(tx["createdAt"]) <= to_date)
    ]
    selected.sort(key=lambda tx: parse_timestamp(tx["createdAt"]), reverse=True)
    return selected


def summarize_transactions(transactions: list[dict]) -> dict:
    """Totals and counts over the full filtered set (before pagination)."""
    def count(key: str, value: str) -> int:
        return sum(1 for tx in transactions if tx[key] == value)

    return {
        "totalTransactions": len(transactions),
        "totalAmount": round(sum(tx["amount"] for tx in transactions), 2),
        "totalFees": round(sum(tx["fees"] for tx in transactions), 2),
        "totalNetAmount": round(sum(tx["netAmount"] for tx in transactions), 2),
        "completedTransactions": count("status", TransactionStatus.COMPLETED.value),
        "pendingTransactions": count("status", TransactionStatus.PENDING.value),
        "failedTransactions": count("status", TransactionStatus.FAILED.value),
        "paymentTransactions": count("type", TransactionType.PAYMENT.value),
        "refundTransactions": count("type", TransactionType.REFUND.value),
    }


def pending_transaction(
    order_id: str, amount: float, tx_type: str, description: str | None,
    rng: random.Random, now: datetime,
) -> dict:
    """Record for a transaction submitted through the API (never settled here)."""
    return {
        "id": f"tx_{int(now.timestamp() * 1000)}",
        "orderId": order_id,
        "amount": amount,
        "type": tx_type,
        "description": description,
        "status": TransactionStatus.PENDING.value,
        "createdAt": now.isoformat(),
        "gateway": "stripe",
        "gatewayTransactionId": gateway_transaction_id(rng),
    }
