"""Simulated Payment Ledger — stand-in for a real payment-ledger integration.

Invariants:
    - Implements core.repository_protocols.PaymentLedger
    - All randomness flows through one random.Random; a fixed seed makes the
      derived transactions reproducible
    - Nothing is persisted: transactions are re-derived on every call
"""

import random

from storefront.core.timestamps import utcnow
from storefront.core.transactions import derive_order_transactions, pending_transaction


class SimulatedPaymentLedger:
    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)  # nosec B311 - simulated data only

    def transactions_for_orders(self, orders: list[dict]) -> list[dict]:
        transactions: list[dict] = []
        for order in orders:
            transactions.extend(derive_order_transactions(order, self._rng))
        return transactions

    def create_transaction(
        self, order_id: str, amount: float, tx_type: str, description: str | None,
    ) -> dict:
        return pending_transaction(
            order_id, amount, tx_type, description, self._rng, utcnow(),
        )
