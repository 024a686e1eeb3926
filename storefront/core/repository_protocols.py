"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - External collaborators (identity provider, payment ledger, reset mail)
      are reached only through these Protocol types
    - Implementations constructed in the app lifespan and injected via dependencies

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Protocol, TypedDict


class TokenClaims(TypedDict):
    """Decoded session token payload."""
    uid: str
    email: str
    role: str
    iat: int
    exp: int


class IdentityProvider(Protocol):
    """Password hashing plus session token issuance and verification."""
    def hash_password(self, password: str) -> str: ...
    def check_password(self, password: str, password_hash: str) -> bool: ...
    def issue_token(self, uid: str, email: str, role: str) -> str: ...
    def verify_token(self, token: str) -> TokenClaims: ...

    @property
    def token_ttl_seconds(self) -> int: ...


class PaymentLedger(Protocol):
    """Source of payment transactions for orders."""
    def transactions_for_orders(self, orders: list[dict]) -> list[dict]: ...
    def create_transaction(
        self, order_id: str, amount: float, tx_type: str, description: str | None,
    ) -> dict: ...


class PasswordResetNotifier(Protocol):
    """Delivers a password reset code to the account owner."""
    async def send_reset_code(self, email: str, code: str) -> None: ...
