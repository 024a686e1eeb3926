"""Local Identity Provider — bcrypt password hashes and signed session tokens.

Invariants:
    - Passwords are stored only as bcrypt hashes
    - Session tokens are JWTs carrying uid, email, role, iat, exp
    - verify_token raises InvalidTokenError for any bad signature, expiry or shape;
      it never returns partial claims

Design Decisions:
    - Stands behind the IdentityProvider protocol so a hosted provider can
      replace it without touching services
    - bcrypt cost configurable (BCRYPT_ROUNDS) so tests can run at the minimum
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from storefront.core.errors import InvalidTokenError
from storefront.core.repository_protocols import TokenClaims

logger = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ("sub", "email", "role", "iat", "exp")


class JwtIdentityProvider:
    """Issues and verifies HS256 session tokens; hashes passwords with bcrypt."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        token_ttl_seconds: int = 3600,
        bcrypt_rounds: int = 12,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._token_ttl_seconds = token_ttl_seconds
        self._bcrypt_rounds = bcrypt_rounds

    @property
    def token_ttl_seconds(self) -> int:
        return self._token_ttl_seconds

    def hash_password(self, password: str) -> str:
        hashed = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self._bcrypt_rounds),
        )
        return hashed.decode("utf-8")

    def check_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8"),
            )
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def issue_token(self, uid: str, email: str, role: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": uid,
            "email": email,
            "role": role,
            "iat": now,
            "exp": now + timedelta(seconds=self._token_ttl_seconds),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token, self._secret, algorithms=[self._algorithm],
                options={"require": list(_REQUIRED_CLAIMS)},
            )
        except jwt.PyJWTError as e:
            logger.info(f"Token verification failed: {e}")
            raise InvalidTokenError()
        return TokenClaims(
            uid=str(payload["sub"]),
            email=str(payload["email"]),
            role=str(payload["role"]),
            iat=int(payload["iat"]),
            exp=int(payload["exp"]),
        )
