"""Access and refresh token minting."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from authservice.domain.users.entities import IssuedTokens
from authservice.domain.users.repositories import TokenIssuer
from authservice.shared.config import TokenConfig
from authservice.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenIssuer(TokenIssuer):
    """Signed JWT access tokens paired with opaque refresh tokens.

    Every issuance gets the same lifetime measured from "now": no sliding
    window and no absolute session cap.
    """

    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(minutes=60),
        refresh_token_bytes: int = 48,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = ttl
        self._refresh_token_bytes = refresh_token_bytes
        self._clock = clock

    @classmethod
    def from_config(cls, config: TokenConfig) -> JwtTokenIssuer:
        return cls(
            secret_key=config.secret_key,
            algorithm=config.algorithm,
            ttl=timedelta(minutes=config.ttl_minutes),
            refresh_token_bytes=config.refresh_token_bytes,
        )

    def issue(self, user_id: int) -> IssuedTokens:
        now = self._clock()
        expires_date = now + self._ttl
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": expires_date,
            # two tokens minted within the same second must still differ
            "jti": secrets.token_hex(16),
        }
        access_token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        refresh_token = secrets.token_urlsafe(self._refresh_token_bytes)
        return IssuedTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_date=expires_date,
        )

    def decode_access_token(self, token: str) -> int | None:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as exc:
            logger.debug(f"tokens.decode: rejected ({type(exc).__name__})")
            return None

        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            return None
