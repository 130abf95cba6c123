"""Use-case resolving a bearer access token to its user."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from authservice.domain.users.entities import User
from authservice.domain.users.exceptions import InvalidAccessTokenError
from authservice.domain.users.repositories import TokenIssuer, UserRepository


class AuthenticateAccessTokenUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        token_issuer: TokenIssuer,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._users = users
        self._token_issuer = token_issuer
        self._clock = clock

    def execute(self, access_token: str) -> User:
        user_id = self._token_issuer.decode_access_token(access_token) if access_token else None
        if user_id is None:
            raise InvalidAccessTokenError()

        user = self._users.find_by_id(user_id)
        # a validly signed token is still dead once a later login/refresh replaced it
        if user is None or not user.has_active_access_token(access_token, self._clock()):
            raise InvalidAccessTokenError()
        return user
