# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for exchanging a refresh token for a fresh token pair."""

from __future__ import annotations

from authservice.domain.users.entities import IssuedTokens
from authservice.domain.users.exceptions import InvalidRefreshTokenError
from authservice.domain.users.repositories import TokenIssuer, UserRepository
from authservice.shared.logging import logger


class RefreshTokensUseCase:
    """Rotate both tokens for whoever currently holds ``refresh_token``.

    The presented token is valid only while it is the one stored on the user
    row; it carries no signature or expiry of its own. Because every rotation
    replaces it, each refresh token can be exchanged at most once.
    """

    def __init__(self, *, users: UserRepository, token_issuer: TokenIssuer) -> None:
        self._users = users
        self._token_issuer = token_issuer

    def execute(self, refresh_token: str) -> IssuedTokens:
        user = self._users.find_by_refresh_token(refresh_token) if refresh_token else None
        if user is None:
            logger.info("auth.refresh: unknown refresh token")
            raise InvalidRefreshTokenError()

        tokens = self._token_issuer.issue(user.id)
        rotated = self._users.rotate_tokens(
            user.id,
            tokens,
            expected_version=user.token_version,
            expected_refresh_token=refresh_token,
        )
        if rotated is None:
            logger.warning(f"auth.refresh: token already rotated for user_id={user.id}")
            raise InvalidRefreshTokenError()

        logger.info(f"auth.refresh: ok user_id={user.id} version={rotated.token_version}")
        return tokens
