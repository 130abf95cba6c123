# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authservice.domain.users.entities import IssuedTokens
from authservice.domain.users.exceptions import InvalidCredentialsError, SessionConflictError
from authservice.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from authservice.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    def execute(self, email: str, password: str) -> IssuedTokens:
        user = self._users.find_by_email(email)
        password_valid = user and self._password_hasher.verify(password, user.password_hash)

        if not password_valid:
            logger.info("auth.login: rejected credentials")
            raise InvalidCredentialsError()

        tokens = self._token_issuer.issue(user.id)
        rotated = self._users.rotate_tokens(
            user.id, tokens, expected_version=user.token_version
        )
        if rotated is None:
            logger.warning(f"auth.login: concurrent rotation for user_id={user.id}")
            raise SessionConflictError()

        logger.info(f"auth.login: ok user_id={user.id} version={rotated.token_version}")
        return tokens
