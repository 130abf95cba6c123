# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from authservice.domain.users.entities import User
from authservice.domain.users.exceptions import EmailAlreadyTakenError
from authservice.domain.users.repositories import PasswordHasher, UserRepository
from authservice.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def is_email_taken(self, email: str) -> bool:
        return self._users.find_by_email(email) is not None

    def execute(self, name: str, email: str, password: str) -> User:
        if self.is_email_taken(email):
            raise EmailAlreadyTakenError()
        now = datetime.now(UTC)
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            name=name,
            email=email,
            password_hash=hashed,
            created_at=now,
            updated_at=now,
        )
        persisted = self._users.add(user)
        logger.info(f"auth.register: created user_id={persisted.id}")
        return persisted
