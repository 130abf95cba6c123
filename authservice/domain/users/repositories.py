# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import IssuedTokens, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_refresh_token(self, refresh_token: str) -> User | None: ...
    def add(self, user: User) -> User: ...

    def rotate_tokens(
        self,
        user_id: int,
        tokens: IssuedTokens,
        *,
        expected_version: int,
        expected_refresh_token: str | None = None,
    ) -> User | None:
        """Swap the stored token triple if the row is still at ``expected_version``.

        Returns the updated user, or None when another rotation got there first.
        """
        ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue(self, user_id: int) -> IssuedTokens: ...
    def decode_access_token(self, token: str) -> int | None: ...
