# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import TOKEN_TYPE, IssuedTokens, User
from .exceptions import (
    EmailAlreadyTakenError,
    InvalidAccessTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    SessionConflictError,
)
from .repositories import PasswordHasher, TokenIssuer, UserRepository

__all__ = [
    "TOKEN_TYPE",
    "EmailAlreadyTakenError",
    "InvalidAccessTokenError",
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "IssuedTokens",
    "PasswordHasher",
    "SessionConflictError",
    "TokenIssuer",
    "User",
    "UserRepository",
]
