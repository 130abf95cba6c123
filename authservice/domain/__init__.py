# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users import (
    IssuedTokens,
    PasswordHasher,
    TokenIssuer,
    User,
    UserRepository,
)

__all__ = [
    "IssuedTokens",
    "PasswordHasher",
    "TokenIssuer",
    "User",
    "UserRepository",
]
