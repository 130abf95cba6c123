# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hmac
from dataclasses import dataclass
from datetime import datetime

TOKEN_TYPE = "bearer"


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    access_token: str | None = None
    refresh_token: str | None = None
    expires_date: datetime | None = None
    token_version: int = 0

    def has_active_access_token(self, token: str, now: datetime) -> bool:
        if self.access_token is None or self.expires_date is None:
            return False
        return hmac.compare_digest(self.access_token, token) and self.expires_date > now


@dataclass(slots=True, frozen=True)
class IssuedTokens:

    access_token: str
    refresh_token: str
    expires_date: datetime
    token_type: str = TOKEN_TYPE
