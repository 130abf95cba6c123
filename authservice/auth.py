# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from authservice.application.use_cases.users.authenticate_user import (
    AuthenticateAccessTokenUseCase,
)
from authservice.domain.users.exceptions import InvalidAccessTokenError
from authservice.shared.logging import logger


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    scheme, _, credentials = auth.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return credentials.strip()


def auth_required(
    authenticate: AuthenticateAccessTokenUseCase,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Guard a view with a bearer access token.

    The authenticated user is handed to the view as ``current_user``.
    """

    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(f)
        def inner(*a, **kw):
            token = bearer_token()
            if not token:
                logger.warning(
                    f"No bearer credential on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise InvalidAccessTokenError()

            user = authenticate.execute(token)
            g.user_id = user.id
            kw["current_user"] = user
            logger.debug(f"Auth OK: user={user.id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner

    return decorator


__all__ = ["auth_required", "bearer_token"]
