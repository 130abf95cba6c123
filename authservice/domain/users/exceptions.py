# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authservice.shared.errors.base import DomainError, UnauthorizedError, ValidationFailure

EMAIL_TAKEN_MESSAGE = "The email has already been taken."


class EmailAlreadyTakenError(ValidationFailure):
    def __init__(self) -> None:
        super().__init__({"email": [EMAIL_TAKEN_MESSAGE]})


class InvalidCredentialsError(UnauthorizedError):
    pass


class InvalidRefreshTokenError(UnauthorizedError):
    pass


class InvalidAccessTokenError(UnauthorizedError):
    pass


class SessionConflictError(DomainError):
    code = "session_conflict"
    status = HTTPStatus.CONFLICT
