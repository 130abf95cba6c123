# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(code=resolved_code, status=resolved_status, context=context)


class ValidationFailure(AppError):
    """Per-field validation messages, rendered as the bare field map."""

    def __init__(self, fields: Mapping[str, Sequence[str]]) -> None:
        super().__init__(
            code="validation_error",
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context={name: list(messages) for name, messages in fields.items()},
        )

    @property
    def fields(self) -> dict[str, list[str]]:
        return dict(self.context or {})

    def to_dict(self) -> dict[str, Any]:
        return self.fields


class UnauthorizedError(DomainError):
    """Every authentication failure renders the same body."""

    code = "Unauthorized"
    status = HTTPStatus.UNAUTHORIZED

    def to_dict(self) -> dict[str, Any]:
        return {"error": "Unauthorized"}
