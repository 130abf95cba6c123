# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationFailure


def _field_name(error: dict) -> str:
    loc = error.get("loc", ())
    field_path = ".".join(str(part) for part in loc if part is not None)
    if field_path:
        return field_path
    # model-level validators name their field through the error context
    ctx = error.get("ctx") or {}
    return str(ctx.get("field", "__root__"))


_MESSAGE_TEMPLATES = {
    "missing": "The {field} field is required.",
    "string_type": "The {field} field must be a string.",
    "string_too_short": "The {field} field must be at least {min_length} characters.",
    "string_too_long": "The {field} field must not be greater than {max_length} characters.",
}


def _message(field: str, error: dict) -> str:
    template = _MESSAGE_TEMPLATES.get(error.get("type", ""))
    if template is None:
        return str(error.get("msg", "Invalid value."))
    ctx = error.get("ctx") or {}
    return template.format_map({**ctx, "field": field.replace("_", " ")})


def format_validation_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}

    for error in exc.errors():
        name = _field_name(error)
        message = _message(name, error)
        messages = fields.setdefault(name, [])
        if message not in messages:
            messages.append(message)

    return fields


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationFailure(format_validation_errors(exc)) from exc


__all__ = [
    "format_validation_errors",
    "raise_validation_error",
]
