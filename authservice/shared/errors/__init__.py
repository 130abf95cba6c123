# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import AppError, DomainError, UnauthorizedError, ValidationFailure
from .http import handle_app_error, register_error_handler
from .validation import format_validation_errors, raise_validation_error

__all__ = [
    "AppError",
    "DomainError",
    "UnauthorizedError",
    "ValidationFailure",
    "format_validation_errors",
    "handle_app_error",
    "raise_validation_error",
    "register_error_handler",
]
