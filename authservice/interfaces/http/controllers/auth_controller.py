# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from authservice.application.use_cases.users.authenticate_user import (
    AuthenticateAccessTokenUseCase,
)
from authservice.application.use_cases.users.login_user import LoginUserUseCase
from authservice.application.use_cases.users.refresh_tokens import RefreshTokensUseCase
from authservice.application.use_cases.users.register_user import RegisterUserUseCase
from authservice.auth import auth_required
from authservice.domain.users.entities import User
from authservice.domain.users.exceptions import EMAIL_TAKEN_MESSAGE
from authservice.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    CurrentUserDTO,
    LoginRequestDTO,
    RefreshRequestDTO,
    RegisteredDTO,
    RegisterRequestDTO,
    UserPublicDTO,
    normalize_email,
)
from authservice.shared.errors.base import ValidationFailure
from authservice.shared.errors.validation import format_validation_errors, raise_validation_error


def _json_body() -> object:
    payload = request.get_json(silent=True)
    return {} if payload is None else payload


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        refresh_use_case: RefreshTokensUseCase,
        authenticate_use_case: AuthenticateAccessTokenUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._refresh_use_case = refresh_use_case
        self._authenticate_use_case = authenticate_use_case

    def register(self) -> tuple[Response, int]:
        body = _json_body()
        try:
            dto = RegisterRequestDTO.model_validate(body)
        except ValidationError as exc:
            fields = format_validation_errors(exc)
            email = body.get("email") if isinstance(body, dict) else None
            # a well-formed email is still checked for uniqueness
            if "email" not in fields and isinstance(email, str):
                if self._register_use_case.is_email_taken(normalize_email(email)):
                    fields["email"] = [EMAIL_TAKEN_MESSAGE]
            raise ValidationFailure(fields) from exc

        user = self._register_use_case.execute(dto.name, dto.email, dto.password)

        payload = RegisteredDTO(user=UserPublicDTO.from_entity(user)).model_dump(mode="json")
        return jsonify(payload), HTTPStatus.CREATED

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        tokens = self._login_use_case.execute(dto.email, dto.password)
        return jsonify(AuthSuccessDTO.from_tokens(tokens).model_dump(mode="json")), HTTPStatus.OK

    def refresh(self) -> tuple[Response, int]:
        try:
            dto = RefreshRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        tokens = self._refresh_use_case.execute(dto.refresh_token)
        return jsonify(AuthSuccessDTO.from_tokens(tokens).model_dump(mode="json")), HTTPStatus.OK

    def me(self, *, current_user: User) -> tuple[Response, int]:
        payload = CurrentUserDTO(user=UserPublicDTO.from_entity(current_user))
        return jsonify(payload.model_dump(mode="json")), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/refresh", view_func=self.refresh, methods=["POST"])
        bp.add_url_rule(
            "/me",
            endpoint="me",
            view_func=auth_required(self._authenticate_use_case)(self.me),
            methods=["GET"],
        )
        return bp
