# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from authservice.application.services.password_hashing import WerkzeugPasswordHasher
from authservice.application.services.token_issuer import JwtTokenIssuer
from authservice.application.use_cases.users.authenticate_user import (
    AuthenticateAccessTokenUseCase,
)
from authservice.application.use_cases.users.login_user import LoginUserUseCase
from authservice.application.use_cases.users.refresh_tokens import RefreshTokensUseCase
from authservice.application.use_cases.users.register_user import RegisterUserUseCase
from authservice.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authservice.interfaces.http.controllers.auth_controller import AuthController
from authservice.interfaces.http.controllers.misc_controller import MiscController
from authservice.shared.config import load_config


class Container:
    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return JwtTokenIssuer.from_config(load_config().tokens)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            token_issuer=self.token_issuer,
        )

    @cached_property
    def refresh_tokens_use_case(self) -> RefreshTokensUseCase:
        return RefreshTokensUseCase(
            users=self.user_repository,
            token_issuer=self.token_issuer,
        )

    @cached_property
    def authenticate_use_case(self) -> AuthenticateAccessTokenUseCase:
        return AuthenticateAccessTokenUseCase(
            users=self.user_repository,
            token_issuer=self.token_issuer,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            refresh_use_case=self.refresh_tokens_use_case,
            authenticate_use_case=self.authenticate_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()


container = Container()
